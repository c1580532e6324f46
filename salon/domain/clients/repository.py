"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def search_clients(
        db: Session, search: Optional[str] = None, skip: int = 0, limit: int = 10
    ) -> tuple[list[Client], int]:
        """Active clients matching a name/phone/email search, with the total count"""
        query = db.query(Client).filter(Client.is_active.is_(True))

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Client.first_name.ilike(pattern),
                    Client.last_name.ilike(pattern),
                    Client.phone.ilike(pattern),
                    Client.email.ilike(pattern),
                )
            )

        total = query.count()
        clients = (
            query.order_by(Client.first_name, Client.last_name).offset(skip).limit(limit).all()
        )
        return clients, total

    @staticmethod
    def get_client_by_id(db: Session, client_id: str) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client
