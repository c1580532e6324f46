"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client
from ...shared.schemas import Pagination
from .repository import ClientRepository
from .schemas import ClientCreate, ClientListResponse, ClientResponse, ClientUpdate

logger = logging.getLogger(__name__)


def to_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        nombre=client.first_name,
        apellido=client.last_name,
        telefono=client.phone,
        email=client.email,
        tipoPelo=client.hair_type,
        notas=client.notes,
        activo=client.is_active,
        createdAt=client.created_at,
    )


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def list_clients(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> ClientListResponse:
        """Paginated list of active clients"""
        clients, total = self.repo.search_clients(self.db, search, (page - 1) * limit, limit)
        return ClientListResponse(
            clientes=[to_response(c) for c in clients],
            pagination=Pagination.build(page, limit, total),
        )

    def get_client(self, client_id: str) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client"""
        logger.info(f"📥 Creating client {data.nombre} {data.apellido}")

        client_data = {
            "first_name": data.nombre,
            "last_name": data.apellido,
            "phone": data.telefono,
            "email": data.email,
            "hair_type": data.tipoPelo,
            "notes": data.notas.strip() if data.notas else None,
        }
        return self.repo.create_client(self.db, **client_data)

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Update a client"""
        client = self.get_client(client_id)

        updates = {
            "first_name": data.nombre.strip() if data.nombre else None,
            "last_name": data.apellido.strip() if data.apellido else None,
            "phone": data.telefono,
            "email": data.email,
            "hair_type": data.tipoPelo,
            "notes": data.notas,
            "is_active": data.activo,
        }
        return self.repo.update_client(self.db, client, **updates)

    def deactivate_client(self, client_id: str) -> dict:
        """Deactivate a client instead of deleting it, keeping appointment history"""
        client = self.get_client(client_id)
        self.repo.update_client(self.db, client, is_active=False)
        logger.info(f"🗑️ Client {client_id} deactivated ({len(client.appointments)} appointment(s) kept)")
        return {"message": "Cliente desactivado correctamente"}
