"""Client router - FastAPI endpoints for client operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ClientCreate, ClientListResponse, ClientResponse, ClientUpdate
from .service import ClientService, to_response

router = APIRouter(prefix="/clientes", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=ClientListResponse)
async def get_clients(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    search: Optional[str] = Query(None),
    service: ClientService = Depends(get_client_service),
):
    """Get active clients, optionally filtered by name, phone or email"""
    return service.list_clients(page, limit, search)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, service: ClientService = Depends(get_client_service)):
    """Get a specific client"""
    return to_response(service.get_client(client_id))


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    """Create a new client"""
    return to_response(service.create_client(data))


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    return to_response(service.update_client(client_id, data))


@router.delete("/{client_id}")
async def delete_client(client_id: str, service: ClientService = Depends(get_client_service)):
    """Deactivate a client"""
    return service.deactivate_client(client_id)
