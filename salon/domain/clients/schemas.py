"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.schemas import Pagination
from ...shared.validators import validate_email, validate_phone


class ClientBase(BaseModel):
    telefono: Optional[str] = None
    email: Optional[str] = None
    tipoPelo: Optional[str] = None
    notas: Optional[str] = None

    @field_validator("telefono")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_phone(v)
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v:
            return validate_email(v)
        return v


class ClientCreate(ClientBase):
    """Schema for creating a new client"""

    nombre: str
    apellido: str

    @field_validator("nombre", "apellido")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Nombre y apellido son obligatorios")
        return v


class ClientUpdate(ClientBase):
    """Schema for updating an existing client"""

    nombre: Optional[str] = None
    apellido: Optional[str] = None
    activo: Optional[bool] = None


class ClientResponse(BaseModel):
    """Schema for client response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    nombre: str
    apellido: str
    telefono: Optional[str] = None
    email: Optional[str] = None
    tipoPelo: Optional[str] = None
    notas: Optional[str] = None
    activo: bool = True
    createdAt: Optional[datetime] = None


class ClientListResponse(BaseModel):
    clientes: list[ClientResponse]
    pagination: Pagination
