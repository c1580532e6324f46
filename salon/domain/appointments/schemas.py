"""Appointment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Appointment
from ...shared.schemas import Pagination
from ...shared.validators import validate_date, validate_time_of_day

AppointmentStatus = Literal["PENDIENTE", "CONFIRMADA", "REALIZADA", "CANCELADA", "REAGENDADA"]


class AppointmentCreate(BaseModel):
    """Schema for creating a new appointment"""

    clienteId: str
    servicioId: Optional[str] = None
    fecha: date
    hora: str
    estado: AppointmentStatus = "PENDIENTE"
    servicio: Optional[str] = None
    precio: Optional[float] = Field(None, ge=0)
    notas: Optional[str] = None
    recordatorio: bool = False
    permitirSuperposicion: bool = False

    @field_validator("fecha", mode="before")
    @classmethod
    def validate_fecha(cls, v):
        if isinstance(v, str):
            return validate_date(v[:10])
        return v

    @field_validator("hora")
    @classmethod
    def validate_hora(cls, v):
        return validate_time_of_day(v)


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment; every field optional"""

    clienteId: Optional[str] = None
    servicioId: Optional[str] = None
    fecha: Optional[date] = None
    hora: Optional[str] = None
    estado: Optional[AppointmentStatus] = None
    servicio: Optional[str] = None
    precio: Optional[float] = Field(None, ge=0)
    notas: Optional[str] = None
    recordatorio: Optional[bool] = None
    pagado: Optional[bool] = None
    permitirSuperposicion: bool = False

    @field_validator("fecha", mode="before")
    @classmethod
    def validate_fecha(cls, v):
        if isinstance(v, str):
            return validate_date(v[:10])
        return v

    @field_validator("hora")
    @classmethod
    def validate_hora(cls, v):
        if v is None:
            return v
        return validate_time_of_day(v)


class ClientSummary(BaseModel):
    id: str
    nombre: str
    apellido: str
    telefono: Optional[str] = None
    email: Optional[str] = None
    tipoPelo: Optional[str] = None


class ServiceSummary(BaseModel):
    id: str
    nombre: str
    duracionMinutos: int
    precioBase: float
    precioVenta: Optional[float] = None


class AppointmentResponse(BaseModel):
    id: str
    clienteId: str
    servicioId: Optional[str] = None
    fecha: date
    hora: str
    estado: str
    servicio: Optional[str] = None
    precio: Optional[float] = None
    notas: Optional[str] = None
    recordatorio: bool
    pagado: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    cliente: Optional[ClientSummary] = None
    servicioRef: Optional[ServiceSummary] = None


class AppointmentListResponse(BaseModel):
    citas: list[AppointmentResponse]
    pagination: Pagination


class PendingPaymentResponse(BaseModel):
    citas: list[AppointmentResponse]
    total: int


def appointment_response(appointment: Appointment) -> AppointmentResponse:
    client = appointment.client
    service = appointment.service

    return AppointmentResponse(
        id=appointment.id,
        clienteId=appointment.client_id,
        servicioId=appointment.service_id,
        fecha=appointment.date,
        hora=appointment.time,
        estado=appointment.status,
        servicio=appointment.service_label,
        precio=appointment.price,
        notas=appointment.notes,
        recordatorio=appointment.reminder,
        pagado=appointment.paid,
        createdAt=appointment.created_at,
        updatedAt=appointment.updated_at,
        cliente=(
            ClientSummary(
                id=client.id,
                nombre=client.first_name,
                apellido=client.last_name,
                telefono=client.phone,
                email=client.email,
                tipoPelo=client.hair_type,
            )
            if client
            else None
        ),
        servicioRef=(
            ServiceSummary(
                id=service.id,
                nombre=service.name,
                duracionMinutos=service.duration_minutes,
                precioBase=service.base_price,
                precioVenta=service.sale_price,
            )
            if service
            else None
        ),
    )
