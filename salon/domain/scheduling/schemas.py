"""Scheduling domain schemas - Availability and occupancy"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ...shared.validators import validate_date, validate_time_of_day
from ..appointments.schemas import AppointmentResponse


class AvailabilityQuery(BaseModel):
    """Validated input of the availability check"""

    fecha: date
    hora: str
    servicioId: Optional[str] = None
    permitirSuperposicion: bool = False
    excluirCitaId: Optional[str] = None

    @field_validator("fecha", mode="before")
    @classmethod
    def validate_fecha(cls, v):
        if isinstance(v, str):
            return validate_date(v)
        return v

    @field_validator("hora")
    @classmethod
    def validate_hora(cls, v):
        return validate_time_of_day(v)


class OccupancyQuery(BaseModel):
    fecha: date

    @field_validator("fecha", mode="before")
    @classmethod
    def validate_fecha(cls, v):
        if isinstance(v, str):
            return validate_date(v)
        return v


class AvailabilityResponse(BaseModel):
    disponible: bool
    conflictos: Optional[list[dict[str, Any]]] = None
    superposiciones: Optional[list[dict[str, Any]]] = None
    sugerencias: list[str] = []
    duracionServicio: int
    intervaloConfigurado: int
    tiempoTotalOcupado: Optional[int] = None
    mensaje: Optional[str] = None


class DayStatistics(BaseModel):
    totalCitas: int
    citasPorEstado: dict[str, int]
    ingresosTotales: float
    ingresosEstimados: float
    tiempoTotalOcupado: int


class TimeConflict(BaseModel):
    hora: str
    cantidad: int
    citas: list[dict[str, Any]]


class OccupancySummary(BaseModel):
    ocupacionPorcentaje: int
    horasOcupadas: float
    eficiencia: int


class OccupancyResponse(BaseModel):
    fecha: date
    citas: list[AppointmentResponse]
    estadisticas: DayStatistics
    conflictos: list[TimeConflict]
    horariosDisponibles: list[str]
    resumen: OccupancySummary


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message of the first validation error"""
    errors = exc.errors()
    if not errors:
        return "Parámetros inválidos"

    error = errors[0]
    message = error.get("msg", "Parámetros inválidos")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    field = ".".join(str(part) for part in error.get("loc", ()))
    if error.get("type") == "value_error" or not field:
        return message
    return f"{field}: {message}"
