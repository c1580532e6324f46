"""Settings domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

SettingValue = Union[bool, int, float, str]


class SettingUpdate(BaseModel):
    """Schema for updating a single setting"""

    clave: str
    valor: SettingValue

    @field_validator("clave")
    @classmethod
    def validate_key(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("La clave es requerida")
        return v


class SettingResponse(BaseModel):
    id: int
    clave: str
    valor: str
    tipo: str
    categoria: str
    updatedAt: Optional[datetime] = None


class CurrencySettings(BaseModel):
    simbolo: str = "€"
    nombre: str = "EUR"
    posicion: Literal["before", "after"] = "after"
    decimales: int = 2


class BusinessInfo(BaseModel):
    nombre: str = "Peluquería Elegance"
    telefono: str = "+34 666 123 456"
    direccion: str = "Calle Principal 123, Madrid"
    horario_apertura: str = "09:00"
    horario_cierre: str = "20:00"


class BusinessSettings(BaseModel):
    """Structured view over the key/value settings"""

    moneda: CurrencySettings = Field(default_factory=CurrencySettings)
    negocio: BusinessInfo = Field(default_factory=BusinessInfo)
