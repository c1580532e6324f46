"""Catalog domain schemas - Categories, services and products"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.schemas import Pagination


class CategoryCreate(BaseModel):
    nombre: str
    descripcion: Optional[str] = None
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icono: Optional[str] = None

    @field_validator("nombre")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("El nombre es obligatorio")
        return v


class CategoryResponse(BaseModel):
    id: str
    nombre: str
    descripcion: Optional[str] = None
    color: Optional[str] = None
    icono: Optional[str] = None
    activo: bool = True


class ServiceCreate(BaseModel):
    """Schema for creating a catalog service"""

    nombre: str
    categoriaId: str
    precioBase: float = Field(gt=0)
    precioVenta: Optional[float] = Field(None, gt=0)
    duracionMinutos: int = Field(30, ge=5, le=720)
    requiereProductos: bool = False
    descripcion: Optional[str] = None
    notas: Optional[str] = None

    @field_validator("nombre")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("El nombre es obligatorio")
        return v


class ServiceUpdate(BaseModel):
    nombre: Optional[str] = None
    categoriaId: Optional[str] = None
    precioBase: Optional[float] = Field(None, gt=0)
    precioVenta: Optional[float] = Field(None, gt=0)
    duracionMinutos: Optional[int] = Field(None, ge=5, le=720)
    requiereProductos: Optional[bool] = None
    descripcion: Optional[str] = None
    notas: Optional[str] = None
    activo: Optional[bool] = None


class CategorySummary(BaseModel):
    id: str
    nombre: str
    color: Optional[str] = None
    icono: Optional[str] = None


class ServiceResponse(BaseModel):
    id: str
    nombre: str
    descripcion: Optional[str] = None
    categoriaId: str
    categoria: Optional[CategorySummary] = None
    precioBase: float
    precioVenta: Optional[float] = None
    duracionMinutos: int
    requiereProductos: bool
    notas: Optional[str] = None
    activo: bool


class ServiceListResponse(BaseModel):
    servicios: list[ServiceResponse]
    pagination: Pagination


class ProductCreate(BaseModel):
    """Schema for creating a product"""

    nombre: str
    categoriaId: str
    precioCosto: float = Field(gt=0)
    precioVenta: float = Field(gt=0)
    descripcion: Optional[str] = None
    marca: Optional[str] = None
    codigo: Optional[str] = None
    stock: int = Field(0, ge=0)
    stockMinimo: int = Field(5, ge=0)
    unidadMedida: str = "unidad"
    fechaVencimiento: Optional[date] = None
    proveedor: Optional[str] = None
    notas: Optional[str] = None

    @field_validator("nombre")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("El nombre es obligatorio")
        return v

    @field_validator("codigo")
    @classmethod
    def validate_code(cls, v):
        if v is None:
            return v
        return v.strip() or None


class ProductUpdate(BaseModel):
    nombre: Optional[str] = None
    categoriaId: Optional[str] = None
    precioCosto: Optional[float] = Field(None, gt=0)
    precioVenta: Optional[float] = Field(None, gt=0)
    descripcion: Optional[str] = None
    marca: Optional[str] = None
    codigo: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    stockMinimo: Optional[int] = Field(None, ge=0)
    unidadMedida: Optional[str] = None
    fechaVencimiento: Optional[date] = None
    proveedor: Optional[str] = None
    notas: Optional[str] = None
    activo: Optional[bool] = None


class ProductResponse(BaseModel):
    id: str
    nombre: str
    descripcion: Optional[str] = None
    categoriaId: str
    categoria: Optional[CategorySummary] = None
    marca: Optional[str] = None
    codigo: Optional[str] = None
    precioCosto: float
    precioVenta: float
    stock: int
    stockMinimo: int
    stockBajo: bool
    unidadMedida: str
    fechaVencimiento: Optional[date] = None
    proveedor: Optional[str] = None
    notas: Optional[str] = None
    activo: bool


class ProductListResponse(BaseModel):
    productos: list[ProductResponse]
    pagination: Pagination
