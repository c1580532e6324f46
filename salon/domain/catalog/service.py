"""Catalog service - Business logic for categories, services and products"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Category, Product, Service
from ...shared.schemas import Pagination
from .repository import CatalogRepository
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategorySummary,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)

logger = logging.getLogger(__name__)


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        nombre=category.name,
        descripcion=category.description,
        color=category.color,
        icono=category.icon,
        activo=category.is_active,
    )


def _category_summary(category: Optional[Category]) -> Optional[CategorySummary]:
    if not category:
        return None
    return CategorySummary(id=category.id, nombre=category.name, color=category.color, icono=category.icon)


def service_response(service: Service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        nombre=service.name,
        descripcion=service.description,
        categoriaId=service.category_id,
        categoria=_category_summary(service.category),
        precioBase=service.base_price,
        precioVenta=service.sale_price,
        duracionMinutos=service.duration_minutes,
        requiereProductos=service.requires_products,
        notas=service.notes,
        activo=service.is_active,
    )


def product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        nombre=product.name,
        descripcion=product.description,
        categoriaId=product.category_id,
        categoria=_category_summary(product.category),
        marca=product.brand,
        codigo=product.code,
        precioCosto=product.cost_price,
        precioVenta=product.sale_price,
        stock=product.stock,
        stockMinimo=product.min_stock,
        stockBajo=product.low_stock,
        unidadMedida=product.unit,
        fechaVencimiento=product.expires_on,
        proveedor=product.supplier,
        notas=product.notes,
        activo=product.is_active,
    )


class CatalogService:
    """Service layer for the category, service and product catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def list_categories(self) -> list[Category]:
        return self.repo.get_categories(self.db)

    def create_category(self, data: CategoryCreate) -> Category:
        if self.repo.get_category_by_name(self.db, data.nombre):
            raise HTTPException(status_code=409, detail="Ya existe una categoría con ese nombre")

        return self.repo.create_category(
            self.db,
            name=data.nombre,
            description=data.descripcion,
            color=data.color,
            icon=data.icono,
        )

    def list_services(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> ServiceListResponse:
        services, total = self.repo.search_services(
            self.db, search, category_id, (page - 1) * limit, limit
        )
        return ServiceListResponse(
            servicios=[service_response(s) for s in services],
            pagination=Pagination.build(page, limit, total),
        )

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Servicio no encontrado")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        """Create a catalog service after checking its category and name"""
        if not self.repo.get_category_by_id(self.db, data.categoriaId):
            raise HTTPException(status_code=404, detail="Categoría no encontrada")

        if self.repo.get_active_service_by_name(self.db, data.nombre):
            raise HTTPException(status_code=409, detail="Ya existe un servicio activo con ese nombre")

        service = self.repo.create_service(
            self.db,
            name=data.nombre,
            description=data.descripcion.strip() if data.descripcion else None,
            category_id=data.categoriaId,
            base_price=data.precioBase,
            sale_price=data.precioVenta,
            duration_minutes=data.duracionMinutos,
            requires_products=data.requiereProductos,
            notes=data.notas.strip() if data.notas else None,
        )
        logger.info(f"✅ Service created: {service.name} ({service.duration_minutes} min)")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)

        name = data.nombre.strip() if data.nombre else None
        if name and self.repo.get_active_service_by_name(self.db, name, exclude_id=service_id):
            raise HTTPException(status_code=409, detail="Ya existe un servicio activo con ese nombre")

        if data.categoriaId and not self.repo.get_category_by_id(self.db, data.categoriaId):
            raise HTTPException(status_code=404, detail="Categoría no encontrada")

        return self.repo.update_service(
            self.db,
            service,
            name=name,
            description=data.descripcion,
            category_id=data.categoriaId,
            base_price=data.precioBase,
            sale_price=data.precioVenta,
            duration_minutes=data.duracionMinutos,
            requires_products=data.requiereProductos,
            notes=data.notas,
            is_active=data.activo,
        )

    def delete_service(self, service_id: str) -> dict:
        """Delete a service that no appointment references"""
        service = self.get_service(service_id)

        if self.repo.has_appointments(self.db, service_id):
            raise HTTPException(
                status_code=400,
                detail="No se puede eliminar un servicio que tiene citas registradas",
            )

        self.repo.delete_service(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")
        return {"message": "Servicio eliminado exitosamente"}

    # ------------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------------

    def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        low_stock: bool = False,
    ) -> ProductListResponse:
        products, total = self.repo.search_products(
            self.db, search, category_id, low_stock, (page - 1) * limit, limit
        )
        return ProductListResponse(
            productos=[product_response(p) for p in products],
            pagination=Pagination.build(page, limit, total),
        )

    def get_product(self, product_id: str) -> Product:
        product = self.repo.get_product_by_id(self.db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Producto no encontrado")
        return product

    def _ensure_unique_product(self, name: Optional[str], code: Optional[str], exclude_id: Optional[str] = None):
        if code and self.repo.get_active_product(self.db, code=code, exclude_id=exclude_id):
            raise HTTPException(status_code=409, detail="Ya existe un producto activo con ese código")
        if name and self.repo.get_active_product(self.db, name=name, exclude_id=exclude_id):
            raise HTTPException(status_code=409, detail="Ya existe un producto activo con ese nombre")

    def create_product(self, data: ProductCreate) -> Product:
        """Create a product after checking its category, code and name"""
        if not self.repo.get_category_by_id(self.db, data.categoriaId):
            raise HTTPException(status_code=404, detail="Categoría no encontrada")

        self._ensure_unique_product(data.nombre, data.codigo)

        product = self.repo.create_product(
            self.db,
            name=data.nombre,
            description=data.descripcion.strip() if data.descripcion else None,
            category_id=data.categoriaId,
            brand=data.marca.strip() if data.marca else None,
            code=data.codigo,
            cost_price=data.precioCosto,
            sale_price=data.precioVenta,
            stock=data.stock,
            min_stock=data.stockMinimo,
            unit=data.unidadMedida or "unidad",
            expires_on=data.fechaVencimiento,
            supplier=data.proveedor.strip() if data.proveedor else None,
            notes=data.notas.strip() if data.notas else None,
        )
        logger.info(f"✅ Product created: {product.name} (stock {product.stock})")
        return product

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)

        name = data.nombre.strip() if data.nombre else None
        code = data.codigo.strip() if data.codigo else None
        self._ensure_unique_product(name, code, exclude_id=product_id)

        if data.categoriaId and not self.repo.get_category_by_id(self.db, data.categoriaId):
            raise HTTPException(status_code=404, detail="Categoría no encontrada")

        updated = self.repo.update_product(
            self.db,
            product,
            name=name,
            description=data.descripcion,
            category_id=data.categoriaId,
            brand=data.marca,
            code=code,
            cost_price=data.precioCosto,
            sale_price=data.precioVenta,
            stock=data.stock,
            min_stock=data.stockMinimo,
            unit=data.unidadMedida,
            expires_on=data.fechaVencimiento,
            supplier=data.proveedor,
            notes=data.notas,
            is_active=data.activo,
        )
        if updated.low_stock:
            logger.warning(f"⚠️ Product {updated.name} is low on stock ({updated.stock}/{updated.min_stock})")
        return updated

    def delete_product(self, product_id: str) -> dict:
        product = self.get_product(product_id)
        self.repo.delete_product(self.db, product)
        logger.info(f"🗑️ Product {product_id} deleted")
        return {"message": "Producto eliminado exitosamente"}
