"""Catalog router - FastAPI endpoints for categories, services and products"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from .service import CatalogService, category_response, product_response, service_response

categories_router = APIRouter(prefix="/categorias", tags=["Catalog"])
services_router = APIRouter(prefix="/servicios", tags=["Catalog"])
products_router = APIRouter(prefix="/productos", tags=["Catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


# ============================================================================
# CATEGORIES
# ============================================================================


@categories_router.get("", response_model=list[CategoryResponse])
async def get_categories(service: CatalogService = Depends(get_catalog_service)):
    """Get active categories"""
    return [category_response(c) for c in service.list_categories()]


@categories_router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate, service: CatalogService = Depends(get_catalog_service)):
    """Create a category"""
    return category_response(service.create_category(data))


# ============================================================================
# SERVICES
# ============================================================================


@services_router.get("", response_model=ServiceListResponse)
async def get_services(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    search: Optional[str] = Query(None),
    categoriaId: Optional[str] = Query(None),
    service: CatalogService = Depends(get_catalog_service),
):
    """Get active services with optional search and category filter"""
    return service.list_services(page, limit, search, categoriaId)


@services_router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, service: CatalogService = Depends(get_catalog_service)):
    return service_response(service.get_service(service_id))


@services_router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(data: ServiceCreate, service: CatalogService = Depends(get_catalog_service)):
    """Create a service"""
    return service_response(service.create_service(data))


@services_router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a service"""
    return service_response(service.update_service(service_id, data))


@services_router.delete("/{service_id}")
async def delete_service(service_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Delete a service without appointments"""
    return service.delete_service(service_id)


# ============================================================================
# PRODUCTS
# ============================================================================


@products_router.get("", response_model=ProductListResponse)
async def get_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    search: Optional[str] = Query(None),
    categoriaId: Optional[str] = Query(None),
    stockBajo: bool = Query(False),
    service: CatalogService = Depends(get_catalog_service),
):
    """Get products with optional search, category and low-stock filters"""
    return service.list_products(page, limit, search, categoriaId, stockBajo)


@products_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, service: CatalogService = Depends(get_catalog_service)):
    return product_response(service.get_product(product_id))


@products_router.post("", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreate, service: CatalogService = Depends(get_catalog_service)):
    """Create a product"""
    return product_response(service.create_product(data))


@products_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    return product_response(service.update_product(product_id, data))


@products_router.delete("/{product_id}")
async def delete_product(product_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Delete a product"""
    return service.delete_product(product_id)
