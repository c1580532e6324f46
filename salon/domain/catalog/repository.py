"""Catalog repository - Database operations for categories, services and products"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, Category, Product, Service


class CatalogRepository:
    """Repository for category, service and product database operations"""

    @staticmethod
    def get_categories(db: Session) -> list[Category]:
        return db.query(Category).filter(Category.is_active.is_(True)).order_by(Category.name).all()

    @staticmethod
    def get_category_by_id(db: Session, category_id: str) -> Optional[Category]:
        return db.query(Category).filter(Category.id == category_id).first()

    @staticmethod
    def get_category_by_name(db: Session, name: str) -> Optional[Category]:
        return db.query(Category).filter(Category.name == name).first()

    @staticmethod
    def create_category(db: Session, **category_data) -> Category:
        category = Category(**category_data)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def search_services(
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Service], int]:
        """Active services matching name/description, with the total count"""
        query = db.query(Service).filter(Service.is_active.is_(True))

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Service.name.ilike(pattern), Service.description.ilike(pattern)))
        if category_id:
            query = query.filter(Service.category_id == category_id)

        total = query.count()
        services = (
            query.options(joinedload(Service.category))
            .order_by(Service.name)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return services, total

    @staticmethod
    def get_service_by_id(db: Session, service_id: str) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_active_service_by_name(
        db: Session, name: str, exclude_id: Optional[str] = None
    ) -> Optional[Service]:
        query = db.query(Service).filter(Service.name == name, Service.is_active.is_(True))
        if exclude_id:
            query = query.filter(Service.id != exclude_id)
        return query.first()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def has_appointments(db: Session, service_id: str) -> bool:
        return db.query(Appointment.id).filter(Appointment.service_id == service_id).first() is not None

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()

    @staticmethod
    def search_products(
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        low_stock: bool = False,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Product], int]:
        """Active products matching name/description/brand/code, with the total count"""
        query = db.query(Product).filter(Product.is_active.is_(True))

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Product.name.ilike(pattern),
                    Product.description.ilike(pattern),
                    Product.brand.ilike(pattern),
                    Product.code.ilike(pattern),
                )
            )
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if low_stock:
            query = query.filter(Product.stock <= Product.min_stock)

        total = query.count()
        products = (
            query.options(joinedload(Product.category))
            .order_by(Product.name)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return products, total

    @staticmethod
    def get_product_by_id(db: Session, product_id: str) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_active_product(
        db: Session,
        name: Optional[str] = None,
        code: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[Product]:
        """Active product with the given name or code"""
        query = db.query(Product).filter(Product.is_active.is_(True))
        if name is not None:
            query = query.filter(Product.name == name)
        if code is not None:
            query = query.filter(Product.code == code)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        return query.first()

    @staticmethod
    def create_product(db: Session, **product_data) -> Product:
        product = Product(**product_data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        for key, value in updates.items():
            if value is not None and hasattr(product, key):
                setattr(product, key, value)

        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product: Product) -> None:
        db.delete(product)
        db.commit()
