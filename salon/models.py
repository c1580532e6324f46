import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a unique string identifier"""
    return str(uuid.uuid4())


# Appointment status values as stored and sent over the wire
STATUS_PENDING = "PENDIENTE"
STATUS_CONFIRMED = "CONFIRMADA"
STATUS_DONE = "REALIZADA"
STATUS_CANCELLED = "CANCELADA"
STATUS_RESCHEDULED = "REAGENDADA"

APPOINTMENT_STATUSES = (
    STATUS_PENDING,
    STATUS_CONFIRMED,
    STATUS_DONE,
    STATUS_CANCELLED,
    STATUS_RESCHEDULED,
)

# Statuses that block a slot when creating or moving an appointment
ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    hair_type = Column(String(50), nullable=True)  # LISO, RIZADO, ONDULADO...
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    appointments = relationship("Appointment", back_populates="client")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=True)  # e.g., #RRGGBB
    icon = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    services = relationship("Service", back_populates="category")
    products = relationship("Product", back_populates="category")


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    base_price = Column(Float, nullable=False)
    sale_price = Column(Float, nullable=True)
    # Drives the occupied interval of every appointment booked for this service
    duration_minutes = Column(Integer, default=30, nullable=False)
    requires_products = Column(Boolean, default=False, nullable=False)  # Consumes inventory
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="services")
    appointments = relationship("Appointment", back_populates="service")

    @property
    def effective_price(self) -> float:
        """Sale price when set, otherwise base price"""
        return self.sale_price or self.base_price


class Product(Base):
    """Product sold or used in the salon; stock is edited directly"""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    brand = Column(String(100), nullable=True)
    code = Column(String(50), nullable=True, index=True)  # Barcode or internal reference
    cost_price = Column(Float, nullable=False)
    sale_price = Column(Float, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    min_stock = Column(Integer, default=5, nullable=False)
    unit = Column(String(20), default="unidad", nullable=False)  # unidad, ml, gr...
    expires_on = Column(Date, nullable=True)
    supplier = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="products")

    @property
    def low_stock(self) -> bool:
        return self.stock <= self.min_stock


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=True)

    # Scheduling
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM format

    # Status workflow: PENDIENTE → CONFIRMADA → REALIZADA, or CANCELADA / REAGENDADA
    status = Column(String(20), default=STATUS_PENDING, nullable=False, index=True)

    service_label = Column(String(255), nullable=True)  # Free-text service name
    price = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    reminder = Column(Boolean, default=False, nullable=False)
    paid = Column(Boolean, default=False, nullable=False)  # Payment registered for a done appointment

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="appointments")
    service = relationship("Service", back_populates="appointments")


class Setting(Base):
    """Key/value business configuration (currency, business info, schedule rules)"""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)
    type = Column(String(20), default="string", nullable=False)
    category = Column(String(50), default="general", nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
