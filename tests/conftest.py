import os
from datetime import date

# In-memory database for the whole test session; must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from salon.cache import SettingsCache  # noqa: E402
from salon.database import Base, SessionLocal, engine  # noqa: E402
from salon.main import app  # noqa: E402
from salon.models import Appointment, Category, Client, Service  # noqa: E402

DAY = date(2024, 3, 15)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    app.state.settings_cache = SettingsCache(ttl=300)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_client(db):
    def _make(first_name="Ana", last_name="García", **kwargs):
        customer = Client(first_name=first_name, last_name=last_name, **kwargs)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    return _make


@pytest.fixture
def make_service(db):
    def _make(name="Corte", duration_minutes=30, base_price=20.0, **kwargs):
        category = db.query(Category).filter(Category.name == "Peluquería").first()
        if category is None:
            category = Category(name="Peluquería")
            db.add(category)
            db.commit()
        service = Service(
            name=name,
            category_id=category.id,
            duration_minutes=duration_minutes,
            base_price=base_price,
            **kwargs,
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    return _make


@pytest.fixture
def make_appointment(db, make_client):
    def _make(time="10:00", status="PENDIENTE", day=DAY, customer=None, service=None, **kwargs):
        customer = customer or make_client()
        appointment = Appointment(
            client_id=customer.id,
            service_id=service.id if service else None,
            date=day,
            time=time,
            status=status,
            **kwargs,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _make
