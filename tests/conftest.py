import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-suite")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealership.core.enums import FuelType, Transmission, UserRole, VehicleStatus
from dealership.core.security import create_access_token, hash_password
from dealership.db.session import Base, get_db
from dealership.main import app
from dealership.models import Inquiry, User, Vehicle, VehicleFeature, VehicleImage


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def token():
    return create_access_token({"userId": 1, "email": "staff@example.com", "rol": "ADMIN"})


@pytest.fixture()
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_vehicle(db_session):
    """Factory inserting a vehicle with ``images`` placeholder images."""
    counter = {"n": 0}

    def _make_vehicle(images: int = 0, features=(), **overrides) -> Vehicle:
        counter["n"] += 1
        values = dict(
            brand="Toyota",
            model="Corolla",
            year=2020,
            price=15000,
            odometer=30000,
            fuel_type=FuelType.GASOLINE,
            transmission=Transmission.MANUAL,
            color="Blanco",
            doors=4,
            status=VehicleStatus.AVAILABLE,
            featured=False,
            created_at=datetime(2024, 1, 1) + timedelta(minutes=counter["n"]),
        )
        values.update(overrides)
        vehicle = Vehicle(**values)
        vehicle.images = [
            VehicleImage(url=f"https://img.example.com/{counter['n']}/{i}.jpg", order=i, public_id=f"autos/{counter['n']}-{i}")
            for i in range(images)
        ]
        vehicle.features = [VehicleFeature(name=name) for name in features]
        db_session.add(vehicle)
        db_session.commit()
        db_session.refresh(vehicle)
        return vehicle

    return _make_vehicle


@pytest.fixture()
def make_inquiry(db_session):
    counter = {"n": 0}

    def _make_inquiry(**overrides) -> Inquiry:
        counter["n"] += 1
        values = dict(
            name="Ana Pérez",
            email=f"ana{counter['n']}@example.com",
            phone="1155551234",
            message="Is this car still available?",
            created_at=datetime(2024, 2, 1) + timedelta(minutes=counter["n"]),
        )
        values.update(overrides)
        inquiry = Inquiry(**values)
        db_session.add(inquiry)
        db_session.commit()
        db_session.refresh(inquiry)
        return inquiry

    return _make_inquiry


@pytest.fixture()
def make_user(db_session):
    def _make_user(email="admin@example.com", password="s3cret-pass", active=True, role=UserRole.ADMIN) -> User:
        user = User(
            email=email,
            name="Admin",
            role=role,
            is_active=active,
            password_hash=hash_password(password),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user
