"""Pytest configuration and shared fixtures."""

import os

# Must be set before app.core.config builds its settings singleton
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token
from app.main import app
from app.models.booking import Booking, BookingStatus
from app.models.hall import StudyHall
from app.models.seat import Seat
from app.models.user import User, UserRole

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def make_user(db, email: str, role: UserRole = UserRole.OWNER) -> User:
    user = User(email=email, full_name=email.split("@")[0], role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_hall(db, owner: User, name: str = "Quiet Corner") -> StudyHall:
    hall = StudyHall(owner_id=owner.id, hall_name=name, seat_count=0)
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


def make_seat(db, hall: StudyHall, number: str, x: int = 100, y: int = 100) -> Seat:
    seat = Seat(hall_id=hall.id, seat_number=number, x_coord=x, y_coord=y)
    db.add(seat)
    db.commit()
    db.refresh(seat)
    return seat


def make_booking(
    db,
    seat: Seat,
    start: datetime,
    end: datetime,
    status: BookingStatus = BookingStatus.CONFIRMED,
    amount: str = "100.00",
) -> Booking:
    booking = Booking(seat_id=seat.id, start_time=start, end_time=end, status=status, amount=Decimal(amount))
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def owner(db) -> User:
    return make_user(db, "owner@example.com")


@pytest.fixture
def other_owner(db) -> User:
    return make_user(db, "rival@example.com")


@pytest.fixture
def hall(db, owner) -> StudyHall:
    return make_hall(db, owner)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}


@pytest.fixture
def owner_headers(owner) -> dict:
    return auth_headers(owner)
