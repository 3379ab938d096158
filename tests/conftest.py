import os

# Configure the app before it is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CLOUDINARY_URL"] = ""
os.environ["ADMIN_NOTIFICATION_EMAIL_ENABLE"] = "false"

from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.db import Base, SessionLocal, engine
from app.main import app
from app.models import Room

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def db():
    from app import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def make_room(db, number, floor=3, price="600.00", capacity=1, available=True, room_type="Single"):
    room = Room(
        room_number=number,
        floor=floor,
        room_type=room_type,
        capacity=capacity,
        price_per_night=Decimal(price),
        amenities=["Free Wi-Fi"],
        is_available=available,
    )
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def rooms(db):
    return [
        make_room(db, "301", floor=3),
        make_room(db, "302", floor=3, capacity=2),
        make_room(db, "401", floor=4),
    ]


@pytest.fixture
def stay():
    """A two-night stay starting next week."""
    check_in = date.today() + timedelta(days=7)
    return check_in, check_in + timedelta(days=2)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "CLOUDINARY_URL", "")
    return tmp_path / settings.SCREENSHOT_BUCKET


@pytest.fixture
def client(db):
    return TestClient(app)
