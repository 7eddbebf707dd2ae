"""Helpers shared by the API tests."""

from datetime import datetime, timezone
from typing import Optional

from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlmodel import Session, select

from rental_admin.models import AuditLog, Listing, User
from rental_admin.utils.passwords import hash_password

TEST_SECRET = "test-secret"


def login(client: TestClient, username: str = "admin", password: str = "admin123") -> str:
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_user(engine: Engine, username: str, password: str, role: str) -> int:
    with Session(engine) as session:
        user = User(username=username, password_hash=hash_password(password), role=role)
        session.add(user)
        session.commit()
        return user.id


def create_listing(engine: Engine, **overrides) -> int:
    fields = {
        "title": "Toyota Camry 2022 - Reliable & Comfortable",
        "description": "Clean interior, excellent fuel economy.",
        "make": "Toyota",
        "model": "Camry",
        "year": 2022,
        "price_per_day": 45.0,
        "location": "Downtown",
        "image_url": "https://via.placeholder.com/300x200?text=Toyota+Camry",
        "status": "pending",
    }
    fields.update(overrides)
    with Session(engine) as session:
        listing = Listing(**fields)
        session.add(listing)
        session.commit()
        return listing.id


def get_listing(engine: Engine, listing_id: int) -> Optional[Listing]:
    with Session(engine) as session:
        return session.get(Listing, listing_id)


def get_audit_rows(engine: Engine, listing_id: Optional[int] = None) -> list[AuditLog]:
    with Session(engine) as session:
        query = select(AuditLog).order_by(AuditLog.id)
        if listing_id is not None:
            query = query.where(AuditLog.listing_id == listing_id)
        return list(session.exec(query).all())


def utc_naive(value: datetime) -> datetime:
    """Normalize a datetime read back from SQLite for comparisons."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
