"""Car-rental listing model."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class ListingStatus(str, Enum):
    """Moderation state of a listing. Any state may move to any other."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Listing(SQLModel, table=True):
    """Listing submitted for moderation."""

    __tablename__ = "listings"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    make: str = Field(max_length=100)
    model: str = Field(max_length=100)
    year: int
    price_per_day: float = Field(ge=0)
    location: str = Field(max_length=255)
    image_url: Optional[str] = None
    status: str = Field(default=ListingStatus.PENDING.value, max_length=20, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), index=True)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
