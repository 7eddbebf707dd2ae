"""Listing request and response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from rental_admin.models import ListingStatus


class ListingResponse(BaseModel):
    """Schema for listing response."""

    id: int
    title: str
    description: Optional[str]
    make: str
    model: str
    year: int
    price_per_day: float
    location: str
    image_url: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ListingListResponse(BaseModel):
    listings: List[ListingResponse]


class ListingUpdate(BaseModel):
    """Full replacement of a listing's editable fields.

    Every field is written; optional fields that are omitted are cleared.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: int
    price_per_day: float = Field(..., ge=0)
    location: str = Field(..., min_length=1, max_length=255)
    image_url: Optional[str] = None

    model_config = {"json_schema_extra": {"example": {
        "title": "Toyota Camry 2022 - Reliable & Comfortable",
        "description": "Clean interior, excellent fuel economy.",
        "make": "Toyota",
        "model": "Camry",
        "year": 2022,
        "price_per_day": 45.0,
        "location": "Downtown",
        "image_url": "https://via.placeholder.com/300x200?text=Toyota+Camry"
    }}}


class StatusUpdateRequest(BaseModel):
    """Request schema for a moderation status change."""

    status: ListingStatus = Field(..., description="New status: pending, approved or rejected")

    model_config = {"json_schema_extra": {"example": {"status": "approved"}}}
