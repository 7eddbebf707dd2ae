"""Listing moderation endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.logger import app_logger
from rental_admin.config.settings import Settings
from rental_admin.db import crud
from rental_admin.db.db import get_session
from rental_admin.models import User
from rental_admin.services import moderation
from rental_admin.utils.auth import (
    RequireAuth,
    RequireListingEditor,
    RequireStatusModerator,
    get_settings,
)
from rental_admin.utils.errors import AppError, InternalError
from rental_admin.utils.responses import AckResponse, ERROR_RESPONSES
from rental_admin.api.listings.schemas import (
    ListingListResponse,
    ListingResponse,
    ListingUpdate,
    StatusUpdateRequest,
)

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("", response_model=ListingListResponse, responses=ERROR_RESPONSES)
async def list_listings(
    user: User = RequireAuth,
    session: AsyncSession = Depends(get_session),
):
    """List every listing, newest first. Any authenticated user may read."""
    try:
        listings = await crud.list_listings(session)
        return ListingListResponse(
            listings=[ListingResponse.model_validate(listing) for listing in listings]
        )
    except AppError:
        raise
    except Exception as e:
        app_logger.error(f"Fetch listings failed: {e}")
        raise InternalError() from e


@router.put("/{listing_id}", response_model=ListingResponse, responses=ERROR_RESPONSES)
async def update_listing(
    listing_id: int,
    payload: ListingUpdate,
    admin: User = RequireListingEditor,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Replace a listing's editable fields. Admin only."""
    try:
        listing = await moderation.edit_listing(
            session,
            listing_id,
            payload.model_dump(),
            admin,
            audit_edits=settings.AUDIT_LISTING_EDITS,
        )
        return ListingResponse.model_validate(listing)
    except AppError:
        raise
    except Exception as e:
        app_logger.error(f"Listing update failed: {e}")
        raise InternalError() from e


@router.post("/{listing_id}/status", response_model=AckResponse, responses=ERROR_RESPONSES)
async def update_listing_status(
    listing_id: int,
    payload: StatusUpdateRequest,
    admin: User = RequireStatusModerator,
    session: AsyncSession = Depends(get_session),
):
    """Change a listing's moderation status and record it in the audit log. Admin only."""
    try:
        await moderation.change_listing_status(session, listing_id, payload.status, admin)
        return AckResponse(success=True)
    except AppError:
        raise
    except Exception as e:
        app_logger.error(f"Status update failed: {e}")
        raise InternalError() from e
