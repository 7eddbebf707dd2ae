"""Listing moderation operations.

Status transitions and their audit entries are committed together: if the
audit insert fails, the status update is rolled back as well.

There is no row locking or version check. Two concurrent transitions on the
same listing can both read the same ``old_status``, so the audit trail may
show a prior value that was already overwritten.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.logger import app_logger
from rental_admin.db import crud
from rental_admin.models import AuditLog, Listing, ListingStatus, User
from rental_admin.utils.audit import create_audit_log, status_change_action
from rental_admin.utils.errors import NotFoundError

EDITABLE_FIELDS = (
    "title",
    "description",
    "make",
    "model",
    "year",
    "price_per_day",
    "location",
    "image_url",
)

LISTING_UPDATED_ACTION = "listing_updated"


async def _load_listing(session: AsyncSession, listing_id: int) -> Listing:
    listing = await crud.get_listing(session, listing_id)
    if listing is None:
        raise NotFoundError("Listing not found")
    return listing


async def change_listing_status(
    session: AsyncSession,
    listing_id: int,
    new_status: ListingStatus,
    admin: User,
) -> AuditLog:
    """Move a listing to ``new_status`` and record the transition.

    Any status may move to any other, including itself.

    Returns:
        The audit entry written for the transition.

    Raises:
        NotFoundError: If the listing does not exist
    """
    listing = await _load_listing(session, listing_id)
    old_status = listing.status
    status_value = ListingStatus(new_status).value

    listing.status = status_value
    listing.updated_at = datetime.now(timezone.utc)
    session.add(listing)

    entry = create_audit_log(
        session,
        listing_id=listing.id,
        admin_id=admin.id,
        action=status_change_action(status_value),
        old_status=old_status,
        new_status=status_value,
    )

    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    app_logger.info(
        f"Listing {listing.id} status {old_status} -> {status_value} by {admin.username} (ID: {admin.id})"
    )
    return entry


async def edit_listing(
    session: AsyncSession,
    listing_id: int,
    fields: Dict[str, Any],
    admin: User,
    audit_edits: bool = False,
) -> Listing:
    """Overwrite every editable field of a listing.

    Fields absent from ``fields`` are written as None; status is left alone.
    When ``audit_edits`` is set, a ``listing_updated`` entry is recorded with
    the unchanged status on both sides.

    Raises:
        NotFoundError: If the listing does not exist
    """
    listing = await _load_listing(session, listing_id)

    for name in EDITABLE_FIELDS:
        setattr(listing, name, fields.get(name))
    listing.updated_at = datetime.now(timezone.utc)
    session.add(listing)

    if audit_edits:
        create_audit_log(
            session,
            listing_id=listing.id,
            admin_id=admin.id,
            action=LISTING_UPDATED_ACTION,
            old_status=listing.status,
            new_status=listing.status,
        )

    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    await session.refresh(listing)

    app_logger.info(f"Listing {listing.id} edited by {admin.username} (ID: {admin.id})")
    return listing


async def recent_audit_logs(session: AsyncSession, limit: int) -> List[Tuple[AuditLog, str]]:
    """Newest ``limit`` audit entries with the acting admin's username."""
    return await crud.get_recent_audit_logs(session, limit)
