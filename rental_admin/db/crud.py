"""Storage operations for users, listings and audit logs.

Functions here never commit; the caller owns the transaction so that a
status change and its audit entry are persisted together.
"""

from typing import Any, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rental_admin.config.logger import app_logger
from rental_admin.models import AuditLog, Listing, User


# ============================================
# User Operations
# ============================================

async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    """Get user by username."""
    try:
        result = await session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()
    except Exception as e:
        app_logger.error(f"Failed to get user by username: {e}")
        raise


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    """Get user by ID."""
    try:
        return await session.get(User, user_id)
    except Exception as e:
        app_logger.error(f"Failed to get user by ID: {e}")
        raise


async def create_user(session: AsyncSession, username: str, password_hash: str, role: str) -> User:
    """Add a new user to the session and flush to assign its id."""
    user = User(username=username, password_hash=password_hash, role=role)
    session.add(user)
    await session.flush()
    return user


# ============================================
# Listing Operations
# ============================================

async def list_listings(session: AsyncSession) -> List[Listing]:
    """Get all listings, newest first."""
    try:
        result = await session.execute(
            select(Listing).order_by(Listing.created_at.desc(), Listing.id.desc())
        )
        return list(result.scalars().all())
    except Exception as e:
        app_logger.error(f"Failed to list listings: {e}")
        raise


async def get_listing(session: AsyncSession, listing_id: int) -> Optional[Listing]:
    """Get listing by ID."""
    try:
        return await session.get(Listing, listing_id)
    except Exception as e:
        app_logger.error(f"Failed to get listing {listing_id}: {e}")
        raise


async def count_listings(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(Listing))
    return result.scalar_one()


def add_listing(session: AsyncSession, **fields: Any) -> Listing:
    listing = Listing(**fields)
    session.add(listing)
    return listing


# ============================================
# Audit Log Operations
# ============================================

async def get_recent_audit_logs(session: AsyncSession, limit: int) -> List[Tuple[AuditLog, str]]:
    """Get the newest audit entries joined with the acting admin's username."""
    try:
        result = await session.execute(
            select(AuditLog, User.username)
            .join(User, AuditLog.admin_id == User.id)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
            .limit(limit)
        )
        return [(entry, username) for entry, username in result.all()]
    except Exception as e:
        app_logger.error(f"Failed to get audit logs: {e}")
        raise

