"""Audit log model (append-only)."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, event
from sqlmodel import Field, SQLModel


class AuditLog(SQLModel, table=True):
    """Record of an admin action against a listing.

    Entries are written once and never changed. The ORM listeners below
    reject flushes that would update or delete an existing row.
    """

    __tablename__ = "audit_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    listing_id: int = Field(foreign_key="listings.id", index=True)
    admin_id: int = Field(foreign_key="users.id", index=True)
    action: str = Field(max_length=100)  # 'status_changed_to_approved', 'listing_updated'
    old_status: Optional[str] = Field(default=None, max_length=20)
    new_status: Optional[str] = Field(default=None, max_length=20)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), index=True)
    )


@event.listens_for(AuditLog, "before_update")
def _reject_audit_update(mapper, connection, target) -> None:
    raise ValueError("AuditLog entries are append-only. Updates are not allowed.")


@event.listens_for(AuditLog, "before_delete")
def _reject_audit_delete(mapper, connection, target) -> None:
    raise ValueError("AuditLog entries are append-only. Deletions are not allowed.")
