"""Audit logging utility for the append-only moderation trail."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.models.audit_log import AuditLog


def status_change_action(new_status: str) -> str:
    """Action tag recorded for a status transition."""
    return f"status_changed_to_{new_status}"


def create_audit_log(
    session: AsyncSession,
    listing_id: int,
    admin_id: int,
    action: str,
    old_status: Optional[str] = None,
    new_status: Optional[str] = None,
) -> AuditLog:
    """Create an audit log entry.

    Args:
        session: Database session
        listing_id: Listing the action was performed on
        admin_id: User who performed the action
        action: Action tag (e.g. 'status_changed_to_approved', 'listing_updated')
        old_status: Listing status before the action
        new_status: Listing status after the action

    Returns:
        Created AuditLog instance
    """
    audit_log = AuditLog(
        listing_id=listing_id,
        admin_id=admin_id,
        action=action,
        old_status=old_status,
        new_status=new_status,
    )

    session.add(audit_log)
    # Note: Don't commit here - let the caller commit
    # This keeps the audit entry in the same transaction as the change it records

    return audit_log
