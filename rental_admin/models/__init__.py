"""Models module - imports all models for SQLModel registration."""

# Import all models so SQLModel can register them
from rental_admin.models.user import ADMIN_ROLE, User
from rental_admin.models.listing import Listing, ListingStatus
from rental_admin.models.audit_log import AuditLog

__all__ = [
    "ADMIN_ROLE",
    "User",
    "Listing",
    "ListingStatus",
    "AuditLog",
]
