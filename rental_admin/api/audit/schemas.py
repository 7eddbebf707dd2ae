"""Audit trail response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AuditLogResponse(BaseModel):
    """One audit entry with the acting admin's username."""

    id: int
    listing_id: int
    admin_id: int
    action: str
    old_status: Optional[str]
    new_status: Optional[str]
    timestamp: datetime
    username: str


class AuditLogListResponse(BaseModel):
    logs: List[AuditLogResponse]
