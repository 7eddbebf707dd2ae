"""Audit trail endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.logger import app_logger
from rental_admin.config.settings import Settings
from rental_admin.db.db import get_session
from rental_admin.models import User
from rental_admin.services import moderation
from rental_admin.utils.auth import RequireAuditReader, get_settings
from rental_admin.utils.errors import AppError, InternalError
from rental_admin.utils.responses import ERROR_RESPONSES
from rental_admin.api.audit.schemas import AuditLogListResponse, AuditLogResponse

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=AuditLogListResponse, responses=ERROR_RESPONSES)
async def list_audit_logs(
    user: User = RequireAuditReader,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Return the newest audit entries (at most AUDIT_LOG_LIMIT), newest first."""
    try:
        rows = await moderation.recent_audit_logs(session, settings.AUDIT_LOG_LIMIT)
        return AuditLogListResponse(
            logs=[
                AuditLogResponse(**entry.model_dump(), username=username)
                for entry, username in rows
            ]
        )
    except AppError:
        raise
    except Exception as e:
        app_logger.error(f"Fetch audit logs failed: {e}")
        raise InternalError() from e
