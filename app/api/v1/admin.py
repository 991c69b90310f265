"""Super Admin API routes for platform settings, logs and statistics."""

import logging
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.dependencies import require_super_admin_user
from app.exceptions import InvalidInputException
from app.models.cron_job_log import CronJobStatus
from app.models.tool import IconType
from app.schemas.admin import CronJobLogResponse, PlatformStatsResponse
from app.schemas.common import PaginationInfo
from app.schemas.settings import LegalDocumentType, LegalDocumentUpdate, SiteMaintenanceUpdate
from app.services.cron_log_service import get_cron_log_service
from app.services.settings_service import get_settings_service
from app.services.stats_service import get_stats_service
from app.services.tool_icon_service import get_tool_icon_service
from app.utils.validation import clamp_pagination, has_more, parse_choice

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_super_admin_user)],
)


# ============== Cron Logs ==============


@router.get("/cron-logs")
async def list_cron_logs(
    job_name: str | None = None,
    status: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List cron job executions, newest first (Super Admin only)."""
    job_status = parse_choice("status", status, CronJobStatus) if status else None
    limit, offset = clamp_pagination(
        limit,
        offset,
        default_limit=settings.cron_log_default_limit,
        max_limit=settings.cron_log_max_limit,
    )

    service = get_cron_log_service()
    logs, total = await service.list_logs(
        db, job_name=job_name, status=job_status, limit=limit, offset=offset
    )

    return {
        "logs": [CronJobLogResponse.model_validate(log).model_dump(mode="json") for log in logs],
        "pagination": PaginationInfo(
            total=total,
            limit=limit,
            offset=offset,
            hasMore=has_more(total, limit, offset),
        ).model_dump(),
    }


# ============== Legal Documents ==============


@router.get("/legal")
async def get_legal_document(
    type: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Get the terms of service or privacy policy (Super Admin only)."""
    doc_type = parse_choice("type", type, LegalDocumentType)
    return await get_settings_service().get_legal_document(db, doc_type)


@router.put("/legal")
async def save_legal_document(
    request: LegalDocumentUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Replace the terms of service or privacy policy (Super Admin only)."""
    last_updated = await get_settings_service().save_legal_document(
        db, request.type, request.content
    )
    return {"success": True, "lastUpdated": last_updated}


# ============== Site Maintenance ==============


@router.get("/site-maintenance")
async def get_site_maintenance(
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Get the sign-up switch and platform fee (Super Admin only)."""
    service = get_settings_service()
    setting = await service.get_site_maintenance(db)
    platform_fee = await service.get_platform_fee(db)
    return {"setting": setting, "platformFee": platform_fee}


@router.put("/site-maintenance")
async def update_site_maintenance(
    request: SiteMaintenanceUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Change the sign-up switch and/or platform fee (Super Admin only)."""
    service = get_settings_service()
    response: dict = {"success": True}

    if request.signUpsDisabled is not None:
        response["setting"] = await service.set_site_maintenance(db, request.signUpsDisabled)
    if request.platformFee is not None:
        response["platformFee"] = await service.set_platform_fee(db, request.platformFee)

    return response


# ============== Platform Stats ==============


@router.get("/stats")
async def get_platform_stats(
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Get platform-wide statistics (Super Admin only)."""
    stats = await get_stats_service().get_platform_stats(db)
    return PlatformStatsResponse(**stats).model_dump()


# ============== Tool Icons ==============


@router.post("/tools/icons")
async def upload_tool_icon(
    tool_id: str | None = Form(None),
    icon_type: str | None = Form(None),
    icon_name: str | None = Form(None),
    icon_file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Set a tool's icon for one icon type (Super Admin only).

    Accepts either ``icon_name`` (icon library name or URL) or an uploaded
    ``icon_file``.
    """
    icon_name = icon_name.strip() if icon_name else None
    if not tool_id or not icon_type or (not icon_name and icon_file is None):
        raise InvalidInputException(
            "tool_id, icon_type and one of icon_name or icon_file are required"
        )
    if icon_name and icon_file is not None:
        raise InvalidInputException("Provide either icon_name or icon_file, not both")

    try:
        tool_uuid = uuid.UUID(tool_id)
    except ValueError:
        raise InvalidInputException("tool_id must be a valid UUID")

    kind = parse_choice("icon_type", icon_type, IconType)

    icon_data = None
    if icon_file is not None:
        icon_data = await icon_file.read()
        if not icon_data:
            raise InvalidInputException("icon_file is empty")

    created = await get_tool_icon_service().upload_icon(
        db, tool_uuid, kind, icon_name=icon_name, icon_data=icon_data
    )

    return {
        "success": True,
        "message": "Icon uploaded successfully" if created else "Icon updated successfully",
    }
