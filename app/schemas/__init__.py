"""Pydantic schemas for request/response validation."""

from app.schemas.admin import (
    CronJobLogResponse,
    MonthlyCount,
    PlatformStatsResponse,
    ToolUsage,
)
from app.schemas.common import PaginationInfo
from app.schemas.dashboard import (
    DashboardItemCreate,
    DashboardItemResponse,
    DashboardItemUpdate,
    KpiPreferenceResponse,
    KpiPreferenceUpsert,
)
from app.schemas.documents import DocumentPasswordCheck, NotePasswordCheck, PasswordCheckResult
from app.schemas.settings import LegalDocumentType, LegalDocumentUpdate, SiteMaintenanceUpdate
from app.schemas.support import SupportRequest, SupportRequestType

__all__ = [
    # Common
    "PaginationInfo",
    # Admin
    "CronJobLogResponse",
    "MonthlyCount",
    "PlatformStatsResponse",
    "ToolUsage",
    # Settings
    "LegalDocumentType",
    "LegalDocumentUpdate",
    "SiteMaintenanceUpdate",
    # Dashboard
    "DashboardItemCreate",
    "DashboardItemResponse",
    "DashboardItemUpdate",
    "KpiPreferenceResponse",
    "KpiPreferenceUpsert",
    # Documents
    "DocumentPasswordCheck",
    "NotePasswordCheck",
    "PasswordCheckResult",
    # Support
    "SupportRequest",
    "SupportRequestType",
]
