"""SQLAlchemy models for Household Toolbox."""

from app.models.base import Base, BaseModel, TimestampMixin
from app.models.user import Capability, Role, User
from app.models.system_settings import SettingKey, SystemSetting
from app.models.cron_job_log import CronJobLog, CronJobStatus
from app.models.tool import IconType, Tool, ToolIcon, UserTool, UserToolStatus
from app.models.dashboard import (
    DashboardItem,
    DashboardItemPriority,
    DashboardItemStatus,
    DashboardItemType,
    UserDashboardKpi,
)
from app.models.document import ImportantDocument, Note

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "TimestampMixin",
    # User
    "User",
    "Role",
    "Capability",
    # Settings
    "SystemSetting",
    "SettingKey",
    # Cron
    "CronJobLog",
    "CronJobStatus",
    # Tools
    "Tool",
    "ToolIcon",
    "IconType",
    "UserTool",
    "UserToolStatus",
    # Dashboard
    "DashboardItem",
    "DashboardItemType",
    "DashboardItemPriority",
    "DashboardItemStatus",
    "UserDashboardKpi",
    # Documents
    "ImportantDocument",
    "Note",
]
