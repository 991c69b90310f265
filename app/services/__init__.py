"""Service layer for business logic."""

from app.services.cron_log_service import CronLogService, get_cron_log_service
from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.services.document_service import DocumentService, get_document_service
from app.services.email_service import EmailService, get_email_service
from app.services.settings_service import SettingsService, get_settings_service
from app.services.stats_service import StatsService, get_stats_service
from app.services.tool_icon_service import ToolIconService, get_tool_icon_service

__all__ = [
    "CronLogService",
    "get_cron_log_service",
    "DashboardService",
    "get_dashboard_service",
    "DocumentService",
    "get_document_service",
    "EmailService",
    "get_email_service",
    "SettingsService",
    "get_settings_service",
    "StatsService",
    "get_stats_service",
    "ToolIconService",
    "get_tool_icon_service",
]
