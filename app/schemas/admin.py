"""Pydantic schemas for super admin responses."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class CronJobLogResponse(BaseModel):
    """Cron job log row."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    job_name: str
    status: str
    started_at: datetime
    completed_at: datetime | None
    duration_ms: int | None
    message: str | None
    error_details: str | None
    execution_data: dict[str, Any] | None
    created_at: datetime


class ToolUsage(BaseModel):
    """Active/trial subscriptions for one tool name."""

    name: str
    value: int


class MonthlyCount(BaseModel):
    """Users created in one calendar month."""

    month: str
    count: int


class PlatformStatsResponse(BaseModel):
    """Platform-wide statistics for the admin dashboard."""

    activeUserCount: int
    guestUserCount: int
    activeTrialToolsCount: int
    avgToolsPerAdmin: float
    toolsByName: list[ToolUsage]
    usersByMonth: list[MonthlyCount]
