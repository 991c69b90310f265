"""Cron job execution log."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, JSONType, utcnow


class CronJobStatus(str, Enum):
    """Outcome of a cron job run."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class CronJobLog(BaseModel):
    """Append-only record of a scheduled job execution."""

    __tablename__ = "cron_job_logs"
    __table_args__ = (
        Index("idx_cron_job_logs_started_at", "started_at"),
        Index("idx_cron_job_logs_job_name", "job_name"),
    )

    job_name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    execution_data: Mapped[dict | None] = mapped_column(JSONType, nullable=True, default=dict)
