"""Service for cron job execution logs."""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, List, Tuple, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors
from app.models.base import utcnow
from app.models.cron_job_log import CronJobLog, CronJobStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CronLogService:
    """Record scheduled job runs and page through them."""

    async def list_logs(
        self,
        db: AsyncSession,
        job_name: str | None = None,
        status: CronJobStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[List[CronJobLog], int]:
        """Get a page of logs, newest first, with the total matching count."""
        query = select(CronJobLog)
        if job_name:
            query = query.where(CronJobLog.job_name == job_name)
        if status is not None:
            query = query.where(CronJobLog.status == status.value)

        async with store_errors(db, "Failed to fetch cron logs"):
            count_query = select(func.count()).select_from(query.subquery())
            total = (await db.execute(count_query)).scalar() or 0

            query = query.order_by(CronJobLog.started_at.desc(), CronJobLog.id.desc())
            query = query.offset(offset).limit(limit)
            result = await db.execute(query)
            logs = list(result.scalars().all())

        return logs, total

    async def record_cron_job(
        self,
        db: AsyncSession,
        job_name: str,
        status: CronJobStatus,
        started_at: datetime | None = None,
        message: str | None = None,
        error_details: str | None = None,
        execution_data: dict[str, Any] | None = None,
    ) -> uuid.UUID | None:
        """Append a log row for a finished run.

        Returns the new row id, or None if the row could not be written. A
        failure to log never fails the job itself.
        """
        completed_at = utcnow()
        started_at = started_at or completed_at
        duration_ms = int((completed_at - started_at).total_seconds() * 1000)

        log = CronJobLog(
            job_name=job_name,
            status=status.value,
            started_at=started_at,
            completed_at=completed_at,
            duration_ms=duration_ms,
            message=message,
            error_details=error_details,
            execution_data=execution_data or {},
        )
        try:
            db.add(log)
            await db.commit()
        except Exception as e:
            logger.error(f"Failed to log cron job execution for {job_name}: {e}")
            await db.rollback()
            return None

        return log.id

    async def execute_with_logging(
        self,
        db: AsyncSession,
        job_name: str,
        job: Callable[[], Awaitable[T]],
    ) -> T:
        """Run ``job`` and record its outcome.

        A successful run is logged with its result under ``execution_data``.
        A failing run is logged as an error and the exception is re-raised.
        """
        started_at = utcnow()
        started = time.monotonic()
        execution_data: dict[str, Any] = {"started_at": started_at.isoformat()}

        try:
            result = await job()
        except Exception as e:
            logger.exception(f"Cron job {job_name} failed")
            await self.record_cron_job(
                db,
                job_name,
                CronJobStatus.ERROR,
                started_at=started_at,
                message="Job execution failed",
                error_details=str(e) or type(e).__name__,
                execution_data=execution_data,
            )
            raise

        if isinstance(result, dict):
            execution_data.update(result)
        elif result is not None:
            execution_data["result"] = result

        logger.info(
            f"Cron job {job_name} completed in {int((time.monotonic() - started) * 1000)}ms"
        )
        await self.record_cron_job(
            db,
            job_name,
            CronJobStatus.SUCCESS,
            started_at=started_at,
            message="Job completed successfully",
            execution_data=execution_data,
        )
        return result


# Singleton instance
_cron_log_service: CronLogService | None = None


def get_cron_log_service() -> CronLogService:
    """Get the cron log service singleton."""
    global _cron_log_service
    if _cron_log_service is None:
        _cron_log_service = CronLogService()
    return _cron_log_service
