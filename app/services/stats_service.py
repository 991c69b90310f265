"""Service for platform-wide statistics shown on the admin dashboard."""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors
from app.models.base import utcnow
from app.models.tool import Tool, UserTool, UserToolStatus
from app.models.user import Role, User

logger = logging.getLogger(__name__)

SUBSCRIBED_STATUSES = (UserToolStatus.ACTIVE.value, UserToolStatus.TRIAL.value)
MONTHS_OF_HISTORY = 12


def _month_start(year: int, month: int) -> datetime:
    """First instant of a calendar month, handling month overflow/underflow."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=timezone.utc)


def recent_months(now: datetime, count: int = MONTHS_OF_HISTORY) -> list[datetime]:
    """First day of each of the last ``count`` months, oldest first, ending with ``now``'s month."""
    return [_month_start(now.year, now.month - i) for i in range(count - 1, -1, -1)]


class StatsService:
    """Aggregate counts over users and tool subscriptions."""

    async def _count(self, db: AsyncSession, query) -> int:
        return (await db.execute(query)).scalar() or 0

    async def get_platform_stats(self, db: AsyncSession) -> dict[str, Any]:
        """Compute the admin dashboard statistics."""
        async with store_errors(db, "Failed to fetch stats"):
            active_users = await self._count(
                db, select(func.count(User.id)).where(User.is_active.is_(True))
            )
            guest_users = await self._count(
                db, select(func.count(User.id)).where(User.role == Role.GUEST.value)
            )
            admin_users = await self._count(
                db,
                select(func.count(User.id)).where(
                    User.role.in_([Role.ADMIN.value, Role.SUPER_ADMIN.value])
                ),
            )
            subscribed_tools = await self._count(
                db,
                select(func.count(UserTool.id)).where(UserTool.status.in_(SUBSCRIBED_STATUSES)),
            )

            # Outer join keeps subscriptions whose tool row is gone
            by_tool = await db.execute(
                select(Tool.name, func.count(UserTool.id))
                .select_from(UserTool)
                .outerjoin(Tool, Tool.id == UserTool.tool_id)
                .where(UserTool.status.in_(SUBSCRIBED_STATUSES))
                .group_by(Tool.name)
            )
            tool_counts: Counter[str] = Counter()
            for name, count in by_tool.all():
                tool_counts[name or "Unknown"] += count

            months = recent_months(utcnow())
            created = await db.execute(
                select(User.created_at).where(User.created_at >= months[0])
            )
            month_counts = Counter(
                (created_at.year, created_at.month)
                for created_at in created.scalars().all()
                if created_at is not None
            )

        avg_tools_per_admin = subscribed_tools / admin_users if admin_users else 0

        return {
            "activeUserCount": active_users,
            "guestUserCount": guest_users,
            "activeTrialToolsCount": subscribed_tools,
            "avgToolsPerAdmin": round(avg_tools_per_admin, 2),
            "toolsByName": [
                {"name": name, "value": count} for name, count in tool_counts.items()
            ],
            "usersByMonth": [
                {
                    "month": month.strftime("%b %Y"),
                    "count": month_counts.get((month.year, month.month), 0),
                }
                for month in months
            ],
        }


# Singleton instance
_stats_service: StatsService | None = None


def get_stats_service() -> StatsService:
    """Get the stats service singleton."""
    global _stats_service
    if _stats_service is None:
        _stats_service = StatsService()
    return _stats_service
