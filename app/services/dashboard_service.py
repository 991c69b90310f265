"""Service for the current user's dashboard items and KPI preferences.

Every query here is filtered by the current user's ID, so one user can never
see or change another user's rows.
"""

import logging
import uuid
from typing import Any, List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors, upsert
from app.exceptions import NotFoundException
from app.models.base import utcnow
from app.models.dashboard import (
    DashboardItem,
    DashboardItemStatus,
    DashboardItemType,
    UserDashboardKpi,
)
from app.schemas.dashboard import DashboardItemCreate, DashboardItemUpdate
from app.utils.request_context import get_current_user_id

logger = logging.getLogger(__name__)

# Item types matched by each ``type`` filter value
TYPE_FILTERS: dict[DashboardItemType, tuple[str, ...]] = {
    DashboardItemType.CALENDAR_EVENT: (
        DashboardItemType.CALENDAR_EVENT.value,
        DashboardItemType.BOTH.value,
    ),
    DashboardItemType.ACTION_ITEM: (
        DashboardItemType.ACTION_ITEM.value,
        DashboardItemType.BOTH.value,
    ),
    DashboardItemType.BOTH: (
        DashboardItemType.CALENDAR_EVENT.value,
        DashboardItemType.BOTH.value,
    ),
}


class DashboardService:
    """Manage dashboard items and KPI preferences of the current user."""

    async def list_items(
        self,
        db: AsyncSession,
        item_type: DashboardItemType | None = None,
        status: DashboardItemStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[DashboardItem]:
        """Get the current user's items.

        Action items default to pending ones when no status is given. Action
        item listings are ordered by due date, everything else by scheduled date.
        """
        user_id = get_current_user_id()

        query = select(DashboardItem).where(DashboardItem.user_id == user_id)

        if item_type is not None:
            query = query.where(DashboardItem.type.in_(TYPE_FILTERS[item_type]))

        if status is not None:
            query = query.where(DashboardItem.status == status.value)
        elif item_type == DashboardItemType.ACTION_ITEM:
            query = query.where(DashboardItem.status == DashboardItemStatus.PENDING.value)

        if item_type in (DashboardItemType.ACTION_ITEM, DashboardItemType.BOTH):
            query = query.order_by(DashboardItem.due_date.asc(), DashboardItem.id)
        else:
            query = query.order_by(DashboardItem.scheduled_date.asc(), DashboardItem.id)

        query = query.offset(offset).limit(limit)

        async with store_errors(db, "Failed to fetch dashboard items"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def list_all_items(self, db: AsyncSession) -> List[DashboardItem]:
        """Get every item of the current user, newest first, without filters."""
        user_id = get_current_user_id()

        async with store_errors(db, "Failed to fetch dashboard items"):
            result = await db.execute(
                select(DashboardItem)
                .where(DashboardItem.user_id == user_id)
                .order_by(DashboardItem.created_at.desc(), DashboardItem.id.desc())
            )
            return list(result.scalars().all())

    async def create_item(self, db: AsyncSession, data: DashboardItemCreate) -> DashboardItem:
        """Create an item owned by the current user."""
        user_id = get_current_user_id()

        item = DashboardItem(
            user_id=user_id,
            tool_id=data.tool_id,
            title=data.title,
            description=data.description,
            type=data.type.value,
            due_date=data.due_date,
            scheduled_date=data.scheduled_date,
            priority=data.priority.value if data.priority else None,
            status=data.status.value,
            item_metadata=data.metadata,
        )

        async with store_errors(db, "Failed to create dashboard item"):
            db.add(item)
            await db.commit()
            await db.refresh(item)

        logger.info(f"Dashboard item {item.id} created for user {user_id}")
        return item

    async def update_item(
        self, db: AsyncSession, item_id: uuid.UUID, data: DashboardItemUpdate
    ) -> DashboardItem:
        """Apply the fields present in ``data`` to one of the current user's items.

        Raises:
            NotFoundException: If the item does not exist or belongs to someone else
        """
        user_id = get_current_user_id()

        values: dict[str, Any] = data.changes()
        if "metadata" in values:
            values["item_metadata"] = values.pop("metadata")
        values["updated_at"] = utcnow()

        stmt = (
            update(DashboardItem)
            .where(DashboardItem.id == item_id, DashboardItem.user_id == user_id)
            .values(**values)
            .returning(DashboardItem)
        )

        async with store_errors(db, "Failed to update dashboard item"):
            result = await db.scalars(stmt, execution_options={"populate_existing": True})
            item = result.one_or_none()
            if item is None:
                raise NotFoundException("Dashboard item")
            await db.commit()

        return item

    async def delete_item(self, db: AsyncSession, item_id: uuid.UUID) -> None:
        """Delete one of the current user's items.

        Raises:
            NotFoundException: If the item does not exist or belongs to someone else
        """
        user_id = get_current_user_id()

        stmt = (
            delete(DashboardItem)
            .where(DashboardItem.id == item_id, DashboardItem.user_id == user_id)
            .returning(DashboardItem.id)
        )

        async with store_errors(db, "Failed to delete dashboard item"):
            result = await db.execute(stmt)
            if result.scalar_one_or_none() is None:
                raise NotFoundException("Dashboard item")
            await db.commit()

        logger.info(f"Dashboard item {item_id} deleted by user {user_id}")

    async def list_kpis(
        self,
        db: AsyncSession,
        tool_id: uuid.UUID | None = None,
        kpi_key: str | None = None,
    ) -> List[UserDashboardKpi]:
        """Get the current user's enabled KPIs."""
        user_id = get_current_user_id()

        query = select(UserDashboardKpi).where(
            UserDashboardKpi.user_id == user_id,
            UserDashboardKpi.is_enabled.is_(True),
        )
        if tool_id is not None:
            query = query.where(UserDashboardKpi.tool_id == tool_id)
        if kpi_key:
            query = query.where(UserDashboardKpi.kpi_key == kpi_key)

        async with store_errors(db, "Failed to fetch dashboard KPIs"):
            result = await db.execute(query.order_by(UserDashboardKpi.kpi_key))
            return list(result.scalars().all())

    async def upsert_kpi(
        self,
        db: AsyncSession,
        tool_id: uuid.UUID,
        kpi_key: str,
        is_enabled: bool,
    ) -> UserDashboardKpi:
        """Create or replace the current user's preference for one KPI."""
        user_id = get_current_user_id()

        async with store_errors(db, "Failed to save KPI preference"):
            kpi = await upsert(
                db,
                UserDashboardKpi,
                {
                    "user_id": user_id,
                    "tool_id": tool_id,
                    "kpi_key": kpi_key,
                    "is_enabled": is_enabled,
                    "updated_at": utcnow(),
                },
                conflict_columns=["user_id", "tool_id", "kpi_key"],
            )
            await db.commit()

        return kpi


# Singleton instance
_dashboard_service: DashboardService | None = None


def get_dashboard_service() -> DashboardService:
    """Get the dashboard service singleton."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
