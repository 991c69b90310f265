"""Dashboard items and KPI preferences, owned by a user."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, JSONType


class DashboardItemType(str, Enum):
    """How a dashboard item is surfaced."""

    CALENDAR_EVENT = "calendar_event"
    ACTION_ITEM = "action_item"
    BOTH = "both"


class DashboardItemPriority(str, Enum):
    """Priority of an action item."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DashboardItemStatus(str, Enum):
    """Lifecycle of a dashboard item."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DashboardItem(BaseModel):
    """A calendar event and/or action item pushed to a user's dashboard by a tool."""

    __tablename__ = "dashboard_items"
    __table_args__ = (
        Index("idx_dashboard_items_user", "user_id"),
        Index("idx_dashboard_items_user_status", "user_id", "status"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    tool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    priority: Mapped[str | None] = mapped_column(String(10), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DashboardItemStatus.PENDING.value
    )
    # "metadata" is reserved on declarative classes
    item_metadata: Mapped[dict | None] = mapped_column("metadata", JSONType, nullable=True, default=dict)


class UserDashboardKpi(BaseModel):
    """Whether a user shows a given tool KPI on their dashboard."""

    __tablename__ = "user_dashboard_kpis"
    __table_args__ = (
        UniqueConstraint("user_id", "tool_id", "kpi_key", name="uq_user_dashboard_kpis_key"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    tool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
    )
    kpi_key: Mapped[str] = mapped_column(String(100), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
