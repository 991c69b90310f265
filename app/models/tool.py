"""Tool catalogue, tool icons and per-user tool subscriptions."""

import uuid
from enum import Enum

from sqlalchemy import ForeignKey, Index, LargeBinary, Numeric, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class IconType(str, Enum):
    """Which state of a tool an icon represents."""

    COMING_SOON = "coming_soon"
    AVAILABLE = "available"
    DEFAULT = "default"


class UserToolStatus(str, Enum):
    """Subscription status of a tool for a user."""

    ACTIVE = "active"
    TRIAL = "trial"
    CANCELLED = "cancelled"
    INACTIVE = "inactive"


class Tool(BaseModel):
    """A tool offered on the platform."""

    __tablename__ = "tools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="available")

    icons = relationship("ToolIcon", back_populates="tool", lazy="noload")


class ToolIcon(BaseModel):
    """Icon of a tool for one icon type.

    ``icon_url`` holds either an icon name from the icon library or a URL;
    ``icon_data`` holds an uploaded image. A row carries one or the other.
    """

    __tablename__ = "tool_icons"
    __table_args__ = (
        UniqueConstraint("tool_id", "icon_type", name="uq_tool_icons_tool_type"),
        Index("idx_tool_icons_icon_url", "icon_url"),
    )

    tool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tools.id", ondelete="CASCADE"),
        nullable=False,
    )
    icon_type: Mapped[str] = mapped_column(String(20), nullable=False)
    icon_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    icon_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)

    tool = relationship("Tool", back_populates="icons", lazy="noload")


class UserTool(BaseModel):
    """A user's subscription to a tool."""

    __tablename__ = "users_tools"
    __table_args__ = (
        Index("idx_users_tools_user", "user_id"),
        Index("idx_users_tools_status", "status"),
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
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=UserToolStatus.ACTIVE.value)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False, default=0)
