"""SystemSetting model for platform-wide configuration."""

from enum import Enum
from typing import Any

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, JSONType


class SettingKey(str, Enum):
    """Well-known keys of the settings table."""

    SITE_MAINTENANCE = "site_maintenance"
    PLATFORM_FEE = "platform_fee"
    TERMS_OF_SERVICE = "terms_of_service"
    PRIVACY_POLICY = "privacy_policy"


class SystemSetting(BaseModel):
    """Key-value store for platform-wide settings.

    At most one row exists per key; a missing row means the default applies.
    Rows are only written through an upsert on ``key``.
    """

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    value: Mapped[Any] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )
