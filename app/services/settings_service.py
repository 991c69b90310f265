"""Service for platform settings stored in the key-value settings table.

Every read goes to the database; nothing is cached in process so that all
server instances see the same values.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import store_errors, upsert
from app.models.base import utcnow
from app.models.system_settings import SettingKey, SystemSetting
from app.schemas.settings import LegalDocumentType

logger = logging.getLogger(__name__)


class SettingsService:
    """Read and write singleton configuration values."""

    async def get_setting(self, db: AsyncSession, key: SettingKey) -> Any | None:
        """Get the stored value for a key, or None when no row exists."""
        async with store_errors(db, f"Failed to fetch setting {key.value}"):
            result = await db.execute(
                select(SystemSetting.value).where(SystemSetting.key == key.value)
            )
            return result.scalar_one_or_none()

    async def put_setting(
        self,
        db: AsyncSession,
        key: SettingKey,
        value: Any,
        updated_at: datetime | None = None,
    ) -> SystemSetting:
        """Create or replace the value for a key."""
        async with store_errors(db, f"Failed to save setting {key.value}"):
            row = await upsert(
                db,
                SystemSetting,
                {
                    "key": key.value,
                    "value": value,
                    "updated_at": updated_at or utcnow(),
                },
                conflict_columns=["key"],
            )
            await db.commit()

        logger.info(f"Setting {key.value} updated")
        return row

    # Site maintenance

    async def get_site_maintenance(self, db: AsyncSession) -> dict[str, Any]:
        """Get the site maintenance value, defaulting to sign-ups enabled."""
        value = await self.get_setting(db, SettingKey.SITE_MAINTENANCE)
        return value or {"signUpsDisabled": False}

    async def set_site_maintenance(
        self, db: AsyncSession, sign_ups_disabled: bool
    ) -> dict[str, Any]:
        """Store the sign-ups flag."""
        value = {"signUpsDisabled": sign_ups_disabled}
        await self.put_setting(db, SettingKey.SITE_MAINTENANCE, value)
        return value

    async def sign_ups_disabled_or_default(self, db: AsyncSession) -> bool:
        """Sign-ups flag for anonymous callers. Falls back to False on any failure."""
        try:
            value = await self.get_site_maintenance(db)
            return bool(value.get("signUpsDisabled", False))
        except Exception as e:
            logger.error(f"Error fetching site maintenance setting, using default: {e}")
            await db.rollback()
            return False

    # Platform fee

    async def get_platform_fee(self, db: AsyncSession) -> float:
        """Get the platform fee amount, defaulting to the configured fee."""
        value = await self.get_setting(db, SettingKey.PLATFORM_FEE)
        if isinstance(value, dict) and value.get("amount") is not None:
            return float(value["amount"])
        return settings.default_platform_fee

    async def set_platform_fee(self, db: AsyncSession, amount: float) -> float:
        """Store the platform fee amount."""
        await self.put_setting(db, SettingKey.PLATFORM_FEE, {"amount": amount})
        return amount

    async def platform_fee_or_default(self, db: AsyncSession) -> float:
        """Platform fee for anonymous callers. Falls back to the default on any failure."""
        try:
            return await self.get_platform_fee(db)
        except Exception as e:
            logger.error(f"Error fetching platform fee setting, using default: {e}")
            await db.rollback()
            return settings.default_platform_fee

    # Legal documents

    async def get_legal_document(
        self, db: AsyncSession, doc_type: LegalDocumentType
    ) -> dict[str, Any]:
        """Get a legal document as ``{content, lastUpdated}`` (nulls when unset)."""
        value = await self.get_setting(db, doc_type.setting_key)
        if not isinstance(value, dict):
            return {"content": None, "lastUpdated": None}
        return {
            "content": value.get("content") or None,
            "lastUpdated": value.get("lastUpdated") or None,
        }

    async def save_legal_document(
        self, db: AsyncSession, doc_type: LegalDocumentType, content: str
    ) -> str:
        """Store a legal document and return its ISO-8601 update timestamp."""
        now = utcnow()
        last_updated = now.isoformat()
        await self.put_setting(
            db,
            doc_type.setting_key,
            {"content": content, "lastUpdated": last_updated},
            updated_at=now,
        )
        return last_updated

    async def legal_document_or_default(
        self, db: AsyncSession, doc_type: LegalDocumentType
    ) -> dict[str, Any]:
        """Legal document for anonymous callers. Nulls on any failure."""
        try:
            return await self.get_legal_document(db, doc_type)
        except Exception as e:
            logger.error(f"Error fetching {doc_type.setting_key.value}, using default: {e}")
            await db.rollback()
            return {"content": None, "lastUpdated": None}


# Singleton instance
_settings_service: SettingsService | None = None


def get_settings_service() -> SettingsService:
    """Get the settings service singleton."""
    global _settings_service
    if _settings_service is None:
        _settings_service = SettingsService()
    return _settings_service
