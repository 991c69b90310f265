"""Service for tool icons.

A tool has at most one icon per icon type. The stored icon is either a name
from the icon library, a URL, or an uploaded image; writing one clears the
others. Icon library names are unique across tools.
"""

import logging
import uuid

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import dialect_name, store_errors, upsert
from app.exceptions import ConflictException, InvalidInputException, NotFoundException
from app.models.base import utcnow
from app.models.tool import IconType, Tool, ToolIcon
from app.utils.validation import is_icon_url

logger = logging.getLogger(__name__)


class ToolIconService:
    """Upload and fetch tool icons."""

    async def _lock_icon_name(self, db: AsyncSession, icon_name: str) -> None:
        """Serialize concurrent uploads of the same icon name until commit.

        PostgreSQL only; SQLite already allows a single writer at a time.
        """
        if dialect_name(db) == "postgresql":
            await db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:name))"),
                {"name": icon_name},
            )

    async def _name_taken_by_other_tool(
        self, db: AsyncSession, icon_name: str, tool_id: uuid.UUID
    ) -> bool:
        result = await db.execute(
            select(ToolIcon.id)
            .where(ToolIcon.icon_url == icon_name, ToolIcon.tool_id != tool_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def upload_icon(
        self,
        db: AsyncSession,
        tool_id: uuid.UUID,
        icon_type: IconType,
        icon_name: str | None = None,
        icon_data: bytes | None = None,
    ) -> bool:
        """Store the icon of ``tool_id`` for ``icon_type``.

        Exactly one of ``icon_name`` (library name or URL) and ``icon_data``
        must be given.

        Returns:
            True if a new icon row was created, False if an existing one was replaced

        Raises:
            NotFoundException: If the tool does not exist
            ConflictException: If the icon name is already used by another tool
        """
        if (icon_name is None) == (icon_data is None):
            raise InvalidInputException("Provide either icon_name or icon_file")

        async with store_errors(db, "Failed to save icon"):
            tool = await db.execute(select(Tool.id).where(Tool.id == tool_id))
            if tool.scalar_one_or_none() is None:
                raise NotFoundException("Tool")

            if icon_name is not None and not is_icon_url(icon_name):
                await self._lock_icon_name(db, icon_name)
                if await self._name_taken_by_other_tool(db, icon_name, tool_id):
                    await db.rollback()
                    raise ConflictException(
                        f'Icon "{icon_name}" is already used by another tool. '
                        "Please choose a different icon."
                    )

            existing = await db.execute(
                select(ToolIcon.id).where(
                    ToolIcon.tool_id == tool_id,
                    ToolIcon.icon_type == icon_type.value,
                )
            )
            created = existing.scalar_one_or_none() is None

            await upsert(
                db,
                ToolIcon,
                {
                    "tool_id": tool_id,
                    "icon_type": icon_type.value,
                    "icon_url": icon_name,
                    "icon_data": icon_data,
                    "updated_at": utcnow(),
                },
                conflict_columns=["tool_id", "icon_type"],
            )
            await db.commit()

        logger.info(
            f"Icon {'created' if created else 'updated'} for tool {tool_id} ({icon_type.value})"
        )
        return created

    async def get_icon(self, db: AsyncSession, icon_id: uuid.UUID) -> ToolIcon | None:
        """Get an icon row by ID."""
        async with store_errors(db, "Failed to fetch icon"):
            return await db.get(ToolIcon, icon_id)


# Singleton instance
_tool_icon_service: ToolIconService | None = None


def get_tool_icon_service() -> ToolIconService:
    """Get the tool icon service singleton."""
    global _tool_icon_service
    if _tool_icon_service is None:
        _tool_icon_service = ToolIconService()
    return _tool_icon_service
