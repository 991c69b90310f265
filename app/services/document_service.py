"""Service for password checks on the current user's protected content."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import store_errors
from app.exceptions import InvalidInputException, NotFoundException, PersistenceException
from app.models.document import ImportantDocument, Note
from app.utils.request_context import get_current_user_id
from app.utils.security import verify_password

logger = logging.getLogger(__name__)

ProtectedModel = type[ImportantDocument] | type[Note]


class DocumentService:
    """Verify passwords guarding documents and notes. Never modifies a row."""

    async def verify_resource_password(
        self,
        db: AsyncSession,
        model: ProtectedModel,
        resource_id: uuid.UUID,
        password: str,
        label: str,
    ) -> bool:
        """Check ``password`` against the stored hash of one of the current user's rows.

        Args:
            model: ImportantDocument or Note
            resource_id: Row ID
            password: Candidate plaintext
            label: Lowercase name of the resource used in error messages

        Returns:
            Whether the password matches

        Raises:
            NotFoundException: If the row does not exist or belongs to someone else
            InvalidInputException: If the row is not password protected or has no password set
            PersistenceException: If the stored hash cannot be read
        """
        user_id = get_current_user_id()

        async with store_errors(db, f"Failed to fetch {label}"):
            result = await db.execute(
                select(model).where(model.id == resource_id, model.user_id == user_id)
            )
            resource = result.scalar_one_or_none()

        if resource is None:
            raise NotFoundException(label.capitalize())
        if not resource.requires_password:
            raise InvalidInputException(f"{label.capitalize()} does not require a password")
        if not resource.password_hash:
            raise InvalidInputException(f"Password not set for this {label}")

        try:
            return verify_password(password, resource.password_hash)
        except ValueError as e:
            # Stored hash is not in a format passlib recognises
            logger.error(f"Unreadable password hash on {label} {resource_id}: {e}")
            raise PersistenceException("Failed to verify password", details=str(e)) from e

    async def verify_document_password(
        self, db: AsyncSession, document_id: uuid.UUID, password: str
    ) -> bool:
        """Check the download password of an important document."""
        return await self.verify_resource_password(
            db, ImportantDocument, document_id, password, "document"
        )

    async def verify_note_password(
        self, db: AsyncSession, note_id: uuid.UUID, password: str
    ) -> bool:
        """Check the view password of a note."""
        return await self.verify_resource_password(db, Note, note_id, password, "note")


# Singleton instance
_document_service: DocumentService | None = None


def get_document_service() -> DocumentService:
    """Get the document service singleton."""
    global _document_service
    if _document_service is None:
        _document_service = DocumentService()
    return _document_service
