"""Public legal documents."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.settings import LegalDocumentType
from app.services.settings_service import get_settings_service
from app.utils.validation import parse_choice

router = APIRouter(prefix="/legal", tags=["Legal"])


@router.get("")
async def get_legal_document(
    type: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Get the terms of service or privacy policy.

    Public. An unknown ``type`` is rejected; any other failure yields null
    content so the page can fall back to its built-in text.
    """
    doc_type = parse_choice("type", type, LegalDocumentType)
    return await get_settings_service().legal_document_or_default(db, doc_type)
