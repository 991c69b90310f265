"""Tool endpoints: password checks for protected content and icon serving."""

import base64
import logging
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import current_principal
from app.schemas.documents import DocumentPasswordCheck, NotePasswordCheck, PasswordCheckResult
from app.services.document_service import get_document_service
from app.services.tool_icon_service import get_tool_icon_service
from app.utils.validation import is_icon_url

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tools",
    tags=["Tools"],
    dependencies=[Depends(current_principal)],
)

# 1x1 transparent PNG served in place of a missing icon
TRANSPARENT_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF8", "image/gif"),
    (b"RIFF", "image/webp"),
    (b"<svg", "image/svg+xml"),
    (b"<?xml", "image/svg+xml"),
)


def guess_image_type(data: bytes) -> str:
    """Media type of stored icon bytes, JPEG unless a known signature matches."""
    for signature, media_type in IMAGE_SIGNATURES:
        if data.startswith(signature):
            return media_type
    return "image/jpeg"


# ============== Password Checks ==============


@router.post("/important-documents/verify-password")
async def verify_document_password(
    request: DocumentPasswordCheck,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Check the download password of one of the current user's documents."""
    valid = await get_document_service().verify_document_password(
        db, request.document_id, request.password
    )
    return PasswordCheckResult(valid=valid).model_dump()


@router.post("/notes/verify-password")
async def verify_note_password(
    request: NotePasswordCheck,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Check the view password of one of the current user's notes."""
    valid = await get_document_service().verify_note_password(
        db, request.note_id, request.password
    )
    return PasswordCheckResult(valid=valid).model_dump()


# ============== Icons ==============


@router.get("/icons/{icon_id}")
async def get_icon(
    icon_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Serve a tool icon.

    Redirects to URL icons, returns ``{iconName}`` for icon library names and
    streams uploaded images. A missing icon yields a 404 with a transparent
    placeholder image so browsers do not show a broken image.
    """
    icon = await get_tool_icon_service().get_icon(db, icon_id)

    if icon is not None and icon.icon_url:
        if is_icon_url(icon.icon_url):
            return RedirectResponse(icon.icon_url)
        return {"iconName": icon.icon_url}

    if icon is not None and icon.icon_data:
        return Response(
            content=icon.icon_data,
            media_type=guess_image_type(icon.icon_data),
            headers={"Cache-Control": "public, max-age=31536000, immutable"},
        )

    logger.warning(f"Icon {icon_id} not found or empty")
    return Response(content=TRANSPARENT_PNG, status_code=404, media_type="image/png")
