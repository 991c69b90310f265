"""Public support contact form."""

import logging

from fastapi import APIRouter

from app.exceptions import NotificationException
from app.schemas.support import SupportRequest
from app.services.email_service import get_email_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/support", tags=["Support"])


@router.post("")
async def submit_support_request(request: SupportRequest) -> dict:
    """Email a question, support request or feature idea to the support inbox."""
    message_id = await get_email_service().send_support_request(
        request.type,
        name=request.name,
        email=request.email,
        subject=request.subject,
        message=request.message,
    )
    if not message_id:
        logger.error(f"Support request from {request.email} could not be delivered")
        raise NotificationException()

    return {"success": True}
