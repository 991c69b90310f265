"""Public billing configuration."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.settings_service import get_settings_service

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.get("/platform-fee")
async def get_platform_fee(db: AsyncSession = Depends(get_db)) -> dict:
    """Get the platform fee amount.

    Public. Always answers 200; the default fee is returned if the stored value
    cannot be read.
    """
    amount = await get_settings_service().platform_fee_or_default(db)
    return {"amount": amount}
