"""Public site maintenance status."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.settings_service import get_settings_service

router = APIRouter(prefix="/site-maintenance", tags=["Site Maintenance"])


@router.get("")
async def get_site_maintenance(db: AsyncSession = Depends(get_db)) -> dict:
    """Tell the sign-up page whether new sign-ups are accepted.

    Public. Reports sign-ups as enabled if the setting cannot be read.
    """
    disabled = await get_settings_service().sign_ups_disabled_or_default(db)
    return {"signUpsDisabled": disabled}
