"""Dashboard items and KPI preferences of the signed-in user."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import current_principal
from app.models.dashboard import DashboardItemStatus, DashboardItemType
from app.schemas.dashboard import (
    DashboardItemCreate,
    DashboardItemResponse,
    DashboardItemUpdate,
    KpiPreferenceResponse,
    KpiPreferenceUpsert,
)
from app.services.dashboard_service import get_dashboard_service
from app.utils.validation import clamp_pagination, parse_choice

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(current_principal)],
)


def _item(item) -> dict:
    return DashboardItemResponse.model_validate(item).model_dump(mode="json")


def _kpi(kpi) -> dict:
    return KpiPreferenceResponse.model_validate(kpi).model_dump(mode="json")


# ============== Items ==============


@router.get("/items")
async def list_items(
    type: str | None = None,
    status: str | None = None,
    limit: int | None = None,
    offset: int | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List the current user's dashboard items.

    ``type=calendar_event`` and ``type=action_item`` also include items of type
    ``both``. Action items default to pending ones.
    """
    item_type = parse_choice("type", type, DashboardItemType) if type else None
    item_status = parse_choice("status", status, DashboardItemStatus) if status else None
    limit, offset = clamp_pagination(limit, offset)

    items = await get_dashboard_service().list_items(
        db, item_type=item_type, status=item_status, limit=limit, offset=offset
    )
    return {"items": [_item(item) for item in items]}


@router.post("/items", status_code=201)
async def create_item(
    request: DashboardItemCreate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Create a dashboard item for the current user."""
    item = await get_dashboard_service().create_item(db, request)
    return {"item": _item(item)}


@router.get("/items/debug")
async def list_all_items(
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List every item of the current user without filters, newest first."""
    items = await get_dashboard_service().list_all_items(db)
    return {"items": [_item(item) for item in items], "count": len(items)}


@router.put("/items/{item_id}")
async def update_item(
    item_id: uuid.UUID,
    request: DashboardItemUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Update the fields present in the body. Omitted fields are left unchanged."""
    item = await get_dashboard_service().update_item(db, item_id, request)
    return {"item": _item(item)}


@router.delete("/items/{item_id}")
async def delete_item(
    item_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete one of the current user's items."""
    await get_dashboard_service().delete_item(db, item_id)
    return {"success": True}


# ============== KPIs ==============


@router.get("/kpis")
async def list_kpis(
    tool_id: uuid.UUID | None = Query(None, alias="toolId"),
    kpi_key: str | None = Query(None, alias="kpiKey"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List the KPIs the current user has enabled."""
    kpis = await get_dashboard_service().list_kpis(db, tool_id=tool_id, kpi_key=kpi_key)
    return {"kpis": [_kpi(kpi) for kpi in kpis]}


@router.post("/kpis")
async def save_kpi(
    request: KpiPreferenceUpsert,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Enable or disable a KPI for the current user."""
    kpi = await get_dashboard_service().upsert_kpi(
        db,
        tool_id=request.tool_id,
        kpi_key=request.kpi_key,
        is_enabled=request.is_enabled,
    )
    return {"kpi": _kpi(kpi)}
