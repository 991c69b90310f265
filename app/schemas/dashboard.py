"""Pydantic schemas for dashboard items and KPI preferences."""

import uuid
from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    model_validator,
)

from app.models.dashboard import (
    DashboardItemPriority,
    DashboardItemStatus,
    DashboardItemType,
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Empty strings from form inputs clear a value
OptionalDate = Annotated[datetime | None, BeforeValidator(_blank_to_none)]
OptionalPriority = Annotated[DashboardItemPriority | None, BeforeValidator(_blank_to_none)]


class DashboardItemCreate(BaseModel):
    """Request body for creating a dashboard item."""

    tool_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: DashboardItemType
    due_date: OptionalDate = None
    scheduled_date: OptionalDate = None
    priority: OptionalPriority = None
    status: DashboardItemStatus = DashboardItemStatus.PENDING
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _require_date_for_type(self):
        if self.type == DashboardItemType.CALENDAR_EVENT and self.scheduled_date is None:
            raise ValueError("scheduled_date is required for calendar_event type")
        if self.type == DashboardItemType.ACTION_ITEM and self.due_date is None:
            raise ValueError("due_date is required for action_item type")
        return self


class DashboardItemUpdate(BaseModel):
    """Partial update of a dashboard item.

    A field left out of the payload is not changed. A field sent as null is
    cleared, which only the nullable columns allow.
    """

    NON_NULLABLE: ClassVar[tuple[str, ...]] = ("title", "type", "status")

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    type: DashboardItemType | None = None
    due_date: OptionalDate = None
    scheduled_date: OptionalDate = None
    priority: OptionalPriority = None
    status: DashboardItemStatus | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self):
        for name in self.NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Column values for the fields present in the payload."""
        data = self.model_dump(exclude_unset=True)
        for key in ("type", "priority", "status"):
            if data.get(key) is not None:
                data[key] = data[key].value
        return data


class DashboardItemResponse(BaseModel):
    """Dashboard item as returned to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    tool_id: uuid.UUID
    title: str
    description: str | None
    type: str
    due_date: datetime | None
    scheduled_date: datetime | None
    priority: str | None
    status: str
    metadata: dict[str, Any] | None = Field(None, validation_alias="item_metadata")
    created_at: datetime
    updated_at: datetime


class KpiPreferenceUpsert(BaseModel):
    """Request body for enabling or disabling a dashboard KPI."""

    model_config = ConfigDict(populate_by_name=True)

    tool_id: uuid.UUID = Field(..., alias="toolId")
    kpi_key: str = Field(..., alias="kpiKey", min_length=1, max_length=100)
    is_enabled: StrictBool = Field(..., alias="isEnabled")


class KpiPreferenceResponse(BaseModel):
    """Stored KPI preference."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    tool_id: uuid.UUID
    kpi_key: str
    is_enabled: bool
    updated_at: datetime
