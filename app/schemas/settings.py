"""Pydantic schemas for platform settings: maintenance, fee and legal documents."""

from enum import Enum

from pydantic import BaseModel, Field, StrictBool, StrictStr, model_validator

from app.models.system_settings import SettingKey


class LegalDocumentType(str, Enum):
    """Legal documents editable by the platform operator."""

    TERMS = "terms"
    PRIVACY = "privacy"

    @property
    def setting_key(self) -> SettingKey:
        """Settings row holding this document."""
        if self is LegalDocumentType.TERMS:
            return SettingKey.TERMS_OF_SERVICE
        return SettingKey.PRIVACY_POLICY


class LegalDocumentUpdate(BaseModel):
    """Request body for saving a legal document."""

    type: LegalDocumentType
    content: StrictStr = Field(..., min_length=1)


class SiteMaintenanceUpdate(BaseModel):
    """Request body for changing site maintenance settings.

    Either field may be omitted; at least one must be present.
    """

    signUpsDisabled: StrictBool | None = None
    platformFee: float | None = Field(None, ge=0, strict=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def _require_a_change(self):
        if self.signUpsDisabled is None and self.platformFee is None:
            raise ValueError("signUpsDisabled or platformFee is required")
        return self
