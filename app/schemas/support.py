"""Pydantic schemas for the support contact form."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.validation import is_valid_email


class SupportRequestType(str, Enum):
    """Kind of support request."""

    QUESTION = "question"
    SUPPORT = "support"
    FEATURE = "feature"

    @property
    def label(self) -> str:
        return {
            SupportRequestType.QUESTION: "Question",
            SupportRequestType.SUPPORT: "Support Request",
            SupportRequestType.FEATURE: "Feature Recommendation",
        }[self]


class SupportRequest(BaseModel):
    """Support form submission."""

    model_config = ConfigDict(str_strip_whitespace=True)

    type: SupportRequestType
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value
