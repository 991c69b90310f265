"""Common Pydantic schemas used across the application."""

from pydantic import BaseModel


class PaginationInfo(BaseModel):
    """Offset pagination metadata for list responses."""

    total: int
    limit: int
    offset: int
    hasMore: bool
