"""User model with role-based access control."""

from enum import Enum

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class Role(str, Enum):
    """User roles."""

    SUPER_ADMIN = "superadmin"  # Platform operator
    ADMIN = "admin"  # Household account owner
    GUEST = "guest"  # Invited member of an owner's household


class Capability(str, Enum):
    """Operations gated by role."""

    MANAGE_PLATFORM = "manage_platform"
    USE_TOOLS = "use_tools"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.SUPER_ADMIN: frozenset({Capability.MANAGE_PLATFORM, Capability.USE_TOOLS}),
    Role.ADMIN: frozenset({Capability.USE_TOOLS}),
    Role.GUEST: frozenset({Capability.USE_TOOLS}),
}


def parse_role(value: str | None) -> Role | None:
    """Convert a stored role string to a Role, or None if unknown."""
    if value is None:
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def role_has_capability(role: Role | str | None, capability: Capability) -> bool:
    """Check whether a role grants a capability. Unknown roles grant nothing."""
    if not isinstance(role, Role):
        role = parse_role(role)
    if role is None:
        return False
    return capability in ROLE_CAPABILITIES[role]


class User(BaseModel):
    """User account."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_role", "role"),
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.ADMIN.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
