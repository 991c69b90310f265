"""Role-based permission checks."""

import uuid

from app.exceptions import ForbiddenException, UnauthorizedException
from app.models.user import Capability, parse_role, role_has_capability
from app.utils.request_context import get_current_user_id_or_none, get_current_user_role


class PermissionChecker:
    """Utility class for checking permissions programmatically."""

    def __init__(self, user_role: str | None):
        self.role = parse_role(user_role)

    def can(self, capability: Capability) -> bool:
        """Check if the role grants a capability."""
        return role_has_capability(self.role, capability)


def check_capability(capability: Capability) -> uuid.UUID:
    """Enforce role-based access control for the current request.

    A request without a session fails with 401; a session whose role does not
    grant ``capability`` fails with 403.

    Returns:
        The current user's ID
    """
    user_id = get_current_user_id_or_none()
    if user_id is None:
        raise UnauthorizedException()

    if not PermissionChecker(get_current_user_role()).can(capability):
        raise ForbiddenException()

    return user_id
