"""FastAPI dependencies resolving the request principal.

Attach them at router level so the session is checked before FastAPI
validates the path, query or body of the request:

    router = APIRouter(prefix="/admin", dependencies=[Depends(require_super_admin_user)])
"""

import uuid

from app.models.user import Capability
from app.utils.permissions import check_capability


async def current_principal() -> uuid.UUID:
    """Require any signed-in user and return their ID."""
    return check_capability(Capability.USE_TOOLS)


async def require_super_admin_user() -> uuid.UUID:
    """Require a session with the platform management capability (superadmin)."""
    return check_capability(Capability.MANAGE_PLATFORM)
