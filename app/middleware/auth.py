"""Authentication middleware resolving the session token to a principal."""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.request_context import (
    clear_all_context,
    set_current_user_id,
    set_current_user_role,
)
from app.utils.security import decode_access_token

SESSION_COOKIE_NAME = "access_token"


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that extracts and validates session tokens from requests.

    Supports both cookie-based auth (for the web app) and Authorization header
    (for API clients). A missing or invalid token leaves the context empty;
    the principal dependencies turn that into a 401 on protected routes.
    """

    # Paths that never carry a principal
    EXEMPT_PATHS = {
        "/health",
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and extract authentication context."""
        # Clear context from previous request
        clear_all_context()

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        token = self._extract_token(request)

        if token:
            payload = decode_access_token(token)
            if payload:
                try:
                    set_current_user_id(uuid.UUID(payload["sub"]))
                    if payload.get("role"):
                        set_current_user_role(payload["role"])
                except (KeyError, ValueError, TypeError):
                    # Malformed subject - context will remain unset
                    clear_all_context()

        try:
            return await call_next(request)
        finally:
            # Clear context after request
            clear_all_context()

    def _extract_token(self, request: Request) -> str | None:
        """Extract the session token from request.

        Priority:
        1. Authorization header (Bearer token)
        2. access_token cookie
        """
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header.removeprefix("Bearer ").strip()

        return request.cookies.get(SESSION_COOKIE_NAME)
