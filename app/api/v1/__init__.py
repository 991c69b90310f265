"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1 import (
    admin,
    billing,
    dashboard,
    legal,
    site_maintenance,
    support,
    tools,
)

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(admin.router)
api_router.include_router(billing.router)
api_router.include_router(dashboard.router)
api_router.include_router(legal.router)
api_router.include_router(site_maintenance.router)
api_router.include_router(support.router)
api_router.include_router(tools.router)
