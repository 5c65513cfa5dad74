"""
API v1 Router
Aggregates all API endpoints.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    admin_content,
    content,
    leads,
    plans,
)

api_router = APIRouter()

# Health check for API
@api_router.get("/ping", tags=["Health"])
async def ping():
    """Simple ping endpoint to verify API is responding"""
    return {"message": "pong", "api_version": "v1"}

# Public site
api_router.include_router(plans.router, tags=["Catalog"])
api_router.include_router(leads.router, prefix="/leads", tags=["Leads"])
api_router.include_router(content.router, tags=["Content"])

# Admin panel
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(admin_content.router, prefix="/admin", tags=["Admin Content"])
