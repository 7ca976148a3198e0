"""Web routes package."""

from fastapi import APIRouter

from app.web.routes import exports, home, tenants

web_router = APIRouter()

web_router.include_router(home.router, tags=["web-home"])
web_router.include_router(tenants.router, prefix="/tenants", tags=["web-tenants"])
web_router.include_router(exports.router, prefix="/export", tags=["web-exports"])
