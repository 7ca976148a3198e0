"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from app.api.routes import bill, health
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.web.routes import web_router

# Static files directory
BASE_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    logger.info("%s %s starting", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Split a shared electricity bill among tenants",
    lifespan=lifespan,
)

# The bill being edited lives in the session cookie
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=settings.SECRET_KEY,
    session_cookie="meter_share_session",
    max_age=86400,  # 1 day
    same_site="lax",
    https_only=not settings.DEBUG,
)

# Mount static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(bill.router, prefix="/api")

# Include web routes (Jinja2 frontend)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
