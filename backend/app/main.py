"""
KNX Smart Home site API: catalog, price configurator, inquiries and CMS.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.logging_config import setup_logging
from app.core.redis import close_redis_client
from app.api.v1 import api_router
from app.services.content_service import ContentService

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open for inquiries on startup; release the rate-limit Redis pool on exit."""
    logger.info(
        "Site API ready: %s %s (env=%s, debug=%s, email=%s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.ENVIRONMENT,
        settings.DEBUG,
        "on" if settings.EMAIL_ENABLED else "off",
    )
    yield
    await close_redis_client()
    logger.info("Site API stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="KNX smart home packages, price configurator and inquiry intake",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Landing page and admin UI are served from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Host header check outside local development
if not settings.DEBUG:
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS,
    )

app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["Health"])
async def root():
    """Service banner."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "docs": "/docs" if settings.DEBUG else None}


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness check for the load balancer."""
    return {"status": "ok", "environment": settings.ENVIRONMENT, "email_enabled": settings.EMAIL_ENABLED}


@app.get("/robots.txt", response_class=PlainTextResponse, tags=["Content"])
async def robots_txt(db: AsyncSession = Depends(get_db)) -> str:
    """Admin-managed robots.txt, or allow-all when unset."""
    return await ContentService.robots_txt(db)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.UVICORN_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
