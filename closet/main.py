import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from closet import __version__
from closet.config import settings
from closet.core.exceptions import (
    ClosetException,
    closet_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from closet.database import engine, Base
from closet import models  # noqa: F401 - register tables before create_all
from closet.routers import auth, wardrobe, outfits, calendar, posts

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Closet API",
    description="Backend API for cataloguing clothes, composing outfits, planning and sharing them",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins if settings.ENVIRONMENT == "production" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

# Rate limiting (limits are declared on the auth routes)
app.state.limiter = auth.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_exception_handler(ClosetException, closet_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# Run lightweight, idempotent DB migrations on startup
@app.on_event("startup")
async def run_startup_migrations() -> None:
    from closet.migrations import migrate
    try:
        migrate()
    except SQLAlchemyError as exc:
        # Do not crash app on migration failure; log for visibility
        logger.warning(f"Migration on startup skipped/failed: {exc}")


# Include routers
app.include_router(auth.router)
app.include_router(wardrobe.router, prefix="/wardrobe", tags=["Wardrobe"])
app.include_router(outfits.router)
app.include_router(calendar.router)
app.include_router(posts.router)


@app.get("/health")
@app.head("/health")
async def health_check():
    """
    Health check endpoint. Supports both GET and HEAD methods for monitoring services.
    """
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except SQLAlchemyError as exc:
        logger.warning(f"Health check database probe failed: {exc}")

    return {
        "status": "ok",
        "database": "connected" if db_ok else "unavailable"
    }


@app.get("/admin/version")
async def version_info():
    """Admin: return version metadata to verify the live build."""
    return {
        "app_version": app.version,
        "time": datetime.now(timezone.utc).isoformat(),
        "env": settings.ENVIRONMENT,
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to the Closet API",
        "version": app.version,
        "docs": "/docs"
    }
