"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from starlette.middleware.base import BaseHTTPMiddleware

from cms_admin.api.routes import articles, categories, courses, users
from cms_admin.config import settings
from cms_admin.db.database import engine
from cms_admin.db.models import Base
from cms_admin.middleware.rate_limiter import limiter
from cms_admin.middleware.request_id import RequestIDMiddleware
from cms_admin.models.envelope import register_exception_handlers

logger = logging.getLogger(__name__)

# Configure logging format based on dev_mode
if not settings.dev_mode:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}',
    )
else:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    # Startup
    if settings.db_create_all:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="CMS Admin API",
    description="Administrative REST API for articles, categories, courses and users",
    version="0.1.0",
    docs_url="/docs" if settings.dev_mode else None,
    redoc_url="/redoc" if settings.dev_mode else None,
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.state.limiter = limiter


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if not settings.dev_mode:
            response.headers["Strict-Transport-Security"] = (
                "max-age=63072000; includeSubDomains"
            )
        return response


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
)

# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers, all under the admin prefix
# ---------------------------------------------------------------------------

for module in (articles, categories, courses, users):
    app.include_router(
        module.router,
        prefix=f"{settings.admin_prefix}/{module.resource.plural}",
        tags=[module.resource.plural],
    )

# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
async def health_check() -> dict:
    """Liveness check: the API process is alive."""
    return {"status": "healthy"}


@app.get("/health/ready")
async def readiness_check() -> JSONResponse:
    """Readiness check: the database is reachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        database = "ok"
    except Exception:
        logger.warning("Readiness check: database unavailable", exc_info=True)
        database = "unavailable"

    ok = database == "ok"
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ready" if ok else "degraded", "services": {"database": database}},
    )


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": "CMS Admin API",
        "admin_prefix": settings.admin_prefix,
        "resources": [m.resource.plural for m in (articles, categories, courses, users)],
    }
