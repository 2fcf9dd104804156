import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from research_admin.config import settings
from research_admin.database import engine
from research_admin.middleware.logging_config import configure_logging

configure_logging(settings.log_level, settings.log_format)

from research_admin.api.health import router as health_router  # noqa: E402
from research_admin.api.navigation import router as navigation_router  # noqa: E402
from research_admin.api.role_permissions import router as role_permissions_router  # noqa: E402
from research_admin.middleware.metrics import PrometheusMiddleware  # noqa: E402
from research_admin.middleware.request_context import RequestContextMiddleware  # noqa: E402

logger = logging.getLogger("research_admin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: verify DB connection
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Research admin API started (%s)", settings.environment)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Research Administration — Navigation Permissions",
    description="Role-based navigation permission store for the research administration portal",
    version="0.1.0",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type", "X-Request-ID", "X-Job-Title"],
)

# ── Request context middleware (request ID + job title + timing) ─────────────
app.add_middleware(RequestContextMiddleware)

# ── Prometheus metrics middleware ────────────────────────────────────────────
app.add_middleware(PrometheusMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return detailed error info in development mode so 500s are debuggable."""
    tb = traceback.format_exc()
    logger.error(
        "Unhandled %s on %s %s: %s\n%s",
        type(exc).__name__, request.method, request.url.path, exc, tb,
    )
    detail = f"{type(exc).__name__}: {exc}"
    if settings.environment == "development":
        return JSONResponse(
            status_code=500,
            content={"detail": detail, "traceback": tb.splitlines()[-5:]},
        )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# Register API routers
app.include_router(role_permissions_router)
app.include_router(navigation_router)
app.include_router(health_router)
