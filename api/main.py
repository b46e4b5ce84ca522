"""Altair API application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded

from common.core.config import settings
from common.core.constants import Environment
from common.core.exceptions import AppException, app_exception_handler
from common.db.session import dispose_engine
from common.providers.rate_limiter.limiter import limiter
from common.core.otel_axiom_exporter import _initialize_telemetry, get_logger
from api.v1.routes.router import api_router

# Tracer provider is registered once, before the app is instrumented
_initialize_telemetry()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} ({settings.environment.value})")
    yield
    logger.info("Shutting down application...")
    await dispose_engine()


def _docs_urls() -> dict:
    """OpenAPI docs are only served in local development."""
    if settings.environment == Environment.LOCAL:
        return {
            "docs_url": "/docs",
            "redoc_url": "/redoc",
            "openapi_url": "/openapi.json",
        }
    return {"docs_url": None, "redoc_url": None, "openapi_url": None}


app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    lifespan=lifespan,
    **_docs_urls(),
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(AppException, app_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
FastAPIInstrumentor.instrument_app(app)
app.add_middleware(SlowAPIMiddleware)

# Auth is enforced per router in api.v1.routes.router
app.include_router(api_router, prefix="/api/v1")


@app.get("/healthz", include_in_schema=False)
async def healthz():
    """Probe endpoint outside /api/v1 for the load balancer."""
    return {"status": "ok"}
