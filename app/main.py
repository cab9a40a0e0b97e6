import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.config import settings
from app.logging_config import setup_logging
from app.middleware.metrics import PrometheusMiddleware, metrics_endpoint, set_app_info
from app.middleware.request_logging import RequestLoggingMiddleware
from app.services.cache import Cache, build_cache
from app.services.feature_matrix import FeatureMatrixResolver
from app.services.overpass import OverpassClient
from app.services.plan_gate import PlanRestrictionError
from app.services.sample_data import SampleDataRegistry

# ── Initialize structured logging ──
setup_logging()
logger = logging.getLogger("scanstreet.app")


def init_services(app: FastAPI, cache: Optional[Cache] = None) -> None:
    """Build the shared services once and hang them on ``app.state``."""
    if cache is None:
        cache = build_cache(settings.REDIS_URL)
    app.state.cache = cache
    app.state.feature_matrix = FeatureMatrixResolver(cache, ttl=settings.FEATURE_MATRIX_CACHE_TTL)
    app.state.sample_data = SampleDataRegistry()
    app.state.overpass = OverpassClient(cache)
    logger.info(
        "Services ready (cache=%s, feature matrix version=%s)",
        cache.backend, app.state.feature_matrix.version,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_services(app)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Set all CORS enabled origins
cors_origins = ["http://localhost:3000", "http://localhost:5173", "http://localhost:8080"]
cors_origins.extend(settings.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware – request ID, timing, context
app.add_middleware(RequestLoggingMiddleware)

# Prometheus metrics middleware – request count, latency, in-progress
app.add_middleware(PrometheusMiddleware)


@app.exception_handler(PlanRestrictionError)
async def plan_restriction_handler(request: Request, exc: PlanRestrictionError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": exc.to_detail()})


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": f"Welcome to {settings.APP_NAME}", "docs": "/docs"}


@app.get("/health")
def health_check(request: Request):
    resolver = getattr(request.app.state, "feature_matrix", None)
    cache = getattr(request.app.state, "cache", None)
    return {
        "status": "ok",
        "env": settings.APP_ENV,
        "cache": cache.backend if cache is not None else None,
        "feature_matrix_version": resolver.version if resolver is not None else None,
    }


# Prometheus metrics endpoint
app.add_route("/metrics", metrics_endpoint)
set_app_info(version=settings.APP_VERSION, env=settings.APP_ENV)
