"""
FRC Data Proxy

FastAPI application that reshapes Statbotics data: team and event
snapshots, regional EPA benchmarks and fuzzy event search.
"""

from contextlib import asynccontextmanager
import logging
import sys
import time

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.v1.router import api_router
from app.features.events import AliasTable, EventResolver, ScoringWeights
from app.features.statbotics import StatboticsClient

SERVICE_NAME = "frc-data-proxy"


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting FRC Data Proxy...")

    http = httpx.AsyncClient(
        limits=httpx.Limits(max_connections=max(settings.aggregation_concurrency, 10))
    )
    app.state.statbotics = StatboticsClient(http_client=http)
    logger.info(f"Statbotics upstream: {settings.upstream_base_url}")

    aliases = AliasTable.load(settings.resolved_aliases_file)
    app.state.event_resolver = EventResolver(aliases, ScoringWeights.from_settings())

    yield

    # Shutdown
    await http.aclose()
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="FRC Data Proxy",
    description="Statbotics proxy with regional benchmarks and event search",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    logger.info(f"{request.method} {path} -> {response.status_code} ({ms:.0f}ms)")
    return response


# === Routes ===
app.include_router(api_router)


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"ok": True, "service": SERVICE_NAME}


@app.get("/ping")
async def ping():
    """Alias of /health for uptime monitors."""
    return {"ok": True, "service": SERVICE_NAME, "ping": True}
