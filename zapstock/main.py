"""
ZapStock service

Inventory and order tracking for sellers running sales through WhatsApp
groups. Handlers touching the record store are ``async def`` so that every
mutation runs to completion on the event loop before the next one starts.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os

from zapstock.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from zapstock.core_settings import get_settings
from zapstock.api.customers import router as customers_router
from zapstock.api.products import router as products_router
from zapstock.api.orders import router as orders_router
from zapstock.api.dashboard import router as dashboard_router
from zapstock.application.store import RecordStore
from zapstock.infrastructure.blob_store import build_blob_store
from zapstock.infrastructure.oracle import GeminiOrderOracle

SERVICE_NAME = "zapstock"
SERVICE_VERSION = get_settings().SERVICE_VERSION
SERVICE_DESCRIPTION = "Inventory and order tracker for WhatsApp group sellers"

setup_logging(
    service_name=SERVICE_NAME,
    level=get_settings().LOG_LEVEL
)

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the snapshot store and load the three collections"""
    settings = get_settings()
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    try:
        blobs = build_blob_store(settings)
        app.state.store = RecordStore(blobs, key_prefix=settings.SNAPSHOT_KEY_PREFIX)
        logger.info(
            "Collections loaded",
            extra={'extra_fields': {
                'backend': settings.SNAPSHOT_BACKEND,
                'seeded': sorted(app.state.store.seeded),
            }}
        )
    except Exception as e:
        logger.error(f"Failed to open snapshot store: {e}")
        raise

    app.state.oracle = GeminiOrderOracle.from_settings(settings)
    if not app.state.oracle.configured:
        logger.warning("GEMINI_API_KEY not set; smart-fill will report failures")

    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")

app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

health_service = ServiceHealth(
    SERVICE_NAME,
    SERVICE_VERSION,
    store_ping=lambda: app.state.store.blobs.ping(),
    oracle_configured=lambda: app.state.oracle.configured,
)
app.include_router(health_service.create_health_router())

app.include_router(customers_router)
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(dashboard_router)

@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs"
    }

@app.get("/info")
async def info():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs"
        }
    }
