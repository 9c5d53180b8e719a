"""
Mongo Query Gateway - FastAPI Application

Read-only HTTP access to a MongoDB cluster: databases, collections,
collection data and last update times.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import get_settings
from app.core.logging_config import configure_logging
from app.database.connections import close_connections
from app.routers import databases, health

logger = logging.getLogger(__name__)

ENDPOINTS_LISTING = """
    Available endpoints:
    - GET /databases: List all databases
    - GET /databases/{db}/collections: List all collections in a database
    - GET /databases/{db}/collections/{collection}/data: Get all data from a collection in a database
    - GET /databases/{db}/collections/{collection}/batch-update-time: Get the last update time of documents in a collection
    - GET /databases/{db}/collections/{collection}/batch-update-time-oplog: Get the last insert or update time of a collection from the oplog
    - GET /health: Liveness check
    - GET /health/ready: Readiness check including MongoDB
    - GET /endpoints: This listing
    - GET /: Root route
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    The MongoDB connection is opened lazily by the first request, so
    startup only logs. Shutdown closes the shared client.
    """
    settings = get_settings()
    logger.info("Server is running on port %d", settings.port)

    yield

    logger.info("Shutting down Mongo Query Gateway...")
    await close_connections()
    logger.info("Database connections closed")


settings = get_settings()
configure_logging(settings.log_level)

# Create FastAPI application
app = FastAPI(
    title="Mongo Query Gateway",
    description="Read-only introspection endpoints over a MongoDB cluster.",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(databases.router)


@app.get("/", response_class=PlainTextResponse, tags=["Root"])
async def root():
    """Root endpoint."""
    return "Hello World!"


@app.get("/endpoints", response_class=PlainTextResponse, tags=["Root"])
async def list_endpoints():
    """Human-readable listing of the available routes."""
    logger.info("Sent endpoints list")
    return ENDPOINTS_LISTING


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
