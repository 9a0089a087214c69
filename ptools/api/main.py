"""ptools API - Transform Catalog Service.

This API serves transform definitions without execution logic:
- Transform catalog in display order
- Option schemas for building each card's input controls

Run with: uvicorn ptools.api.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ptools import __version__, config
from ptools.api.routes import transforms
from ptools.transforms.registry import get_transform_registry

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format=config.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Pre-load the catalog
    logger.info("Loading transform catalog...")
    registry = get_transform_registry()
    logger.info(f"Loaded {registry.count()} transforms")

    logger.info("ptools API ready")
    yield
    # Shutdown
    logger.info("Shutting down ptools API")


# Create FastAPI app
app = FastAPI(
    title="ptools API",
    description="""
## Transform Catalog Service

Serves the catalog of text transforms and their option schemas.
Transforms run in the client's own session; this service never executes them.

### Key Endpoints

- `GET /v1/transforms` - List all transforms in display order
- `GET /v1/transforms/{name}` - Get a transform with its option schema
- `GET /v1/transforms/{name}/options` - Get just the option schema
""",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /v1 prefix
app.include_router(transforms.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "ptools API",
        "version": __version__,
        "description": "Text transform catalog service",
        "docs": "/docs",
        "endpoints": {
            "transforms": "/v1/transforms",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    registry = get_transform_registry()
    return {
        "status": "healthy",
        "transforms_loaded": registry.count(),
        "preview_limit": config.PREVIEW_LIMIT,
    }
