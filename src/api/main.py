"""
H2 Tags API Service.

FastAPI application exposing the tag catalogue stored in Postgres.

Endpoints:
1. GET /api/tags - all tags sorted by name
2. GET /health   - service and store status
"""
# Load .env file if present (for local development)
from dotenv import load_dotenv
load_dotenv()

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..services.tag_store import TagStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "Internal server error"}


def resolve_database_url() -> Optional[str]:
    """
    Read the Postgres URL from the environment.

    Returns:
        DATABASE_URL, falling back to POSTGRES_URL, or None if neither is set
    """
    return os.getenv('DATABASE_URL') or os.getenv('POSTGRES_URL')


def env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Global instances
store: Optional[TagStore] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Connects the tag store on startup and closes it on shutdown.
    """
    global store

    database_url = resolve_database_url()
    if not database_url:
        raise ValueError("DATABASE_URL (or POSTGRES_URL) environment variable required")

    store = TagStore(database_url)
    await store.initialize(run_migrations=env_flag('DB_AUTO_MIGRATE', True))

    yield

    # Cleanup
    await store.close()
    store = None


app = FastAPI(
    title="H2 Tags API",
    description="REST API listing the tags used to categorise H2 problems",
    version="1.0.0",
    lifespan=lifespan
)


# Response Models

class TagModel(BaseModel):
    """A single tag."""
    id: str
    name: str
    slug: str
    created_at: Optional[str] = None


class TagListResponse(BaseModel):
    """Response model for the tag listing."""
    data: list[TagModel]


class ErrorResponse(BaseModel):
    """Fixed body returned on server errors."""
    error: str


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    store_connected: bool
    tag_count: Optional[int] = None


# API Endpoints

@app.get(
    "/api/tags",
    response_model=TagListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_tags():
    """
    List all tags.

    Returns:
        TagListResponse with every tag, sorted ascending by name.
        On any store failure, a 500 with a generic error body.
    """
    try:
        tags = await store.list_tags()
        return TagListResponse(data=[TagModel(**tag.to_dict()) for tag in tags])
    except Exception as e:
        logger.exception(f"GET /api/tags error: {e}")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.get("/health", response_model=HealthResponse)
async def health():
    """
    Health check endpoint.

    Returns:
        HealthResponse with store connectivity and tag count
    """
    if not store or not store.connected:
        return HealthResponse(status="degraded", store_connected=False)

    try:
        tag_count = await store.count_tags()
    except Exception as e:
        logger.warning(f"Health check query failed: {e}")
        return HealthResponse(status="degraded", store_connected=True)

    return HealthResponse(status="healthy", store_connected=True, tag_count=tag_count)


@app.get("/")
async def root():
    """
    Root endpoint with API information.

    Returns:
        API info and available endpoints
    """
    return {
        "name": "H2 Tags API",
        "version": "1.0.0",
        "endpoints": {
            "list_tags": "GET /api/tags",
            "health": "GET /health",
        }
    }
