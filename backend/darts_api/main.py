"""Main FastAPI application for the darts player catalog."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from darts_api import __version__
from darts_api.core import DatabaseManager, get_global_settings, setup_logging
from darts_api.features.players import players_router
from darts_api.init_db import create_tables, seed_from_file

settings = get_global_settings()
setup_logging(settings.log_level)
logger = structlog.get_logger(__name__)


async def _seed_database_safely(db_manager: DatabaseManager) -> None:
    """Run the seed import, logging instead of failing startup."""
    try:
        await seed_from_file(db_manager, settings.seed_file)
    except Exception as e:
        logger.error(
            "Failed to seed player database",
            error=str(e),
            error_type=type(e).__name__,
            seed_file=str(settings.seed_file),
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Owns the single database manager for the process.
    """
    logger.info("Starting up darts player catalog")
    db_manager = DatabaseManager(settings)
    app.state.db_manager = db_manager

    if settings.reset_db:
        await _seed_database_safely(db_manager)
    else:
        try:
            await create_tables(db_manager)
        except Exception as e:
            logger.warning("Could not verify database tables", error=str(e))

    yield

    logger.info("Shutting down darts player catalog")
    await db_manager.close()


tags_metadata = [
    {
        "name": "players",
        "description": "Ranking-bounded player listing, lookup and search.",
    },
    {
        "name": "meta",
        "description": "Route listing and health check endpoints.",
    },
]

app = FastAPI(
    title="Darts Player Catalog",
    description="""
    A read-only catalog of competitive darts players.

    * **Players**: list players within a ranking bound, or fetch one by id
    * **Countries**: list countries and search players by country
    * **Nicknames**: list nicknames and search players by nickname
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(players_router)


@app.get("/", tags=["meta"])
async def list_routes(request: Request) -> List[Dict[str, Any]]:
    """List every API route with its HTTP methods."""
    return [
        {"path": route.path, "methods": sorted(route.methods)}
        for route in request.app.routes
        if isinstance(route, APIRoute)
    ]


@app.get("/health", tags=["meta"])
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": "Application is running",
        "version": __version__,
        "debug": settings.debug,
    }
