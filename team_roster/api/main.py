"""
Team Roster API Server

FastAPI server exposing the in-memory league store: roster, match schedule,
availability, lineups, results and MVPs.
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
import uvicorn

from team_roster.api.routes import router
from team_roster.database.init_defaults import build_initial_data, empty_league_data
from team_roster.services import settings_service
from team_roster.services.league_store import LeagueStore

# Set up logging
# Allow log level to be configured via environment variable (default: INFO)
log_level = settings_service.get_log_level()
numeric_level = getattr(logging, log_level, logging.INFO)
logging.basicConfig(
    level=numeric_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_store_from_settings() -> LeagueStore:
    """Create a store configured from the environment."""
    if settings_service.get_seed_sample_data():
        initial_data = build_initial_data()
    else:
        initial_data = empty_league_data()
    store = LeagueStore(
        initial_data=initial_data,
        latency_seconds=settings_service.get_store_latency_seconds(),
        serialize_mutations=settings_service.get_serialize_mutations(),
    )
    logger.info(
        f"League store ready: {len(initial_data.players)} players, "
        f"latency={store.latency_seconds}s, serialize_mutations={store.serialize_mutations}"
    )
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup and shutdown events."""
    store: LeagueStore = app.state.league_store
    logger.info(f"Starting up Team Roster API ({store.current_season.value} {store.data.year})...")

    yield  # App is running

    logger.info("Shutting down Team Roster API...")


def create_app(store: Optional[LeagueStore] = None) -> FastAPI:
    """
    Build the FastAPI application around a store.

    The store is owned by the app (``app.state.league_store``) and handed to
    route handlers through a dependency.
    """
    app = FastAPI(
        title="Team Roster API",
        description="API for managing a team's roster, match schedule, availability and lineups",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.league_store = store if store is not None else build_store_from_settings()

    # Add CORS middleware to allow frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify your frontend domain
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
