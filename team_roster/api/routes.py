"""
API route handlers for the team roster store.
"""

import logging
import traceback
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from team_roster.models.schemas import (
    CreateMatchRequest,
    CreatePlayerRequest,
    DashboardResponse,
    FinalizeMvpRequest,
    HealthResponse,
    LeagueSnapshotResponse,
    Lineup,
    Match,
    MatchResults,
    Player,
    Season,
    SeasonSchedule,
    SetAvailabilityRequest,
)
from team_roster.services import dashboard_service
from team_roster.services.league_store import LeagueStore
from team_roster.utils.constants import DASHBOARD_UPCOMING_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()


def get_league_store(request: Request) -> LeagueStore:
    """Dependency: the store owned by the running application."""
    return request.app.state.league_store


def _match_not_found(season: Season, match_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Match {match_id} not found in {season.value} season")


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}")
    logger.error(traceback.format_exc())
    return HTTPException(status_code=500, detail=f"Error {action}: {str(e)}")


@router.get("/api/health", response_model=HealthResponse)
async def health_check(store: LeagueStore = Depends(get_league_store)):
    """Health check endpoint."""
    data = store.data
    return HealthResponse(
        status="healthy",
        current_season=store.current_season,
        player_count=len(data.players),
        match_count=len(dashboard_service.all_matches(data)),
    )


@router.get("/api/league", response_model=LeagueSnapshotResponse)
async def get_league(store: LeagueStore = Depends(get_league_store)):
    """Current snapshot, loading flag and current season."""
    return LeagueSnapshotResponse(
        data=store.data,
        loading=store.loading,
        current_season=store.current_season,
    )


# ============================================================================
# Players
# ============================================================================

@router.get("/api/players", response_model=List[Player])
async def list_players(store: LeagueStore = Depends(get_league_store)):
    """Roster sorted by rank."""
    return store.data.players


@router.post("/api/players", response_model=Player)
async def create_player(request: CreatePlayerRequest, store: LeagueStore = Depends(get_league_store)):
    """Add a player to the roster."""
    try:
        return await store.add_player(request.name, request.rank)
    except Exception as e:
        raise _server_error("creating player", e)


@router.put("/api/players/{player_id}", response_model=Player)
async def update_player(
    player_id: str,
    request: CreatePlayerRequest,
    store: LeagueStore = Depends(get_league_store),
):
    """Replace a player's name and rank."""
    player = Player(id=player_id, name=request.name, rank=request.rank)
    try:
        updated = await store.update_player(player)
    except Exception as e:
        raise _server_error("updating player", e)
    if not updated:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return player


@router.delete("/api/players/{player_id}")
async def delete_player(player_id: str, store: LeagueStore = Depends(get_league_store)):
    """Remove a player from the roster."""
    try:
        deleted = await store.delete_player(player_id)
    except Exception as e:
        raise _server_error("deleting player", e)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return {"status": "success", "player_id": player_id}


# ============================================================================
# Matches
# ============================================================================

@router.get("/api/seasons/{season}/matches", response_model=List[Match])
async def list_matches(season: Season, store: LeagueStore = Depends(get_league_store)):
    """Matches for a season in scheduling order."""
    return store.get_season_matches(season)


@router.post("/api/seasons/{season}/matches", response_model=Match)
async def create_match(
    season: Season,
    request: CreateMatchRequest,
    store: LeagueStore = Depends(get_league_store),
):
    """Schedule a match."""
    try:
        return await store.add_match(season, request.opponent, request.location, request.date)
    except Exception as e:
        raise _server_error("creating match", e)


@router.put("/api/seasons/{season}/matches/{match_id}", response_model=Match)
async def update_match(
    season: Season,
    match_id: str,
    match: Match,
    store: LeagueStore = Depends(get_league_store),
):
    """Replace a match record. The body id must match the path."""
    if match.id != match_id:
        raise HTTPException(status_code=400, detail="Match id in body does not match path")
    try:
        updated = await store.update_match(season, match)
    except Exception as e:
        raise _server_error("updating match", e)
    if not updated:
        raise _match_not_found(season, match_id)
    return match


@router.delete("/api/seasons/{season}/matches/{match_id}")
async def delete_match(season: Season, match_id: str, store: LeagueStore = Depends(get_league_store)):
    """Remove a match from a season."""
    try:
        deleted = await store.delete_match(season, match_id)
    except Exception as e:
        raise _server_error("deleting match", e)
    if not deleted:
        raise _match_not_found(season, match_id)
    return {"status": "success", "match_id": match_id}


def _updated_match(store: LeagueStore, season: Season, match_id: str, changed: bool) -> Match:
    if not changed:
        raise _match_not_found(season, match_id)
    return store.find_match(season, match_id)


@router.put("/api/seasons/{season}/matches/{match_id}/availability/{player_id}", response_model=Match)
async def set_availability(
    season: Season,
    match_id: str,
    player_id: str,
    request: SetAvailabilityRequest,
    store: LeagueStore = Depends(get_league_store),
):
    """Record a player's availability for a match."""
    try:
        changed = await store.set_player_availability(season, match_id, player_id, request.status)
    except Exception as e:
        raise _server_error("setting availability", e)
    return _updated_match(store, season, match_id, changed)


@router.put("/api/seasons/{season}/matches/{match_id}/lineup", response_model=Match)
async def set_lineup(
    season: Season,
    match_id: str,
    lineup: Lineup,
    store: LeagueStore = Depends(get_league_store),
):
    """Set the singles/doubles lineup for a match."""
    try:
        changed = await store.set_lineup(season, match_id, lineup)
    except Exception as e:
        raise _server_error("setting lineup", e)
    return _updated_match(store, season, match_id, changed)


@router.put("/api/seasons/{season}/matches/{match_id}/results", response_model=Match)
async def record_results(
    season: Season,
    match_id: str,
    results: MatchResults,
    store: LeagueStore = Depends(get_league_store),
):
    """Record the team score and per-slot results for a match."""
    try:
        changed = await store.record_results(season, match_id, results)
    except Exception as e:
        raise _server_error("recording results", e)
    return _updated_match(store, season, match_id, changed)


@router.post("/api/seasons/{season}/matches/{match_id}/mvp-votes/{player_id}", response_model=Match)
async def cast_mvp_vote(
    season: Season,
    match_id: str,
    player_id: str,
    store: LeagueStore = Depends(get_league_store),
):
    """Add one MVP vote for a player."""
    try:
        changed = await store.cast_mvp_vote(season, match_id, player_id)
    except Exception as e:
        raise _server_error("casting MVP vote", e)
    return _updated_match(store, season, match_id, changed)


@router.post("/api/seasons/{season}/matches/{match_id}/mvp", response_model=Match)
async def finalize_mvp(
    season: Season,
    match_id: str,
    request: FinalizeMvpRequest,
    store: LeagueStore = Depends(get_league_store),
):
    """Finalize the MVP, defaulting to the top-voted player."""
    if store.find_match(season, match_id) is None:
        raise _match_not_found(season, match_id)
    try:
        changed = await store.finalize_mvp(season, match_id, request.player_id)
    except Exception as e:
        raise _server_error("finalizing MVP", e)
    if not changed:
        # The match may have been deleted while this call waited
        if store.find_match(season, match_id) is None:
            raise _match_not_found(season, match_id)
        raise HTTPException(status_code=400, detail="No MVP votes to finalize from")
    return store.find_match(season, match_id)


@router.get("/api/seasons/{season}/schedule", response_model=SeasonSchedule)
async def get_season_schedule(season: Season, store: LeagueStore = Depends(get_league_store)):
    """A season's upcoming matches (soonest first) and past matches (newest first)."""
    return dashboard_service.season_schedule(store.data, season)


@router.get("/api/seasons/{season}/matches/{match_id}/available-players", response_model=List[Player])
async def list_available_players(
    season: Season,
    match_id: str,
    store: LeagueStore = Depends(get_league_store),
):
    """Players who can be picked for the lineup (answered yes or if needed)."""
    match = store.find_match(season, match_id)
    if match is None:
        raise _match_not_found(season, match_id)
    return dashboard_service.available_players(store.data, match)


# ============================================================================
# Dashboard
# ============================================================================

@router.get("/api/dashboard", response_model=DashboardResponse)
async def get_dashboard(store: LeagueStore = Depends(get_league_store)):
    """Year overview: record, next matches and latest results."""
    data = store.data
    return DashboardResponse(
        year=data.year,
        current_season=store.current_season,
        record=dashboard_service.season_record(data),
        upcoming_matches=dashboard_service.upcoming_matches(data),
        recent_results=dashboard_service.past_results(data)[:DASHBOARD_UPCOMING_LIMIT],
    )
