"""
Pydantic models for the league data store and API request/response validation.
"""

import enum
from datetime import datetime
from typing import Optional, List, Dict, Tuple
from pydantic import BaseModel, Field, ConfigDict, field_validator

from team_roster.utils.constants import SINGLES_SLOTS, DOUBLES_SLOTS
from team_roster.utils.datetime_utils import ensure_utc


class Season(str, enum.Enum):
    """The two fixed yearly partitions matches are grouped under."""

    SPRING = "Spring"
    FALL = "Fall"


class Availability(str, enum.Enum):
    """A player's response to a specific match."""

    YES = "Yes"
    NO = "No"
    IF_NEEDED = "If Needed"


DoublesPair = Tuple[Optional[str], Optional[str]]


# ============================================================================
# Store entities
# ============================================================================

class Player(BaseModel):
    """Roster entry. Lower rank is better."""

    model_config = ConfigDict(frozen=True)
    id: str
    name: str = Field(min_length=1)
    rank: int = Field(gt=0)


class PlayerAvailability(BaseModel):
    """One player's availability for one match."""

    model_config = ConfigDict(frozen=True)
    player_id: str
    status: Availability


def _empty_singles() -> List[Optional[str]]:
    return [None] * SINGLES_SLOTS


def _empty_doubles() -> List[DoublesPair]:
    return [(None, None)] * DOUBLES_SLOTS


class Lineup(BaseModel):
    """
    Singles and doubles slot assignments for a match.

    Slots may be left empty. A player may appear in several slots, and
    nothing ties the lineup to the availability list.
    """

    model_config = ConfigDict(frozen=True)
    singles: List[Optional[str]] = Field(
        default_factory=_empty_singles,
        min_length=SINGLES_SLOTS,
        max_length=SINGLES_SLOTS,
    )
    doubles: List[DoublesPair] = Field(
        default_factory=_empty_doubles,
        min_length=DOUBLES_SLOTS,
        max_length=DOUBLES_SLOTS,
    )


class MatchResult(BaseModel):
    """Outcome of a single singles/doubles slot."""

    model_config = ConfigDict(frozen=True)
    player_ids: List[str]
    opponent_names: List[str]
    score: str
    win: bool


class MatchResults(BaseModel):
    """Aggregate result of a match: team score (ours, theirs) plus per-slot outcomes."""

    model_config = ConfigDict(frozen=True)
    team_score: Tuple[int, int]
    match_results: List[MatchResult] = Field(default_factory=list)


class Match(BaseModel):
    """A scheduled match and everything recorded against it."""

    model_config = ConfigDict(frozen=True)
    id: str
    opponent: str = Field(min_length=1)
    location: str = Field(min_length=1)
    date: datetime
    availability: List[PlayerAvailability] = Field(default_factory=list)
    lineup: Optional[Lineup] = None
    results: Optional[MatchResults] = None
    mvp_votes: Optional[Dict[str, int]] = None
    mvp: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_is_aware(cls, value: datetime) -> datetime:
        """Naive dates are taken to be UTC."""
        return ensure_utc(value)


class SeasonMatches(BaseModel):
    """Matches for both seasons, each in scheduling order."""

    model_config = ConfigDict(frozen=True)
    spring: List[Match] = Field(default_factory=list)
    fall: List[Match] = Field(default_factory=list)

    def for_season(self, season: Season) -> List[Match]:
        """Get the match list for a season."""
        return self.spring if season == Season.SPRING else self.fall

    def with_season(self, season: Season, matches: List[Match]) -> "SeasonMatches":
        """Return a copy with one season's match list replaced."""
        field_name = "spring" if season == Season.SPRING else "fall"
        return self.model_copy(update={field_name: matches})


class LeagueYearData(BaseModel):
    """Root aggregate: one year's roster and schedule."""

    model_config = ConfigDict(frozen=True)
    year: int
    players: List[Player] = Field(default_factory=list)
    matches: SeasonMatches = Field(default_factory=SeasonMatches)


# ============================================================================
# API requests / responses
# ============================================================================

class CreatePlayerRequest(BaseModel):
    """Request to add a player to the roster."""

    name: str = Field(min_length=1)
    rank: int = Field(gt=0)


class CreateMatchRequest(BaseModel):
    """Request to schedule a match."""

    opponent: str = Field(min_length=1)
    location: str = Field(min_length=1)
    date: datetime


class SetAvailabilityRequest(BaseModel):
    """Request to record a player's availability."""

    status: Availability


class FinalizeMvpRequest(BaseModel):
    """Request to finalize the MVP. Omit player_id to take the top-voted player."""

    player_id: Optional[str] = None


class LeagueSnapshotResponse(BaseModel):
    """Current store snapshot."""

    data: LeagueYearData
    loading: bool
    current_season: Season


class AvailabilitySummary(BaseModel):
    """Counts of players who answered yes / if needed."""

    yes: int
    if_needed: int


class SeasonRecord(BaseModel):
    """Win/loss record over completed matches."""

    wins: int
    losses: int
    played: int
    win_rate: str


class SeasonSchedule(BaseModel):
    """One season split around the current time."""

    season: Season
    upcoming_matches: List[Match]
    past_matches: List[Match]


class DashboardResponse(BaseModel):
    """Overview of the current year."""

    year: int
    current_season: Season
    record: SeasonRecord
    upcoming_matches: List[Match]
    recent_results: List[Match]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    current_season: Season
    player_count: int
    match_count: int
