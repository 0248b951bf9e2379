"""
Read-side derivations over a league snapshot: upcoming matches, recent
results, win/loss record, and lineup helpers.
"""

from datetime import datetime
from typing import List, Optional

from team_roster.models.schemas import (
    Availability,
    AvailabilitySummary,
    LeagueYearData,
    Match,
    Player,
    Season,
    SeasonRecord,
    SeasonSchedule,
)
from team_roster.utils.constants import DASHBOARD_UPCOMING_LIMIT, UNKNOWN_PLAYER_NAME
from team_roster.utils.datetime_utils import utcnow


def all_matches(data: LeagueYearData) -> List[Match]:
    """Spring matches followed by fall matches."""
    return data.matches.spring + data.matches.fall


def upcoming_matches(
    data: LeagueYearData,
    now: Optional[datetime] = None,
    limit: Optional[int] = DASHBOARD_UPCOMING_LIMIT,
) -> List[Match]:
    """Matches on or after ``now``, soonest first."""
    now = now or utcnow()
    matches = sorted((m for m in all_matches(data) if m.date >= now), key=lambda m: m.date)
    return matches if limit is None else matches[:limit]


def past_results(data: LeagueYearData, now: Optional[datetime] = None) -> List[Match]:
    """Completed matches that have results, most recent first."""
    now = now or utcnow()
    return sorted(
        (m for m in all_matches(data) if m.date < now and m.results is not None),
        key=lambda m: m.date,
        reverse=True,
    )


def match_won(match: Match) -> bool:
    if match.results is None:
        return False
    ours, theirs = match.results.team_score
    return ours > theirs


def season_record(data: LeagueYearData, now: Optional[datetime] = None) -> SeasonRecord:
    """
    Win/loss record over completed matches with results.

    Anything that is not a win (including a tied team score) counts as a loss.
    """
    played = past_results(data, now)
    if not played:
        return SeasonRecord(wins=0, losses=0, played=0, win_rate="0%")
    wins = sum(1 for m in played if match_won(m))
    # Half rounds up
    win_rate = f"{int(wins / len(played) * 100 + 0.5)}%"
    return SeasonRecord(wins=wins, losses=len(played) - wins, played=len(played), win_rate=win_rate)


def availability_summary(match: Match) -> AvailabilitySummary:
    yes = sum(1 for a in match.availability if a.status == Availability.YES)
    if_needed = sum(1 for a in match.availability if a.status == Availability.IF_NEEDED)
    return AvailabilitySummary(yes=yes, if_needed=if_needed)


def available_players(data: LeagueYearData, match: Match) -> List[Player]:
    """Roster players who answered yes or if needed, in roster order."""
    available_ids = {
        a.player_id
        for a in match.availability
        if a.status in (Availability.YES, Availability.IF_NEEDED)
    }
    return [p for p in data.players if p.id in available_ids]


def player_name(data: LeagueYearData, player_id: str) -> str:
    for player in data.players:
        if player.id == player_id:
            return player.name
    return UNKNOWN_PLAYER_NAME


def season_schedule(
    data: LeagueYearData, season: Season, now: Optional[datetime] = None
) -> SeasonSchedule:
    """
    Split one season around ``now``.

    Upcoming matches come soonest first. Past matches come newest first and
    include matches that have no results yet.
    """
    now = now or utcnow()
    season = Season(season)
    matches = data.matches.for_season(season)
    return SeasonSchedule(
        season=season,
        upcoming_matches=sorted((m for m in matches if m.date >= now), key=lambda m: m.date),
        past_matches=sorted(
            (m for m in matches if m.date < now), key=lambda m: m.date, reverse=True
        ),
    )
