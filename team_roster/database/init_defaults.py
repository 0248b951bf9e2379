"""
Initialize default league values.
Builds the sample roster and schedule a fresh store starts from.
"""

from datetime import datetime, timedelta
from typing import Optional

from team_roster.models.schemas import (
    Availability,
    LeagueYearData,
    Lineup,
    Match,
    MatchResults,
    Player,
    PlayerAvailability,
    SeasonMatches,
)
from team_roster.utils.datetime_utils import utcnow


SAMPLE_PLAYERS = [
    ("p1", "Alex Johnson"),
    ("p2", "Ben Carter"),
    ("p3", "Chris Davis"),
    ("p4", "David Evans"),
    ("p5", "Ethan Foster"),
    ("p6", "Frank Green"),
    ("p7", "George Hill"),
    ("p8", "Henry Ian"),
]


def empty_league_data(now: Optional[datetime] = None) -> LeagueYearData:
    """An empty aggregate for the year of ``now``."""
    now = now or utcnow()
    return LeagueYearData(year=now.year)


def build_initial_data(now: Optional[datetime] = None) -> LeagueYearData:
    """
    Build the sample league data.

    Match dates are relative to ``now``: one completed spring match two
    weeks ago, one upcoming spring match next week, and one fall match
    roughly three months out.
    """
    now = now or utcnow()

    players = [
        Player(id=player_id, name=name, rank=rank)
        for rank, (player_id, name) in enumerate(SAMPLE_PLAYERS, start=1)
    ]

    played_availability = [
        PlayerAvailability(player_id=f"p{i}", status=Availability.YES) for i in range(1, 7)
    ] + [
        PlayerAvailability(player_id="p7", status=Availability.NO),
        PlayerAvailability(player_id="p8", status=Availability.IF_NEEDED),
    ]

    spring = [
        Match(
            id="m1s",
            opponent="Eagles TC",
            location="Home",
            date=now - timedelta(days=14),
            availability=played_availability,
            lineup=Lineup(
                singles=["p1", "p2", "p3", "p4", "p5", "p6"],
                doubles=[("p1", "p2"), ("p3", "p4"), ("p5", "p6")],
            ),
            results=MatchResults(team_score=(7, 2), match_results=[]),
            mvp="p2",
        ),
        Match(
            id="m2s",
            opponent="Lions Tennis",
            location="Away",
            date=now + timedelta(days=7),
            availability=[
                PlayerAvailability(player_id="p1", status=Availability.YES),
                PlayerAvailability(player_id="p2", status=Availability.YES),
            ],
        ),
    ]
    fall = [
        Match(
            id="m1f",
            opponent="Eagles TC",
            location="Away",
            date=now + timedelta(days=90),
        ),
    ]

    return LeagueYearData(
        year=now.year,
        players=players,
        matches=SeasonMatches(spring=spring, fall=fall),
    )
