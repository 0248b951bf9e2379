"""
Tests for dashboard derivations over league snapshots.
"""

from datetime import timedelta

from team_roster.models.schemas import (
    Availability,
    LeagueYearData,
    Match,
    MatchResults,
    PlayerAvailability,
    Season,
    SeasonMatches,
)
from team_roster.services import dashboard_service


def _played(match_id, now, days_ago, ours, theirs):
    return Match(
        id=match_id,
        opponent=f"Opponent {match_id}",
        location="Home",
        date=now - timedelta(days=days_ago),
        results=MatchResults(team_score=(ours, theirs)),
    )


def test_all_matches_spring_then_fall(sample_data):
    ids = [m.id for m in dashboard_service.all_matches(sample_data)]
    assert ids == ["m1s", "m2s", "m1f"]


def test_upcoming_matches(sample_data, now):
    """Future matches only, soonest first."""
    upcoming = dashboard_service.upcoming_matches(sample_data, now)
    assert [m.id for m in upcoming] == ["m2s", "m1f"]


def test_upcoming_matches_limit(sample_data, now):
    data = sample_data.model_copy(
        update={
            "matches": sample_data.matches.with_season(
                "Fall",
                sample_data.matches.fall
                + [
                    Match(id="x1", opponent="A", location="Home", date=now + timedelta(days=1)),
                    Match(id="x2", opponent="B", location="Home", date=now + timedelta(days=2)),
                ],
            )
        }
    )

    assert [m.id for m in dashboard_service.upcoming_matches(data, now)] == ["x1", "x2", "m2s"]
    assert len(dashboard_service.upcoming_matches(data, now, limit=None)) == 4


def test_past_results_requires_results(now):
    """Past matches without results are left out; newest first."""
    data = LeagueYearData(
        year=2024,
        matches=SeasonMatches(
            spring=[
                _played("old", now, 20, 5, 4),
                Match(id="no-result", opponent="C", location="Away", date=now - timedelta(days=3)),
                _played("recent", now, 2, 1, 8),
            ]
        ),
    )

    assert [m.id for m in dashboard_service.past_results(data, now)] == ["recent", "old"]


def test_season_record(sample_data, now):
    record = dashboard_service.season_record(sample_data, now)

    assert record.wins == 1
    assert record.losses == 0
    assert record.played == 1
    assert record.win_rate == "100%"


def test_season_record_empty(now):
    record = dashboard_service.season_record(LeagueYearData(year=2024), now)

    assert record.played == 0
    assert record.win_rate == "0%"


def test_season_record_rounds_and_counts_ties_as_losses(now):
    data = LeagueYearData(
        year=2024,
        matches=SeasonMatches(
            spring=[_played("w1", now, 3, 5, 4), _played("w2", now, 4, 6, 3)],
            fall=[_played("t", now, 5, 4, 4)],
        ),
    )

    record = dashboard_service.season_record(data, now)

    assert (record.wins, record.losses) == (2, 1)
    assert record.win_rate == "67%"


def test_match_won(sample_data):
    assert dashboard_service.match_won(sample_data.matches.spring[0]) is True
    assert dashboard_service.match_won(sample_data.matches.spring[1]) is False


def test_availability_summary(sample_data):
    summary = dashboard_service.availability_summary(sample_data.matches.spring[0])

    assert summary.yes == 6
    assert summary.if_needed == 1


def test_available_players_in_roster_order(sample_data):
    match = sample_data.matches.spring[0].model_copy(
        update={
            "availability": [
                PlayerAvailability(player_id="p8", status=Availability.IF_NEEDED),
                PlayerAvailability(player_id="p2", status=Availability.YES),
                PlayerAvailability(player_id="p3", status=Availability.NO),
                PlayerAvailability(player_id="gone", status=Availability.YES),
            ]
        }
    )

    players = dashboard_service.available_players(sample_data, match)

    assert [p.id for p in players] == ["p2", "p8"]


def test_player_name(sample_data):
    assert dashboard_service.player_name(sample_data, "p1") == "Alex Johnson"
    assert dashboard_service.player_name(sample_data, "nobody") == "Unknown Player"


def test_season_schedule(now):
    """Upcoming soonest first; past newest first, with or without results."""
    data = LeagueYearData(
        year=2024,
        matches=SeasonMatches(
            spring=[
                Match(id="later", opponent="A", location="Home", date=now + timedelta(days=10)),
                _played("old", now, 20, 5, 4),
                Match(id="sooner", opponent="B", location="Away", date=now + timedelta(days=2)),
                Match(id="unscored", opponent="C", location="Away", date=now - timedelta(days=3)),
            ],
            fall=[Match(id="fall", opponent="D", location="Home", date=now + timedelta(days=1))],
        ),
    )

    schedule = dashboard_service.season_schedule(data, Season.SPRING, now)

    assert schedule.season == Season.SPRING
    assert [m.id for m in schedule.upcoming_matches] == ["sooner", "later"]
    assert [m.id for m in schedule.past_matches] == ["unscored", "old"]


def test_season_schedule_match_at_now_is_upcoming(now):
    data = LeagueYearData(
        year=2024,
        matches=SeasonMatches(fall=[Match(id="now", opponent="A", location="Home", date=now)]),
    )

    schedule = dashboard_service.season_schedule(data, Season.FALL, now)

    assert [m.id for m in schedule.upcoming_matches] == ["now"]
    assert schedule.past_matches == []
