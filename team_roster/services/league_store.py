"""
In-memory league data store.

Holds one LeagueYearData aggregate and exposes async mutations that each
wait a fixed simulated latency and then replace the whole aggregate in a
single step. Readers always see a complete snapshot.

Concurrency:
- By default mutations race. Each one applies to the snapshot that is
  current when its latency elapses, so overlapping mutations land in
  completion order and the later one wins where they touch the same record.
- With serialize_mutations=True, mutations queue behind an asyncio.Lock
  and apply strictly in call order.

Lookups by id that miss leave the aggregate untouched and return False.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple, TypeVar, Union

from team_roster.database.init_defaults import empty_league_data
from team_roster.models.schemas import (
    Availability,
    LeagueYearData,
    Lineup,
    Match,
    MatchResults,
    Player,
    PlayerAvailability,
    Season,
)
from team_roster.utils.constants import (
    DEFAULT_STORE_LATENCY_SECONDS,
    MATCH_ID_PREFIX,
    PLAYER_ID_PREFIX,
)
from team_roster.utils.datetime_utils import season_for_month, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")
Mutation = Callable[[LeagueYearData], Tuple[LeagueYearData, T]]


def sort_roster(players: List[Player]) -> List[Player]:
    """Sort players by rank ascending; equal ranks keep their current order."""
    return sorted(players, key=lambda p: p.rank)


class LeagueStore:
    """Season-partitioned store of players and matches."""

    def __init__(
        self,
        initial_data: Optional[LeagueYearData] = None,
        latency_seconds: float = DEFAULT_STORE_LATENCY_SECONDS,
        serialize_mutations: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._clock = clock
        self._data = initial_data if initial_data is not None else empty_league_data(clock())
        self._latency_seconds = latency_seconds
        self._serialize_mutations = serialize_mutations
        self._lock = asyncio.Lock()
        self._in_flight = 0
        self._last_id_stamp = 0
        # Fixed for the store's lifetime. The month is the clock's month, which
        # is UTC by default, so near a month boundary it can differ from local time.
        self._current_season = Season(season_for_month(clock().month))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def data(self) -> LeagueYearData:
        """Current snapshot."""
        return self._data

    @property
    def loading(self) -> bool:
        """True while any mutation is in flight."""
        return self._in_flight > 0

    @property
    def current_season(self) -> Season:
        return self._current_season

    @property
    def latency_seconds(self) -> float:
        return self._latency_seconds

    @property
    def serialize_mutations(self) -> bool:
        return self._serialize_mutations

    def get_season_matches(self, season: Union[Season, str]) -> List[Match]:
        return self._data.matches.for_season(Season(season))

    def find_match(self, season: Union[Season, str], match_id: str) -> Optional[Match]:
        for match in self.get_season_matches(season):
            if match.id == match_id:
                return match
        return None

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self._data.players:
            if player.id == player_id:
                return player
        return None

    # ------------------------------------------------------------------
    # Mutation plumbing
    # ------------------------------------------------------------------

    def _next_id(self, prefix: str) -> str:
        """Time-based id, bumped so ids generated in the same millisecond differ."""
        stamp = int(self._clock().timestamp() * 1000)
        if stamp <= self._last_id_stamp:
            stamp = self._last_id_stamp + 1
        self._last_id_stamp = stamp
        return f"{prefix}{stamp}"

    async def _mutate(self, description: str, mutation: Mutation) -> T:
        self._in_flight += 1
        try:
            if self._serialize_mutations:
                async with self._lock:
                    return await self._apply_after_latency(description, mutation)
            return await self._apply_after_latency(description, mutation)
        finally:
            self._in_flight -= 1

    async def _apply_after_latency(self, description: str, mutation: Mutation) -> T:
        await asyncio.sleep(self._latency_seconds)
        # Read the snapshot only now, after the latency has elapsed
        new_data, result = mutation(self._data)
        self._data = new_data
        logger.debug(f"Applied {description}")
        return result

    async def _replace_match(
        self,
        description: str,
        season: Union[Season, str],
        match_id: str,
        transform: Callable[[Match], Optional[Match]],
    ) -> bool:
        """
        Replace one match in a season with ``transform(match)``.

        If the match is missing, or ``transform`` returns None, the aggregate
        is left as it was and False is returned.
        """
        season = Season(season)

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, bool]:
            matches = list(data.matches.for_season(season))
            for index, match in enumerate(matches):
                if match.id == match_id:
                    replacement = transform(match)
                    if replacement is None:
                        return data, False
                    matches[index] = replacement
                    return (
                        data.model_copy(update={"matches": data.matches.with_season(season, matches)}),
                        True,
                    )
            logger.info(f"Match {match_id} not found in {season.value}; {description} skipped")
            return data, False

        return await self._mutate(description, mutation)

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    async def add_player(self, name: str, rank: int) -> Player:
        """Add a player with a generated id and re-sort the roster by rank."""

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, Player]:
            player = Player(id=self._next_id(PLAYER_ID_PREFIX), name=name, rank=rank)
            players = sort_roster(data.players + [player])
            return data.model_copy(update={"players": players}), player

        return await self._mutate(f"add_player({name!r})", mutation)

    async def update_player(self, player: Player) -> bool:
        """Replace the roster entry with the same id and re-sort."""

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, bool]:
            if not any(p.id == player.id for p in data.players):
                logger.info(f"Player {player.id} not found; roster unchanged")
                return data, False
            players = [player if p.id == player.id else p for p in data.players]
            return data.model_copy(update={"players": sort_roster(players)}), True

        return await self._mutate(f"update_player({player.id})", mutation)

    async def delete_player(self, player_id: str) -> bool:
        """
        Remove a player from the roster.

        Availability, lineups, results and votes that mention the player are
        left as they are.
        """

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, bool]:
            players = [p for p in data.players if p.id != player_id]
            if len(players) == len(data.players):
                logger.info(f"Player {player_id} not found; roster unchanged")
                return data, False
            return data.model_copy(update={"players": players}), True

        return await self._mutate(f"delete_player({player_id})", mutation)

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    async def add_match(
        self,
        season: Union[Season, str],
        opponent: str,
        location: str,
        date: Union[datetime, str],
    ) -> Match:
        """Schedule a match at the end of the season's list."""
        season = Season(season)

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, Match]:
            match = Match(
                id=self._next_id(MATCH_ID_PREFIX),
                opponent=opponent,
                location=location,
                date=date,
            )
            matches = data.matches.for_season(season) + [match]
            return (
                data.model_copy(update={"matches": data.matches.with_season(season, matches)}),
                match,
            )

        return await self._mutate(f"add_match({season.value}, {opponent!r})", mutation)

    async def update_match(self, season: Union[Season, str], match: Match) -> bool:
        """Replace the season's match with the same id."""
        return await self._replace_match(
            f"update_match({match.id})", season, match.id, lambda _: match
        )

    async def delete_match(self, season: Union[Season, str], match_id: str) -> bool:
        season = Season(season)

        def mutation(data: LeagueYearData) -> Tuple[LeagueYearData, bool]:
            current = data.matches.for_season(season)
            matches = [m for m in current if m.id != match_id]
            if len(matches) == len(current):
                logger.info(f"Match {match_id} not found in {season.value}; nothing deleted")
                return data, False
            return (
                data.model_copy(update={"matches": data.matches.with_season(season, matches)}),
                True,
            )

        return await self._mutate(f"delete_match({match_id})", mutation)

    async def set_player_availability(
        self,
        season: Union[Season, str],
        match_id: str,
        player_id: str,
        status: Union[Availability, str],
    ) -> bool:
        """Record a player's availability, replacing any earlier answer."""
        entry = PlayerAvailability(player_id=player_id, status=Availability(status))

        def transform(match: Match) -> Match:
            availability = list(match.availability)
            for index, existing in enumerate(availability):
                if existing.player_id == player_id:
                    availability[index] = entry
                    break
            else:
                availability.append(entry)
            return match.model_copy(update={"availability": availability})

        return await self._replace_match(
            f"set_player_availability({match_id}, {player_id})", season, match_id, transform
        )

    async def set_lineup(self, season: Union[Season, str], match_id: str, lineup: Lineup) -> bool:
        return await self._replace_match(
            f"set_lineup({match_id})",
            season,
            match_id,
            lambda match: match.model_copy(update={"lineup": lineup}),
        )

    async def record_results(
        self, season: Union[Season, str], match_id: str, results: MatchResults
    ) -> bool:
        return await self._replace_match(
            f"record_results({match_id})",
            season,
            match_id,
            lambda match: match.model_copy(update={"results": results}),
        )

    async def cast_mvp_vote(self, season: Union[Season, str], match_id: str, player_id: str) -> bool:
        """Add one MVP vote for a player, starting the tally on the first vote."""

        def transform(match: Match) -> Match:
            votes = dict(match.mvp_votes or {})
            votes[player_id] = votes.get(player_id, 0) + 1
            return match.model_copy(update={"mvp_votes": votes})

        return await self._replace_match(
            f"cast_mvp_vote({match_id}, {player_id})", season, match_id, transform
        )

    async def finalize_mvp(
        self,
        season: Union[Season, str],
        match_id: str,
        player_id: Optional[str] = None,
    ) -> bool:
        """
        Set the match MVP.

        Without ``player_id`` the top-voted player is chosen; on a tie the
        player listed first in the tally wins. Returns False when there is
        no tally to choose from.
        """

        def transform(match: Match) -> Optional[Match]:
            chosen = player_id
            if chosen is None:
                if not match.mvp_votes:
                    logger.info(f"No MVP votes for match {match_id}; MVP not finalized")
                    return None
                chosen = max(match.mvp_votes.items(), key=lambda item: item[1])[0]
            return match.model_copy(update={"mvp": chosen})

        return await self._replace_match(f"finalize_mvp({match_id})", season, match_id, transform)
