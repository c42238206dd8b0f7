from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any, Iterable

from .bracket import conference_for_division
from .config import DEFAULT_GAMES_PER_MATCHUP
from .engine import simulate_game
from .models import PostseasonResults, Team
from .postseason import PostseasonEngine
from .schedule import build_round_robin_days
from .seeding import TieBreakSpec, group_by_division, rank_teams
from .serialize import season_summary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LeagueResult:
    standings: dict[int, list[Team]]


class League:
    """Three tiers of teams plus the regular-season calendar that fills in their records.

    Tier 1 plays a round robin inside each conference, Tier 2 inside each
    division and Tier 3 inside each metro.
    """

    TIERS = (1, 2, 3)

    def __init__(
        self,
        teams: Iterable[Team],
        games_per_matchup: int = DEFAULT_GAMES_PER_MATCHUP,
        seed: int | None = None,
        season_start_year: int = 2025,
    ) -> None:
        if games_per_matchup < 1:
            raise ValueError("games_per_matchup must be at least 1.")
        self.teams = list(teams)
        self.games_per_matchup = games_per_matchup
        self.seed = seed
        self.season_start_year = season_start_year
        self._rng = random.Random(seed)
        self.history: list[dict[str, Any]] = []
        self.last_postseason: PostseasonResults | None = None
        self._build_calendar()

    def _schedule_groups(self) -> list[list[Team]]:
        groups: list[list[Team]] = []
        for tier in self.TIERS:
            tier_teams = self.tier_teams(tier)
            if tier == 1:
                by_conference: dict[str, list[Team]] = {}
                for team in tier_teams:
                    key = team.conference or conference_for_division(team.division) or team.division
                    by_conference.setdefault(key, []).append(team)
                groups.extend(by_conference.values())
            else:
                groups.extend(group_by_division(tier_teams).values())
        return groups

    def _build_calendar(self) -> None:
        per_group = [build_round_robin_days(group, self.games_per_matchup) for group in self._schedule_groups()]
        self._season_days: list[list[tuple[Team, Team]]] = [
            [game for day in slates if day for game in day] for slates in zip_longest(*per_group, fillvalue=None)
        ]
        self._day_index = 0

    @property
    def total_days(self) -> int:
        return len(self._season_days)

    @property
    def current_day(self) -> int:
        return self._day_index + 1

    def tier_teams(self, tier: int) -> list[Team]:
        if tier not in self.TIERS:
            raise ValueError(f"Unknown tier {tier}.")
        return [team for team in self.teams if team.tier == tier]

    def get_team(self, key: str) -> Team | None:
        for team in self.teams:
            if team.team_id == key or team.name == key:
                return team
        return None

    def get_standings(self, tier: int, tie_break=None) -> list[Team]:
        return rank_teams(self.tier_teams(tier), tie_break)

    def get_group_standings(self, tier: int) -> dict[str, list[Team]]:
        return {group: rank_teams(teams) for group, teams in group_by_division(self.tier_teams(tier)).items()}

    def is_complete(self) -> bool:
        return self._day_index >= len(self._season_days)

    def get_day_schedule(self) -> list[tuple[Team, Team]]:
        if self.is_complete():
            return []
        return self._season_days[self._day_index]

    def simulate_next_day(self) -> list[tuple[Team, Team, int, int]]:
        results: list[tuple[Team, Team, int, int]] = []
        for home, away in self.get_day_schedule():
            outcome = simulate_game(home, away, is_playoff=False, rng=self._rng)
            home.record_game(outcome.home_score, outcome.away_score)
            away.record_game(outcome.away_score, outcome.home_score)
            results.append((home, away, outcome.home_score, outcome.away_score))
        self._day_index += 1
        return results

    def run_season(self) -> LeagueResult:
        while not self.is_complete():
            self.simulate_next_day()
        logger.info("Regular season %d complete after %d days", self.season_start_year, self.total_days)
        return LeagueResult(standings={tier: self.get_standings(tier) for tier in self.TIERS})

    def run_postseason(
        self,
        seed: int | None = None,
        tie_break: TieBreakSpec = "stable",
        engine: PostseasonEngine | None = None,
    ) -> PostseasonResults:
        engine = engine or PostseasonEngine(seed=seed, tie_break=tie_break)
        results = engine.run(self.tier_teams(1), self.tier_teams(2), self.tier_teams(3))
        self.last_postseason = results
        self.history.append({"season_start_year": self.season_start_year, **season_summary(results)})
        return results

    def reset(self) -> None:
        for team in self.teams:
            team.reset_record()
        self.last_postseason = None
        self._rng = random.Random(self.seed)
        self._build_calendar()
