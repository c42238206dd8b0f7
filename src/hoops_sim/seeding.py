"""Record ordering shared by every bracket stage.

All stages order teams by wins, then point differential, both descending.
Nothing beyond those two keys is applied unless a tie-break policy is passed
in explicitly; with the default ``"stable"`` policy exact ties keep their input
order because ``sorted`` is stable.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Iterable, Union

from .models import Seed, Team

TieBreak = Callable[[Team], Any]
TieBreakSpec = Union[str, TieBreak, None]

TIE_BREAK_POLICIES = ("stable", "team_id", "random")


def record_key(team: Team) -> tuple[int, int]:
    return (team.wins, team.point_diff)


def resolve_tie_break(policy: TieBreakSpec, rng: random.Random | None = None) -> TieBreak | None:
    if policy is None or policy == "stable":
        return None
    if callable(policy):
        return policy
    if policy == "team_id":
        return lambda team: team.team_id
    if policy == "random":
        rng = rng or random.Random()
        draws: dict[str, float] = {}

        def _draw(team: Team) -> float:
            # One draw per team so repeated sorts agree with each other.
            if team.team_id not in draws:
                draws[team.team_id] = rng.random()
            return draws[team.team_id]

        return _draw
    raise ValueError(f"Unknown tie-break policy {policy!r}; expected one of {TIE_BREAK_POLICIES}.")


def rank_teams(teams: Iterable[Team], tie_break: TieBreak | None = None) -> list[Team]:
    """Best record first. ``tie_break`` only orders teams whose wins and point differential match."""
    ranked = list(teams)
    if tie_break is not None:
        # Tertiary key ascending first, then the stable primary sort on top of it.
        ranked.sort(key=tie_break)
    ranked.sort(key=record_key, reverse=True)
    return ranked


def seed_field(teams: Iterable[Team], group: str = "", tie_break: TieBreak | None = None) -> list[Seed]:
    return [Seed(team=team, seed=idx, group=group) for idx, team in enumerate(rank_teams(teams, tie_break), start=1)]


def reseed_by_original(seeds: Iterable[Seed]) -> list[Seed]:
    return sorted(seeds, key=lambda s: s.seed)


def group_by_division(teams: Iterable[Team]) -> dict[str, list[Team]]:
    groups: dict[str, list[Team]] = {}
    for team in teams:
        groups.setdefault(team.division, []).append(team)
    return groups
