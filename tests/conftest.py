from __future__ import annotations

from typing import Callable

import pytest

from hoops_sim.models import GameOutcome, Team


def _outcome(home: Team, away: Team, home_wins: bool) -> GameOutcome:
    if home_wins:
        return GameOutcome(home_score=101, away_score=94, winner=home)
    return GameOutcome(home_score=94, away_score=101, winner=away)


class FavoriteProvider:
    """Higher rating always wins; the home side takes a rating tie."""

    def __init__(self) -> None:
        self.calls: list[tuple[Team, Team]] = []

    def __call__(self, home: Team, away: Team, is_playoff: bool = True) -> GameOutcome:
        self.calls.append((home, away))
        return _outcome(home, away, home.rating >= away.rating)


class HomeProvider:
    def __init__(self) -> None:
        self.calls: list[tuple[Team, Team]] = []

    def __call__(self, home: Team, away: Team, is_playoff: bool = True) -> GameOutcome:
        self.calls.append((home, away))
        return _outcome(home, away, True)


@pytest.fixture
def favorite_provider() -> FavoriteProvider:
    return FavoriteProvider()


@pytest.fixture
def home_provider() -> HomeProvider:
    return HomeProvider()


@pytest.fixture
def make_team() -> Callable[..., Team]:
    def _make(
        name: str,
        wins: int,
        division: str = "Atlantic",
        tier: int = 1,
        rating: float = 50.0,
        point_diff: int = 0,
        losses: int | None = None,
    ) -> Team:
        return Team(
            name=name,
            division=division,
            tier=tier,
            wins=wins,
            losses=losses if losses is not None else max(0, 82 - wins),
            point_diff=point_diff,
            rating=rating,
        )

    return _make
