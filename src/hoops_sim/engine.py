from __future__ import annotations

import random

from .config import (
    BASE_SCORE,
    HOME_COURT_POINTS,
    OVERTIME_BASE_SCORE,
    OVERTIME_SPREAD,
    PLAYOFF_PACE_FACTOR,
    RATING_POINTS,
    SCORE_SPREAD,
)
from .models import GameOutcome, Team

MAX_OVERTIME_PERIODS = 6


def _sample_score(expected: float, spread: float, rng: random.Random) -> int:
    return max(0, int(round(rng.gauss(expected, spread))))


def _expected_scores(home: Team, away: Team, is_playoff: bool) -> tuple[float, float]:
    tier = home.tier or away.tier or 1
    edge = (home.rating - away.rating) * RATING_POINTS
    home_court = HOME_COURT_POINTS.get(tier, HOME_COURT_POINTS[1])
    pace = PLAYOFF_PACE_FACTOR if is_playoff else 1.0
    base = BASE_SCORE * pace
    home_expected = base + edge / 2.0 + home_court / 2.0
    away_expected = base - edge / 2.0 - home_court / 2.0
    return home_expected, away_expected


def simulate_game(
    home: Team,
    away: Team,
    is_playoff: bool = False,
    rng: random.Random | None = None,
) -> GameOutcome:
    rng = rng or random.Random()
    home_expected, away_expected = _expected_scores(home, away, is_playoff)
    # Playoff games are a touch tighter than the regular season.
    spread = SCORE_SPREAD * (0.92 if is_playoff else 1.0)
    home_score = _sample_score(home_expected, spread, rng)
    away_score = _sample_score(away_expected, spread, rng)

    overtime_periods = 0
    while home_score == away_score:
        overtime_periods += 1
        if overtime_periods > MAX_OVERTIME_PERIODS:
            # Sudden death after a long night so the loop always terminates.
            if rng.random() < 0.5:
                home_score += 1
            else:
                away_score += 1
            break
        ot_edge = (home_expected - away_expected) / 48.0 * 5.0
        home_score += _sample_score(OVERTIME_BASE_SCORE + ot_edge / 2.0, OVERTIME_SPREAD, rng)
        away_score += _sample_score(OVERTIME_BASE_SCORE - ot_edge / 2.0, OVERTIME_SPREAD, rng)

    winner = home if home_score > away_score else away
    return GameOutcome(
        home_score=home_score,
        away_score=away_score,
        winner=winner,
        overtime_periods=overtime_periods,
    )


class RatingGameEngine:
    """Default game-outcome provider: rating gap plus home court, seeded by the caller."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random(seed)
        self.games_simulated = 0

    def __call__(self, home: Team, away: Team, is_playoff: bool = True) -> GameOutcome:
        self.games_simulated += 1
        return simulate_game(home, away, is_playoff=is_playoff, rng=self._rng)
