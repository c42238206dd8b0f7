from __future__ import annotations

from math import ceil
from typing import Callable

from .config import HOME_PATTERNS, SUPPORTED_BEST_OF
from .errors import SeriesError
from .models import GameOutcome, GameResult, SeriesResult, Team

GameOutcomeProvider = Callable[[Team, Team, bool], GameOutcome]


def home_pattern(best_of: int) -> tuple[bool, ...]:
    pattern = HOME_PATTERNS.get(best_of)
    if pattern is None:
        raise ValueError(f"Unsupported series length {best_of}; expected one of {SUPPORTED_BEST_OF}.")
    return pattern


def series_home_team(game_index: int, higher_seed: Team, lower_seed: Team, best_of: int) -> Team:
    return higher_seed if home_pattern(best_of)[game_index] else lower_seed


def _check_outcome(outcome: GameOutcome, home: Team, away: Team) -> None:
    if outcome.winner.team_id not in (home.team_id, away.team_id):
        raise SeriesError(f"Game winner {outcome.winner.name} is not playing in {home.name} vs {away.name}.")
    if outcome.home_score == outcome.away_score:
        raise SeriesError(f"Tied playoff score {outcome.home_score}-{outcome.away_score} in {home.name} vs {away.name}.")


def simulate_series(
    higher_seed: Team,
    lower_seed: Team,
    best_of: int,
    provider: GameOutcomeProvider,
) -> SeriesResult:
    home_pattern(best_of)
    wins_needed = ceil(best_of / 2)
    high_wins = 0
    low_wins = 0
    games: list[GameResult] = []
    game_index = 0

    while high_wins < wins_needed and low_wins < wins_needed and game_index < best_of:
        home = series_home_team(game_index, higher_seed, lower_seed, best_of)
        away = lower_seed if home is higher_seed else higher_seed
        outcome = provider(home, away, True)
        _check_outcome(outcome, home, away)
        winner = home if outcome.winner.team_id == home.team_id else away
        games.append(
            GameResult(
                game_number=game_index + 1,
                home=home,
                away=away,
                home_score=outcome.home_score,
                away_score=outcome.away_score,
                winner=winner,
                overtime_periods=outcome.overtime_periods,
            )
        )
        if winner.team_id == higher_seed.team_id:
            high_wins += 1
        else:
            low_wins += 1
        game_index += 1

    winner = higher_seed if high_wins >= wins_needed else lower_seed
    loser = lower_seed if winner.team_id == higher_seed.team_id else higher_seed
    return SeriesResult(
        higher_seed=higher_seed,
        lower_seed=lower_seed,
        winner=winner,
        loser=loser,
        higher_wins=high_wins,
        lower_wins=low_wins,
        games=games,
        best_of=best_of,
    )
