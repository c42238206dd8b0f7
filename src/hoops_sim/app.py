from __future__ import annotations

import random
from typing import Iterable

from .bracket import conference_for_division
from .config import T2_DIVISION_SIZES, T3_METRO_SIZE, T3_METROS
from .league import League
from .models import PostseasonResults, RelegationBracket, SeriesResult, Team
from .names import T1_CITIES, TeamNameGenerator

# (mean, spread) of starting ratings per tier.
TIER_RATINGS: dict[int, tuple[float, float]] = {1: (64.0, 8.0), 2: (50.0, 7.5), 3: (38.0, 7.0)}


def _rating(team_name: str, tier: int) -> float:
    mean, spread = TIER_RATINGS[tier]
    rng = random.Random(f"rating:{tier}:{team_name}")
    return round(rng.gauss(mean, spread), 1)


def build_default_teams(seed: int = 7) -> list[Team]:
    name_gen = TeamNameGenerator(seed=seed)
    teams: list[Team] = []

    for division, cities in T1_CITIES.items():
        conference = conference_for_division(division) or ""
        for city in cities:
            name = name_gen.for_city(city)
            teams.append(Team(name=name, division=division, conference=conference, tier=1, rating=_rating(name, 1)))

    for division, size in T2_DIVISION_SIZES.items():
        for _ in range(size):
            name = name_gen.next_name()
            teams.append(Team(name=name, division=division, tier=2, rating=_rating(name, 2)))

    for metro in T3_METROS:
        for _ in range(T3_METRO_SIZE):
            name = name_gen.next_name()
            teams.append(Team(name=name, division=metro, tier=3, rating=_rating(name, 3)))
    return teams


def build_default_league(seed: int | None = None, games_per_matchup: int = 2, season_start_year: int = 2025) -> League:
    return League(
        teams=build_default_teams(),
        games_per_matchup=games_per_matchup,
        seed=seed,
        season_start_year=season_start_year,
    )


def format_standings(teams: Iterable[Team]) -> str:
    lines = ["Pos Team                         Div                        W   L  Diff"]
    for idx, team in enumerate(teams, start=1):
        lines.append(
            f"{idx:>3} {team.name[:28]:<28} {team.division[:26]:<26} {team.wins:>3} {team.losses:>3} {team.point_diff:>+5}"
        )
    return "\n".join(lines)


def _series_line(label: str, result: SeriesResult | None) -> str:
    if result is None:
        return f"  {label:<18} -"
    return (
        f"  {label:<18} {result.winner.name} def. {result.loser.name}"
        f" {result.winner_wins}-{result.loser_wins} (Bo{result.best_of})"
    )


def _relegation_lines(bracket: RelegationBracket) -> list[str]:
    return [
        f"Tier {bracket.tier} relegation",
        f"  {'Auto':<18} {bracket.auto_relegated.name}",
        _series_line("Round 1", bracket.round1_result),
        _series_line("Round 2", bracket.round2_result),
        f"  {'Relegated':<18} {', '.join(team.name for team in bracket.relegated)}",
    ]


def format_postseason(results: PostseasonResults) -> str:
    lines: list[str] = []
    for tier in (1, 2, 3):
        bracket = results.bracket(tier)
        lines.append(f"Tier {tier} playoffs")
        if tier == 2:
            for division in results.t2.division_brackets:
                if division.final_result is None:
                    lines.append(f"  {division.division[:18]:<18} {division.champion.name if division.champion else '-'} (unopposed)")
                else:
                    lines.append(_series_line(division.division[:18], division.final_result))
            rounds = results.t2.national.rounds if results.t2.national is not None else []
        else:
            rounds = bracket.rounds
        for rnd in rounds:
            for entry in rnd.series:
                lines.append(_series_line(rnd.name, entry.result))
        if tier in (2, 3):
            lines.append(_series_line("Bronze", bracket.bronze_result))
        champion = bracket.champion.name if bracket.champion else "-"
        runner_up = bracket.runner_up.name if bracket.runner_up else "-"
        lines.append(f"  {'Champion':<18} {champion}")
        lines.append(f"  {'Runner-up':<18} {runner_up}")
        lines.append("")

    lines.extend(_relegation_lines(results.t1_relegation))
    lines.extend(_relegation_lines(results.t2_relegation))
    lines.append("")
    lines.append(f"Promoted to Tier 1: {', '.join(team.name for team in results.promoted_to_t1) or '-'}")
    lines.append(f"Promoted to Tier 2: {', '.join(team.name for team in results.promoted_to_t2) or '-'}")
    return "\n".join(lines)
