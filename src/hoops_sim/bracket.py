"""Unplayed bracket shapes for each tier's playoff format.

Builders only arrange teams; no series is simulated here. Later stages whose
field depends on results (national rounds, the T3 regional and beyond) are
paired with ``pair_field`` or ``pair_to_power_of_two`` once those results exist.
"""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from .config import RELEGATION_MIN_TEAMS, T1_CONFERENCES, T1_SEEDS_PER_CONFERENCE, T2_DIVISION_SEEDS
from .errors import PostseasonError
from .models import DivisionBracket, MetroMatchup, RelegationBracket, T1Bracket, T2Bracket, T3Bracket, Team
from .seeding import TieBreak, group_by_division, rank_teams, seed_field

T = TypeVar("T")


def conference_for_division(division: str) -> str | None:
    for conference, divisions in T1_CONFERENCES.items():
        if division in divisions:
            return conference
    return None


def pair_field(field: Sequence[T]) -> tuple[list[tuple[T, T]], list[T]]:
    """Pair best against worst: index i meets n-1-i. An odd middle entry gets a bye."""
    entries = list(field)
    half = len(entries) // 2
    pairs = [(entries[idx], entries[len(entries) - 1 - idx]) for idx in range(half)]
    byes = [entries[half]] if len(entries) % 2 == 1 else []
    return pairs, byes


def pair_to_power_of_two(field: Sequence[T]) -> tuple[list[tuple[T, T]], list[T]]:
    """Pair only the bottom of the field so byes plus winners make a power of two.

    The top ``2 * target - n`` entries sit out; the rest meet best against worst.
    Every later round then halves cleanly and the semifinal always has four teams.
    """
    entries = list(field)
    if len(entries) < 2:
        return [], entries
    target = 1
    while target * 2 < len(entries):
        target *= 2
    bye_count = 2 * target - len(entries)
    pairs, _ = pair_field(entries[bye_count:])
    return pairs, entries[:bye_count]


def count_metro_champions(teams: Iterable[Team]) -> int:
    return sum(1 for metro_teams in group_by_division(teams).values() if len(metro_teams) >= 2)


def build_t1_bracket(teams: Iterable[Team], tie_break: TieBreak | None = None) -> T1Bracket:
    by_conference: dict[str, list[Team]] = {conference: [] for conference in T1_CONFERENCES}
    for team in teams:
        conference = conference_for_division(team.division)
        if conference is not None:
            by_conference[conference].append(team)

    east = seed_field(rank_teams(by_conference["East"], tie_break)[:T1_SEEDS_PER_CONFERENCE], "East")
    west = seed_field(rank_teams(by_conference["West"], tie_break)[:T1_SEEDS_PER_CONFERENCE], "West")
    return T1Bracket(east=east, west=west)


def build_division_bracket(division: str, teams: Iterable[Team], tie_break: TieBreak | None = None) -> DivisionBracket:
    top = rank_teams(teams, tie_break)[:T2_DIVISION_SEEDS]
    return DivisionBracket(division=division, seeds=seed_field(top, division))


def build_t2_bracket(teams: Iterable[Team], tie_break: TieBreak | None = None) -> T2Bracket:
    divisions = group_by_division(teams)
    return T2Bracket(
        division_brackets=[
            build_division_bracket(division, division_teams, tie_break)
            for division, division_teams in divisions.items()
        ]
    )


def build_t3_bracket(teams: Iterable[Team], tie_break: TieBreak | None = None) -> T3Bracket:
    matchups: list[MetroMatchup] = []
    for division, metro_teams in group_by_division(teams).items():
        ranked = rank_teams(metro_teams, tie_break)
        if len(ranked) < 2:
            continue
        matchups.append(MetroMatchup(division=division, seed1=ranked[0], seed2=ranked[1]))
    return T3Bracket(metro_matchups=matchups)


def build_relegation_bracket(ranked_teams: Sequence[Team], tier: int) -> RelegationBracket:
    """``ranked_teams`` is best record first; the bottom four make up the bracket."""
    if len(ranked_teams) < RELEGATION_MIN_TEAMS:
        raise PostseasonError(
            f"Tier {tier} needs at least {RELEGATION_MIN_TEAMS} teams for relegation, got {len(ranked_teams)}."
        )
    return RelegationBracket(
        tier=tier,
        auto_relegated=ranked_teams[-1],
        round1_higher=ranked_teams[-3],
        round1_lower=ranked_teams[-2],
        bye_team=ranked_teams[-4],
    )
