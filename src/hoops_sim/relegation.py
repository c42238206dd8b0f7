from __future__ import annotations

from typing import Iterable

from .bracket import build_relegation_bracket
from .config import RELEGATION_BEST_OF, RELEGATION_SLOTS, RELEGATION_TIERS
from .errors import PostseasonError
from .events import EventLog, ensure_log
from .models import RelegationBracket, Team
from .seeding import TieBreak, rank_teams
from .series import GameOutcomeProvider, simulate_series


def run_relegation_bracket(
    teams: Iterable[Team],
    tier: int,
    provider: GameOutcomeProvider,
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> RelegationBracket:
    """Play the bottom-four bracket for ``tier`` and return it with three teams relegated.

    The worst team goes down without playing. Third- and second-to-last meet
    first; the loser drops and the winner faces fourth-to-last, whose loser
    drops as well.
    """
    if tier not in RELEGATION_TIERS:
        raise ValueError(f"Tier {tier} does not relegate; expected one of {RELEGATION_TIERS}.")
    log = ensure_log(events)
    bracket = build_relegation_bracket(rank_teams(teams, tie_break), tier)
    stage = "relegation"

    log.emit(
        "relegation",
        f"{bracket.auto_relegated.name} finish last and are relegated from Tier {tier}",
        tier=tier,
        stage=stage,
        team=bracket.auto_relegated.team_id,
        round="auto",
    )

    bracket.round1_result = simulate_series(bracket.round1_higher, bracket.round1_lower, RELEGATION_BEST_OF, provider)
    first = bracket.round1_result
    bracket.relegated.append(first.loser)
    log.emit(
        "relegation",
        f"{first.loser.name} lose {first.loser_wins}-{first.winner_wins} to {first.winner.name} and are relegated",
        tier=tier,
        stage=stage,
        team=first.loser.team_id,
        round="round_1",
    )

    bracket.round2_result = simulate_series(bracket.bye_team, first.winner, RELEGATION_BEST_OF, provider)
    second = bracket.round2_result
    bracket.relegated.append(second.loser)
    bracket.survivor = second.winner
    log.emit(
        "relegation",
        f"{second.loser.name} lose {second.loser_wins}-{second.winner_wins} to {second.winner.name} and are relegated",
        tier=tier,
        stage=stage,
        team=second.loser.team_id,
        round="round_2",
    )
    log.emit(
        "survivor",
        f"{second.winner.name} stay in Tier {tier}",
        tier=tier,
        stage=stage,
        team=second.winner.team_id,
    )
    if len({team.team_id for team in bracket.relegated}) != RELEGATION_SLOTS:
        raise PostseasonError(f"Tier {tier} relegation ended with {len(bracket.relegated)} teams relegated.")
    bracket.completed = True
    return bracket
