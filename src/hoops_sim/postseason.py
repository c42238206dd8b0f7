from __future__ import annotations

import logging
import random
from typing import Sequence

from .bracket import count_metro_champions
from .config import RELEGATION_MIN_TEAMS, RELEGATION_TIERS, T3_MIN_METRO_CHAMPIONS
from .engine import RatingGameEngine
from .errors import PostseasonError
from .events import EventLog, EventObserver
from .models import PostseasonResults, Team
from .playoffs import run_t1_playoffs, run_t2_playoffs, run_t3_playoffs
from .promotion import promote_to_tier1, promote_to_tier2
from .relegation import run_relegation_bracket
from .seeding import TieBreakSpec, resolve_tie_break
from .series import GameOutcomeProvider

logger = logging.getLogger(__name__)


def validate_tiers(tier1: Sequence[Team], tier2: Sequence[Team], tier3: Sequence[Team]) -> None:
    problems: list[str] = []
    for tier, teams in ((1, tier1), (2, tier2), (3, tier3)):
        if not teams:
            problems.append(f"Tier {tier} has no teams")
        elif tier in RELEGATION_TIERS and len(teams) < RELEGATION_MIN_TEAMS:
            problems.append(f"Tier {tier} has {len(teams)} teams; relegation needs at least {RELEGATION_MIN_TEAMS}")
    if tier3:
        metros = count_metro_champions(tier3)
        if metros < T3_MIN_METRO_CHAMPIONS:
            problems.append(
                f"Tier 3 has {metros} metros with two or more teams; promotion needs at least {T3_MIN_METRO_CHAMPIONS}"
            )
    if problems:
        raise PostseasonError("; ".join(problems) + ".")


def run_postseason(
    tier1: Sequence[Team],
    tier2: Sequence[Team],
    tier3: Sequence[Team],
    provider: GameOutcomeProvider,
    observer: EventObserver | None = None,
    tie_break: TieBreakSpec = None,
) -> PostseasonResults:
    """Run every tier's playoffs, both relegation brackets and both promotion picks.

    Order is fixed: T1, T2, T3 playoffs, then T1 and T2 relegation, then
    promotion into T1 and T2. Teams are never mutated; the returned lists hold
    references to the caller's Team objects.
    """
    tier1, tier2, tier3 = list(tier1), list(tier2), list(tier3)
    validate_tiers(tier1, tier2, tier3)
    key = resolve_tie_break(tie_break)
    log = EventLog(observer)
    logger.info("Postseason starting: %d/%d/%d teams", len(tier1), len(tier2), len(tier3))

    t1 = run_t1_playoffs(tier1, provider, log, key)
    t2 = run_t2_playoffs(tier2, provider, log, key)
    t3 = run_t3_playoffs(tier3, provider, log, key)

    t1_relegation = run_relegation_bracket(tier1, 1, provider, log, key)
    t2_relegation = run_relegation_bracket(tier2, 2, provider, log, key)

    promoted_to_t1 = promote_to_tier1(tier2, t2, log, key)
    promoted_to_t2 = promote_to_tier2(t3, log)

    logger.info(
        "Postseason complete: champions %s / %s / %s",
        t1.champion.name if t1.champion else "-",
        t2.champion.name if t2.champion else "-",
        t3.champion.name if t3.champion else "-",
    )
    return PostseasonResults(
        t1=t1,
        t2=t2,
        t3=t3,
        t1_relegation=t1_relegation,
        t2_relegation=t2_relegation,
        promoted_to_t1=promoted_to_t1,
        promoted_to_t2=promoted_to_t2,
        events=list(log.events),
    )


class PostseasonEngine:
    """Holds the provider, observer and tie-break policy for repeated postseason runs."""

    def __init__(
        self,
        seed: int | None = None,
        provider: GameOutcomeProvider | None = None,
        observer: EventObserver | None = None,
        tie_break: TieBreakSpec = "stable",
    ) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self.provider = provider or RatingGameEngine(rng=self._rng)
        self.observer = observer
        self.tie_break = resolve_tie_break(tie_break, rng=self._rng)
        self.runs = 0

    def run(self, tier1: Sequence[Team], tier2: Sequence[Team], tier3: Sequence[Team]) -> PostseasonResults:
        results = run_postseason(
            tier1,
            tier2,
            tier3,
            self.provider,
            observer=self.observer,
            tie_break=self.tie_break,
        )
        self.runs += 1
        return results
