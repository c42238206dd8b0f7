from __future__ import annotations

from typing import Iterable

from .config import PROMOTION_SLOTS
from .errors import PostseasonError
from .events import EventLog, ensure_log
from .models import T2Bracket, T3Bracket, Team
from .seeding import TieBreak, rank_teams


def _add(picks: list[Team], team: Team | None) -> bool:
    if team is None or len(picks) >= PROMOTION_SLOTS:
        return False
    if any(pick.team_id == team.team_id for pick in picks):
        return False
    picks.append(team)
    return True


def promote_to_tier1(
    t2_teams: Iterable[Team],
    t2_bracket: T2Bracket,
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> list[Team]:
    """Choose the Tier 2 teams moving up.

    1. Best regular-season record.
    2. Playoff champion, when that is a different team.
    3. Highest playoff finisher not already picked, then the regular-season
       ranking if the finish order runs dry.
    """
    log = ensure_log(events)
    ranked = rank_teams(t2_teams, tie_break)
    picks: list[Team] = []

    def pick(team: Team | None, reason: str) -> None:
        if _add(picks, team):
            log.emit(
                "promotion",
                f"{team.name} promoted to Tier 1 ({reason})",
                tier=2,
                stage="promotion",
                team=team.team_id,
                reason=reason,
                slot=len(picks),
            )

    if ranked:
        pick(ranked[0], "best record")
    pick(t2_bracket.champion, "champion")
    for team in t2_bracket.finish_order():
        pick(team, "playoff finish")
    for team in ranked:
        if len(picks) >= PROMOTION_SLOTS:
            break
        pick(team, "record fallback")
    return picks


def promote_to_tier2(t3_bracket: T3Bracket, events: EventLog | None = None) -> list[Team]:
    log = ensure_log(events)
    picks: list[Team] = []
    for team, reason in (
        (t3_bracket.champion, "champion"),
        (t3_bracket.runner_up, "runner-up"),
        (t3_bracket.bronze_winner, "third place"),
    ):
        if _add(picks, team):
            log.emit(
                "promotion",
                f"{team.name} promoted to Tier 2 ({reason})",
                tier=3,
                stage="promotion",
                team=team.team_id,
                reason=reason,
                slot=len(picks),
            )
    if len(picks) < PROMOTION_SLOTS:
        raise PostseasonError(
            f"Tier 3 postseason produced {len(picks)} promotion candidates; {PROMOTION_SLOTS} are required."
        )
    return picks
