from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .models import Team


def _round_robin_slates(teams: list[Team]) -> list[list[tuple[Team, Team]]]:
    """One full round robin as slates where each team plays at most once."""
    if len(teams) < 2:
        return []

    # Circle method with a placeholder opponent for odd counts.
    wheel: list[Team | None] = list(teams)
    if len(wheel) % 2 == 1:
        wheel.append(None)

    half = len(wheel) // 2
    slates: list[list[tuple[Team, Team]]] = []
    for slate_idx in range(len(wheel) - 1):
        slate: list[tuple[Team, Team]] = []
        for idx in range(half):
            home, away = wheel[idx], wheel[-(idx + 1)]
            if home is None or away is None:
                continue
            if slate_idx % 2 == 1:
                home, away = away, home
            slate.append((home, away))
        slates.append(slate)
        wheel = [wheel[0], wheel[-1], *wheel[1:-1]]
    return slates


def build_round_robin_days(teams: Iterable[Team], games_per_matchup: int = 2) -> list[list[tuple[Team, Team]]]:
    team_list = list(teams)
    if len(team_list) < 2 or games_per_matchup < 1:
        return []
    base = _round_robin_slates(team_list)
    days: list[list[tuple[Team, Team]]] = []
    for leg in range(games_per_matchup):
        # Every other leg swaps venues so home games even out.
        for slate in base:
            days.append([(away, home) for home, away in slate] if leg % 2 == 1 else list(slate))
    return days


def build_round_robin(teams: Iterable[Team], games_per_matchup: int = 2) -> list[tuple[Team, Team]]:
    return [game for day in build_round_robin_days(teams, games_per_matchup) for game in day]


@dataclass(frozen=True, slots=True)
class DateWindow:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(slots=True)
class PlayoffCalendar:
    season_start_year: int
    tiers: dict[int, dict[str, DateWindow]]
    relegation: dict[str, DateWindow]
    promotion_date: date
    season_close: date


_TIER_WINDOWS: dict[int, tuple[tuple[str, str, str], ...]] = {
    1: (
        ("round1", "04-16", "04-27"),
        ("round2", "04-29", "05-10"),
        ("conference_finals", "05-12", "05-23"),
        ("finals", "05-25", "06-05"),
    ),
    2: (
        ("round1", "04-16", "04-27"),
        ("round2", "04-29", "05-08"),
        ("conference_finals", "05-10", "05-18"),
        ("finals", "05-20", "05-28"),
        ("third_place", "05-20", "05-24"),
    ),
    3: (
        ("metro", "04-16", "04-20"),
        ("regional", "04-22", "04-26"),
        ("sweet16", "04-28", "05-02"),
        ("quarterfinals", "05-04", "05-08"),
        ("semifinals", "05-10", "05-14"),
        ("third_place", "05-14", "05-16"),
        ("finals", "05-17", "05-22"),
    ),
}
_RELEGATION_WINDOWS: tuple[tuple[str, str, str], ...] = (
    ("round1", "05-10", "05-16"),
    ("round2", "05-18", "05-24"),
)


def _on(year: int, month_day: str) -> date:
    month, day = month_day.split("-")
    return date(year, int(month), int(day))


def _windows(year: int, rows: Iterable[tuple[str, str, str]]) -> dict[str, DateWindow]:
    return {key: DateWindow(_on(year, start), _on(year, end)) for key, start, end in rows}


def playoff_dates(season_start_year: int) -> PlayoffCalendar:
    """Postseason windows for a season starting in ``season_start_year``; all fall in the following year."""
    year = season_start_year + 1
    return PlayoffCalendar(
        season_start_year=season_start_year,
        tiers={tier: _windows(year, rows) for tier, rows in _TIER_WINDOWS.items()},
        relegation=_windows(year, _RELEGATION_WINDOWS),
        promotion_date=_on(year, "05-28"),
        season_close=_on(year, "06-01"),
    )
