"""Plain-dict views of postseason results for JSON output.

Teams appear as ``{"id", "name"}`` references; seed and standings rows add the
record fields.
"""

from __future__ import annotations

from typing import Any

from .events import PostseasonEvent
from .models import (
    BracketRound,
    DivisionBracket,
    GameResult,
    NationalBracket,
    PostseasonResults,
    RelegationBracket,
    Seed,
    SeriesResult,
    T1Bracket,
    T2Bracket,
    T3Bracket,
    Team,
)
from .schedule import DateWindow, PlayoffCalendar


def team_ref(team: Team | None) -> dict[str, str] | None:
    if team is None:
        return None
    return {"id": team.team_id, "name": team.name}


def team_refs(teams: list[Team]) -> list[dict[str, str]]:
    return [{"id": team.team_id, "name": team.name} for team in teams]


def team_row(team: Team) -> dict[str, Any]:
    return {
        "id": team.team_id,
        "name": team.name,
        "tier": team.tier,
        "conference": team.conference,
        "division": team.division,
        "gp": team.games_played,
        "w": team.wins,
        "l": team.losses,
        "pct": round(team.win_pct, 3),
        "diff": team.point_diff,
        "rating": round(team.rating, 1),
    }


def seed_to_dict(seed: Seed) -> dict[str, Any]:
    return {
        "seed": seed.seed,
        "group": seed.group,
        "id": seed.team.team_id,
        "name": seed.team.name,
        "record": seed.team.record,
        "diff": seed.team.point_diff,
    }


def game_to_dict(game: GameResult) -> dict[str, Any]:
    return {
        "game": game.game_number,
        "home": team_ref(game.home),
        "away": team_ref(game.away),
        "home_score": game.home_score,
        "away_score": game.away_score,
        "winner": game.winner.team_id,
        "ot": game.overtime_periods,
    }


def series_to_dict(result: SeriesResult | None, include_games: bool = True) -> dict[str, Any] | None:
    if result is None:
        return None
    row: dict[str, Any] = {
        "higher_seed": team_ref(result.higher_seed),
        "lower_seed": team_ref(result.lower_seed),
        "winner": team_ref(result.winner),
        "loser": team_ref(result.loser),
        "score": f"{result.winner_wins}-{result.loser_wins}",
        "best_of": result.best_of,
        "games_played": result.games_played,
        "upset": result.upset,
    }
    if include_games:
        row["games"] = [game_to_dict(game) for game in result.games]
    return row


def round_to_dict(rnd: BracketRound, include_games: bool = True) -> dict[str, Any]:
    return {
        "name": rnd.name,
        "series": [
            {"group": entry.group, **series_to_dict(entry.result, include_games)} for entry in rnd.series
        ],
        "byes": team_refs(rnd.byes),
    }


def t1_to_dict(bracket: T1Bracket, include_games: bool = True) -> dict[str, Any]:
    return {
        "kind": bracket.kind,
        "stage": bracket.stage.value,
        "completed": bracket.completed,
        "best_of": bracket.best_of,
        "east": [seed_to_dict(seed) for seed in bracket.east],
        "west": [seed_to_dict(seed) for seed in bracket.west],
        "rounds": [round_to_dict(rnd, include_games) for rnd in bracket.rounds],
        "champion": team_ref(bracket.champion),
        "runner_up": team_ref(bracket.runner_up),
    }


def division_to_dict(division: DivisionBracket, include_games: bool = True) -> dict[str, Any]:
    return {
        "division": division.division,
        "seeds": [seed_to_dict(seed) for seed in division.seeds],
        "semi1": series_to_dict(division.semi1_result, include_games),
        "semi2": series_to_dict(division.semi2_result, include_games),
        "final": series_to_dict(division.final_result, include_games),
        "champion": team_ref(division.champion),
        "runner_up": team_ref(division.runner_up),
    }


def national_to_dict(national: NationalBracket | None, include_games: bool = True) -> dict[str, Any] | None:
    if national is None:
        return None
    return {
        "field": [seed_to_dict(seed) for seed in national.teams],
        "division_champions": team_refs(national.division_champions),
        "wildcards": team_refs(national.wildcards),
        "padded": team_refs(national.padded),
        "rounds": [round_to_dict(rnd, include_games) for rnd in national.rounds],
        "champion": team_ref(national.champion),
        "runner_up": team_ref(national.runner_up),
    }


def t2_to_dict(bracket: T2Bracket, include_games: bool = True) -> dict[str, Any]:
    return {
        "kind": bracket.kind,
        "stage": bracket.stage.value,
        "completed": bracket.completed,
        "divisions": [division_to_dict(division, include_games) for division in bracket.division_brackets],
        "national": national_to_dict(bracket.national, include_games),
        "bronze": series_to_dict(bracket.bronze_result, include_games),
        "champion": team_ref(bracket.champion),
        "runner_up": team_ref(bracket.runner_up),
        "bronze_winner": team_ref(bracket.bronze_winner),
        "bronze_loser": team_ref(bracket.bronze_loser),
    }


def t3_to_dict(bracket: T3Bracket, include_games: bool = True) -> dict[str, Any]:
    return {
        "kind": bracket.kind,
        "stage": bracket.stage.value,
        "completed": bracket.completed,
        "metro_matchups": [
            {
                "metro": matchup.division,
                "seed1": team_ref(matchup.seed1),
                "seed2": team_ref(matchup.seed2),
                "result": series_to_dict(matchup.result, include_games),
            }
            for matchup in bracket.metro_matchups
        ],
        "bye_teams": team_refs(bracket.bye_teams),
        "play_in_teams": team_refs(bracket.play_in_teams),
        "rounds": [round_to_dict(rnd, include_games) for rnd in bracket.rounds],
        "bronze": series_to_dict(bracket.bronze_result, include_games),
        "champion": team_ref(bracket.champion),
        "runner_up": team_ref(bracket.runner_up),
        "bronze_winner": team_ref(bracket.bronze_winner),
        "bronze_loser": team_ref(bracket.bronze_loser),
    }


def bracket_to_dict(bracket: T1Bracket | T2Bracket | T3Bracket, include_games: bool = True) -> dict[str, Any]:
    if isinstance(bracket, T1Bracket):
        return t1_to_dict(bracket, include_games)
    if isinstance(bracket, T2Bracket):
        return t2_to_dict(bracket, include_games)
    return t3_to_dict(bracket, include_games)


def relegation_to_dict(bracket: RelegationBracket, include_games: bool = True) -> dict[str, Any]:
    return {
        "tier": bracket.tier,
        "completed": bracket.completed,
        "auto_relegated": team_ref(bracket.auto_relegated),
        "round1_higher": team_ref(bracket.round1_higher),
        "round1_lower": team_ref(bracket.round1_lower),
        "bye_team": team_ref(bracket.bye_team),
        "round1": series_to_dict(bracket.round1_result, include_games),
        "round2": series_to_dict(bracket.round2_result, include_games),
        "relegated": team_refs(bracket.relegated),
        "survivor": team_ref(bracket.survivor),
    }


def event_to_dict(event: PostseasonEvent) -> dict[str, Any]:
    return {
        "kind": event.kind,
        "tier": event.tier,
        "stage": event.stage,
        "message": event.message,
        "data": dict(event.data),
    }


def season_summary(results: PostseasonResults) -> dict[str, Any]:
    """Snapshot kept in season history once a postseason is done."""
    return {
        "champions": {f"t{tier}": team_ref(team) for tier, team in results.champions().items()},
        "runners_up": {
            "t1": team_ref(results.t1.runner_up),
            "t2": team_ref(results.t2.runner_up),
            "t3": team_ref(results.t3.runner_up),
        },
        "promoted": {
            "to_t1": team_refs(results.promoted_to_t1),
            "to_t2": team_refs(results.promoted_to_t2),
        },
        "relegated": {
            "from_t1": team_refs(results.relegated_from_t1),
            "from_t2": team_refs(results.relegated_from_t2),
        },
    }


def results_to_dict(results: PostseasonResults, include_games: bool = False) -> dict[str, Any]:
    return {
        "summary": season_summary(results),
        "t1": t1_to_dict(results.t1, include_games),
        "t2": t2_to_dict(results.t2, include_games),
        "t3": t3_to_dict(results.t3, include_games),
        "relegation": {
            "t1": relegation_to_dict(results.t1_relegation, include_games),
            "t2": relegation_to_dict(results.t2_relegation, include_games),
        },
        "event_count": len(results.events),
    }


def calendar_to_dict(calendar: PlayoffCalendar) -> dict[str, Any]:
    def window(win: DateWindow) -> dict[str, str]:
        return {"start": win.start.isoformat(), "end": win.end.isoformat()}

    return {
        "season_start_year": calendar.season_start_year,
        **{
            f"t{tier}": {key: window(win) for key, win in windows.items()}
            for tier, windows in calendar.tiers.items()
        },
        "relegation": {key: window(win) for key, win in calendar.relegation.items()},
        "promotion_date": calendar.promotion_date.isoformat(),
        "season_close": calendar.season_close.isoformat(),
    }
