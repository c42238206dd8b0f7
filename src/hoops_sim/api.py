from __future__ import annotations

import logging
from threading import Lock
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .app import build_default_league
from .config import RELEGATION_TIERS, TIER_SIZES
from .errors import PostseasonError
from .league import League
from .models import PostseasonResults
from .postseason import PostseasonEngine
from .schedule import playoff_dates
from .seeding import TIE_BREAK_POLICIES
from .serialize import (
    bracket_to_dict,
    calendar_to_dict,
    event_to_dict,
    relegation_to_dict,
    results_to_dict,
    season_summary,
    team_row,
)

logger = logging.getLogger(__name__)


class SeasonSelection(BaseModel):
    days: int | None = None


class PostseasonSelection(BaseModel):
    seed: int | None = None
    tie_break: str = "stable"


class SimService:
    def __init__(self, league: League | None = None) -> None:
        self._league_factory = (lambda: league) if league is not None else build_default_league
        self.league = self._league_factory()
        self.results: PostseasonResults | None = None
        self._lock = Lock()

    def _require_results(self) -> PostseasonResults:
        if self.results is None:
            raise HTTPException(status_code=404, detail="No postseason has been run")
        return self.results

    def _check_tier(self, tier: int) -> None:
        if tier not in TIER_SIZES:
            raise HTTPException(status_code=404, detail=f"Unknown tier {tier}")

    def meta(self) -> dict[str, Any]:
        return {
            "season_start_year": self.league.season_start_year,
            "day": min(self.league.current_day, self.league.total_days),
            "total_days": self.league.total_days,
            "season_complete": self.league.is_complete(),
            "postseason_complete": self.results is not None,
            "tiers": {tier: len(self.league.tier_teams(tier)) for tier in TIER_SIZES},
            "tie_break_policies": list(TIE_BREAK_POLICIES),
            "seasons_recorded": len(self.league.history),
        }

    def standings(self, tier: int, grouped: bool = False) -> dict[str, Any]:
        self._check_tier(tier)
        body: dict[str, Any] = {
            "tier": tier,
            "teams": [team_row(team) for team in self.league.get_standings(tier)],
        }
        if grouped:
            body["groups"] = {
                group: [team_row(team) for team in teams]
                for group, teams in self.league.get_group_standings(tier).items()
            }
        return body

    def team(self, key: str) -> dict[str, Any]:
        team = self.league.get_team(key)
        if team is None:
            raise HTTPException(status_code=404, detail=f"Unknown team {key}")
        return team_row(team)

    def simulate_season(self, days: int | None) -> dict[str, Any]:
        if days is not None and days < 1:
            raise HTTPException(status_code=400, detail="days must be at least 1")
        if self.league.is_complete():
            raise HTTPException(status_code=409, detail="Regular season is already complete")
        played = 0
        games = 0
        while not self.league.is_complete() and (days is None or played < days):
            games += len(self.league.simulate_next_day())
            played += 1
        return {
            "ok": True,
            "days_played": played,
            "games_played": games,
            "season_complete": self.league.is_complete(),
        }

    def run_postseason(self, seed: int | None, tie_break: str) -> dict[str, Any]:
        if not self.league.is_complete():
            raise HTTPException(status_code=409, detail="Regular season is not complete")
        if self.results is not None:
            raise HTTPException(status_code=409, detail="Postseason already run; reset to start a new season")
        try:
            engine = PostseasonEngine(seed=seed, tie_break=tie_break)
            self.results = self.league.run_postseason(engine=engine)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except PostseasonError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        logger.info("Postseason run with seed=%s tie_break=%s", seed, tie_break)
        return {"ok": True, **season_summary(self.results)}

    def events(self, kind: str | None, tier: int | None) -> list[dict[str, Any]]:
        results = self._require_results()
        return [
            event_to_dict(event)
            for event in results.events
            if (kind is None or event.kind == kind) and (tier is None or event.tier == tier)
        ]

    def reset(self) -> dict[str, Any]:
        self.league = self._league_factory()
        self.league.reset()
        self.results = None
        return {"ok": True}


service = SimService()
app = FastAPI(title="Hoops Postseason API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/meta")
def meta() -> dict[str, Any]:
    with service._lock:
        return service.meta()


@app.get("/api/standings")
def standings(tier: int = 1, grouped: bool = False) -> dict[str, Any]:
    with service._lock:
        return service.standings(tier, grouped)


@app.get("/api/teams/{key}")
def team(key: str) -> dict[str, Any]:
    with service._lock:
        return service.team(key)


@app.post("/api/season/simulate")
def simulate_season(payload: SeasonSelection | None = None) -> dict[str, Any]:
    with service._lock:
        return service.simulate_season(payload.days if payload is not None else None)


@app.post("/api/postseason")
def run_postseason(payload: PostseasonSelection | None = None) -> dict[str, Any]:
    payload = payload or PostseasonSelection()
    with service._lock:
        return service.run_postseason(seed=payload.seed, tie_break=payload.tie_break)


@app.get("/api/postseason")
def postseason(games: bool = False) -> dict[str, Any]:
    with service._lock:
        return results_to_dict(service._require_results(), include_games=games)


@app.get("/api/postseason/summary")
def postseason_summary() -> dict[str, Any]:
    with service._lock:
        return season_summary(service._require_results())


@app.get("/api/postseason/brackets/{tier}")
def postseason_bracket(tier: int, games: bool = True) -> dict[str, Any]:
    with service._lock:
        service._check_tier(tier)
        return bracket_to_dict(service._require_results().bracket(tier), include_games=games)


@app.get("/api/postseason/relegation/{tier}")
def postseason_relegation(tier: int, games: bool = True) -> dict[str, Any]:
    with service._lock:
        if tier not in RELEGATION_TIERS:
            raise HTTPException(status_code=404, detail=f"Tier {tier} has no relegation bracket")
        return relegation_to_dict(service._require_results().relegation(tier), include_games=games)


@app.get("/api/postseason/events")
def postseason_events(kind: str | None = None, tier: int | None = None) -> list[dict[str, Any]]:
    with service._lock:
        return service.events(kind=kind, tier=tier)


@app.get("/api/calendar")
def calendar(season_start_year: int | None = None) -> dict[str, Any]:
    with service._lock:
        year = season_start_year if season_start_year is not None else service.league.season_start_year
        return calendar_to_dict(playoff_dates(year))


@app.post("/api/reset")
def reset() -> dict[str, Any]:
    with service._lock:
        return service.reset()
