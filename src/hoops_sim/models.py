from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from math import ceil
from typing import ClassVar
from uuid import uuid4

from .config import T1_BEST_OF
from .events import PostseasonEvent


@dataclass(slots=True)
class Team:
    name: str
    division: str = "Independent"
    conference: str = ""
    tier: int = 1
    wins: int = 0
    losses: int = 0
    point_diff: int = 0
    rating: float = 50.0
    team_id: str = field(default_factory=lambda: uuid4().hex)

    MIN_RATING: ClassVar[float] = 1.0
    MAX_RATING: ClassVar[float] = 99.0

    def __post_init__(self) -> None:
        if self.tier not in (1, 2, 3):
            raise ValueError(f"{self.name} has invalid tier {self.tier}.")
        self.rating = max(self.MIN_RATING, min(self.MAX_RATING, float(self.rating)))

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        gp = self.games_played
        if gp <= 0:
            return 0.0
        return self.wins / gp

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"

    def record_game(self, points_for: int, points_against: int) -> None:
        self.point_diff += points_for - points_against
        if points_for > points_against:
            self.wins += 1
        else:
            self.losses += 1

    def reset_record(self) -> None:
        self.wins = 0
        self.losses = 0
        self.point_diff = 0


@dataclass(slots=True)
class GameOutcome:
    home_score: int
    away_score: int
    winner: Team
    overtime_periods: int = 0


@dataclass(slots=True)
class GameResult:
    game_number: int
    home: Team
    away: Team
    home_score: int
    away_score: int
    winner: Team
    overtime_periods: int = 0

    @property
    def loser(self) -> Team:
        return self.away if self.winner.team_id == self.home.team_id else self.home


@dataclass(slots=True)
class SeriesResult:
    higher_seed: Team
    lower_seed: Team
    winner: Team
    loser: Team
    higher_wins: int
    lower_wins: int
    games: list[GameResult]
    best_of: int

    @property
    def games_played(self) -> int:
        return len(self.games)

    @property
    def wins_needed(self) -> int:
        return ceil(self.best_of / 2)

    @property
    def winner_wins(self) -> int:
        return max(self.higher_wins, self.lower_wins)

    @property
    def loser_wins(self) -> int:
        return min(self.higher_wins, self.lower_wins)

    @property
    def upset(self) -> bool:
        return self.winner.team_id == self.lower_seed.team_id


@dataclass(frozen=True, slots=True)
class Seed:
    """A team's position in a bracket field, fixed when the bracket is built."""

    team: Team
    seed: int
    group: str = ""


@dataclass(slots=True)
class PairedSeries:
    group: str
    result: SeriesResult


@dataclass(slots=True)
class BracketRound:
    name: str
    series: list[PairedSeries] = field(default_factory=list)
    byes: list[Team] = field(default_factory=list)

    @property
    def winners(self) -> list[Team]:
        return [entry.result.winner for entry in self.series]

    @property
    def losers(self) -> list[Team]:
        return [entry.result.loser for entry in self.series]

    def advancing(self) -> list[Team]:
        return [*self.winners, *self.byes]


class T1Stage(str, Enum):
    ROUND_1 = "round_1"
    ROUND_2 = "round_2"
    CONFERENCE_FINALS = "conference_finals"
    FINALS = "finals"
    COMPLETE = "complete"


class T2Stage(str, Enum):
    DIVISION_PLAYOFFS = "division_playoffs"
    NATIONAL_TOURNAMENT = "national_tournament"
    COMPLETE = "complete"


class T3Stage(str, Enum):
    METRO_FINALS = "metro_finals"
    REGIONAL = "regional"
    OPENING_ROUND = "opening_round"
    SWEET_16 = "sweet_16"
    QUARTERFINALS = "quarterfinals"
    SEMIFINALS = "semifinals"
    FINALS = "finals"
    COMPLETE = "complete"


@dataclass(slots=True)
class T1Bracket:
    east: list[Seed]
    west: list[Seed]
    best_of: int = T1_BEST_OF
    stage: T1Stage = T1Stage.ROUND_1
    rounds: list[BracketRound] = field(default_factory=list)
    champion: Team | None = None
    runner_up: Team | None = None
    completed: bool = False

    kind: ClassVar[str] = "t1"

    def conference_seeds(self, conference: str) -> list[Seed]:
        return self.east if conference == "East" else self.west

    def seed_of(self, team: Team) -> Seed | None:
        for seed in (*self.east, *self.west):
            if seed.team.team_id == team.team_id:
                return seed
        return None


@dataclass(slots=True)
class DivisionBracket:
    division: str
    seeds: list[Seed]
    semi1_result: SeriesResult | None = None
    semi2_result: SeriesResult | None = None
    final_result: SeriesResult | None = None
    champion: Team | None = None
    runner_up: Team | None = None

    def seed(self, number: int) -> Team | None:
        if 1 <= number <= len(self.seeds):
            return self.seeds[number - 1].team
        return None


@dataclass(slots=True)
class NationalBracket:
    teams: list[Seed]
    division_champions: list[Team] = field(default_factory=list)
    wildcards: list[Team] = field(default_factory=list)
    padded: list[Team] = field(default_factory=list)
    rounds: list[BracketRound] = field(default_factory=list)
    champion: Team | None = None
    runner_up: Team | None = None


@dataclass(slots=True)
class T2Bracket:
    division_brackets: list[DivisionBracket]
    stage: T2Stage = T2Stage.DIVISION_PLAYOFFS
    national: NationalBracket | None = None
    bronze_result: SeriesResult | None = None
    champion: Team | None = None
    runner_up: Team | None = None
    bronze_winner: Team | None = None
    bronze_loser: Team | None = None
    completed: bool = False

    kind: ClassVar[str] = "t2"

    def finish_order(self) -> list[Team]:
        return [
            team
            for team in (self.champion, self.runner_up, self.bronze_winner, self.bronze_loser)
            if team is not None
        ]


@dataclass(slots=True)
class MetroMatchup:
    division: str
    seed1: Team
    seed2: Team
    result: SeriesResult | None = None

    @property
    def champion(self) -> Team | None:
        return self.result.winner if self.result is not None else None


@dataclass(slots=True)
class T3Bracket:
    metro_matchups: list[MetroMatchup]
    stage: T3Stage = T3Stage.METRO_FINALS
    metro_champions: list[Team] = field(default_factory=list)
    bye_teams: list[Team] = field(default_factory=list)
    play_in_teams: list[Team] = field(default_factory=list)
    rounds: list[BracketRound] = field(default_factory=list)
    bronze_result: SeriesResult | None = None
    champion: Team | None = None
    runner_up: Team | None = None
    bronze_winner: Team | None = None
    bronze_loser: Team | None = None
    completed: bool = False

    kind: ClassVar[str] = "t3"

    def round_named(self, name: str) -> BracketRound | None:
        for rnd in self.rounds:
            if rnd.name == name:
                return rnd
        return None


@dataclass(slots=True)
class RelegationBracket:
    tier: int
    auto_relegated: Team
    round1_higher: Team
    round1_lower: Team
    bye_team: Team
    round1_result: SeriesResult | None = None
    round2_result: SeriesResult | None = None
    relegated: list[Team] = field(default_factory=list)
    survivor: Team | None = None
    completed: bool = False

    def __post_init__(self) -> None:
        if not self.relegated:
            self.relegated = [self.auto_relegated]


Bracket = T1Bracket | T2Bracket | T3Bracket


@dataclass(slots=True)
class PostseasonResults:
    t1: T1Bracket
    t2: T2Bracket
    t3: T3Bracket
    t1_relegation: RelegationBracket
    t2_relegation: RelegationBracket
    promoted_to_t1: list[Team]
    promoted_to_t2: list[Team]
    events: list[PostseasonEvent] = field(default_factory=list)

    @property
    def relegated_from_t1(self) -> list[Team]:
        return self.t1_relegation.relegated

    @property
    def relegated_from_t2(self) -> list[Team]:
        return self.t2_relegation.relegated

    def bracket(self, tier: int) -> Bracket:
        if tier == 1:
            return self.t1
        if tier == 2:
            return self.t2
        if tier == 3:
            return self.t3
        raise ValueError(f"Unknown tier {tier}.")

    def relegation(self, tier: int) -> RelegationBracket:
        if tier == 1:
            return self.t1_relegation
        if tier == 2:
            return self.t2_relegation
        raise ValueError(f"Tier {tier} has no relegation bracket.")

    def champions(self) -> dict[int, Team | None]:
        return {1: self.t1.champion, 2: self.t2.champion, 3: self.t3.champion}
