"""Round-by-round progression of each tier's playoff format.

T1: conference bracket, re-seeded by original conference seed, best-of-7.
T2: best-of-3 division playoffs feeding a 16-team best-of-5 national tournament.
T3: best-of-3 metro finals and regional play-in, then a best-of-5 national bracket.

Conference and regional rounds pair their field with ``pair_field``; an odd field
gives the middle team a bye, so short fields advance instead of raising.
National rounds open with ``pair_to_power_of_two`` so any field size reaches a
four-team semifinal and a two-team final.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from .bracket import build_t1_bracket, build_t2_bracket, build_t3_bracket, pair_field, pair_to_power_of_two
from .config import (
    BRONZE_BEST_OF,
    T1_CONFERENCES,
    T2_DIVISION_BEST_OF,
    T2_NATIONAL_BEST_OF,
    T2_NATIONAL_FIELD,
    T2_RUNNER_UP_QUALIFIERS,
    T3_BYE_COUNT,
    T3_METRO_BEST_OF,
    T3_NATIONAL_BEST_OF,
    T3_REGIONAL_BEST_OF,
)
from .errors import PostseasonError
from .events import EventLog, ensure_log
from .models import (
    BracketRound,
    DivisionBracket,
    NationalBracket,
    PairedSeries,
    Seed,
    SeriesResult,
    T1Bracket,
    T1Stage,
    T2Bracket,
    T2Stage,
    T3Bracket,
    T3Stage,
    Team,
)
from .seeding import TieBreak, rank_teams, reseed_by_original, seed_field
from .series import GameOutcomeProvider, simulate_series

T1_ROUNDS: tuple[tuple[str, T1Stage], ...] = (
    ("Round 1", T1Stage.ROUND_1),
    ("Round 2", T1Stage.ROUND_2),
    ("Conference Finals", T1Stage.CONFERENCE_FINALS),
)
T2_NATIONAL_ROUNDS: tuple[str, ...] = ("National Round 1", "National Round 2", "National Semifinals")
T3_NATIONAL_ROUNDS: tuple[tuple[str, T3Stage], ...] = (
    ("Sweet 16", T3Stage.SWEET_16),
    ("Quarterfinals", T3Stage.QUARTERFINALS),
    ("Semifinals", T3Stage.SEMIFINALS),
)


def _log_series(log: EventLog, tier: int, stage: str, round_name: str, group: str, result: SeriesResult) -> None:
    log.emit(
        "series",
        f"{result.winner.name} def. {result.loser.name} {result.winner_wins}-{result.loser_wins}",
        tier=tier,
        stage=stage,
        round=round_name,
        group=group,
        winner=result.winner.team_id,
        loser=result.loser.team_id,
        best_of=result.best_of,
        games=result.games_played,
        upset=result.upset,
    )


def _play_pairs(
    name: str,
    pairs: Sequence[tuple[Team, Team]],
    byes: Sequence[Team],
    best_of: int,
    provider: GameOutcomeProvider,
    log: EventLog,
    tier: int,
    stage: str,
    group: str,
) -> BracketRound:
    rnd = BracketRound(name=name, byes=list(byes))
    for higher, lower in pairs:
        result = simulate_series(higher, lower, best_of, provider)
        rnd.series.append(PairedSeries(group=group, result=result))
        _log_series(log, tier, stage, name, group, result)
    for team in byes:
        log.emit("bye", f"{team.name} advances from {name} on a bye", tier=tier, stage=stage, round=name, team=team.team_id)
    return rnd


def rounds_needed(field_size: int) -> int:
    """Knockout rounds until at most two teams (the finalists) remain."""
    count = 0
    while field_size > 2:
        field_size = (field_size + 1) // 2
        count += 1
    return count


def round_names(names: Sequence, field_size: int, opening: Callable[[int], object]) -> list:
    """Names for the knockout rounds a field of ``field_size`` needs.

    Short fields skip the early names; oversized fields get ``opening(size)``
    rounds in front, so the last round played is always the semifinal.
    """
    needed = rounds_needed(field_size)
    named = list(names)
    while len(named) < needed:
        named.insert(0, opening(2 ** (len(named) + 2)))
    return named[len(named) - needed:] if needed else []


def _play_final(
    finalists: list[Team],
    best_of: int,
    provider: GameOutcomeProvider,
    log: EventLog,
    tier: int,
    stage: str,
) -> tuple[BracketRound | None, Team | None, Team | None]:
    if len(finalists) > 2:
        names = ", ".join(team.name for team in finalists)
        raise PostseasonError(f"Tier {tier} reached its final with {len(finalists)} teams alive: {names}.")
    if len(finalists) == 2:
        rnd = _play_pairs("Championship", [(finalists[0], finalists[1])], [], best_of, provider, log, tier, stage, "Finals")
        result = rnd.series[0].result
        return rnd, result.winner, result.loser
    if finalists:
        log.emit("auto_advance", f"{finalists[0].name} wins the title unopposed", tier=tier, stage=stage, team=finalists[0].team_id)
        return None, finalists[0], None
    return None, None, None


def _play_bronze(
    semifinal: BracketRound | None,
    provider: GameOutcomeProvider,
    log: EventLog,
    tier: int,
    stage: str,
) -> SeriesResult | None:
    if semifinal is None or len(semifinal.series) != 2:
        return None
    losers = semifinal.losers
    result = simulate_series(losers[0], losers[1], BRONZE_BEST_OF, provider)
    _log_series(log, tier, stage, "Bronze", "Bronze", result)
    return result


def run_t1_playoffs(
    teams: Iterable[Team],
    provider: GameOutcomeProvider,
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> T1Bracket:
    log = ensure_log(events)
    bracket = build_t1_bracket(teams, tie_break)
    alive: dict[str, list[Seed]] = {
        conference: list(bracket.conference_seeds(conference)) for conference in T1_CONFERENCES
    }

    for name, stage in T1_ROUNDS:
        bracket.stage = stage
        log.emit("stage", f"Tier 1 {name}", tier=1, stage=stage.value)
        rnd = BracketRound(name=name)
        for conference in T1_CONFERENCES:
            field = reseed_by_original(alive[conference])
            pairs, byes = pair_field(field)
            played = _play_pairs(
                name,
                [(high.team, low.team) for high, low in pairs],
                [seed.team for seed in byes],
                bracket.best_of,
                provider,
                log,
                1,
                stage.value,
                conference,
            )
            rnd.series.extend(played.series)
            rnd.byes.extend(played.byes)
            alive[conference] = [*byes, *(bracket.seed_of(team) for team in played.winners)]
        if rnd.series or rnd.byes:
            bracket.rounds.append(rnd)

    bracket.stage = T1Stage.FINALS
    champions = [alive[conference][0] for conference in T1_CONFERENCES if alive[conference]]
    if len(champions) == 2:
        east_champ, west_champ = champions
        # Seed position decides home court across conferences; East keeps it on equal seeds.
        higher, lower = (east_champ, west_champ) if east_champ.seed <= west_champ.seed else (west_champ, east_champ)
        log.emit("stage", "Tier 1 Finals", tier=1, stage=T1Stage.FINALS.value)
        finals = _play_pairs("Finals", [(higher.team, lower.team)], [], bracket.best_of, provider, log, 1, T1Stage.FINALS.value, "Finals")
        bracket.rounds.append(finals)
        bracket.champion = finals.series[0].result.winner
        bracket.runner_up = finals.series[0].result.loser
    elif champions:
        bracket.champion = champions[0].team
        log.emit("auto_advance", f"{bracket.champion.name} wins Tier 1 unopposed", tier=1, stage=T1Stage.FINALS.value)

    bracket.stage = T1Stage.COMPLETE
    bracket.completed = True
    if bracket.champion is not None:
        log.emit("champion", f"{bracket.champion.name} are Tier 1 champions", tier=1, stage="complete", team=bracket.champion.team_id)
    return bracket


def run_division_bracket(
    division: DivisionBracket,
    provider: GameOutcomeProvider,
    events: EventLog | None = None,
) -> DivisionBracket:
    log = ensure_log(events)
    stage = T2Stage.DIVISION_PLAYOFFS.value
    best_of = T2_DIVISION_BEST_OF
    seed1, seed2, seed3, seed4 = (division.seed(n) for n in (1, 2, 3, 4))
    size = len(division.seeds)

    if size < 2:
        division.champion = seed1
        division.runner_up = None
        if seed1 is not None:
            log.emit("auto_advance", f"{seed1.name} wins the {division.division} division unopposed", tier=2, stage=stage, division=division.division)
        return division

    if size == 2:
        division.final_result = simulate_series(seed1, seed2, best_of, provider)
    elif size == 3:
        division.semi2_result = simulate_series(seed2, seed3, best_of, provider)
        _log_series(log, 2, stage, "Division Semifinal", division.division, division.semi2_result)
        division.final_result = simulate_series(seed1, division.semi2_result.winner, best_of, provider)
    else:
        division.semi1_result = simulate_series(seed1, seed4, best_of, provider)
        division.semi2_result = simulate_series(seed2, seed3, best_of, provider)
        _log_series(log, 2, stage, "Division Semifinal", division.division, division.semi1_result)
        _log_series(log, 2, stage, "Division Semifinal", division.division, division.semi2_result)
        division.final_result = simulate_series(
            division.semi1_result.winner, division.semi2_result.winner, best_of, provider
        )

    _log_series(log, 2, stage, "Division Final", division.division, division.final_result)
    division.champion = division.final_result.winner
    division.runner_up = division.final_result.loser
    return division


def build_national_field(
    bracket: T2Bracket,
    pool: Sequence[Team],
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> NationalBracket:
    log = ensure_log(events)
    champions = [db.champion for db in bracket.division_brackets if db.champion is not None]
    runners_up = rank_teams(
        [db.runner_up for db in bracket.division_brackets if db.runner_up is not None], tie_break
    )[:T2_RUNNER_UP_QUALIFIERS]

    entrants = [*champions, *runners_up]
    included = {team.team_id for team in entrants}
    padded: list[Team] = []
    if len(entrants) < T2_NATIONAL_FIELD:
        for team in rank_teams(pool, tie_break):
            if len(entrants) >= T2_NATIONAL_FIELD:
                break
            if team.team_id in included:
                continue
            entrants.append(team)
            padded.append(team)
            included.add(team.team_id)
        if padded:
            log.emit(
                "padding",
                f"National field padded with {len(padded)} team(s) from the league-wide standings",
                tier=2,
                stage=T2Stage.NATIONAL_TOURNAMENT.value,
                teams=[team.team_id for team in padded],
            )

    field = seed_field(rank_teams(entrants, tie_break)[:T2_NATIONAL_FIELD], "National")
    return NationalBracket(teams=field, division_champions=champions, wildcards=runners_up, padded=padded)


def run_t2_playoffs(
    teams: Iterable[Team],
    provider: GameOutcomeProvider,
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> T2Bracket:
    log = ensure_log(events)
    pool = list(teams)
    bracket = build_t2_bracket(pool, tie_break)

    log.emit("stage", "Tier 2 division playoffs", tier=2, stage=T2Stage.DIVISION_PLAYOFFS.value)
    for division in bracket.division_brackets:
        run_division_bracket(division, provider, log)

    bracket.stage = T2Stage.NATIONAL_TOURNAMENT
    stage = T2Stage.NATIONAL_TOURNAMENT.value
    log.emit("stage", "Tier 2 national tournament", tier=2, stage=stage)
    national = build_national_field(bracket, pool, log, tie_break)
    bracket.national = national

    field = [seed.team for seed in national.teams]
    semifinal: BracketRound | None = None
    names = round_names(T2_NATIONAL_ROUNDS, len(field), lambda size: f"National Round of {size}")
    for idx, name in enumerate(names):
        if idx > 0:
            field = rank_teams(field, tie_break)
        pairs, byes = pair_to_power_of_two(field)
        rnd = _play_pairs(name, pairs, byes, T2_NATIONAL_BEST_OF, provider, log, 2, stage, "National")
        national.rounds.append(rnd)
        field = rnd.advancing()
        if name == T2_NATIONAL_ROUNDS[-1]:
            semifinal = rnd

    bronze = _play_bronze(semifinal, provider, log, 2, stage)
    if bronze is not None:
        bracket.bronze_result = bronze
        bracket.bronze_winner = bronze.winner
        bracket.bronze_loser = bronze.loser

    final_round, champion, runner_up = _play_final(field, T2_NATIONAL_BEST_OF, provider, log, 2, stage)
    if final_round is not None:
        national.rounds.append(final_round)
    national.champion = bracket.champion = champion
    national.runner_up = bracket.runner_up = runner_up

    bracket.stage = T2Stage.COMPLETE
    bracket.completed = True
    if champion is not None:
        log.emit("champion", f"{champion.name} are Tier 2 champions", tier=2, stage="complete", team=champion.team_id)
    return bracket


def run_t3_playoffs(
    teams: Iterable[Team],
    provider: GameOutcomeProvider,
    events: EventLog | None = None,
    tie_break: TieBreak | None = None,
) -> T3Bracket:
    log = ensure_log(events)
    bracket = build_t3_bracket(teams, tie_break)

    stage = T3Stage.METRO_FINALS.value
    log.emit("stage", "Tier 3 metro finals", tier=3, stage=stage)
    metro_round = BracketRound(name="Metro Finals")
    for matchup in bracket.metro_matchups:
        matchup.result = simulate_series(matchup.seed1, matchup.seed2, T3_METRO_BEST_OF, provider)
        metro_round.series.append(PairedSeries(group=matchup.division, result=matchup.result))
        _log_series(log, 3, stage, metro_round.name, matchup.division, matchup.result)
    bracket.rounds.append(metro_round)
    bracket.metro_champions = [matchup.result.winner for matchup in bracket.metro_matchups if matchup.result is not None]

    ranked_champions = rank_teams(bracket.metro_champions, tie_break)
    bracket.bye_teams = ranked_champions[:T3_BYE_COUNT]
    bracket.play_in_teams = ranked_champions[T3_BYE_COUNT:]

    bracket.stage = T3Stage.REGIONAL
    stage = T3Stage.REGIONAL.value
    regional_advancers: list[Team] = []
    if bracket.play_in_teams:
        log.emit("stage", "Tier 3 regional play-in", tier=3, stage=stage)
        pairs, byes = pair_field(bracket.play_in_teams)
        regional = _play_pairs("Regional", pairs, byes, T3_REGIONAL_BEST_OF, provider, log, 3, stage, "Regional")
        bracket.rounds.append(regional)
        regional_advancers = regional.advancing()

    field = rank_teams([*bracket.bye_teams, *regional_advancers], tie_break)
    if len(field) != 16:
        log.emit(
            "field_size",
            f"Sweet 16 field has {len(field)} teams",
            tier=3,
            stage=T3Stage.SWEET_16.value,
            size=len(field),
        )

    semifinal: BracketRound | None = None
    names = round_names(T3_NATIONAL_ROUNDS, len(field), lambda size: (f"Round of {size}", T3Stage.OPENING_ROUND))
    for idx, (name, round_stage) in enumerate(names):
        bracket.stage = round_stage
        if idx > 0:
            field = rank_teams(field, tie_break)
        log.emit("stage", f"Tier 3 {name}", tier=3, stage=round_stage.value)
        pairs, byes = pair_to_power_of_two(field)
        rnd = _play_pairs(name, pairs, byes, T3_NATIONAL_BEST_OF, provider, log, 3, round_stage.value, "National")
        bracket.rounds.append(rnd)
        field = rnd.advancing()
        if round_stage is T3Stage.SEMIFINALS:
            semifinal = rnd

    bracket.stage = T3Stage.FINALS
    stage = T3Stage.FINALS.value
    bronze = _play_bronze(semifinal, provider, log, 3, stage)
    if bronze is not None:
        bracket.bronze_result = bronze
        bracket.bronze_winner = bronze.winner
        bracket.bronze_loser = bronze.loser

    final_round, champion, runner_up = _play_final(field, T3_NATIONAL_BEST_OF, provider, log, 3, stage)
    if final_round is not None:
        bracket.rounds.append(final_round)
    bracket.champion = champion
    bracket.runner_up = runner_up

    bracket.stage = T3Stage.COMPLETE
    bracket.completed = True
    if champion is not None:
        log.emit("champion", f"{champion.name} are Tier 3 champions", tier=3, stage="complete", team=champion.team_id)
    return bracket
