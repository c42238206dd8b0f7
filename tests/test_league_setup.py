from hoops_sim.app import build_default_league, build_default_teams, format_postseason, format_standings
from hoops_sim.config import T2_DIVISION_SIZES, T3_METROS


def test_tier_and_division_counts() -> None:
    teams = build_default_teams()
    counts = {tier: sum(1 for team in teams if team.tier == tier) for tier in (1, 2, 3)}
    assert counts == {1: 30, 2: 86, 3: 144}

    t2_divisions: dict[str, int] = {}
    for team in teams:
        if team.tier == 2:
            t2_divisions[team.division] = t2_divisions.get(team.division, 0) + 1
    assert t2_divisions == T2_DIVISION_SIZES

    metros = {team.division for team in teams if team.tier == 3}
    assert metros == set(T3_METROS)


def test_tier_one_conferences() -> None:
    teams = [team for team in build_default_teams() if team.tier == 1]
    east = [team for team in teams if team.conference == "East"]
    west = [team for team in teams if team.conference == "West"]
    assert len(east) == 15
    assert len(west) == 15
    assert {team.division for team in east} == {"Atlantic", "Central", "Southeast"}


def test_team_names_are_league_unique() -> None:
    names = [team.name for team in build_default_teams()]
    assert len(names) == len(set(names))


def test_default_teams_are_deterministic() -> None:
    first = [(team.name, team.rating) for team in build_default_teams()]
    second = [(team.name, team.rating) for team in build_default_teams()]
    assert first == second


def test_regular_season_fills_records() -> None:
    league = build_default_league(seed=2)
    result = league.run_season()
    assert league.is_complete()
    t1 = league.tier_teams(1)
    # Fifteen-team conferences, home and away.
    assert all(team.games_played == 28 for team in t1)
    assert sum(team.wins for team in league.teams) == sum(team.losses for team in league.teams)
    assert sum(team.point_diff for team in league.teams) == 0
    standings = result.standings[1]
    assert [team.wins for team in standings] == sorted((team.wins for team in standings), reverse=True)


def test_reset_clears_records() -> None:
    league = build_default_league(seed=2)
    league.simulate_next_day()
    league.reset()
    assert league.current_day == 1
    assert all(team.games_played == 0 for team in league.teams)


def test_text_output() -> None:
    league = build_default_league(seed=6)
    league.run_season()
    table = format_standings(league.get_standings(1))
    assert len(table.splitlines()) == 31
    results = league.run_postseason(seed=6)
    report = format_postseason(results)
    assert "Tier 1 playoffs" in report
    assert "Promoted to Tier 2:" in report
    assert results.t1.champion.name in report
