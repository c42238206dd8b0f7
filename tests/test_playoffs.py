from hoops_sim.events import EventLog
from hoops_sim.models import T1Stage, T2Stage, T3Stage
from hoops_sim.playoffs import round_names, rounds_needed, run_t1_playoffs, run_t2_playoffs, run_t3_playoffs

EAST = ("Atlantic", "Central", "Southeast")
WEST = ("Northwest", "Pacific", "Southwest")


def _conference(make_team, prefix: str, divisions: tuple[str, ...], ratings: dict[int, float] | None = None):
    ratings = ratings or {}
    return [
        make_team(
            f"{prefix}{idx + 1}",
            wins=70 - idx,
            division=divisions[idx % 3],
            rating=ratings.get(idx + 1, 60.0 - idx),
        )
        for idx in range(15)
    ]


def _names(pairs):
    return [(entry.result.higher_seed.name, entry.result.lower_seed.name) for entry in pairs]


def test_t1_rounds_reseed_by_original_seed(make_team, favorite_provider) -> None:
    teams = _conference(make_team, "E", EAST) + _conference(make_team, "W", WEST)
    bracket = run_t1_playoffs(teams, favorite_provider)

    round1, round2, conf_finals, finals = bracket.rounds
    east_r1 = [entry for entry in round1.series if entry.group == "East"]
    assert _names(east_r1) == [("E1", "E8"), ("E2", "E7"), ("E3", "E6"), ("E4", "E5")]
    east_r2 = [entry for entry in round2.series if entry.group == "East"]
    assert _names(east_r2) == [("E1", "E4"), ("E2", "E3")]
    assert len(conf_finals.series) == 2
    assert all(entry.result.best_of == 7 for rnd in bracket.rounds for entry in rnd.series)
    assert finals.name == "Finals"
    assert bracket.stage is T1Stage.COMPLETE
    assert bracket.completed


def test_t1_finals_lower_conference_seed_hosts(make_team, favorite_provider) -> None:
    # East's third seed is the strongest side and runs the table; West's top seed wins the West.
    east = _conference(make_team, "E", EAST, ratings={3: 99.0})
    west = _conference(make_team, "W", WEST)
    bracket = run_t1_playoffs(east + west, favorite_provider)

    final = bracket.rounds[-1].series[0].result
    assert final.higher_seed.name == "W1"
    assert final.lower_seed.name == "E3"
    assert final.games[0].home.name == "W1"
    assert bracket.champion.name == "E3"
    assert bracket.runner_up.name == "W1"


def test_t1_finals_east_second_seed_hosts_west_fifth_seed(make_team, favorite_provider) -> None:
    east = _conference(make_team, "E", EAST, ratings={2: 99.0})
    west = _conference(make_team, "W", WEST, ratings={5: 98.0})
    bracket = run_t1_playoffs(east + west, favorite_provider)

    final = bracket.rounds[-1].series[0].result
    assert final.higher_seed.name == "E2"
    assert final.lower_seed.name == "W5"
    assert [game.home.name for game in final.games[:4]] == ["E2", "E2", "W5", "W5"]


def test_t1_finals_equal_seeds_favor_east(make_team, favorite_provider) -> None:
    teams = _conference(make_team, "E", EAST) + _conference(make_team, "W", WEST)
    bracket = run_t1_playoffs(teams, favorite_provider)
    final = bracket.rounds[-1].series[0].result
    assert final.higher_seed.name == "E1"
    assert final.lower_seed.name == "W1"


def test_t1_short_conference_gets_byes(make_team, favorite_provider) -> None:
    east = [make_team(f"E{idx + 1}", wins=50 - idx, division="Atlantic", rating=60 - idx) for idx in range(5)]
    west = [make_team(f"W{idx + 1}", wins=50 - idx, division="Pacific", rating=60 - idx) for idx in range(8)]
    bracket = run_t1_playoffs(east + west, favorite_provider)
    round1 = bracket.rounds[0]
    assert [team.name for team in round1.byes] == ["E3"]
    assert bracket.champion is not None


def test_t2_three_and_one_team_divisions(make_team, favorite_provider) -> None:
    teams = [
        make_team("Solo", wins=35, division="Lonely", tier=2, rating=70),
        make_team("Trio 1", wins=30, division="Trio", tier=2, rating=60),
        make_team("Trio 2", wins=20, division="Trio", tier=2, rating=50),
        make_team("Trio 3", wins=10, division="Trio", tier=2, rating=40),
    ]
    teams += [make_team(f"Quad {idx + 1}", wins=28 - idx, division="Quad", tier=2, rating=58 - idx) for idx in range(4)]
    bracket = run_t2_playoffs(teams, favorite_provider)
    divisions = {db.division: db for db in bracket.division_brackets}

    lonely = divisions["Lonely"]
    assert lonely.champion.name == "Solo"
    assert lonely.runner_up is None
    assert lonely.final_result is None

    trio = divisions["Trio"]
    assert trio.semi1_result is None
    assert (trio.semi2_result.higher_seed.name, trio.semi2_result.lower_seed.name) == ("Trio 2", "Trio 3")
    assert trio.final_result.higher_seed.name == "Trio 1"
    assert trio.final_result.lower_seed.name == "Trio 2"
    assert trio.champion.name == "Trio 1"
    assert trio.runner_up.name == "Trio 2"
    assert trio.final_result.best_of == 3

    quad = divisions["Quad"]
    assert (quad.semi1_result.higher_seed.name, quad.semi1_result.lower_seed.name) == ("Quad 1", "Quad 4")
    assert (quad.semi2_result.higher_seed.name, quad.semi2_result.lower_seed.name) == ("Quad 2", "Quad 3")


def test_t2_national_field_pads_to_available_teams(make_team, favorite_provider) -> None:
    teams = [make_team("Solo", wins=35, division="Lonely", tier=2, rating=70)]
    teams += [make_team(f"Trio {idx + 1}", wins=30 - idx * 10, division="Trio", tier=2, rating=60 - idx * 10) for idx in range(3)]
    teams += [make_team(f"Quad {idx + 1}", wins=28 - idx, division="Quad", tier=2, rating=58 - idx) for idx in range(4)]
    log = EventLog()
    bracket = run_t2_playoffs(teams, favorite_provider, log)

    national = bracket.national
    assert len(national.division_champions) == 3
    assert len(national.wildcards) == 2
    assert len(national.padded) == 3
    assert len(national.teams) == 8
    wins = [seed.team.wins for seed in national.teams]
    assert wins == sorted(wins, reverse=True)
    assert log.of_kind("padding")
    assert national.rounds[-1].name == "Championship"
    assert bracket.bronze_result is not None
    assert bracket.bronze_result.best_of == 3
    assert len(bracket.finish_order()) == 4
    assert bracket.stage is T2Stage.COMPLETE


def test_t2_full_national_tournament(make_team, favorite_provider) -> None:
    teams = []
    for div in range(11):
        for idx in range(8):
            teams.append(
                make_team(f"D{div}-{idx}", wins=60 - idx * 5 - div, division=f"Region {div}", tier=2, rating=80 - idx * 5 - div)
            )
    bracket = run_t2_playoffs(teams, favorite_provider)
    national = bracket.national
    assert len(national.teams) == 16
    assert national.padded == []
    names = [rnd.name for rnd in national.rounds]
    assert names == ["National Round 1", "National Round 2", "National Semifinals", "Championship"]
    assert [len(rnd.series) for rnd in national.rounds] == [8, 4, 2, 1]
    assert all(entry.result.best_of == 5 for rnd in national.rounds for entry in rnd.series)
    champion_ids = {team.team_id for team in national.division_champions}
    assert champion_ids <= {seed.team.team_id for seed in national.teams}


def _metros(make_team, count: int):
    teams = []
    for idx in range(count):
        teams.append(make_team(f"M{idx}a", wins=60 - idx, division=f"Metro {idx}", tier=3, rating=80 - idx))
        teams.append(make_team(f"M{idx}b", wins=20 - idx % 10, division=f"Metro {idx}", tier=3, rating=30))
    return teams


def test_t3_twenty_metro_champions(make_team, favorite_provider) -> None:
    log = EventLog()
    bracket = run_t3_playoffs(_metros(make_team, 20), favorite_provider, log)

    assert len(bracket.metro_champions) == 20
    assert [team.name for team in bracket.bye_teams] == [f"M{idx}a" for idx in range(8)]
    assert len(bracket.play_in_teams) == 12
    regional = bracket.round_named("Regional")
    assert len(regional.series) == 6
    assert (regional.series[0].result.higher_seed.name, regional.series[0].result.lower_seed.name) == ("M8a", "M19a")

    sweet16 = bracket.round_named("Sweet 16")
    assert len(sweet16.series) == 6
    assert [team.name for team in sweet16.byes] == ["M0a", "M1a"]
    assert (sweet16.series[0].result.higher_seed.name, sweet16.series[0].result.lower_seed.name) == ("M2a", "M13a")
    quarters = bracket.round_named("Quarterfinals")
    assert len(quarters.series) == 4
    assert quarters.byes == []
    assert len(bracket.round_named("Semifinals").series) == 2
    assert bracket.bronze_result is not None
    assert bracket.champion.name == "M0a"
    assert log.of_kind("field_size")[0].data["size"] == 14
    assert bracket.stage is T3Stage.COMPLETE


def test_t3_twenty_four_metros_fill_sweet_sixteen(make_team, favorite_provider) -> None:
    bracket = run_t3_playoffs(_metros(make_team, 24), favorite_provider)
    assert len(bracket.round_named("Regional").series) == 8
    assert len(bracket.round_named("Sweet 16").series) == 8
    assert len(bracket.round_named("Quarterfinals").series) == 4
    assert bracket.round_named("Championship").series[0].result.best_of == 5
    assert bracket.bronze_winner is not None
    assert bracket.runner_up is not None


def test_rounds_needed() -> None:
    assert rounds_needed(16) == 3
    assert rounds_needed(14) == 3
    assert rounds_needed(4) == 1
    assert rounds_needed(2) == 0
    assert rounds_needed(17) == 4


def test_round_names_trim_short_fields_and_extend_large_ones() -> None:
    names = ("Sweet 16", "Quarterfinals", "Semifinals")
    def opening(size: int) -> str:
        return f"Round of {size}"

    assert round_names(names, 16, opening) == list(names)
    assert round_names(names, 5, opening) == ["Quarterfinals", "Semifinals"]
    assert round_names(names, 2, opening) == []
    assert round_names(names, 17, opening) == ["Round of 32", *names]
    assert round_names(names, 40, opening) == ["Round of 64", "Round of 32", *names]


def test_t3_oversized_field_opens_with_round_of_32(make_team, favorite_provider) -> None:
    # 26 metros: 8 byes plus 9 regional winners leave 17 national entrants.
    log = EventLog()
    bracket = run_t3_playoffs(_metros(make_team, 26), favorite_provider, log)
    assert log.of_kind("field_size")[0].data["size"] == 17

    opening = bracket.round_named("Round of 32")
    assert [(entry.result.higher_seed.name, entry.result.lower_seed.name) for entry in opening.series] == [("M15a", "M16a")]
    assert len(opening.byes) == 15
    assert len(bracket.round_named("Sweet 16").series) == 8
    semifinals = bracket.round_named("Semifinals")
    assert len(semifinals.series) == 2
    assert semifinals.byes == []

    national = [rnd for rnd in bracket.rounds if rnd.name not in ("Metro Finals", "Regional")]
    losers = [entry.result.loser.name for rnd in national for entry in rnd.series]
    entrants = [f"M{idx}a" for idx in range(17)]
    assert sorted([*losers, bracket.champion.name]) == sorted(entrants)
    assert bracket.champion.name == "M0a"
    assert bracket.runner_up.name == "M1a"
    assert bracket.bronze_winner.name == "M2a"


def test_t3_twelve_team_field_still_plays_bronze(make_team, favorite_provider) -> None:
    bracket = run_t3_playoffs(_metros(make_team, 16), favorite_provider)
    sweet16 = bracket.round_named("Sweet 16")
    assert [team.name for team in sweet16.byes] == ["M0a", "M1a", "M2a", "M3a"]
    assert len(sweet16.series) == 4
    assert len(bracket.round_named("Semifinals").series) == 2
    assert bracket.bronze_winner is not None
