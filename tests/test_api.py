import pytest
from fastapi.testclient import TestClient

from hoops_sim import api
from hoops_sim.app import build_default_league


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.setattr(api, "service", api.SimService(league=build_default_league(seed=8)))
    return TestClient(api.app)


def test_health_and_meta(client: TestClient) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}
    meta = client.get("/api/meta").json()
    assert meta["season_complete"] is False
    assert meta["postseason_complete"] is False
    assert meta["tiers"] == {"1": 30, "2": 86, "3": 144}
    assert "stable" in meta["tie_break_policies"]


def test_standings_by_tier(client: TestClient) -> None:
    body = client.get("/api/standings", params={"tier": 2}).json()
    assert body["tier"] == 2
    assert len(body["teams"]) == 86
    assert client.get("/api/standings", params={"tier": 9}).status_code == 404


def test_grouped_standings_and_team_lookup(client: TestClient) -> None:
    body = client.get("/api/standings", params={"tier": 3, "grouped": True}).json()
    assert len(body["groups"]) == 24
    assert all(len(rows) == 6 for rows in body["groups"].values())
    assert "groups" not in client.get("/api/standings", params={"tier": 3}).json()

    first = body["teams"][0]
    assert client.get(f"/api/teams/{first['id']}").json()["name"] == first["name"]
    assert client.get("/api/teams/nobody").status_code == 404


def test_postseason_requires_finished_season(client: TestClient) -> None:
    assert client.get("/api/postseason").status_code == 404
    response = client.post("/api/postseason", json={"seed": 1})
    assert response.status_code == 409


def test_full_flow(client: TestClient) -> None:
    partial = client.post("/api/season/simulate", json={"days": 3}).json()
    assert partial["days_played"] == 3
    assert partial["season_complete"] is False
    rest = client.post("/api/season/simulate").json()
    assert rest["season_complete"] is True
    assert client.post("/api/season/simulate").status_code == 409

    ran = client.post("/api/postseason", json={"seed": 4})
    assert ran.status_code == 200
    summary = ran.json()
    assert len(summary["promoted"]["to_t1"]) == 3
    assert len(summary["relegated"]["from_t2"]) == 3
    assert client.get("/api/postseason/summary").json() == {key: value for key, value in summary.items() if key != "ok"}

    t1 = client.get("/api/postseason/brackets/1").json()
    assert t1["kind"] == "t1"
    assert len(t1["east"]) == 8
    assert t1["stage"] == "complete"
    t3 = client.get("/api/postseason/brackets/3", params={"games": False}).json()
    assert "games" not in t3["rounds"][0]["series"][0]
    assert client.get("/api/postseason/brackets/4").status_code == 404

    relegation = client.get("/api/postseason/relegation/2").json()
    assert len(relegation["relegated"]) == 3
    assert client.get("/api/postseason/relegation/3").status_code == 404

    champions = client.get("/api/postseason/events", params={"kind": "champion"}).json()
    assert sorted(event["tier"] for event in champions) == [1, 2, 3]

    full = client.get("/api/postseason").json()
    assert full["summary"]["champions"]["t1"] == summary["champions"]["t1"]

    assert client.post("/api/postseason", json={"seed": 4}).status_code == 409
    assert client.post("/api/reset").json() == {"ok": True}
    assert client.get("/api/meta").json()["postseason_complete"] is False


def test_bad_tie_break_policy(client: TestClient) -> None:
    client.post("/api/season/simulate")
    response = client.post("/api/postseason", json={"tie_break": "coin"})
    assert response.status_code == 400
    assert client.post("/api/postseason", json={"tie_break": "team_id"}).status_code == 200


def test_calendar(client: TestClient) -> None:
    body = client.get("/api/calendar", params={"season_start_year": 2030}).json()
    assert body["t1"]["round1"]["start"] == "2031-04-16"
    assert body["promotion_date"] == "2031-05-28"
    assert client.get("/api/calendar").json()["season_start_year"] == 2025
