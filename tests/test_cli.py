from pinboard.cli import DEMO_PINS, DEMO_USERS
from pinboard.models import Follow, Pin, User


def test_seed_demo_is_idempotent(app, count_rows):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed", "demo"])
    assert first.exit_code == 0, first.output
    assert "Created:" in first.output

    second = runner.invoke(args=["seed", "demo"])
    assert second.exit_code == 0, second.output
    assert "Created:" not in second.output

    assert count_rows(User) == len(DEMO_USERS)
    assert count_rows(Pin) == len(DEMO_PINS)
    assert count_rows(Follow) == 1


def test_seeded_private_board_visible_only_to_follower(app, client):
    app.test_cli_runner().invoke(args=["seed", "demo"])
    resp = client.get("/api/pins?userId=boris@pinboard.local")
    assert resp.get_json()["pins"] == []

    login = client.post("/api/auth/login", json={"email": "ana@pinboard.local", "password": "demo-password"})
    assert login.status_code == 200
    resp = client.get("/api/pins?userId=boris@pinboard.local")
    assert len(resp.get_json()["pins"]) == 2


def test_seed_demo_after_clashing_registration(app, client, count_rows):
    resp = client.post("/api/auth/register", json={"name": "Ana", "email": "ana@gmail.com", "password": "hunter22"})
    assert resp.get_json()["user"]["username"] == "ana"

    result = app.test_cli_runner().invoke(args=["seed", "demo"])
    assert result.exit_code == 0, result.output
    assert count_rows(User) == len(DEMO_USERS) + 1
    assert count_rows(User, email="ana@pinboard.local", username="ana2") == 1
