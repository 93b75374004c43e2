from voxroom.main import create_app
from voxroom.services.admin_service import AdminService


def test_wrong_or_missing_key_is_rejected(registry):
    svc = AdminService(registry, admin_key="s3cret")

    assert svc.is_authorized("s3cret") is True
    assert svc.is_authorized("S3CRET") is False
    assert svc.is_authorized("") is False
    assert svc.is_authorized(None) is False


def test_empty_configured_key_locks_everyone_out(registry):
    svc = AdminService(registry, admin_key="")

    assert svc.is_authorized("") is False
    assert svc.is_authorized("anything") is False


def test_stats_totals(registry, make_conn):
    registry.join("r1", make_conn("alice"))
    registry.join("r1", make_conn("bob"))
    registry.join("r2", make_conn("carol", room_id="r2"))
    registry.get_or_create("r3")

    stats = AdminService(registry, admin_key="k").stats()

    assert stats.total_rooms == 3
    assert stats.total_users == 3
    assert {r.id: r.users for r in stats.rooms} == {"r1": ["alice", "bob"], "r2": ["carol"], "r3": []}


def test_http_stats_with_correct_key(client, registry, clock, make_conn):
    registry.join("r1", make_conn("alice"))

    res = client.get("/api/ws", params={"key": "s3cret"})

    assert res.status_code == 200
    assert res.json() == {
        "rooms": [{"id": "r1", "users": ["alice"], "lastActivity": clock()}],
        "totalRooms": 1,
        "totalUsers": 1,
    }


def test_http_stats_with_wrong_key_leaks_nothing(client, registry, make_conn):
    registry.join("secret-room", make_conn("alice"))

    for params in ({"key": "nope"}, {}):
        res = client.get("/api/ws", params=params)
        assert res.status_code == 401
        assert res.json() == {"error": "unauthorized"}
        assert "secret-room" not in res.text
        assert "alice" not in res.text


def test_http_stats_do_not_touch_activity(client, registry, clock):
    room = registry.get_or_create("r1")
    before = room.last_activity
    clock.advance(30_000)

    client.get("/api/ws", params={"key": "s3cret"})

    assert room.last_activity == before


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_app_uses_injected_empty_registry(test_settings, registry):
    assert len(registry) == 0
    app = create_app(test_settings, registry=registry)

    assert app.state.registry is registry
    assert app.state.settings is test_settings
