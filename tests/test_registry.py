import asyncio

import pytest

from voxroom.runtime.registry import RoomRegistry

TTL_MS = 10 * 60 * 1000


def test_get_or_create_returns_same_room(registry):
    first = registry.get_or_create("r1")
    second = registry.get_or_create("r1")

    assert first is second
    assert len(registry) == 1
    assert first.members == {}


def test_room_ids_are_case_sensitive(registry):
    assert registry.get_or_create("Room") is not registry.get_or_create("room")
    assert len(registry) == 2


def test_join_creates_room_and_adds_member(registry, make_conn):
    alice = make_conn("alice")
    room = registry.join("r1", alice)

    assert "r1" in registry
    assert room.usernames() == ["alice"]


@pytest.mark.anyio
async def test_simultaneous_joins_share_one_room(registry, make_conn):
    conns = [make_conn(f"user{i}", room_id="fresh") for i in range(10)]
    rooms = []

    async def join(conn):
        await asyncio.sleep(0)
        rooms.append(registry.join("fresh", conn))

    await asyncio.gather(*(join(c) for c in conns))

    assert len(registry) == 1
    assert all(r is rooms[0] for r in rooms)
    assert len(rooms[0].members) == 10


def test_leave_unknown_room_is_noop(registry, make_conn):
    assert registry.leave("missing", make_conn("alice")) is False


def test_snapshot_lists_rooms_without_touching_them(registry, clock, make_conn):
    registry.join("r1", make_conn("alice"))
    registry.join("r1", make_conn("bob"))
    registry.get_or_create("r2")
    before = {s.id: s.last_activity for s in registry.snapshot()}

    clock.advance(60_000)
    snap = {s.id: s for s in registry.snapshot()}

    assert snap["r1"].users == ["alice", "bob"]
    assert snap["r2"].users == []
    assert {k: v.last_activity for k, v in snap.items()} == before


def test_sweep_removes_only_empty_stale_rooms(registry, clock, make_conn):
    registry.get_or_create("stale-empty")
    registry.join("stale-busy", make_conn("alice", room_id="stale-busy"))
    clock.advance(TTL_MS + 1)
    registry.get_or_create("fresh-empty")

    removed = registry.sweep(idle_ttl_ms=TTL_MS)

    assert removed == ["stale-empty"]
    assert "stale-busy" in registry
    assert "fresh-empty" in registry


def test_sweep_threshold_is_strict(registry, clock):
    registry.get_or_create("r1")
    clock.advance(TTL_MS)

    assert registry.sweep(idle_ttl_ms=TTL_MS) == []
    assert registry.sweep(idle_ttl_ms=TTL_MS, now=clock() + 1) == ["r1"]


def test_occupied_room_is_never_swept(registry, clock, make_conn):
    registry.join("r1", make_conn("alice"))
    clock.advance(TTL_MS * 100)

    assert registry.sweep(idle_ttl_ms=TTL_MS) == []


def test_emptied_room_is_swept_and_recreated_fresh(registry, clock, make_conn):
    alice = make_conn("alice", room_id="r2")
    original = registry.join("r2", alice)
    registry.leave("r2", alice)

    clock.advance(TTL_MS + 1)
    assert registry.sweep(idle_ttl_ms=TTL_MS) == ["r2"]
    assert "r2" not in registry

    bob = make_conn("bob", room_id="r2")
    recreated = registry.join("r2", bob)
    assert recreated is not original
    assert recreated.usernames() == ["bob"]


def test_rooms_use_registry_message_limit(clock, make_conn):
    registry = RoomRegistry(clock=clock, max_message_bytes=5)
    alice = make_conn("alice")
    room = registry.join("r1", alice)
    alice.clear()

    room.dispatch(alice, '{"type": "message", "text": "abcdefgh"}')

    assert alice.frames()[0]["text"] == "abcde"
