from concurrent.futures import ThreadPoolExecutor

from app.infrastructure.notifications import PresenceRegistry

from conftest import FakeConnection


def test_register_and_lookup() -> None:
    registry = PresenceRegistry()
    connection = FakeConnection()

    registry.register(1, connection)

    assert registry.lookup(1) is connection
    assert 1 in registry
    assert registry.online_user_ids() == {1}
    assert len(registry) == 1


def test_lookup_unknown_user_returns_none() -> None:
    assert PresenceRegistry().lookup(42) is None


def test_new_connection_replaces_previous_one() -> None:
    registry = PresenceRegistry()
    first, second = FakeConnection(), FakeConnection()

    registry.register(1, first)
    registry.register(1, second)

    assert registry.lookup(1) is second
    assert len(registry) == 1


def test_unregister_of_replaced_connection_keeps_current_one() -> None:
    registry = PresenceRegistry()
    first, second = FakeConnection(), FakeConnection()
    registry.register(1, first)
    registry.register(1, second)

    assert registry.unregister(first) is None
    assert registry.lookup(1) is second

    assert registry.unregister(second) == 1
    assert registry.lookup(1) is None


def test_unregister_unknown_connection_is_noop() -> None:
    registry = PresenceRegistry()
    registry.register(1, FakeConnection())

    assert registry.unregister(FakeConnection()) is None
    assert registry.online_user_ids() == {1}


def test_connection_moved_to_another_user_leaves_single_owner() -> None:
    registry = PresenceRegistry()
    connection = FakeConnection()

    registry.register(1, connection)
    registry.register(2, connection)

    assert registry.lookup(1) is None
    assert registry.lookup(2) is connection


def test_clear_and_snapshot() -> None:
    registry = PresenceRegistry()
    a, b = FakeConnection(), FakeConnection()
    registry.register(1, a)
    registry.register(2, b)

    assert sorted(user_id for user_id, _ in registry.connections()) == [1, 2]

    registry.clear()
    assert len(registry) == 0
    assert registry.connections() == []


def test_concurrent_register_and_unregister_keep_maps_consistent() -> None:
    registry = PresenceRegistry()
    users = range(1, 17)

    def churn(user_id: int) -> FakeConnection:
        current = FakeConnection()
        registry.register(user_id, current)
        for step in range(200):
            replacement = FakeConnection()
            registry.register(user_id, replacement)
            assert registry.unregister(current) is None
            current = replacement
            if step % 3 == 0:
                assert registry.unregister(current) == user_id
                current = FakeConnection()
                registry.register(user_id, current)
            registry.connections()
        return current

    with ThreadPoolExecutor(max_workers=8) as pool:
        last = dict(zip(users, pool.map(churn, users)))

    assert registry.online_user_ids() == set(users)
    for user_id, connection in last.items():
        assert registry.lookup(user_id) is connection
        assert registry.unregister(connection) == user_id
    assert len(registry) == 0
    assert registry.connections() == []
