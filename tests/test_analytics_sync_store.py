"""Tests for the shared analytics store."""

import json

import pytest

from concall_viewer.application.services import AnalyticsSyncStore
from concall_viewer.domain.models import (
    AnalyticsSnapshot,
    AnalyticsUpdate,
    ConnectionState,
    DataUpdate,
    ErrorInfo,
    ErrorUpdate,
)
from tests.fakes import (
    FakeConnector,
    FakeGateway,
    HangingConnection,
    RecordingSleep,
    settle,
    transport_error,
)


def _frame(total_visits: object) -> str:
    return json.dumps({"type": "analytics_update", "total_visits": total_visits})


@pytest.fixture
def gateway() -> FakeGateway:
    """Create a gateway whose analytics fetch waits for release."""
    fake = FakeGateway()
    fake.hold_analytics = True
    return fake


@pytest.mark.asyncio
async def test_when_many_subscribe_during_fetch_then_one_request_serves_all(
    gateway: FakeGateway,
) -> None:
    """Given three views subscribing before the fetch resolves, when it resolves, then one request fed them all."""
    store = AnalyticsSyncStore(gateway)
    received: list[list[AnalyticsUpdate]] = [[], [], []]

    store.subscribe(received[0].append)
    store.subscribe(received[1].append)
    await settle()
    store.subscribe(received[2].append)

    assert store.fetch_in_flight
    assert all(not r for r in received)

    gateway.release_analytics.set()
    await store.refresh()

    assert gateway.analytics_calls == 1
    expected = DataUpdate(AnalyticsSnapshot(total_visits=10))
    assert received == [[expected], [expected], [expected]]
    assert not store.fetch_in_flight


@pytest.mark.asyncio
async def test_when_snapshot_resident_then_late_subscriber_gets_it_synchronously(
    gateway: FakeGateway,
) -> None:
    """Given a resident snapshot, when a view subscribes, then it receives the snapshot before subscribe returns."""
    gateway.hold_analytics = False
    store = AnalyticsSyncStore(gateway)
    store.subscribe(lambda _update: None)
    await store.refresh()
    calls_before = gateway.analytics_calls

    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)

    assert received == [DataUpdate(AnalyticsSnapshot(total_visits=10))]
    assert gateway.analytics_calls == calls_before
    assert not store.fetch_in_flight


@pytest.mark.asyncio
async def test_when_unsubscribed_during_fetch_then_listener_is_not_called(
    gateway: FakeGateway,
) -> None:
    """Given a listener removed while the fetch is pending, when it resolves, then only the remaining listener is called."""
    store = AnalyticsSyncStore(gateway)
    gone: list[AnalyticsUpdate] = []
    kept: list[AnalyticsUpdate] = []

    token = store.subscribe(gone.append)
    store.subscribe(kept.append)
    store.unsubscribe(token)

    gateway.release_analytics.set()
    await store.refresh()

    assert gone == []
    assert len(kept) == 1
    assert store.listener_count == 1


def test_unsubscribe_is_idempotent() -> None:
    """Given a removed token, when unsubscribing again, then nothing happens."""
    store = AnalyticsSyncStore(FakeGateway())
    store._snapshot = AnalyticsSnapshot(total_visits=1)
    token = store.subscribe(lambda _update: None)

    store.unsubscribe(token)
    store.unsubscribe(token)

    assert store.listener_count == 0


@pytest.mark.asyncio
async def test_when_first_fetch_fails_then_listeners_get_error_and_late_subscriber_too(
    gateway: FakeGateway,
) -> None:
    """Given no snapshot, when the fetch fails, then listeners and later subscribers see the error without refetching."""
    gateway.analytics_result = transport_error("failed to query MongoDB", 500)
    store = AnalyticsSyncStore(gateway)
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)

    gateway.release_analytics.set()
    assert await store.refresh() is None

    expected_error = ErrorInfo(message="failed to query MongoDB", status_code=500)
    assert received == [ErrorUpdate(expected_error)]
    assert store.last_error == expected_error
    assert store.snapshot is None

    late: list[AnalyticsUpdate] = []
    store.subscribe(late.append)

    assert late == [ErrorUpdate(expected_error)]
    assert gateway.analytics_calls == 1


@pytest.mark.asyncio
async def test_when_fetch_fails_with_snapshot_resident_then_snapshot_is_kept() -> None:
    """Given a resident snapshot, when a refresh fails, then the snapshot stays and the error carries it."""
    gateway = FakeGateway()
    store = AnalyticsSyncStore(gateway)
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    await store.refresh()

    gateway.analytics_result = transport_error()
    result = await store.refresh()

    snapshot = AnalyticsSnapshot(total_visits=10)
    assert result == snapshot
    assert store.snapshot == snapshot
    assert isinstance(received[-1], ErrorUpdate)
    assert received[-1].snapshot == snapshot

    late: list[AnalyticsUpdate] = []
    store.subscribe(late.append)
    assert late == [DataUpdate(snapshot)]


@pytest.mark.asyncio
async def test_when_stream_frame_arrives_then_all_listeners_see_new_total() -> None:
    """Given a resident total of 10, when a frame with 42 arrives, then every listener receives 42 without a new fetch."""
    gateway = FakeGateway()
    store = AnalyticsSyncStore(gateway)
    first: list[AnalyticsUpdate] = []
    second: list[AnalyticsUpdate] = []
    store.subscribe(first.append)
    await store.refresh()
    store.subscribe(second.append)

    store.handle_stream_message(_frame(42))

    expected = DataUpdate(AnalyticsSnapshot(total_visits=42))
    assert first[-1] == expected
    assert second[-1] == expected
    assert store.snapshot == AnalyticsSnapshot(total_visits=42)
    assert gateway.analytics_calls == 1


@pytest.mark.asyncio
async def test_when_frames_are_malformed_then_they_are_dropped() -> None:
    """Given a resident snapshot, when malformed frames arrive, then nothing changes and nobody is notified."""
    store = AnalyticsSyncStore(FakeGateway())
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    await store.refresh()
    received.clear()

    for frame in [
        "not json",
        "[1, 2, 3]",
        json.dumps({"type": "presence", "total_visits": 99}),
        json.dumps({"type": "analytics_update"}),
        _frame("abc"),
        _frame(-5),
        _frame(1.5),
    ]:
        store.handle_stream_message(frame)

    assert received == []
    assert store.snapshot == AnalyticsSnapshot(total_visits=10)


@pytest.mark.asyncio
async def test_when_stream_update_follows_error_then_store_recovers(
    gateway: FakeGateway,
) -> None:
    """Given a failed fetch, when a stream frame arrives, then the error is cleared and data is delivered."""
    gateway.analytics_result = transport_error()
    store = AnalyticsSyncStore(gateway)
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    gateway.release_analytics.set()
    await store.refresh()

    store.handle_stream_message(_frame(7))

    assert received[-1] == DataUpdate(AnalyticsSnapshot(total_visits=7))
    assert store.last_error is None


@pytest.mark.asyncio
async def test_when_listener_raises_then_others_are_still_notified() -> None:
    """Given a failing listener registered first, when broadcasting, then later listeners still receive the update."""
    store = AnalyticsSyncStore(FakeGateway())

    def broken(_update: AnalyticsUpdate) -> None:
        raise RuntimeError("boom")

    received: list[AnalyticsUpdate] = []
    store.subscribe(broken)
    store.subscribe(received.append)
    await store.refresh()

    assert received == [DataUpdate(AnalyticsSnapshot(total_visits=10))]


@pytest.mark.asyncio
async def test_listeners_are_notified_in_registration_order() -> None:
    """Given several listeners, when broadcasting, then they are called in the order they subscribed."""
    store = AnalyticsSyncStore(FakeGateway())
    order: list[str] = []
    for name in ["a", "b", "c"]:
        store.subscribe(lambda _update, name=name: order.append(name))
    await store.refresh()

    assert order == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_when_listener_unsubscribes_another_during_broadcast_then_it_is_skipped() -> None:
    """Given a listener removing a later one, when broadcasting, then the removed one is not called."""
    store = AnalyticsSyncStore(FakeGateway())
    later_calls: list[AnalyticsUpdate] = []
    tokens = {}

    def remover(_update: AnalyticsUpdate) -> None:
        store.unsubscribe(tokens["later"])

    store.subscribe(remover)
    tokens["later"] = store.subscribe(later_calls.append)
    await store.refresh()

    assert later_calls == []


@pytest.mark.asyncio
async def test_when_stream_connected_then_pushed_frames_reach_listeners() -> None:
    """Given a live stream, when the server pushes a frame, then listeners receive it; stop closes the stream."""
    connection = HangingConnection()
    connector = FakeConnector([connection])
    store = AnalyticsSyncStore(FakeGateway(), connector, sleep=RecordingSleep())

    await store.start()
    await store.start()
    await settle()

    assert connector.open_calls == 1
    assert store.connection_state is ConnectionState.OPEN

    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    await store.refresh()

    connection.queue.put_nowait(_frame(42))
    await settle()

    assert received[-1] == DataUpdate(AnalyticsSnapshot(total_visits=42))

    await store.stop()

    assert connection.closed
    assert store.connection_state is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
async def test_when_no_connector_then_start_is_a_noop() -> None:
    """Given no stream connector, when starting, then the store stays disconnected."""
    store = AnalyticsSyncStore(FakeGateway())

    await store.start()

    assert store.stream is None
    assert store.connection_state is ConnectionState.DISCONNECTED
    await store.stop()


@pytest.mark.asyncio
async def test_when_stopped_during_fetch_then_pending_fetch_is_cancelled(
    gateway: FakeGateway,
) -> None:
    """Given a pending fetch, when the store stops, then the fetch is cancelled and the slot released."""
    store = AnalyticsSyncStore(gateway)
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    await settle()

    await store.stop()

    assert not store.fetch_in_flight
    assert received == []


@pytest.mark.asyncio
async def test_when_frame_arrives_during_fetch_then_older_fetch_result_is_discarded(
    gateway: FakeGateway,
) -> None:
    """Given a pending fetch, when a frame with 42 arrives before it returns 10, then 42 stays resident."""
    store = AnalyticsSyncStore(gateway)
    received: list[AnalyticsUpdate] = []
    store.subscribe(received.append)
    await settle()

    store.handle_stream_message(_frame(42))
    gateway.release_analytics.set()
    result = await store.refresh()

    expected = AnalyticsSnapshot(total_visits=42)
    assert received == [DataUpdate(expected)]
    assert store.snapshot == expected
    assert result == expected
    assert not store.fetch_in_flight
