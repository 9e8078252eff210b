"""Tests for AnalyticsRefreshPoller behavior."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from concall_viewer.application.services import AnalyticsRefreshPoller, AnalyticsSyncStore
from concall_viewer.domain.models import AnalyticsSnapshot
from tests.fakes import FakeGateway


@pytest.mark.asyncio
async def test_when_interval_is_zero_then_poller_does_not_start() -> None:
    """Given a zero interval, when starting, then no task is created."""
    store = MagicMock()
    poller = AnalyticsRefreshPoller(store, 0)

    await poller.start()

    assert not poller.enabled
    assert poller._task is None
    await poller.stop()


@pytest.mark.asyncio
async def test_poll_once_refreshes_store() -> None:
    """Given a store, when polling once, then a fresh snapshot is fetched."""
    gateway = FakeGateway()
    store = AnalyticsSyncStore(gateway)
    poller = AnalyticsRefreshPoller(store, 30)

    await poller.poll_once()
    gateway.analytics_result = AnalyticsSnapshot(total_visits=11)
    await poller.poll_once()

    assert gateway.analytics_calls == 2
    assert store.snapshot == AnalyticsSnapshot(total_visits=11)


@pytest.mark.asyncio
async def test_when_started_then_refreshes_each_interval_until_stopped() -> None:
    """Given an enabled poller, when running, then it sleeps the interval before each refresh."""
    store = MagicMock()
    store.refresh = AsyncMock(return_value=None)
    poller = AnalyticsRefreshPoller(store, 15)
    sleeps: list[float] = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)
        await real_sleep(0)

    with patch(
        "concall_viewer.application.services.analytics_refresh_poller.asyncio.sleep",
        side_effect=fake_sleep,
    ):
        await poller.start()
        await poller.start()
        for _ in range(5):
            await real_sleep(0)
        await poller.stop()

    assert sleeps
    assert all(delay == 15 for delay in sleeps)
    assert store.refresh.await_count >= 1
    assert poller._task is None
