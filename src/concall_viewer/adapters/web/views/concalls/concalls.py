"""Concalls LiveView: paginated listing, search and live analytics."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import Any

from pyview import LiveView, LiveViewSocket, is_connected
from pyview.events import InfoEvent
from pyview.template.live_template import LiveRender, LiveTemplate
from pyview.vendor import ibis

from concall_viewer.adapters.config import AppConfig
from concall_viewer.adapters.web.broadcasters import StateBroadcaster
from concall_viewer.adapters.web.formatters import ConcallFormatter
from concall_viewer.adapters.web.state import AnalyticsPanelState, ConcallsState
from concall_viewer.domain.contracts import (
    AnalyticsStoreProtocol,  # noqa: TC001 - Runtime dependency: methods called at runtime
    PageQueryControllerFactory,  # noqa: TC001 - Runtime dependency: called at runtime
    StateBroadcasterProtocol,  # noqa: TC001 - Runtime dependency: methods called at runtime
)
from concall_viewer.domain.models import AnalyticsUpdate

logger = logging.getLogger(__name__)

TEMPLATE_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "concalls.html")


def _payload_value(payload: Any, key: str) -> str:
    """Read a form or phx-value field; form values may arrive as lists."""
    if not isinstance(payload, dict):
        return ""
    value = payload.get(key, "")
    if isinstance(value, list):
        value = value[0] if value else ""
    return str(value)


class ConcallsLiveView(LiveView[ConcallsState]):
    """LiveView listing concall summaries with an analytics panel."""

    def __init__(
        self,
        store: AnalyticsStoreProtocol,
        controller_factory: PageQueryControllerFactory,
        config: AppConfig,
        broadcaster: StateBroadcasterProtocol | None = None,
    ) -> None:
        """Initialize the LiveView.

        Args:
            store: Shared analytics store.
            controller_factory: Creates one listing controller per connection.
            config: Application configuration.
            broadcaster: Pushes re-render signals to a connection's topic.
        """
        super().__init__()
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        if not callable(controller_factory):
            raise TypeError("controller_factory must be callable")

        self.store = store
        self.controller_factory = controller_factory
        self.config = config
        self.broadcaster = broadcaster or StateBroadcaster()
        self.formatter = ConcallFormatter(config)
        self._pending: set[asyncio.Task] = set()

    def _make_listener(self, socket: LiveViewSocket[ConcallsState]) -> Any:
        """Create the analytics listener for one connection."""
        topic = socket.context.topic

        def listener(update: AnalyticsUpdate) -> None:
            socket.context.analytics = AnalyticsPanelState.from_update(update)
            task = asyncio.ensure_future(self.broadcaster.broadcast_update(topic))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return listener

    def _sync_query(self, socket: LiveViewSocket[ConcallsState]) -> None:
        """Copy the controller's listing state into the socket context."""
        controller = socket.context.controller
        if controller is not None:
            socket.context.query = controller.state

    def _release(self, socket: LiveViewSocket[ConcallsState]) -> None:
        """Unsubscribe the connection's analytics listener."""
        context = socket.context
        if isinstance(context, ConcallsState) and context.subscription is not None:
            self.store.unsubscribe(context.subscription)
            context.subscription = None

    async def mount(self, socket: LiveViewSocket[ConcallsState], _session: dict) -> None:
        """Mount the LiveView: load the first page and join the analytics store."""
        controller = self.controller_factory()
        socket.context = ConcallsState(
            query=controller.state,
            analytics=AnalyticsPanelState.from_store(self.store),
            controller=controller,
        )

        if is_connected(socket):
            socket.context.topic = f"concalls:analytics:{uuid.uuid4()}"
            try:
                await socket.subscribe(socket.context.topic)
            except Exception as e:
                logger.error(
                    f"Failed to subscribe to topic {socket.context.topic}: {e}", exc_info=True
                )
            socket.context.subscription = self.store.subscribe(self._make_listener(socket))
            logger.info(f"Concalls view joined analytics store ({socket.context.topic})")

        await controller.load_page(1)
        self._sync_query(socket)

    async def unmount(self, socket: LiveViewSocket[ConcallsState]) -> None:
        """Unmount the LiveView and leave the analytics store."""
        self._release(socket)

    async def disconnect(self, socket: LiveViewSocket[ConcallsState]) -> None:
        """Handle socket disconnection - leave the analytics store."""
        self._release(socket)

    async def handle_event(
        self, event: str, payload: Any, socket: LiveViewSocket[ConcallsState]
    ) -> None:
        """Handle search and pagination events from the page."""
        controller = socket.context.controller
        if controller is None:
            logger.warning(f"Ignoring event '{event}' before mount")
            return

        if event == "search":
            term = _payload_value(payload, "query")
            socket.context.search_input = term.strip()
            await controller.search(term)
        elif event == "clear_search":
            socket.context.search_input = ""
            await controller.clear_search()
        elif event == "next_page":
            await controller.next_page()
        elif event == "previous_page":
            await controller.previous_page()
        elif event == "goto_page":
            try:
                page = int(_payload_value(payload, "page"))
            except ValueError:
                logger.warning(f"Ignoring goto_page with invalid page: {payload!r}")
                return
            await controller.change_page(page)
        else:
            logger.debug(f"Unknown event '{event}' with payload: {payload}")
            return

        self._sync_query(socket)

    async def handle_info(
        self, event: str | InfoEvent, socket: LiveViewSocket[ConcallsState]
    ) -> None:
        """Handle re-render signals; the listener already updated the context."""
        if isinstance(event, InfoEvent):
            logger.debug(f"Received InfoEvent from topic '{event.name}'")
            return
        logger.debug(f"Received direct payload: {event}")

    async def render(self, assigns: ConcallsState | dict, meta: Any) -> Any:
        """Render the HTML template."""
        state = assigns if isinstance(assigns, ConcallsState) else ConcallsState()
        try:
            template_assigns = self.formatter.build_assigns(
                state.query, state.analytics, state.search_input
            )
            with open(TEMPLATE_FILE, encoding="utf-8") as f:
                template = ibis.Template(f.read())
            return LiveRender(LiveTemplate(template), template_assigns, meta)
        except Exception as e:
            logger.error(f"Error rendering template: {e}", exc_info=True)
            error_template = ibis.Template("<div>Error rendering template: {{ error }}</div>")
            return LiveRender(LiveTemplate(error_template), {"error": str(e)}, meta)


def create_concalls_live_view(
    store: AnalyticsStoreProtocol,
    controller_factory: PageQueryControllerFactory,
    config: AppConfig,
) -> type[ConcallsLiveView]:
    """Create a configured ConcallsLiveView class.

    PyView's add_live_view expects a class, not an instance, so the
    dependencies are captured in a subclass.

    Args:
        store: Shared analytics store.
        controller_factory: Creates one listing controller per connection.
        config: Application configuration.

    Returns:
        A configured ConcallsLiveView class that can be registered with PyView.
    """
    captured_store = store
    captured_factory = controller_factory
    captured_config = config

    class ConfiguredConcallsLiveView(ConcallsLiveView):
        """Configured concalls LiveView."""

        def __init__(self) -> None:
            super().__init__(captured_store, captured_factory, captured_config)

    return ConfiguredConcallsLiveView
