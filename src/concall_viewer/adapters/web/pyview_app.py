"""PyView web adapter for displaying concalls and analytics."""

from __future__ import annotations

import logging
from typing import Any

from concall_viewer.adapters.config import AppConfig
from concall_viewer.domain.contracts import (
    AnalyticsPollerProtocol,
    AnalyticsStoreProtocol,
    PageQueryControllerFactory,
)
from concall_viewer.domain.ports import DisplayAdapter

from .views.concalls import create_concalls_live_view

logger = logging.getLogger(__name__)


class PyViewWebAdapter(DisplayAdapter):
    """PyView-based web adapter serving the concalls page."""

    def __init__(
        self,
        store: AnalyticsStoreProtocol,
        controller_factory: PageQueryControllerFactory,
        config: AppConfig,
        poller: AnalyticsPollerProtocol | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            store: Shared analytics store, started and stopped with the server.
            controller_factory: Creates one listing controller per connection.
            config: Application configuration.
            poller: Optional periodic analytics refresh.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        if not hasattr(store, "subscribe") or not callable(getattr(store, "subscribe", None)):
            raise TypeError("store must implement AnalyticsStoreProtocol")

        self.store = store
        self.controller_factory = controller_factory
        self.config = config
        self.poller = poller
        self._server: Any | None = None

    def create_app(self) -> Any:
        """Build the PyView application with all routes."""
        from pyview import PyView
        from pyview.template import defaultRootTemplate
        from starlette.responses import Response
        from starlette.routing import Route

        app = PyView()
        app.rootTemplate = defaultRootTemplate(title=self.config.title, title_suffix="")

        live_view_class = create_concalls_live_view(
            self.store, self.controller_factory, self.config
        )
        app.add_live_view("/", live_view_class)
        logger.info("Registered concalls view at path '/'")

        async def healthz(_request: Any) -> Response:
            """Health check endpoint for load balancers and monitoring."""
            return Response(content="Ok", media_type="text/plain")

        app.routes.append(Route("/healthz", healthz, methods=["GET"]))
        return app

    async def start(self) -> None:
        """Start the analytics store and the web server."""
        import uvicorn

        app = self.create_app()

        await self.store.start()
        if self.poller is not None:
            await self.poller.start()

        config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Serving concalls on http://{self.config.host}:{self.config.port}")

        try:
            await self._server.serve()
        finally:
            await self._shutdown_services()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
        await self._shutdown_services()

    async def _shutdown_services(self) -> None:
        if self.poller is not None:
            await self.poller.stop()
        await self.store.stop()
