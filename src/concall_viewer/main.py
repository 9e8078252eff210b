"""Main entry point for the concall viewer application."""

import asyncio
import logging
import sys

import aiohttp

from concall_viewer.adapters.concall_api import AiohttpStreamConnector, ConcallApiGateway
from concall_viewer.adapters.config import AppConfig
from concall_viewer.adapters.web import PyViewWebAdapter
from concall_viewer.application.services import (
    AnalyticsRefreshPoller,
    AnalyticsSyncStore,
    PageQueryController,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    stream_url = config.stream_url()
    logger.info(
        f"Loaded config: env={config.environment}, api={config.api_base_url}, "
        f"stream={stream_url}, page_size={config.page_size}"
    )

    # One aiohttp session shared by the gateway and the analytics stream
    async with aiohttp.ClientSession() as session:
        gateway = ConcallApiGateway(
            session,
            config.api_base_url,
            page_size=config.page_size,
            timeout_seconds=config.api_timeout_seconds,
        )

        # One analytics store per process, handed to every view
        store = AnalyticsSyncStore(
            gateway,
            AiohttpStreamConnector(session, stream_url),
            max_reconnect_attempts=config.max_reconnect_attempts,
            reconnect_base_delay=config.reconnect_base_delay_seconds,
        )
        poller = AnalyticsRefreshPoller(store, config.analytics_refresh_interval_seconds)

        def controller_factory() -> PageQueryController:
            return PageQueryController(gateway, page_size=config.page_size)

        display_adapter = PyViewWebAdapter(store, controller_factory, config, poller=poller)

        try:
            await display_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await display_adapter.stop()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
