"""HTTP gateway for the concall API."""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from concall_viewer.adapters.api_request_logger import log_api_request, log_api_response
from concall_viewer.adapters.concall_api.constants import (
    ANALYTICS_PATH,
    FIND_CONCALLS_PATH,
    GENERIC_NETWORK_ERROR,
    LIST_CONCALLS_PATH,
)
from concall_viewer.domain.errors import MalformedResponseError, TransportError
from concall_viewer.domain.models.analytics_snapshot import AnalyticsSnapshot
from concall_viewer.domain.models.concall_page import ConcallPage
from concall_viewer.domain.models.page_query_state import DEFAULT_PAGE_SIZE
from concall_viewer.domain.ports.concall_gateway import ConcallGateway

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConcallApiGateway(ConcallGateway):
    """aiohttp client for list, search and analytics calls.

    Every failure is raised as ``TransportError`` (network or HTTP status) or
    ``MalformedResponseError`` (unexpected body).
    """

    def __init__(
        self,
        session: ClientSession,
        base_url: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize the gateway.

        Args:
            session: Shared aiohttp session.
            base_url: API base URL, e.g. "http://localhost:8080/api".
            page_size: Default page size when a call does not pass one.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def list_page(self, page: int, limit: int | None = None) -> ConcallPage:
        """Get one page of all concall summaries."""
        params = {"page": page, "limit": limit or self.page_size}
        body = await self._get_json(LIST_CONCALLS_PATH, params)
        return self._parse(ConcallPage, body, LIST_CONCALLS_PATH)

    async def search_page(self, name: str, page: int, limit: int | None = None) -> ConcallPage:
        """Get one page of concall summaries whose company name matches."""
        params = {"name": name, "page": page, "limit": limit or self.page_size}
        body = await self._get_json(FIND_CONCALLS_PATH, params)
        return self._parse(ConcallPage, body, FIND_CONCALLS_PATH)

    async def fetch_analytics(self) -> AnalyticsSnapshot:
        """Get the current analytics snapshot."""
        body = await self._get_json(ANALYTICS_PATH)
        return self._parse(AnalyticsSnapshot, body, ANALYTICS_PATH)

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and decode the JSON body of a 2xx response."""
        url = f"{self.base_url}{path}"
        log_api_request("GET", url, params=params)
        started = time.monotonic()

        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                log_api_response("GET", url, response.status, (time.monotonic() - started) * 1000)
                if not 200 <= response.status < 300:
                    message = await self._error_message(response)
                    logger.warning(
                        f"Concall API returned status {response.status} for {url}: {message}"
                    )
                    raise TransportError(message, status_code=response.status)

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(
                        f"Invalid JSON from {path}: {e}", status_code=response.status
                    ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"Error calling concall API {url}: {e}")
            raise TransportError(f"{GENERIC_NETWORK_ERROR}: {e}") from e
        except TimeoutError as e:
            logger.warning(f"Timeout calling concall API {url}")
            raise TransportError(f"{GENERIC_NETWORK_ERROR}: request timed out") from e

    @staticmethod
    async def _error_message(response: ClientResponse) -> str:
        """Extract the error message of a failed response."""
        text = await response.text()
        try:
            body = json.loads(text)
        except ValueError:
            return GENERIC_NETWORK_ERROR
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP error! status: {response.status}"

    @staticmethod
    def _parse(model: type[ModelT], body: Any, path: str) -> ModelT:
        """Validate a decoded body against a response model."""
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected response shape from {path}: {e.error_count()} error(s)"
            ) from e
