"""
Statbotics API client.

Single-resource GET requests against the Statbotics v3 REST API.
Each call is bounded by its own timeout and is never retried here;
callers decide whether a failure is fatal.

Failures are surfaced as:
- UpstreamTimeoutError - no response within the configured window
- UpstreamStatusError - non-2xx response (status + raw body)
- UpstreamTransportError - network failure, corrupt encoding or
  undecodable body
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

JSONDocument = Union[dict[str, Any], list[Any]]


# =============================================================================
# Exceptions
# =============================================================================

class UpstreamError(Exception):
    """Base upstream error."""

    status_code: Optional[int] = None


class UpstreamTransportError(UpstreamError):
    """Upstream could not be reached."""
    pass


class UpstreamTimeoutError(UpstreamError):
    """Upstream did not answer in time."""

    def __init__(self, url: str, timeout_ms: int):
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(f"Upstream timeout after {timeout_ms}ms: {url}")


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Upstream error {status_code}: {body}")


# =============================================================================
# Helpers
# =============================================================================

def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Drop None/empty values so they are omitted from the query string."""
    if not params:
        return {}
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        text = str(value)
        if text:
            cleaned[key] = text
    return cleaned


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


# =============================================================================
# Client
# =============================================================================

class StatboticsClient:
    """
    Async client for the Statbotics API.

    Pass an existing httpx.AsyncClient to share its connection pool;
    otherwise one is created and owned by this instance.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.upstream_base_url).rstrip("/")
        self.timeout_ms = timeout_ms or settings.upstream_timeout_ms
        self._http = http_client
        self._owns_http = http_client is None

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                limits=httpx.Limits(
                    max_connections=max(settings.aggregation_concurrency, 10)
                ),
            )
            self._owns_http = True
        return self._http

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{normalize_path(path)}"

    async def fetch(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> JSONDocument:
        """
        GET {base}{path}?{params} and decode the JSON body.

        Raises:
            UpstreamTimeoutError, UpstreamStatusError, UpstreamTransportError
        """
        url = self.build_url(path)
        query = clean_params(params)
        http = self._get_http()

        timeout = self.timeout_ms / 1000

        # httpx timeouts apply per phase; wait_for bounds the whole call
        # including a slowly streamed body
        try:
            response = await asyncio.wait_for(
                http.get(
                    url,
                    params=query,
                    headers={"accept": "application/json"},
                    timeout=timeout,
                ),
                timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Statbotics timeout: {url} ({e.__class__.__name__})")
            raise UpstreamTimeoutError(url, self.timeout_ms) from e
        except httpx.RequestError as e:
            logger.warning(f"Statbotics request failed: {url}: {e}")
            raise UpstreamTransportError(f"Upstream request failed: {e}") from e

        if not response.is_success:
            logger.debug(
                f"Statbotics {response.status_code} for {url}: {response.text[:200]}"
            )
            raise UpstreamStatusError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamTransportError(f"Invalid JSON from upstream: {url}") from e

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    async def get_team(self, team: Union[int, str]) -> JSONDocument:
        return await self.fetch(f"/v3/team/{team}")

    async def get_team_year(self, team: Union[int, str], year: int) -> JSONDocument:
        return await self.fetch(f"/v3/team_year/{team}/{year}")

    async def get_event(self, event: str) -> JSONDocument:
        return await self.fetch(f"/v3/event/{event}")

    async def list_teams(
        self, params: Optional[Mapping[str, Any]] = None, **filters: Any
    ) -> JSONDocument:
        return await self.fetch("/v3/teams", {**(params or {}), **filters})

    async def list_events(
        self, params: Optional[Mapping[str, Any]] = None, **filters: Any
    ) -> JSONDocument:
        return await self.fetch("/v3/events", {**(params or {}), **filters})

    async def list_team_years(
        self, params: Optional[Mapping[str, Any]] = None, **filters: Any
    ) -> JSONDocument:
        return await self.fetch("/v3/team_years", {**(params or {}), **filters})

    async def close(self):
        """Close the underlying HTTP client if this instance created it."""
        if self._http is not None and self._owns_http and not self._http.is_closed:
            await self._http.aclose()
        self._http = None
