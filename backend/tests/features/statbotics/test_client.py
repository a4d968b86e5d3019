"""
Tests for StatboticsClient.

Upstream is replaced by httpx.MockTransport.
"""

import asyncio
import time

import httpx
import pytest

from app.features.statbotics import (
    StatboticsClient,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
    clean_params,
)

BASE_URL = "https://upstream.test"


def make_client(handler, timeout_ms=10000) -> StatboticsClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StatboticsClient(base_url=BASE_URL, timeout_ms=timeout_ms, http_client=http)


# =============================================================================
# Test clean_params
# =============================================================================

class TestCleanParams:
    def test_drops_none_and_empty(self):
        assert clean_params({"year": 2025, "district": None, "state": ""}) == {"year": "2025"}

    def test_keeps_falsy_numbers(self):
        assert clean_params({"offset": 0}) == {"offset": "0"}

    def test_none_mapping(self):
        assert clean_params(None) == {}


# =============================================================================
# Test fetch
# =============================================================================

class TestFetch:
    """Success and failure paths of a single fetch."""

    @pytest.mark.asyncio
    async def test_builds_url_and_query(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["accept"] = request.headers.get("accept")
            return httpx.Response(200, json=[{"team": 254}])

        client = make_client(handler)
        data = await client.fetch("v3/teams", {"year": 2025, "district": "pnw", "state": None})

        assert data == [{"team": 254}]
        assert seen["url"].path == "/v3/teams"
        assert seen["url"].host == "upstream.test"
        assert dict(seen["url"].params) == {"year": "2025", "district": "pnw"}
        assert seen["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_status_error_carries_status_and_body(self):
        def handler(request):
            return httpx.Response(404, text='{"detail": "Team not found"}')

        with pytest.raises(UpstreamStatusError) as exc:
            await make_client(handler).get_team(99999)

        assert exc.value.status_code == 404
        assert exc.value.body == '{"detail": "Team not found"}'
        assert "404" in str(exc.value)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamTimeoutError) as exc:
            await make_client(handler, timeout_ms=250).get_event("2025orsal")

        assert exc.value.timeout_ms == 250
        assert exc.value.status_code is None

    @pytest.mark.asyncio
    async def test_slow_body_hits_overall_deadline(self):
        """Chunks arrive faster than any per-read limit, but the whole body takes ~1s."""
        async def slow_body():
            for _ in range(10):
                await asyncio.sleep(0.1)
                yield b'{"a":'

        def handler(request):
            return httpx.Response(200, content=slow_body())

        started = time.monotonic()
        with pytest.raises(UpstreamTimeoutError) as exc:
            await make_client(handler, timeout_ms=300).get_team(254)

        assert exc.value.timeout_ms == 300
        assert time.monotonic() - started < 0.9

    @pytest.mark.asyncio
    async def test_corrupt_gzip_body_is_transport_error(self):
        def handler(request):
            return httpx.Response(
                200, headers={"content-encoding": "gzip"}, content=b"notgzip"
            )

        with pytest.raises(UpstreamTransportError):
            await make_client(handler).get_team_year(254, 2025)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamTransportError) as exc:
            await make_client(handler).get_team(254)

        assert exc.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_transport_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(UpstreamTransportError):
            await make_client(handler).get_team(254)

    @pytest.mark.asyncio
    async def test_all_errors_share_base(self):
        def handler(request):
            return httpx.Response(503, text="down")

        with pytest.raises(UpstreamError):
            await make_client(handler).list_events(year=2025)


class TestResources:
    """Resource helpers map to the documented upstream paths."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("call,expected_path", [
        (lambda c: c.get_team(254), "/v3/team/254"),
        (lambda c: c.get_team_year(254, 2024), "/v3/team_year/254/2024"),
        (lambda c: c.get_event("2025wasam"), "/v3/event/2025wasam"),
        (lambda c: c.list_teams(year=2025), "/v3/teams"),
        (lambda c: c.list_events({"district": "pnw"}), "/v3/events"),
        (lambda c: c.list_team_years(year=2025, limit=1), "/v3/team_years"),
    ])
    async def test_paths(self, call, expected_path):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={})

        await call(make_client(handler))
        assert seen == [expected_path]

    @pytest.mark.asyncio
    async def test_mapping_and_keyword_filters_merge(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json=[])

        await make_client(handler).list_teams({"district": "pnw"}, year=2025)
        assert seen == {"district": "pnw", "year": "2025"}


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_leaves_shared_client_open(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
        client = StatboticsClient(base_url=BASE_URL, http_client=http)

        await client.close()

        assert not http.is_closed
        await http.aclose()

    def test_build_url_adds_slash(self):
        client = StatboticsClient(base_url=BASE_URL + "/")
        assert client.build_url("v3/team/254") == "https://upstream.test/v3/team/254"
