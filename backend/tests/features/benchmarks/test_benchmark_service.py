"""Tests for BenchmarkService (team list + fan-out) against a mocked upstream."""

import httpx
import pytest

from app.features.benchmarks import (
    BenchmarkService,
    EmptyInputSetError,
    Metric,
    NoExtractableValuesError,
    extract_team_numbers,
)
from app.features.statbotics import RegionFilter, StatboticsClient, UpstreamStatusError


def make_upstream(teams, team_years, seen=None):
    """Mock Statbotics: /v3/teams returns `teams`, team_year per team number."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request.url)
        path = request.url.path
        if path == "/v3/teams":
            return httpx.Response(200, json=teams)
        if path.startswith("/v3/team_year/"):
            team = int(path.split("/")[3])
            if team not in team_years:
                return httpx.Response(404, json={"detail": "not found"})
            return httpx.Response(200, json=team_years[team])
        return httpx.Response(500, text="unexpected")

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StatboticsClient(base_url="https://upstream.test", http_client=http)


class TestExtractTeamNumbers:
    def test_skips_malformed_rows(self):
        rows = [{"team": 254}, {"team": "abc"}, {"team": None}, {}, "junk", {"team": 1678.0}, {"team": True}]
        assert extract_team_numbers(rows) == [254, 1678]

    def test_not_a_list(self):
        assert extract_team_numbers({"team": 254}) == []


class TestRegionFilter:
    def test_defaults_to_pnw(self):
        assert RegionFilter().with_default().district == "pnw"

    def test_explicit_region_kept(self):
        region = RegionFilter(state="CA").with_default()
        assert region == RegionFilter(state="CA")

    def test_custom_default(self):
        assert RegionFilter().with_default("fim").district == "fim"


class TestEpaBenchmarks:
    @pytest.mark.asyncio
    async def test_percentiles_from_team_years(self):
        seen = []
        client = make_upstream(
            teams=[{"team": 1}, {"team": 2}, {"team": 3}, {"team": 4}],
            team_years={
                1: {"epa": {"unitless": 1400}},
                2: {"epa": {"unitless": 1600}},
                3: {"epa": {"unitless": 1800}},
                # 4 missing → 404
            },
            seen=seen,
        )

        result = await BenchmarkService(client).epa_benchmarks(
            2025, Metric.UNITLESS_EPA, [50, 100], RegionFilter(district="pnw"),
        )

        assert result.count == 3
        assert result.attempted == 4
        assert result.error_count == 1
        assert result.errors_sample[0].identifier == 4
        assert result.errors_sample[0].error.status_code == 404
        assert result.percentiles == {50: 1600, 100: 1800}

        teams_request = seen[0]
        assert teams_request.path == "/v3/teams"
        assert dict(teams_request.params) == {"year": "2025", "district": "pnw"}
        assert all(u.path.endswith("/2025") for u in seen[1:])

    @pytest.mark.asyncio
    async def test_max_teams_cap(self):
        client = make_upstream(
            teams=[{"team": t} for t in range(1, 21)],
            team_years={t: {"epa": {"unitless": t}} for t in range(1, 21)},
        )

        result = await BenchmarkService(client).epa_benchmarks(
            2025, Metric.UNITLESS_EPA, [100], RegionFilter(district="pnw"), max_teams=5,
        )

        assert result.attempted == 5
        assert result.percentiles[100] == 5

    @pytest.mark.asyncio
    async def test_no_teams(self):
        client = make_upstream(teams=[], team_years={})

        with pytest.raises(EmptyInputSetError):
            await BenchmarkService(client).epa_benchmarks(
                2025, Metric.UNITLESS_EPA, [50], RegionFilter(district="pnw"),
            )

    @pytest.mark.asyncio
    async def test_no_values(self):
        client = make_upstream(teams=[{"team": 1}, {"team": 2}], team_years={})

        with pytest.raises(NoExtractableValuesError) as exc:
            await BenchmarkService(client).epa_benchmarks(
                2025, Metric.EPA_POINTS_MEAN, [50], RegionFilter(district="pnw"),
            )

        assert exc.value.error_count == 2

    @pytest.mark.asyncio
    async def test_team_list_failure_propagates(self):
        def handler(request):
            return httpx.Response(503, text="maintenance")

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = StatboticsClient(base_url="https://upstream.test", http_client=http)

        with pytest.raises(UpstreamStatusError) as exc:
            await BenchmarkService(client).epa_benchmarks(
                2025, Metric.UNITLESS_EPA, [50], RegionFilter(state="WA"),
            )

        assert exc.value.status_code == 503
