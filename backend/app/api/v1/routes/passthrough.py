"""
Generic Statbotics passthrough.

/statbotics?path=v3/team/254
/statbotics?path=v3/events&year=2025&district=pnw

Query-param style avoids issues with slashes in GPT Actions.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.deps import get_statbotics_client, upstream_http_error
from app.features.statbotics import StatboticsClient, UpstreamError

router = APIRouter()


@router.get("/statbotics")
async def statbotics_proxy(
    request: Request,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """Forward any GET to Statbotics; all params except `path` are passed through."""
    params = dict(request.query_params)
    path = params.pop("path", None)
    if not path:
        raise HTTPException(status_code=400, detail="missing required query param: path")

    try:
        return await client.fetch(path, params)
    except UpstreamError as e:
        raise upstream_http_error(e, "statbotics proxy error")
