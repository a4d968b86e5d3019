"""
Event Routes

Event snapshots, event lists and fuzzy event-key search.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from app.api.deps import (
    get_event_resolver,
    get_statbotics_client,
    upstream_http_error,
    with_default_region,
)
from app.features.events import EventResolver, NoMatchError
from app.features.statbotics import StatboticsClient, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter()


# === Schemas ===

class EventCandidateSchema(BaseModel):
    """Scored event."""
    key: Optional[str] = None
    name: Optional[str] = None
    week: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    score: int


class EventFindResponse(BaseModel):
    """Best match plus top candidates for disambiguation."""
    year: int
    q: str
    best: EventCandidateSchema
    candidates: list[EventCandidateSchema]


# === Endpoints ===

@router.get("/event/{event}")
async def get_event(
    event: str,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """Event snapshot (Statbotics /v3/event/{event})."""
    try:
        return await client.get_event(event)
    except UpstreamError as e:
        raise upstream_http_error(e, "event lookup failed")


@router.get("/events")
async def list_events(
    request: Request,
    client: StatboticsClient = Depends(get_statbotics_client),
):
    """List events with region filters (defaults to district=pnw if none provided)."""
    try:
        return await client.list_events(with_default_region(request.query_params))
    except UpstreamError as e:
        raise upstream_http_error(e, "events query failed")


@router.get("/events/find", response_model=EventFindResponse)
async def find_event(
    year: int,
    q: str = Query(default=""),
    district: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    client: StatboticsClient = Depends(get_statbotics_client),
    resolver: EventResolver = Depends(get_event_resolver),
):
    """
    Find the best-matching event key by fuzzy name search.

    Short codes are expanded through the alias table (e.g. osf →
    "oregon state fair"). Region filters narrow the upstream list and
    add a small bonus to events whose name mentions them.
    """
    query = q.strip()
    if not query:
        raise HTTPException(
            status_code=400,
            detail="Missing 'q' search string (e.g., q=osf or q=oregon state fair)",
        )

    try:
        events = await client.list_events(
            year=year, district=district, state=state, country=country
        )
    except UpstreamError as e:
        raise upstream_http_error(e, "events find failed")

    records = events if isinstance(events, list) else []
    try:
        resolution = resolver.resolve_records(
            query, records, district=district, state=state
        )
    except NoMatchError as e:
        logger.info(f"No event match for '{e.query}' in {year} ({len(records)} events)")
        raise HTTPException(
            status_code=404,
            detail={
                "error": "No matching event found",
                "year": year,
                "q": query,
                "normalized_q": e.query,
                "candidates": [c.to_dict() for c in e.candidates],
                "hint": "Try a longer query string (e.g., 'oregon state fair') "
                        "or specify district/state filters",
            },
        )

    return EventFindResponse(
        year=year,
        q=query,
        best=EventCandidateSchema(**resolution.best.to_dict()),
        candidates=[EventCandidateSchema(**c.to_dict()) for c in resolution.candidates],
    )
