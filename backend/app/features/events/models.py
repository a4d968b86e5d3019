"""Data models for event search (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from app.config import settings


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the event match score."""

    phrase: int = 200  # whole variant found in the name
    token: int = 25  # per variant token found in the name
    abbreviation: int = 40  # short variant found in name or key
    region: int = 3  # district/state hint found in the name
    abbreviation_max_length: int = 5
    token_min_length: int = 3
    candidate_limit: int = 5

    @classmethod
    def from_settings(cls) -> "ScoringWeights":
        return cls(
            phrase=settings.score_phrase,
            token=settings.score_token,
            abbreviation=settings.score_abbreviation,
            region=settings.score_region,
            abbreviation_max_length=settings.abbreviation_max_length,
            candidate_limit=settings.candidate_limit,
        )


@dataclass
class EventCandidate:
    """An upstream event scored against a search query."""

    key: Optional[str]
    name: Optional[str]
    week: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    score: int = 0
    token_hits: int = field(default=0, repr=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "EventCandidate":
        return cls(
            key=record.get("key"),
            name=record.get("name"),
            week=record.get("week"),
            start_date=record.get("start_date"),
            end_date=record.get("end_date"),
            district=record.get("district"),
            state=record.get("state"),
            country=record.get("country"),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("token_hits")
        return data


@dataclass
class Resolution:
    """Best match plus the top-ranked alternatives."""

    query: str
    best: EventCandidate
    candidates: list[EventCandidate]


class EventMatchError(Exception):
    """Base event search error."""
    pass


class NoMatchError(EventMatchError):
    """No candidate scored above zero."""

    def __init__(self, query: str, candidates: Optional[list[EventCandidate]] = None):
        self.query = query
        self.candidates = candidates or []
        super().__init__(f"No matching event found for '{query}'")
