"""
Event search module.

Usage:
    from app.features.events import AliasTable, EventResolver

Components:
- normalize: canonical text form used for every comparison
- AliasTable: shorthand → phrases, loaded from content/events/aliases.yaml
- EventResolver: scores and ranks upstream events against a query
"""

from .text import normalize
from .aliases import AliasTable
from .models import (
    EventCandidate,
    EventMatchError,
    NoMatchError,
    Resolution,
    ScoringWeights,
)
from .matching import EventResolver, expand_query, score_candidate

__all__ = [
    "normalize",
    "AliasTable",
    "EventCandidate",
    "EventMatchError",
    "NoMatchError",
    "Resolution",
    "ScoringWeights",
    "EventResolver",
    "expand_query",
    "score_candidate",
]
