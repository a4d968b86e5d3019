"""
Event matching: rank events against a free-text query.

Scoring per query variant (the query plus its alias expansions):
- phrase: variant is a substring of the event name
- token: each variant token (>2 chars) found in the name, counted as a hit
- abbreviation: short variant found in the name or event key
Region hints (district, state) add a small bonus when they appear in the
name. Token hits are added once more at the end to break ties.

Same query, candidates and alias table always give the same ranking.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from .aliases import AliasTable
from .models import EventCandidate, NoMatchError, Resolution, ScoringWeights
from .text import normalize


def expand_query(query: str, aliases: AliasTable) -> list[str]:
    """Normalized query followed by its alias expansions, without repeats."""
    base = normalize(query)
    variants = [base]
    for phrase in aliases.expansions(base):
        phrase = normalize(phrase)
        if phrase not in variants:
            variants.append(phrase)
    return variants


def score_candidate(
    name: Optional[str],
    key: Optional[str],
    variants: Iterable[str],
    district: Optional[str] = None,
    state: Optional[str] = None,
    weights: ScoringWeights = ScoringWeights(),
) -> tuple[int, int]:
    """Score one event. Returns (score, token_hits); score includes the hits."""
    n = normalize(name)
    k = normalize(key)

    score = 0
    token_hits = 0

    for variant in variants:
        if not variant:
            continue

        if variant in n:
            score += weights.phrase

        for token in variant.split(" "):
            if len(token) < weights.token_min_length:
                continue
            if token in n:
                score += weights.token
                token_hits += 1

        if len(variant) <= weights.abbreviation_max_length and (variant in n or variant in k):
            score += weights.abbreviation

    for hint in (district, state):
        hint = normalize(hint)
        if hint and hint in n:
            score += weights.region

    score += token_hits
    return score, token_hits


class EventResolver:
    """
    Picks the best event for a query.

    Usage:
        resolver = EventResolver(AliasTable.load(path))
        resolution = resolver.resolve("osf", events, district="pnw")
    """

    def __init__(
        self,
        aliases: Optional[AliasTable] = None,
        weights: Optional[ScoringWeights] = None,
    ):
        self.aliases = aliases or AliasTable()
        self.weights = weights or ScoringWeights()

    def rank(
        self,
        query: str,
        candidates: Iterable[EventCandidate],
        district: Optional[str] = None,
        state: Optional[str] = None,
    ) -> list[EventCandidate]:
        """Scored copies of the candidates, highest score first (stable)."""
        variants = expand_query(query, self.aliases)
        scored = []
        for candidate in candidates:
            score, token_hits = score_candidate(
                candidate.name,
                candidate.key,
                variants,
                district=district,
                state=state,
                weights=self.weights,
            )
            scored.append(replace(candidate, score=score, token_hits=token_hits))
        return sorted(scored, key=lambda c: c.score, reverse=True)

    def resolve(
        self,
        query: str,
        candidates: Iterable[EventCandidate],
        district: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Resolution:
        """
        Best match plus the top alternatives.

        Raises:
            NoMatchError: no candidates, or the best score is zero
        """
        ranked = self.rank(query, candidates, district=district, state=state)
        top = ranked[: self.weights.candidate_limit]

        if not ranked or ranked[0].score == 0:
            raise NoMatchError(normalize(query), top)

        return Resolution(query=normalize(query), best=ranked[0], candidates=top)

    def resolve_records(
        self,
        query: str,
        records: Iterable[dict],
        district: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Resolution:
        """Resolve against raw upstream event documents."""
        candidates = [
            EventCandidate.from_record(r) for r in records if isinstance(r, dict)
        ]
        return self.resolve(query, candidates, district=district, state=state)
