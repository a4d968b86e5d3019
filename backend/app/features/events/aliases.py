"""Alias table loader: reads aliases.yaml and expands shorthand queries."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml

from .text import normalize

logger = logging.getLogger(__name__)


class AliasTable:
    """Read-only mapping: normalized shorthand → normalized phrases."""

    def __init__(self, aliases: Mapping[str, Iterable[str]] | None = None):
        table: dict[str, tuple[str, ...]] = {}
        for shorthand, phrases in (aliases or {}).items():
            key = normalize(shorthand)
            if not key:
                continue
            if isinstance(phrases, str):
                phrases = [phrases]
            expanded = list(table.get(key, ()))
            for phrase in phrases:
                norm = normalize(phrase)
                if norm and norm not in expanded:
                    expanded.append(norm)
            table[key] = tuple(expanded)
        self._table = MappingProxyType(table)

    @classmethod
    def load(cls, path: Path) -> "AliasTable":
        """Load from a YAML file with a top-level `aliases` mapping."""
        if not path.exists():
            logger.warning(f"Alias file not found: {path}")
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        table = cls(data.get("aliases") or {})
        logger.info(f"Loaded {len(table)} event aliases from {path}")
        return table

    def expansions(self, normalized_query: str) -> tuple[str, ...]:
        return self._table.get(normalized_query, ())

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)
