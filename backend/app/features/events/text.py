"""Text normalization shared by alias loading and event matching."""

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """Canonical form for matching.

    Lower-case, anything outside [a-z0-9] and whitespace becomes a space,
    whitespace runs collapse to one space, ends trimmed.

    "Glacier Peak (WA) Event #2" → "glacier peak wa event 2"
    """
    if text is None:
        return ""
    lowered = str(text).lower()
    cleaned = _NON_ALNUM.sub(" ", lowered)
    return _WHITESPACE.sub(" ", cleaned).strip()
