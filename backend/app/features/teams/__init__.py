"""Team summaries feature module."""

from .service import TeamService, recent_seasons, SKIPPED_SEASONS

__all__ = [
    "TeamService",
    "recent_seasons",
    "SKIPPED_SEASONS",
]
