"""
Statbotics upstream integration.

Usage:
    from app.features.statbotics import StatboticsClient, UpstreamError
"""

from .client import (
    StatboticsClient,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
    clean_params,
)
from .filters import RegionFilter

__all__ = [
    "RegionFilter",
    "StatboticsClient",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
    "clean_params",
]
