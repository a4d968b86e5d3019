"""Region filters for Statbotics list endpoints."""

from dataclasses import dataclass
from typing import Optional

from app.config import settings


@dataclass(frozen=True)
class RegionFilter:
    """District/state/country filter for list endpoints."""

    district: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.district or self.state or self.country)

    def with_default(self, default_district: Optional[str] = None) -> "RegionFilter":
        """Fall back to the default district (pnw) when no region is given."""
        if not self.is_empty:
            return self
        district = settings.default_district if default_district is None else default_district
        return RegionFilter(district=district or None)

    def as_params(self) -> dict:
        return {
            "district": self.district,
            "state": self.state,
            "country": self.country,
        }
