"""
Tiered coordinate lookup.

1. city table of the parsed state
2. state centroid
3. fixed fallback point

The resolver never fails: precision degrades from city to state to country.
"""

import re
from collections.abc import Mapping

from addressmap.configs.logging_init import logger
from addressmap.core.coordinates import CITY_TABLES, STATE_CENTROIDS, US_CENTER
from addressmap.models.map_data import GeoPoint, ParsedAddress


class CoordinateResolver:
    def __init__(
        self,
        city_tables: Mapping[str, Mapping[str, GeoPoint]] = CITY_TABLES,
        state_centroids: Mapping[str, GeoPoint] = STATE_CENTROIDS,
        fallback: GeoPoint = US_CENTER,
    ):
        self.city_tables = city_tables
        self.state_centroids = state_centroids
        self.fallback = fallback

    def _match_city(self, city: str, cities: Mapping[str, GeoPoint]) -> GeoPoint | None:
        """Exact city match, else the longest curated name ending the captured text.

        The parser's city group usually carries street text in front of the
        city ("1 Mills Circle Ontario"), so a trailing whole-word match counts.
        """
        if city in cities:
            return cities[city]

        for name in sorted(cities, key=len, reverse=True):
            if re.search(rf"(?:^|\s){re.escape(name)}$", city):
                return cities[name]
        return None

    def resolve(self, parsed: ParsedAddress) -> GeoPoint:
        if parsed.is_structured:
            cities = self.city_tables.get(parsed.state)
            if cities:
                point = self._match_city(parsed.city, cities)
                if point is not None:
                    return point

        if parsed.state:
            centroid = self.state_centroids.get(parsed.state)
            if centroid is not None:
                return centroid

        logger.debug(f"No city or state match for '{parsed.full_address}', using fallback point")
        return self.fallback
