"""
Unit tests for tiered coordinate lookup.
"""

import math

import pytest

from addressmap.core.coordinate_resolver import CoordinateResolver
from addressmap.core.coordinates import CITY_TABLES, STATE_CENTROIDS, US_CENTER
from addressmap.models.map_data import GeoPoint, ParsedAddress


def parsed(city=None, state=None, full_address="test"):
    return ParsedAddress(full_address=full_address, city=city, state=state)


class TestResolve:
    """Tests for CoordinateResolver.resolve."""

    def test_city_tier_wins_over_state(self, resolver):
        """Should return the curated city coordinate, not the state centroid."""
        result = resolver.resolve(parsed(city="Ontario", state="California"))

        assert result == GeoPoint(lat=34.0633, lng=-117.5916)
        assert result != STATE_CENTROIDS["California"]

    def test_city_with_leading_street_text(self, resolver):
        """Should match a curated city that ends the captured city text."""
        result = resolver.resolve(parsed(city="1 Mills Circle Ontario", state="California"))

        assert result == CITY_TABLES["California"]["Ontario"]

    def test_longest_city_name_preferred(self, resolver):
        """Should match multi-word city names as a whole."""
        result = resolver.resolve(parsed(city="100 Main St Los Angeles", state="California"))

        assert result == CITY_TABLES["California"]["Los Angeles"]

    def test_partial_word_does_not_match(self, resolver):
        """Should not treat a city name embedded in another word as a match."""
        result = resolver.resolve(parsed(city="Fontario", state="California"))

        assert result == STATE_CENTROIDS["California"]

    def test_unknown_city_falls_back_to_state(self, resolver):
        """Should return the state centroid for cities outside the curated table."""
        result = resolver.resolve(parsed(city="Fresno", state="California"))

        assert result == STATE_CENTROIDS["California"]

    def test_state_without_city_table(self, resolver):
        """Should return the centroid for states with no curated cities."""
        result = resolver.resolve(parsed(city="Austin", state="Texas"))

        assert result == STATE_CENTROIDS["Texas"]

    def test_state_only_skips_city_tier(self):
        """Should go straight to the centroid when no city was parsed."""

        class StrictTables(dict):
            def get(self, key, default=None):
                raise AssertionError("city tables consulted without a city")

        resolver = CoordinateResolver(city_tables=StrictTables())

        assert resolver.resolve(parsed(state="California")) == STATE_CENTROIDS["California"]

    def test_unknown_state_uses_fallback(self, resolver):
        """Should return the fixed fallback center for unknown states."""
        result = resolver.resolve(parsed(state="Atlantis"))

        assert result == GeoPoint(lat=39.8283, lng=-98.5795)

    def test_all_fields_absent(self, resolver):
        """Should resolve an unstructured address to the fallback point."""
        result = resolver.resolve(ParsedAddress(full_address="Unknown Place"))

        assert result == US_CENTER

    def test_custom_fallback(self):
        """Should use the injected fallback point."""
        fallback = GeoPoint(lat=1.0, lng=2.0)
        resolver = CoordinateResolver(fallback=fallback)

        assert resolver.resolve(ParsedAddress(full_address="")) == fallback

    @pytest.mark.parametrize("state", sorted(STATE_CENTROIDS))
    def test_every_state_resolves_to_finite_point(self, resolver, state):
        """Should return finite coordinates for all 50 states."""
        result = resolver.resolve(parsed(state=state))

        assert math.isfinite(result.lat)
        assert math.isfinite(result.lng)


class TestCoordinateTables:
    """Tests for the static coordinate tables."""

    def test_fifty_states(self):
        """Should carry a centroid for each of the 50 states."""
        assert len(STATE_CENTROIDS) == 50

    def test_tables_are_read_only(self):
        """Should reject mutation of the lookup tables."""
        with pytest.raises(TypeError):
            STATE_CENTROIDS["Atlantis"] = US_CENTER
