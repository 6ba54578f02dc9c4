"""
Unit tests for row projection and render pass building.
"""

import math

import pytest

from addressmap.core.coordinates import CITY_TABLES, US_CENTER
from addressmap.core.exceptions import DataUnavailable, StaleRenderPassError
from addressmap.core.row_projector import build_render_pass, dataset_version, project_row
from addressmap.core.value_scaler import build_scale_context
from addressmap.models.map_data import SourceRow


class TestBuildRenderPass:
    """Tests for build_render_pass function."""

    def test_two_row_dataset(self, rendered):
        """Should resolve the structured row to Ontario and the other to the fallback."""
        render_pass, _ = rendered
        ontario, unknown = render_pass.points

        assert len(render_pass.points) == 2
        assert ontario.geo_point == CITY_TABLES["California"]["Ontario"]
        assert unknown.geo_point == US_CENTER
        assert ontario.radius > unknown.radius

    def test_colors_follow_value_order(self, rendered):
        """Should give the larger value the later palette position."""
        render_pass, scale = rendered
        ontario, unknown = render_pass.points

        assert scale.color_position(ontario.source_row.value) > scale.color_position(
            unknown.source_row.value
        )
        assert ontario.color == scale.color_for(100)
        assert unknown.color == scale.color_for(50)

    def test_points_indexed_by_row(self, rendered):
        """Should keep one point per row at its row index."""
        render_pass, _ = rendered

        assert [p.row_index for p in render_pass.points] == [0, 1]
        assert render_pass.point_at(1).source_row.element_id == 7
        assert render_pass.point_at(2) is None

    def test_points_are_placed(self, rendered):
        """Should give both US points screen coordinates."""
        render_pass, _ = rendered

        assert all(p.is_placeable for p in render_pass.points)

    def test_unplaceable_point_kept_without_coordinates(self, offshore_rendered):
        """Should keep rows outside the projection but without screen coordinates."""
        render_pass, _ = offshore_rendered
        offshore = render_pass.point_at(1)

        assert offshore.screen_x is None
        assert offshore.screen_y is None
        assert not offshore.is_placeable
        assert len(render_pass.placeable_points) == 1

    def test_scale_version_matches_pass(self, rendered):
        """Should build the scale for the same dataset version as the pass."""
        render_pass, scale = rendered

        assert scale.version == render_pass.version

    def test_empty_rows_raise(self, resolver, projection):
        """Should raise DataUnavailable without rows."""
        with pytest.raises(DataUnavailable):
            build_render_pass([], resolver, projection)

    def test_rejects_scale_from_other_dataset(self, two_rows, resolver, projection):
        """Should refuse a scale built for another dataset version."""
        stale = build_scale_context([1, 2], version="old")

        with pytest.raises(StaleRenderPassError):
            build_render_pass(two_rows, resolver, projection, scale=stale)

    def test_accepts_matching_scale(self, two_rows, resolver, projection):
        """Should reuse a scale built for this dataset version."""
        scale = build_scale_context([50, 100], version=dataset_version(two_rows))

        _, used = build_render_pass(two_rows, resolver, projection, scale=scale)

        assert used is scale

    def test_nan_value_row_still_projected(self, resolver, projection):
        """Should project rows with missing values using the minimum radius."""
        rows = [
            SourceRow(address_text="Austin, Texas 78701", value=10, element_id=0, row_index=0),
            SourceRow(address_text="Dallas, Texas 75201", value=math.nan, element_id=1, row_index=1),
            SourceRow(address_text="Houston, Texas 77002", value=20, element_id=2, row_index=2),
        ]

        render_pass, scale = build_render_pass(rows, resolver, projection)

        assert len(render_pass.points) == 3
        assert scale.color_domain == (10, 20)
        assert render_pass.point_at(1).radius == 5


class TestProjectRow:
    """Tests for project_row function."""

    def test_pure_given_inputs(self, two_rows, resolver, projection):
        """Should produce equal points for equal inputs."""
        scale = build_scale_context([50, 100])

        first = project_row(two_rows[0], resolver, scale, projection)
        second = project_row(two_rows[0], resolver, scale, projection)

        assert first == second

    def test_uses_injected_projection(self, two_rows, resolver):
        """Should take screen coordinates from the projection callable."""
        scale = build_scale_context([50, 100])

        point = project_row(two_rows[1], resolver, scale, lambda c: (1.0, 2.0))

        assert (point.screen_x, point.screen_y) == (1.0, 2.0)


class TestDatasetVersion:
    """Tests for dataset_version function."""

    def test_stable_for_equal_rows(self, two_rows):
        """Should hash equal datasets to the same version."""
        assert dataset_version(two_rows) == dataset_version(list(two_rows))

    def test_changes_with_values(self, two_rows):
        """Should change when a value changes."""
        changed = [two_rows[0].model_copy(update={"value": 101}), two_rows[1]]

        assert dataset_version(changed) != dataset_version(two_rows)
