"""
Unit tests for address map build and render utilities.
"""

from addressmap.dash.modules.map_component.utils import (
    LEGEND_TITLE,
    MARKER_TRACE,
    build_map,
    error_figure,
    legend_entries,
    marker_trace_index,
    no_data_figure,
    render_map,
    resolve_canvas_size,
)


class TestBuildMap:
    """Tests for build_map function."""

    def test_component_ids(self):
        """Should create stores, graph and tooltip keyed by the component index."""
        component = build_map(index="map-1", dimension="address", measure="revenue")

        ids = [child.id for child in component.children]

        assert {"type": "address-map-trigger", "index": "map-1"} in ids
        assert {"type": "address-map-render-pass", "index": "map-1"} in ids
        assert {"type": "address-map-hover", "index": "map-1"} in ids
        assert {"type": "stored-metadata-component", "index": "map-1"} in ids
        assert {"type": "address-map-graph", "index": "map-1"} in ids
        assert {"type": "address-map-tooltip", "index": "map-1"} in ids

    def test_trigger_data(self):
        """Should pass binding and columns to the render callback."""
        component = build_map(
            index="map-1",
            dimension="address",
            measure="revenue",
            title="Stores",
            geometry_url="http://custom/atlas.json",
        )

        trigger = component.children[0].data

        assert trigger["binding_path"] == "/qHyperCubeDef"
        assert trigger["dimension"] == "address"
        assert trigger["measure"] == "revenue"
        assert trigger["title"] == "Stores"
        assert trigger["selection_enabled"] is True
        assert trigger["geometry_url"] == "http://custom/atlas.json"


class TestResolveCanvasSize:
    """Tests for resolve_canvas_size function."""

    def test_unmeasured_container(self):
        """Should fall back to the 975x610 canvas."""
        assert resolve_canvas_size(None, None) == (975.0, 610.0)

    def test_measured_container(self):
        """Should use the measured size."""
        assert resolve_canvas_size(500, 300) == (500.0, 300.0)


class TestRenderMap:
    """Tests for render_map function."""

    def test_trace_layout(self, rendered, square_state):
        """Should draw states, markers and legend in that order."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [square_state])

        assert [trace.name for trace in fig.data] == ["states", MARKER_TRACE, "legend"]
        assert marker_trace_index(fig) == 1

    def test_marker_customdata(self, rendered, square_state):
        """Should tag each marker with its row index and render pass version."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [square_state])
        customdata = [list(c) for c in fig.data[1].customdata]

        assert customdata == [[0, render_pass.version], [1, render_pass.version]]

    def test_marker_encoding(self, rendered, square_state):
        """Should size and color markers from the render pass."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [square_state])
        marker = fig.data[1].marker

        assert list(marker.size) == [2 * p.radius for p in render_pass.points]
        assert list(marker.color) == [p.color for p in render_pass.points]
        assert list(marker.line.color) == ["#fff", "#fff"]

    def test_unplaceable_points_not_drawn(self, offshore_rendered):
        """Should only draw markers with screen coordinates."""
        render_pass, scale = offshore_rendered

        fig = render_map(render_pass, scale, [])

        assert len(fig.data[1].x) == 1
        assert [list(c)[0] for c in fig.data[1].customdata] == [0]

    def test_legend(self, rendered):
        """Should label minimum, median and maximum under the legend title."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [])

        assert list(fig.data[2].text) == ["50", "75", "100"]
        assert any(LEGEND_TITLE in a.text for a in fig.layout.annotations)

    def test_state_rings(self, rendered, square_state):
        """Should draw each ring followed by a gap."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [square_state])

        assert list(fig.data[0].x) == [100.0, 200.0, 200.0, 100.0, None]

    def test_default_canvas_size(self, rendered):
        """Should size the figure to the logical canvas when unmeasured."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [])

        assert fig.layout.width == 975
        assert fig.layout.height == 610
        assert tuple(fig.layout.yaxis.range) == (610, 0)

    def test_title(self, rendered):
        """Should add the component title when given."""
        render_pass, scale = rendered

        fig = render_map(render_pass, scale, [], title="Stores")

        assert fig.layout.title.text == "Stores"


class TestLegendEntries:
    """Tests for legend_entries function."""

    def test_entries_use_scale(self, rendered):
        """Should draw legend markers with the current scale."""
        _, scale = rendered

        entries = legend_entries([50, 100], scale)

        assert [e["radius"] for e in entries] == [5, scale.radius_for(75), 20]
        assert entries[-1]["color"] == scale.color_for(100)


class TestPlaceholders:
    """Tests for placeholder figures."""

    def test_no_data(self):
        """Should show the no data message."""
        fig = no_data_figure()

        assert fig.layout.annotations[0].text == "No data available"

    def test_error(self):
        """Should show the error message in red."""
        fig = error_figure("Error loading map: Failed to load map data: Not Found")

        annotation = fig.layout.annotations[0]
        assert annotation.text == "Error loading map: Failed to load map data: Not Found"
        assert annotation.font.color == "red"

    def test_marker_trace_index_missing(self):
        """Should return None for figures without markers."""
        assert marker_trace_index(no_data_figure()) is None
        assert marker_trace_index({"data": [{"name": "states"}]}) is None
