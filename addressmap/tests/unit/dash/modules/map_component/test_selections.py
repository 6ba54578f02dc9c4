"""
Unit tests for the store-backed selection host.
"""

import pytest

from addressmap.core.exceptions import SelectionStateError
from addressmap.core.selection import SelectionProtocol, ValueSelector
from addressmap.dash.modules.map_component.selections import (
    ROW_SOURCE_TYPE,
    SOURCE_TYPE,
    StoreSelections,
)


def entries(store, source):
    return [v for v in store["interactive_components_values"] if v.get("source") == source]


@pytest.fixture
def host():
    return StoreSelections(None, component_index="map-1", column_name="address", dc_id="/qHyperCubeDef")


class TestStoreSelectionsProtocol:
    """Tests for begin/select/confirm."""

    def test_confirm_writes_element_ids(self, host):
        """Should store the selected element ids on confirm."""
        host.begin("/qHyperCubeDef")
        host.select(0, [5], False)
        host.confirm()

        (entry,) = entries(host.store, SOURCE_TYPE)
        assert entry["value"] == [5]
        assert entry["index"] == "map-1"
        assert entry["column_name"] == "address"
        assert entry["dc_id"] == "/qHyperCubeDef"

    def test_nothing_written_before_confirm(self, host):
        """Should keep staged values out of the store until confirm."""
        host.begin("/qHyperCubeDef")
        host.select(0, [5], False)

        assert entries(host.store, SOURCE_TYPE) == []

    def test_single_select_replaces_previous(self):
        """Should replace a prior selection when toggle is false."""
        store = {
            "interactive_components_values": [
                {"index": "map-1", "source": SOURCE_TYPE, "value": [7]},
            ]
        }
        host = StoreSelections(store, component_index="map-1", column_name="address")

        host.begin("/qHyperCubeDef")
        host.select(0, [5], False)
        host.confirm()

        assert entries(host.store, SOURCE_TYPE)[0]["value"] == [5]

    def test_toggle_select_adds_and_removes(self, host):
        """Should toggle element ids when toggle is true."""
        host.begin("/qHyperCubeDef")
        host.select(0, [5, 7], True)
        host.select(0, [5], True)
        host.confirm()

        assert entries(host.store, SOURCE_TYPE)[0]["value"] == [7]

    def test_select_before_begin(self, host):
        """Should refuse select outside of a selection context."""
        with pytest.raises(SelectionStateError):
            host.select(0, [5], False)

    def test_confirm_before_begin(self, host):
        """Should refuse confirm outside of a selection context."""
        with pytest.raises(SelectionStateError):
            host.confirm()

    def test_unknown_dimension(self, host):
        """Should only accept the single bound dimension."""
        host.begin("/qHyperCubeDef")

        with pytest.raises(SelectionStateError):
            host.select(1, [5], False)

    def test_confirm_closes_context(self, host):
        """Should require a new begin after confirm."""
        host.begin("/qHyperCubeDef")
        host.confirm()

        assert not host.is_active


class TestStoreSelectionsValues:
    """Tests for select_values."""

    def test_writes_row_indices(self, host):
        """Should store row indices under the row selection source."""
        host.select_values("/qHyperCubeDef", 0, [0], True)

        assert entries(host.store, ROW_SOURCE_TYPE)[0]["value"] == [0]

    def test_toggle_twice_clears(self, host):
        """Should remove the entry when the only index is toggled off."""
        host.select_values("/qHyperCubeDef", 0, [0], True)
        host.select_values("/qHyperCubeDef", 0, [0], True)

        assert entries(host.store, ROW_SOURCE_TYPE) == []

    def test_keeps_other_components(self):
        """Should leave entries of other components untouched."""
        other = {"index": "slider-1", "value": [0, 10], "source": "range"}
        host = StoreSelections(
            {"interactive_components_values": [other]}, component_index="map-1", column_name="address"
        )

        host.select_values("/qHyperCubeDef", 0, [3], True)

        assert other in host.store["interactive_components_values"]
        assert len(host.store["interactive_components_values"]) == 2

    def test_does_not_mutate_input_store(self):
        """Should build a new store instead of editing the received one."""
        original = {"interactive_components_values": [], "first_load": True}
        host = StoreSelections(original, component_index="map-1", column_name="address")

        host.select_values("/qHyperCubeDef", 0, [3], True)

        assert original["interactive_components_values"] == []

    def test_satisfies_protocols(self, host):
        """Should be usable as both host selection entry points."""
        assert isinstance(host, SelectionProtocol)
        assert isinstance(host, ValueSelector)
