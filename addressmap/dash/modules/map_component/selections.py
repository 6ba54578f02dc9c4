"""
Address Map Component - Store-backed host selections.

Implements the host selection protocol on top of the Dash
interactive-values-store so other components can react to map clicks.

- begin/select/confirm writes a ``map_selection`` entry holding element ids
- select_values writes a ``map_row_selection`` entry holding row indices
"""

from collections.abc import Sequence
from typing import Any

from addressmap.configs.logging_init import logger
from addressmap.core.exceptions import SelectionStateError
from addressmap.dash.modules.shared.selection_utils import (
    create_selection_entry,
    filter_existing_values,
    find_selection_values,
    initialize_store,
    merge_selection_values,
)

SOURCE_TYPE = "map_selection"
ROW_SOURCE_TYPE = "map_row_selection"


def _apply(current: list[int], incoming: Sequence[int], toggle: bool) -> list[int]:
    if not toggle:
        return list(dict.fromkeys(incoming))
    result = list(current)
    for value in incoming:
        if value in result:
            result.remove(value)
        else:
            result.append(value)
    return result


class StoreSelections:
    """Selection host backed by one interactive-values-store snapshot.

    Args:
        current_store: Store data as received by the callback (not mutated)
        component_index: Map component index used as the entry key
        column_name: Dimension column the element ids belong to
        dc_id: Data binding identifier stored with the entries
    """

    def __init__(
        self,
        current_store: dict[str, Any] | None,
        component_index: str,
        column_name: str,
        dc_id: str | None = None,
    ):
        self.store = initialize_store(current_store)
        self.component_index = component_index
        self.column_name = column_name
        self.dc_id = dc_id
        self._binding_path: str | None = None
        self._staged: list[int] = []

    @property
    def is_active(self) -> bool:
        return self._binding_path is not None

    def begin(self, binding_path: str) -> None:
        self._binding_path = binding_path
        self._staged = find_selection_values(self.store, SOURCE_TYPE, self.component_index)

    def select(self, dimension_index: int, element_ids: Sequence[int], toggle: bool) -> None:
        if not self.is_active:
            raise SelectionStateError("select() called before begin()")
        if dimension_index != 0:
            raise SelectionStateError(f"Unknown dimension index {dimension_index}")
        self._staged = _apply(self._staged, element_ids, toggle)

    def confirm(self) -> None:
        if not self.is_active:
            raise SelectionStateError("confirm() called before begin()")
        self._write(SOURCE_TYPE, self._staged)
        logger.debug(f"Confirmed {SOURCE_TYPE} for {self.component_index}: {self._staged}")
        self._binding_path = None
        self._staged = []

    def select_values(
        self,
        binding_path: str,
        dimension_index: int,
        row_indices: Sequence[int],
        toggle: bool,
    ) -> None:
        current = find_selection_values(self.store, ROW_SOURCE_TYPE, self.component_index)
        self._write(ROW_SOURCE_TYPE, _apply(current, row_indices, toggle))

    def _write(self, source_type: str, values: list[int]) -> None:
        existing = filter_existing_values(self.store, source_type, self.component_index)
        entries = []
        if values:
            entries.append(
                create_selection_entry(
                    component_index=self.component_index,
                    values=values,
                    source_type=source_type,
                    column_name=self.column_name,
                    dc_id=self.dc_id,
                )
            )
        self.store = merge_selection_values(existing, entries)
