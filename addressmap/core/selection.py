"""
Host selection protocol.

The host application owns selection state; the map only issues requests.
Two entry points exist: the scoped begin/select/confirm protocol addressing
element identifiers, and a direct value selection addressing row indices.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class SelectionProtocol(Protocol):
    def begin(self, binding_path: str) -> None: ...

    def select(self, dimension_index: int, element_ids: Sequence[int], toggle: bool) -> None: ...

    def confirm(self) -> None: ...


@runtime_checkable
class ValueSelector(Protocol):
    def select_values(
        self,
        binding_path: str,
        dimension_index: int,
        row_indices: Sequence[int],
        toggle: bool,
    ) -> None: ...
