"""
Shared utilities for selections written to the interactive-values-store.

Store layout::

    {
        "interactive_components_values": [
            {"index": ..., "value": [...], "source": ..., "column_name": ..., "dc_id": ...},
        ],
        "first_load": False,
    }
"""

from typing import Any


def initialize_store(current_store: dict[str, Any] | None) -> dict[str, Any]:
    """Initialize or return existing interactive-values-store.

    Args:
        current_store: Current store data or None

    Returns:
        Initialized store dictionary
    """
    if current_store is None:
        return {"interactive_components_values": [], "first_load": False}
    return current_store


def filter_existing_values(
    current_store: dict[str, Any],
    source_type: str,
    component_index: str | None = None,
) -> list[dict[str, Any]]:
    """Get existing store values excluding one source type.

    Args:
        current_store: Current store data
        source_type: Source type to exclude (e.g., "map_selection")
        component_index: When given, only that component's entries are excluded

    Returns:
        List of remaining values
    """
    return [
        v
        for v in current_store.get("interactive_components_values", [])
        if not (
            v.get("source") == source_type
            and (component_index is None or v.get("index") == component_index)
        )
    ]


def find_selection_values(
    current_store: dict[str, Any],
    source_type: str,
    component_index: str,
) -> list[Any]:
    """Return the values currently stored for one component and source."""
    for v in current_store.get("interactive_components_values", []):
        if v.get("source") == source_type and v.get("index") == component_index:
            return list(v.get("value") or [])
    return []


def create_selection_entry(
    component_index: str,
    values: list[Any],
    source_type: str,
    column_name: str,
    dc_id: str | None,
) -> dict[str, Any]:
    """Create a standardized selection entry for the store.

    Args:
        component_index: Unique component identifier
        values: List of selected values
        source_type: Selection source (e.g., "map_selection", "map_row_selection")
        column_name: Name of the column being filtered
        dc_id: Data binding identifier

    Returns:
        Selection entry dictionary
    """
    return {
        "index": component_index,
        "value": values,
        "source": source_type,
        "column_name": column_name,
        "dc_id": dc_id,
    }


def merge_selection_values(
    existing_values: list[dict[str, Any]],
    selection_values: list[dict[str, Any]],
) -> dict[str, Any]:
    """Merge existing store values with new selection values.

    Args:
        existing_values: Values from store (excluding the replaced entries)
        selection_values: New selection values to add

    Returns:
        Updated store dictionary
    """
    return {
        "interactive_components_values": existing_values + selection_values,
        "first_load": False,
    }


def build_metadata_lookup(
    metadata_list: list[dict[str, Any] | None],
    metadata_ids: list[dict[str, str]],
) -> dict[str, Any]:
    """Build a lookup dictionary mapping component index to store data.

    Args:
        metadata_list: Store data, one entry per component
        metadata_ids: Matching store IDs

    Returns:
        Dictionary mapping component index to data (None entries skipped)
    """
    lookup: dict[str, Any] = {}
    for i, meta_id in enumerate(metadata_ids):
        if i < len(metadata_list) and metadata_list[i]:
            index = meta_id.get("index") if isinstance(meta_id, dict) else str(meta_id)
            lookup[index] = metadata_list[i]
    return lookup
