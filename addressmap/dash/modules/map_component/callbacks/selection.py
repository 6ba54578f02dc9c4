"""
Address Map Component - Click Selection Callback.

Resolves a clicked marker to its source row through the stored render pass
and forwards the selection to the interactive-values-store, which acts as
the host selection object for the rest of the dashboard.
"""

from typing import Any

import dash
from dash import ALL, Input, Output, State, ctx

from addressmap.configs.logging_init import logger
from addressmap.core.interaction import InteractionController
from addressmap.dash.modules.map_component.callbacks.interaction import extract_marker_point
from addressmap.dash.modules.map_component.selections import StoreSelections
from addressmap.dash.modules.map_component.utils import marker_trace_index
from addressmap.dash.modules.shared.selection_utils import build_metadata_lookup
from addressmap.models.map_data import RenderPass


def handle_map_click(
    click_data: dict[str, Any] | None,
    render_pass_data: dict[str, Any] | None,
    figure: dict[str, Any] | None,
    metadata: dict[str, Any] | None,
    component_index: str,
    current_store: dict[str, Any] | None,
) -> dict[str, Any]:
    """Apply one map click to the store.

    Raises:
        PreventUpdate: Nothing hit-testable was clicked.
    """
    metadata = metadata or {}
    if not metadata.get("selection_enabled", True) or not render_pass_data:
        raise dash.exceptions.PreventUpdate

    target = extract_marker_point(click_data, marker_trace_index(figure or {}))
    if target is None:
        raise dash.exceptions.PreventUpdate

    host = StoreSelections(
        current_store,
        component_index=component_index,
        column_name=metadata.get("dimension") or "",
        dc_id=metadata.get("binding_path"),
    )
    controller = InteractionController(
        RenderPass.model_validate(render_pass_data),
        selections=host,
        value_selector=host,
        binding_path=metadata.get("binding_path", "/qHyperCubeDef"),
    )

    if controller.click(target["row_index"], target["version"]) is None:
        raise dash.exceptions.PreventUpdate
    return host.store


def register_map_selection_callback(app):
    """Register callback to capture address map clicks.

    Args:
        app: Dash application instance.
    """

    logger.info("Registering address map selection callback")

    @app.callback(
        Output("interactive-values-store", "data", allow_duplicate=True),
        Input({"type": "address-map-graph", "index": ALL}, "clickData"),
        State({"type": "address-map-graph", "index": ALL}, "id"),
        State({"type": "address-map-graph", "index": ALL}, "figure"),
        State({"type": "address-map-render-pass", "index": ALL}, "data"),
        State({"type": "address-map-render-pass", "index": ALL}, "id"),
        State({"type": "stored-metadata-component", "index": ALL}, "data"),
        State({"type": "stored-metadata-component", "index": ALL}, "id"),
        State("interactive-values-store", "data"),
        prevent_initial_call=True,
    )
    def update_store_from_map_click(
        click_data_list: list[dict[str, Any] | None],
        graph_ids: list[dict[str, str]],
        figures: list[dict[str, Any] | None],
        render_passes: list[dict[str, Any] | None],
        render_pass_ids: list[dict[str, str]],
        metadata_list: list[dict[str, Any] | None],
        metadata_ids: list[dict[str, str]],
        current_store: dict[str, Any] | None,
    ) -> dict[str, Any]:
        triggered = ctx.triggered_id
        if not isinstance(triggered, dict):
            raise dash.exceptions.PreventUpdate

        index = triggered.get("index")
        position = next((i for i, g in enumerate(graph_ids) if g.get("index") == index), None)
        if position is None:
            raise dash.exceptions.PreventUpdate

        return handle_map_click(
            click_data_list[position],
            build_metadata_lookup(render_passes, render_pass_ids).get(index),
            figures[position] if position < len(figures) else None,
            build_metadata_lookup(metadata_list, metadata_ids).get(index),
            index,
            current_store,
        )
