"""
Address Map Component - Hover Callback.

Applies highlight directives to the marker trace with a Dash Patch and
shows the tooltip next to the hovered marker. The last hovered marker is
kept in the component's hover store so the next event can reverse it.
"""

from typing import Any

import dash
from dash import MATCH, Input, Output, Patch, State, html

from addressmap.core.interaction import InteractionController, MarkerStyle, TooltipDirective
from addressmap.dash.modules.map_component.utils import marker_trace_index
from addressmap.models.map_data import RenderPass

TOOLTIP_STYLE = {
    "background": "white",
    "border": "1px solid #ddd",
    "borderRadius": "4px",
    "padding": "8px",
    "boxShadow": "0 2px 10px rgba(0,0,0,0.1)",
}


def extract_marker_point(event_data: dict[str, Any] | None, trace_index: int | None) -> dict | None:
    """Return ``{row_index, version, point_number, bbox}`` for a marker event.

    Events on other traces (state shapes, legend) or without customdata
    return None.
    """
    if not event_data or trace_index is None:
        return None

    for point in event_data.get("points", []):
        if point.get("curveNumber") != trace_index:
            continue
        customdata = point.get("customdata")
        if not isinstance(customdata, list) or len(customdata) < 2:
            continue
        return {
            "row_index": int(customdata[0]),
            "version": customdata[1],
            "point_number": point.get("pointNumber", point.get("pointIndex")),
            "bbox": point.get("bbox"),
        }
    return None


def _apply_style(patch: Patch, trace_index: int, point_number: int, style: MarkerStyle) -> None:
    marker = patch["data"][trace_index]["marker"]
    marker["line"]["color"][point_number] = style.stroke
    marker["line"]["width"][point_number] = style.stroke_width
    marker["opacity"][point_number] = style.opacity


def tooltip_children(tooltip: TooltipDirective) -> html.Div:
    return html.Div(
        [html.Strong(tooltip.address), html.Br(), tooltip.value_label],
        style=TOOLTIP_STYLE,
    )


def handle_hover(
    hover_data: dict[str, Any] | None,
    render_pass_data: dict[str, Any] | None,
    hover_state: dict[str, Any] | None,
    figure: dict[str, Any] | None,
) -> tuple:
    """Compute (figure patch, tooltip show, bbox, children, hover state)."""
    if not render_pass_data or not figure:
        raise dash.exceptions.PreventUpdate

    render_pass = RenderPass.model_validate(render_pass_data)
    trace_index = marker_trace_index(figure)
    target = extract_marker_point(hover_data, trace_index)

    previous = hover_state if hover_state and hover_state.get("version") == render_pass.version else None
    if previous and target and target["row_index"] == previous["row_index"]:
        raise dash.exceptions.PreventUpdate

    controller = InteractionController(
        render_pass, hovered=[previous["row_index"]] if previous else []
    )
    patch = Patch()
    show, bbox, children, new_state = False, dash.no_update, dash.no_update, None

    if previous:
        directives = controller.hover_exit(previous["row_index"])
        if directives:
            _apply_style(patch, trace_index, previous["point_number"], directives.highlight.style)

    if target:
        directives = controller.hover_enter(target["row_index"], target["version"])
        if directives:
            _apply_style(patch, trace_index, target["point_number"], directives.highlight.style)
            show = directives.tooltip.visible
            bbox = target["bbox"]
            children = tooltip_children(directives.tooltip)
            new_state = {
                "row_index": target["row_index"],
                "point_number": target["point_number"],
                "version": render_pass.version,
            }

    if not previous and new_state is None:
        raise dash.exceptions.PreventUpdate

    return patch, show, bbox, children, new_state


def register_hover_callback(app):
    """Register hover highlight and tooltip callback for address maps."""

    @app.callback(
        Output({"type": "address-map-graph", "index": MATCH}, "figure", allow_duplicate=True),
        Output({"type": "address-map-tooltip", "index": MATCH}, "show"),
        Output({"type": "address-map-tooltip", "index": MATCH}, "bbox"),
        Output({"type": "address-map-tooltip", "index": MATCH}, "children"),
        Output({"type": "address-map-hover", "index": MATCH}, "data"),
        Input({"type": "address-map-graph", "index": MATCH}, "hoverData"),
        State({"type": "address-map-render-pass", "index": MATCH}, "data"),
        State({"type": "address-map-hover", "index": MATCH}, "data"),
        State({"type": "address-map-graph", "index": MATCH}, "figure"),
        prevent_initial_call=True,
    )
    def update_hover(hover_data, render_pass_data, hover_state, figure):
        return handle_hover(hover_data, render_pass_data, hover_state, figure)
