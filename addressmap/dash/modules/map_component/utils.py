"""
Address Map Component - Build and Render Utilities.

Provides build_map() for skeleton creation and render_map() for figure
generation. Figures are drawn in the 975x610 canvas space shared by the
pre-projected state atlas and the Albers USA marker projection.
"""

from typing import Any

import plotly.graph_objects as go
from dash import dcc, html

from addressmap.configs.settings_models import MapConfig
from addressmap.core.geometry import feature_rings
from addressmap.core.interaction import RESTING_STYLE, format_value
from addressmap.core.value_scaler import ScaleContext, legend_values
from addressmap.models.map_data import RenderPass

STATE_FILL = "#f0f0f0"
STATE_STROKE = "#999"
STATE_STROKE_WIDTH = 0.5

LEGEND_TITLE = "Location Values"
LEGEND_OFFSET = (50, 100)
LEGEND_SPACING = 25

MARKER_TRACE = "address-markers"


def build_map(**kwargs) -> html.Div:
    """Build map component skeleton with stores, graph and tooltip.

    Args:
        **kwargs: Component metadata (index, binding_path, dimension, title, ...)

    Returns:
        html.Div containing stores, graph placeholder and tooltip.
    """
    index = kwargs.get("index", "")

    trigger_data = {
        "binding_path": kwargs.get("binding_path", "/qHyperCubeDef"),
        "dimension": kwargs.get("dimension"),
        "measure": kwargs.get("measure"),
        "width": kwargs.get("width"),
        "height": kwargs.get("height"),
        "title": kwargs.get("title"),
        "selection_enabled": kwargs.get("selection_enabled", True),
        "geometry_url": kwargs.get("geometry_url"),
    }

    return html.Div(
        [
            dcc.Store(id={"type": "address-map-trigger", "index": index}, data=trigger_data),
            dcc.Store(id={"type": "address-map-render-pass", "index": index}, data=None),
            dcc.Store(id={"type": "address-map-hover", "index": index}, data=None),
            dcc.Store(id={"type": "stored-metadata-component", "index": index}, data=kwargs),
            dcc.Graph(
                id={"type": "address-map-graph", "index": index},
                clear_on_unhover=True,
                config={"displayModeBar": False, "scrollZoom": False},
                style={"height": "100%", "width": "100%"},
            ),
            dcc.Tooltip(id={"type": "address-map-tooltip", "index": index}),
        ],
        style={"height": "100%", "width": "100%", "position": "relative"},
    )


def resolve_canvas_size(
    width: float | None, height: float | None, map_config: MapConfig | None = None
) -> tuple[float, float]:
    """Use the measured container size, or the logical canvas when unmeasured."""
    map_config = map_config or MapConfig()
    if not width or not height:
        return float(map_config.canvas_width), float(map_config.canvas_height)
    return float(width), float(height)


def _message_figure(text: str, color: str | None = None) -> go.Figure:
    fig = go.Figure()
    font: dict[str, Any] = {"size": 14}
    if color:
        font["color"] = color
    fig.add_annotation(
        text=text, xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False, font=font
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)")
    return fig


def no_data_figure() -> go.Figure:
    return _message_figure("No data available")


def error_figure(message: str) -> go.Figure:
    return _message_figure(message, color="red")


def _state_trace(states: list[dict[str, Any]]) -> go.Scatter:
    xs: list[float | None] = []
    ys: list[float | None] = []
    for feature in states:
        for ring in feature_rings(feature):
            xs.extend(x for x, _ in ring)
            ys.extend(y for _, y in ring)
            xs.append(None)
            ys.append(None)

    return go.Scatter(
        x=xs,
        y=ys,
        mode="lines",
        fill="toself",
        fillcolor=STATE_FILL,
        line={"color": STATE_STROKE, "width": STATE_STROKE_WIDTH},
        hoverinfo="skip",
        name="states",
    )


def _marker_trace(render_pass: RenderPass, pixel_scale: float) -> go.Scatter:
    points = render_pass.placeable_points
    return go.Scatter(
        x=[p.screen_x for p in points],
        y=[p.screen_y for p in points],
        mode="markers",
        marker={
            "size": [2 * p.radius * pixel_scale for p in points],
            "sizemode": "diameter",
            "color": [p.color for p in points],
            "opacity": [RESTING_STYLE.opacity] * len(points),
            "line": {
                "color": [RESTING_STYLE.stroke] * len(points),
                "width": [RESTING_STYLE.stroke_width] * len(points),
            },
        },
        customdata=[[p.row_index, render_pass.version] for p in points],
        hoverinfo="none",
        name=MARKER_TRACE,
    )


def legend_entries(values: list[float], scale: ScaleContext) -> list[dict[str, Any]]:
    """Legend rows for the minimum, median and maximum value."""
    return [
        {
            "value": value,
            "radius": scale.radius_for(value),
            "color": scale.color_for(value),
            "label": format_value(value),
        }
        for value in legend_values(values)
    ]


def _legend_trace(
    entries: list[dict[str, Any]], origin: tuple[float, float], pixel_scale: float
) -> go.Scatter:
    x0, y0 = origin
    return go.Scatter(
        x=[x0] * len(entries),
        y=[y0 + i * LEGEND_SPACING for i in range(len(entries))],
        mode="markers+text",
        text=[entry["label"] for entry in entries],
        textposition="middle right",
        textfont={"size": 12},
        marker={
            "size": [2 * entry["radius"] * pixel_scale for entry in entries],
            "color": [entry["color"] for entry in entries],
            "opacity": RESTING_STYLE.opacity,
            "line": {"color": RESTING_STYLE.stroke, "width": RESTING_STYLE.stroke_width},
        },
        hoverinfo="skip",
        name="legend",
    )


def marker_trace_index(fig: go.Figure | dict) -> int | None:
    data = fig.get("data", []) if isinstance(fig, dict) else fig.data
    for i, trace in enumerate(data):
        name = trace.get("name") if isinstance(trace, dict) else trace.name
        if name == MARKER_TRACE:
            return i
    return None


def render_map(
    render_pass: RenderPass,
    scale: ScaleContext,
    states: list[dict[str, Any]],
    width: float | None = None,
    height: float | None = None,
    title: str | None = None,
    map_config: MapConfig | None = None,
) -> go.Figure:
    """Render the address map figure.

    Args:
        render_pass: Points of the current dataset version
        scale: Scale context the points were built with
        states: Decoded state features in canvas coordinates
        width: Measured container width, if any
        height: Measured container height, if any
        title: Optional figure title
        map_config: Canvas constants

    Returns:
        Plotly figure with state, marker and legend traces.
    """
    map_config = map_config or MapConfig()
    canvas_w, canvas_h = map_config.canvas_width, map_config.canvas_height
    width, height = resolve_canvas_size(width, height, map_config)
    pixel_scale = min(width / canvas_w, height / canvas_h)

    fig = go.Figure()
    fig.add_trace(_state_trace(states))
    fig.add_trace(_marker_trace(render_pass, pixel_scale))

    entries = legend_entries(render_pass.values, scale)
    if entries:
        origin = (LEGEND_OFFSET[0], canvas_h - LEGEND_OFFSET[1])
        fig.add_trace(_legend_trace(entries, origin, pixel_scale))
        fig.add_annotation(
            text=f"<b>{LEGEND_TITLE}</b>",
            x=origin[0],
            y=origin[1] - 30,
            xanchor="left",
            showarrow=False,
            font={"size": 14},
        )

    fig.update_xaxes(range=[0, canvas_w], visible=False, fixedrange=True)
    fig.update_yaxes(
        range=[canvas_h, 0], visible=False, fixedrange=True, scaleanchor="x", scaleratio=1
    )
    layout_kwargs: dict[str, Any] = {
        "width": width,
        "height": height,
        "margin": {"l": 0, "r": 0, "t": 30 if title else 0, "b": 0},
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "showlegend": False,
        "hovermode": "closest",
        "clickmode": "event",
        "dragmode": False,
        "uirevision": render_pass.version,
    }
    if title:
        layout_kwargs["title"] = {"text": title, "x": 0.5, "xanchor": "center", "font": {"size": 14}}
    fig.update_layout(**layout_kwargs)

    return fig
