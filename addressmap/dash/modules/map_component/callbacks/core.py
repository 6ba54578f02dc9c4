"""
Address Map Component - Core Rendering Callback.

Rebuilds the render pass whenever the host data page or the component
trigger changes, and stores the serialized pass for the interaction
callbacks. One MapView is kept per mounted component; views of components
that leave the layout are torn down so their in-flight renders are
discarded.
"""

import threading
from collections.abc import Iterable
from typing import Any

import dash
from dash import ALL, MATCH, Input, Output, State

from addressmap.configs.config import settings
from addressmap.configs.logging_init import logger
from addressmap.core.geometry import GeometryLoader
from addressmap.core.render_pass import MapView, RenderStatus
from addressmap.dash.modules.map_component.utils import error_figure, no_data_figure, render_map
from addressmap.models.map_data import DataPage

DATA_PAGE_STORE = "address-map-data-page"

_loaders: dict[str, GeometryLoader] = {}
_views: dict[str, MapView] = {}
_registry_lock = threading.Lock()


def get_loader(geometry_url: str | None = None) -> GeometryLoader:
    """Return the shared loader for a boundary URL, so each URL is fetched once."""
    url = geometry_url or settings.map.geometry_url
    with _registry_lock:
        loader = _loaders.get(url)
        if loader is None:
            loader = GeometryLoader(url, timeout=settings.performance.http_client_timeout)
            _loaders[url] = loader
        return loader


def get_map_view(index: str, geometry_url: str | None = None) -> MapView:
    """Return the mounted view for a component index, creating it on first use.

    A view whose boundary URL changed is torn down and replaced.
    """
    loader = get_loader(geometry_url)
    with _registry_lock:
        view = _views.get(index)
        if view is not None and view.loader.url != loader.url:
            view.teardown()
            view = None
        if view is None:
            view = MapView(settings.map, loader=loader).mount()
            _views[index] = view
        return view


def dispose_map_view(index: str) -> None:
    with _registry_lock:
        view = _views.pop(index, None)
    if view is not None:
        view.teardown()


def prune_map_views(active_indices: Iterable[str]) -> list[str]:
    """Tear down views whose component is no longer in the layout.

    Returns:
        Indices of the disposed views.
    """
    active = set(active_indices)
    with _registry_lock:
        stale = [index for index in _views if index not in active]
    for index in stale:
        dispose_map_view(index)
    if stale:
        logger.debug(f"Disposed {len(stale)} address map view(s)")
    return stale


def render_address_map(
    index: str,
    trigger_data: dict[str, Any] | None,
    page_data: dict[str, Any] | None,
) -> tuple[Any, dict[str, Any] | None]:
    """Render one map component.

    Returns:
        Tuple of (figure, serialized render pass or None).

    Raises:
        PreventUpdate: The render was superseded or the view torn down.
    """
    trigger_data = trigger_data or {}
    page = DataPage.model_validate(page_data or {})

    result = get_map_view(index, trigger_data.get("geometry_url")).render(page)
    if result is None:
        raise dash.exceptions.PreventUpdate

    if result.status is RenderStatus.NO_DATA:
        return no_data_figure(), None
    if result.status is RenderStatus.ERROR:
        return error_figure(result.message), None

    fig = render_map(
        result.render_pass,
        result.scale,
        result.states,
        width=trigger_data.get("width"),
        height=trigger_data.get("height"),
        title=trigger_data.get("title"),
        map_config=settings.map,
    )
    logger.info(
        f"Rendered map {index[:8]}: {len(result.render_pass.placeable_points)}/"
        f"{len(result.render_pass.points)} points placed"
    )
    return fig, result.render_pass.model_dump(mode="json")


def register_core_callbacks(app):
    """Register the rendering and view lifecycle callbacks for address map components."""

    @app.callback(
        Output({"type": "address-map-graph", "index": MATCH}, "figure"),
        Output({"type": "address-map-render-pass", "index": MATCH}, "data"),
        Input({"type": "address-map-trigger", "index": MATCH}, "data"),
        Input(DATA_PAGE_STORE, "data"),
        State({"type": "address-map-trigger", "index": MATCH}, "id"),
    )
    def update_address_map(trigger_data, page_data, trigger_id):
        index = trigger_id.get("index", "") if isinstance(trigger_id, dict) else str(trigger_id)
        return render_address_map(index, trigger_data, page_data)

    @app.callback(
        Input({"type": "address-map-trigger", "index": ALL}, "id"),
    )
    def sync_address_map_views(trigger_ids):
        prune_map_views(
            trigger_id.get("index", "") for trigger_id in trigger_ids if isinstance(trigger_id, dict)
        )
