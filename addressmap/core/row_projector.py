"""
Row projection: SourceRow -> RenderPoint.

``project_row`` is pure given its inputs. ``build_render_pass`` builds the
scale context and every point of one dataset version together, so a pass
never mixes scales from different datasets.
"""

import hashlib
import json
from collections.abc import Callable, Sequence

from addressmap.configs.logging_init import logger
from addressmap.core.address_parser import parse_address
from addressmap.core.coordinate_resolver import CoordinateResolver
from addressmap.core.exceptions import DataUnavailable, StaleRenderPassError
from addressmap.core.value_scaler import (
    DEFAULT_PALETTE,
    DEFAULT_RADIUS_RANGE,
    ScaleContext,
    build_scale_context,
)
from addressmap.models.map_data import RenderPass, RenderPoint, SourceRow

Projection = Callable[[tuple[float, float]], tuple[float, float] | None]


def dataset_version(rows: Sequence[SourceRow]) -> str:
    """Content hash identifying one dataset load."""
    payload = [row.model_dump() for row in rows]
    return hashlib.md5(json.dumps(payload, sort_keys=True, default=str).encode()).hexdigest()[:12]


def project_row(
    row: SourceRow,
    resolver: CoordinateResolver,
    scale: ScaleContext,
    projection: Projection,
) -> RenderPoint:
    geo_point = resolver.resolve(parse_address(row.address_text))
    placed = projection((geo_point.lng, geo_point.lat))
    screen_x, screen_y = placed if placed is not None else (None, None)

    return RenderPoint(
        source_row=row,
        geo_point=geo_point,
        screen_x=screen_x,
        screen_y=screen_y,
        radius=scale.radius_for(row.value),
        color=scale.color_for(row.value),
    )


def build_render_pass(
    rows: Sequence[SourceRow],
    resolver: CoordinateResolver,
    projection: Projection,
    radius_range: tuple[float, float] = DEFAULT_RADIUS_RANGE,
    palette: str = DEFAULT_PALETTE,
    scale: ScaleContext | None = None,
) -> tuple[RenderPass, ScaleContext]:
    """Project every row of a dataset into a fresh RenderPass.

    Args:
        rows: Rows of the current data page, ordered by row_index
        resolver: Coordinate lookup
        projection: Callable mapping (lng, lat) to screen coordinates or None
        radius_range: Marker radius range in screen units
        palette: Plotly sequential colorscale name
        scale: Optional prebuilt scale; must carry this dataset's version

    Returns:
        Tuple of (render_pass, scale_context).

    Raises:
        DataUnavailable: No rows were given.
        StaleRenderPassError: ``scale`` was built for another dataset.
    """
    if not rows:
        raise DataUnavailable("No data available")

    version = dataset_version(rows)
    if scale is None:
        scale = build_scale_context(
            (row.value for row in rows),
            radius_range=radius_range,
            palette=palette,
            version=version,
        )
    elif scale.version != version:
        raise StaleRenderPassError(
            f"Scale context version {scale.version!r} does not match dataset {version!r}"
        )

    points = [project_row(row, resolver, scale, projection) for row in rows]
    unplaced = sum(1 for p in points if not p.is_placeable)
    if unplaced:
        logger.debug(f"{unplaced}/{len(points)} points fall outside the projection")

    render_pass = RenderPass(version=version, scale=scale.summary(), points=points)
    return render_pass, scale
