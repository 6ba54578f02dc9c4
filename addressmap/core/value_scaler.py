"""
Value encoding for address markers.

Radius follows a square-root scale so marker area grows linearly with the
value; color follows a sequential palette (light for low values, dark warm
hues for high values). A collapsed domain maps every value to the middle
of both ranges.
"""

import math
import statistics
from collections.abc import Iterable

import plotly.colors

from addressmap.models.map_data import ScaleSummary

DEFAULT_RADIUS_RANGE = (5.0, 20.0)
DEFAULT_PALETTE = "YlOrRd"


def _signed_sqrt(x: float) -> float:
    return math.copysign(math.sqrt(abs(x)), x)


def finite_values(values: Iterable[float]) -> list[float]:
    return [v for v in values if v is not None and math.isfinite(v)]


def palette_colors(palette: str) -> list[str]:
    """Resolve a Plotly sequential colorscale name (e.g. 'YlOrRd') to its colors."""
    colors = getattr(plotly.colors.sequential, palette, None)
    if not colors:
        raise ValueError(f"Unknown sequential palette: {palette}")
    return list(colors)


class ScaleContext:
    """Radius and color mapping for one dataset version."""

    def __init__(
        self,
        min_value: float,
        max_value: float,
        radius_range: tuple[float, float] = DEFAULT_RADIUS_RANGE,
        palette: str = DEFAULT_PALETTE,
        version: str = "",
    ):
        self.min_value = min_value
        self.max_value = max_value
        self.radius_range = radius_range
        self.palette = palette
        self.version = version
        self._colors = palette_colors(palette)

    @property
    def color_domain(self) -> tuple[float, float]:
        return (self.min_value, self.max_value)

    @property
    def is_degenerate(self) -> bool:
        return self.min_value == self.max_value

    @staticmethod
    def _position(value: float, lo: float, hi: float) -> float:
        if hi == lo:
            return 0.5
        return min(1.0, max(0.0, (value - lo) / (hi - lo)))

    def radius_for(self, value: float) -> float:
        r0, r1 = self.radius_range
        if value is None or not math.isfinite(value):
            return r0
        t = self._position(
            _signed_sqrt(value), _signed_sqrt(self.min_value), _signed_sqrt(self.max_value)
        )
        return r0 + t * (r1 - r0)

    def color_position(self, value: float) -> float:
        if value is None or not math.isfinite(value):
            return 0.0
        return self._position(value, self.min_value, self.max_value)

    def color_for(self, value: float) -> str:
        return plotly.colors.sample_colorscale(self._colors, [self.color_position(value)])[0]

    def summary(self) -> ScaleSummary:
        return ScaleSummary(
            min_value=self.min_value,
            max_value=self.max_value,
            radius_range=self.radius_range,
            palette=self.palette,
        )

    def __repr__(self) -> str:
        return (
            f"ScaleContext(domain=[{self.min_value}, {self.max_value}], "
            f"radius_range={list(self.radius_range)}, palette={self.palette!r}, "
            f"version={self.version!r})"
        )


def build_scale_context(
    values: Iterable[float],
    radius_range: tuple[float, float] = DEFAULT_RADIUS_RANGE,
    palette: str = DEFAULT_PALETTE,
    version: str = "",
) -> ScaleContext:
    """Build the scale context from the observed value extent.

    Non-finite values are ignored; with no finite value the domain collapses
    to [0, 0].
    """
    observed = finite_values(values)
    if observed:
        lo, hi = min(observed), max(observed)
    else:
        lo = hi = 0.0
    return ScaleContext(lo, hi, radius_range=radius_range, palette=palette, version=version)


def legend_values(values: Iterable[float]) -> list[float]:
    """Minimum, median and maximum of the observed values."""
    observed = finite_values(values)
    if not observed:
        return []
    return [min(observed), statistics.median(observed), max(observed)]
