"""
Albers USA composite projection.

Lower 48 states on an Albers equal-area conic, with Alaska and Hawaii drawn
as scaled insets in the lower-left corner. Screen coordinates use a y axis
pointing down and match the pre-projected ``states-albers-10m`` atlas when
the default scale (1300) and translate (487.5, 305) are used.
"""

import math

EPSILON = 1e-6

ClipExtent = tuple[tuple[float, float], tuple[float, float]]


def _wrap_longitude(lam: float) -> float:
    if lam > math.pi:
        return lam - 2 * math.pi
    if lam < -math.pi:
        return lam + 2 * math.pi
    return lam


class ConicEqualArea:
    """Single conic equal-area projection with rotation, centering and clipping."""

    def __init__(
        self,
        parallels: tuple[float, float],
        rotate: float,
        center: tuple[float, float],
        scale: float,
        translate: tuple[float, float],
        clip_extent: ClipExtent | None = None,
    ):
        phi0, phi1 = (math.radians(p) for p in parallels)
        sy0 = math.sin(phi0)
        self.n = (sy0 + math.sin(phi1)) / 2
        self.c = 1 + sy0 * (2 * self.n - sy0)
        self.r0 = math.sqrt(self.c) / self.n

        self.delta_lambda = math.radians(rotate)
        self.scale = scale
        self.translate = translate
        self.clip_extent = clip_extent
        # Center is given in unrotated geographic coordinates
        self._center = self._raw(math.radians(center[0]), math.radians(center[1]))

    def _raw(self, lam: float, phi: float) -> tuple[float, float]:
        r = math.sqrt(max(0.0, self.c - 2 * self.n * math.sin(phi))) / self.n
        x = lam * self.n
        return r * math.sin(x), self.r0 - r * math.cos(x)

    def point(self, lng: float, lat: float) -> tuple[float, float] | None:
        lam = _wrap_longitude(math.radians(lng) + self.delta_lambda)
        px, py = self._raw(lam, math.radians(lat))
        cx, cy = self._center
        tx, ty = self.translate
        x = tx + self.scale * (px - cx)
        y = ty - self.scale * (py - cy)

        if self.clip_extent is not None:
            (x0, y0), (x1, y1) = self.clip_extent
            if not (x0 <= x <= x1 and y0 <= y <= y1):
                return None
        return x, y


class AlbersUsa:
    """Callable projection: ``projection((lng, lat)) -> (x, y) | None``."""

    def __init__(self, scale: float = 1300.0, translate: tuple[float, float] = (487.5, 305.0)):
        k = scale
        x, y = translate
        self.scale = scale
        self.translate = translate

        self.lower48 = ConicEqualArea(
            parallels=(29.5, 45.5),
            rotate=96,
            center=(-0.6, 38.7),
            scale=k,
            translate=(x, y),
            clip_extent=((x - 0.455 * k, y - 0.238 * k), (x + 0.455 * k, y + 0.238 * k)),
        )
        self.alaska = ConicEqualArea(
            parallels=(55, 65),
            rotate=154,
            center=(-2, 58.5),
            scale=k * 0.35,
            translate=(x - 0.307 * k, y + 0.201 * k),
            clip_extent=(
                (x - 0.425 * k + EPSILON, y + 0.120 * k + EPSILON),
                (x - 0.214 * k - EPSILON, y + 0.234 * k - EPSILON),
            ),
        )
        self.hawaii = ConicEqualArea(
            parallels=(8, 18),
            rotate=157,
            center=(-3, 19.9),
            scale=k,
            translate=(x - 0.205 * k, y + 0.212 * k),
            clip_extent=(
                (x - 0.214 * k + EPSILON, y + 0.166 * k + EPSILON),
                (x - 0.115 * k - EPSILON, y + 0.234 * k - EPSILON),
            ),
        )

    def __call__(self, coordinates: tuple[float, float]) -> tuple[float, float] | None:
        lng, lat = coordinates
        if not (math.isfinite(lng) and math.isfinite(lat)):
            return None
        for inset in (self.lower48, self.alaska, self.hawaii):
            placed = inset.point(lng, lat)
            if placed is not None:
                return placed
        return None
