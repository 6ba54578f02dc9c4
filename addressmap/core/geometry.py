"""
State boundary geometry.

Fetches a US atlas topology (``states-albers-10m.json``, already projected
into the 975x610 canvas) and decodes ``objects.states`` into GeoJSON-style
features. Fetch or format errors raise GeometryFetchFailed, which aborts
the render pass with an inline message.
"""

from typing import Any

import httpx

from addressmap.configs.logging_init import logger
from addressmap.configs.settings_models import DEFAULT_GEOMETRY_URL
from addressmap.core.exceptions import GeometryFetchFailed

Position = tuple[float, float]


def _decode_arcs(topology: dict[str, Any]) -> list[list[Position]]:
    """Absolute arc coordinates, undoing quantization when a transform is present."""
    transform = topology.get("transform")
    decoded: list[list[Position]] = []

    for arc in topology.get("arcs", []):
        if transform:
            (kx, ky), (tx, ty) = transform["scale"], transform["translate"]
            x = y = 0
            points = []
            for dx, dy, *_ in arc:
                x += dx
                y += dy
                points.append((x * kx + tx, y * ky + ty))
        else:
            points = [(float(p[0]), float(p[1])) for p in arc]
        decoded.append(points)

    return decoded


def _stitch_ring(arc_indices: list[int], arcs: list[list[Position]]) -> list[Position]:
    """Join arcs into one ring; a negative index ``~i`` means arc ``i`` reversed."""
    ring: list[Position] = []
    for index in arc_indices:
        arc = arcs[index] if index >= 0 else arcs[~index][::-1]
        if ring:
            # Consecutive arcs share their junction point
            ring.pop()
        ring.extend(arc)

    if ring and len(ring) < 4:
        ring.append(ring[0])
    return ring


def _decode_geometry(geometry: dict[str, Any], arcs: list[list[Position]]) -> list[dict[str, Any]]:
    geometry_type = geometry.get("type")

    if geometry_type == "GeometryCollection":
        features = []
        for child in geometry.get("geometries", []):
            features.extend(_decode_geometry(child, arcs))
        return features

    if geometry_type == "Polygon":
        coordinates = [_stitch_ring(ring, arcs) for ring in geometry.get("arcs", [])]
    elif geometry_type == "MultiPolygon":
        coordinates = [
            [_stitch_ring(ring, arcs) for ring in polygon] for polygon in geometry.get("arcs", [])
        ]
    else:
        logger.debug(f"Skipping unsupported geometry type: {geometry_type}")
        return []

    return [
        {
            "type": "Feature",
            "id": geometry.get("id"),
            "properties": geometry.get("properties", {}),
            "geometry": {"type": geometry_type, "coordinates": coordinates},
        }
    ]


def topology_features(topology: dict[str, Any], object_name: str = "states") -> list[dict[str, Any]]:
    """Decode one named topology object into a list of features.

    Raises:
        GeometryFetchFailed: The topology lacks ``objects.<object_name>`` or
            its arcs and geometries cannot be decoded.
    """
    if not isinstance(topology, dict) or object_name not in (topology.get("objects") or {}):
        raise GeometryFetchFailed("Invalid map data format")

    try:
        arcs = _decode_arcs(topology)
        return _decode_geometry(topology["objects"][object_name], arcs)
    except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
        logger.debug(f"Topology decoding failed: {e!r}")
        raise GeometryFetchFailed("Invalid map data format") from e


def feature_rings(feature: dict[str, Any]) -> list[list[Position]]:
    geometry = feature["geometry"]
    if geometry["type"] == "Polygon":
        return list(geometry["coordinates"])
    return [ring for polygon in geometry["coordinates"] for ring in polygon]


class GeometryLoader:
    """Fetch and decode state boundaries, caching decoded features per URL.

    Args:
        url: Topology URL
        timeout: HTTP timeout in seconds
        client: Optional httpx client (injected in tests)
    """

    def __init__(
        self,
        url: str = DEFAULT_GEOMETRY_URL,
        timeout: float = 30,
        client: httpx.Client | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.client = client
        self._cache: dict[str, list[dict[str, Any]]] = {}

    def _get(self) -> httpx.Response:
        if self.client is not None:
            return self.client.get(self.url, timeout=self.timeout)
        return httpx.get(self.url, timeout=self.timeout)

    def fetch_topology(self) -> dict[str, Any]:
        try:
            response = self._get()
        except httpx.HTTPError as e:
            raise GeometryFetchFailed(f"Failed to load map data: {e}") from e

        if not response.is_success:
            raise GeometryFetchFailed(f"Failed to load map data: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as e:
            raise GeometryFetchFailed("Invalid map data format") from e

    def load_states(self) -> list[dict[str, Any]]:
        if self.url not in self._cache:
            features = topology_features(self.fetch_topology(), "states")
            logger.info(f"Loaded {len(features)} state shapes from {self.url}")
            self._cache[self.url] = features
        return self._cache[self.url]
