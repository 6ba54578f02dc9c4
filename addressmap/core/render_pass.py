"""
Map view lifecycle.

A MapView owns one mounted map. Every ``render`` call starts a new
generation; its result is committed only if the view is still mounted and
no newer render started while the boundary fetch was outstanding.
"""

import threading
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from addressmap.configs.logging_init import logger
from addressmap.configs.settings_models import MapConfig
from addressmap.core.coordinate_resolver import CoordinateResolver
from addressmap.core.exceptions import DataUnavailable, GeometryFetchFailed
from addressmap.core.geometry import GeometryLoader
from addressmap.core.projection import AlbersUsa
from addressmap.core.row_projector import Projection, build_render_pass
from addressmap.core.value_scaler import ScaleContext
from addressmap.models.map_data import DataPage, GeoPoint, RenderPass, source_rows_from_page


class RenderStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    ERROR = "error"


class RenderResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: RenderStatus
    message: str = ""
    render_pass: RenderPass | None = None
    scale: ScaleContext | None = None
    states: list[dict[str, Any]] = Field(default_factory=list)


class MapView:
    def __init__(
        self,
        map_config: MapConfig | None = None,
        loader: GeometryLoader | None = None,
        resolver: CoordinateResolver | None = None,
        projection: Projection | None = None,
    ):
        self.config = map_config or MapConfig()
        self.loader = loader or GeometryLoader(self.config.geometry_url)
        self.resolver = resolver or CoordinateResolver(
            fallback=GeoPoint(lat=self.config.fallback_lat, lng=self.config.fallback_lng)
        )
        self.projection = projection or AlbersUsa(
            scale=self.config.projection_scale, translate=self.config.projection_translate
        )
        self.mounted = False
        self.current: RenderResult | None = None
        self._generation = 0
        self._lock = threading.Lock()

    def mount(self) -> "MapView":
        self.mounted = True
        return self

    def teardown(self) -> None:
        with self._lock:
            self.mounted = False
            self._generation += 1
            self.current = None

    def _build(self, page: DataPage) -> RenderResult:
        try:
            rows = source_rows_from_page(page)
            if not rows:
                raise DataUnavailable("No data available")
            states = self.loader.load_states()
            render_pass, scale = build_render_pass(
                rows,
                self.resolver,
                self.projection,
                radius_range=self.config.radius_range,
                palette=self.config.palette,
            )
        except DataUnavailable:
            return RenderResult(status=RenderStatus.NO_DATA, message="No data available")
        except GeometryFetchFailed as e:
            logger.error(f"Error loading map: {e.reason}")
            return RenderResult(status=RenderStatus.ERROR, message=f"Error loading map: {e.reason}")

        logger.debug(render_pass.scale)
        return RenderResult(
            status=RenderStatus.OK, render_pass=render_pass, scale=scale, states=states
        )

    def render(self, page: DataPage) -> RenderResult | None:
        """Rebuild the whole render pass for ``page``.

        Returns:
            The committed result, or None when the view was torn down or a
            newer render superseded this one.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        result = self._build(page)

        with self._lock:
            if not self.mounted or generation != self._generation:
                logger.debug(f"Discarding render generation {generation}")
                return None
            self.current = result
        return result
