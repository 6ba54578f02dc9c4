"""
Address Map Data Models.

Records flowing through one render pass: host data page -> SourceRow ->
ParsedAddress -> GeoPoint -> RenderPoint. Everything is rebuilt on each
dataset change and never mutated afterwards.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataCell(BaseModel):
    """One cell of a host data page row."""

    text: str = ""
    num: float = math.nan
    elem_number: int = -1

    @field_validator("num", mode="before")
    @classmethod
    def missing_num_as_nan(cls, v):
        return math.nan if v is None else v


class DataPage(BaseModel):
    """A page of host rows: each row is [dimension cell, measure cell]."""

    matrix: list[list[DataCell]] = Field(default_factory=list)

    @field_validator("matrix")
    @classmethod
    def validate_row_width(cls, v: list[list[DataCell]]) -> list[list[DataCell]]:
        for i, row in enumerate(v):
            if len(row) != 2:
                raise ValueError(f"Row {i} has {len(row)} cells, expected dimension and measure")
        return v

    @property
    def is_empty(self) -> bool:
        return not self.matrix


class SourceRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    address_text: str
    value: float
    element_id: int
    row_index: int

    @field_validator("value", mode="before")
    @classmethod
    def missing_value_as_nan(cls, v):
        # JSON round-trips of a render pass turn NaN into null
        return math.nan if v is None else v


class ParsedAddress(BaseModel):
    """Structured components of an address; absent fields are None."""

    model_config = ConfigDict(frozen=True)

    full_address: str
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    @property
    def is_structured(self) -> bool:
        return self.city is not None and self.state is not None


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class RenderPoint(BaseModel):
    """A row placed on the canvas with its value encoding."""

    source_row: SourceRow
    geo_point: GeoPoint
    screen_x: float | None = None
    screen_y: float | None = None
    radius: float
    color: str

    @property
    def is_placeable(self) -> bool:
        return self.screen_x is not None and self.screen_y is not None

    @property
    def row_index(self) -> int:
        return self.source_row.row_index


class ScaleSummary(BaseModel):
    """Serializable view of a ScaleContext."""

    min_value: float
    max_value: float
    radius_range: tuple[float, float]
    palette: str


class RenderPass(BaseModel):
    """All RenderPoints of one dataset version, ordered by row index."""

    version: str
    scale: ScaleSummary
    points: list[RenderPoint] = Field(default_factory=list)

    @field_validator("points")
    @classmethod
    def validate_row_order(cls, v: list[RenderPoint]) -> list[RenderPoint]:
        for position, point in enumerate(v):
            if point.row_index != position:
                raise ValueError(
                    f"Point at position {position} carries row_index {point.row_index}"
                )
        return v

    def point_at(self, row_index: int) -> RenderPoint | None:
        if 0 <= row_index < len(self.points):
            return self.points[row_index]
        return None

    @property
    def placeable_points(self) -> list[RenderPoint]:
        return [p for p in self.points if p.is_placeable]

    @property
    def values(self) -> list[float]:
        return [p.source_row.value for p in self.points]


def source_rows_from_page(page: DataPage) -> list[SourceRow]:
    """Convert a host data page into SourceRows, indexed by page order."""
    return [
        SourceRow(
            address_text=dimension.text,
            value=measure.num,
            element_id=dimension.elem_number,
            row_index=i,
        )
        for i, (dimension, measure) in enumerate(page.matrix)
    ]
