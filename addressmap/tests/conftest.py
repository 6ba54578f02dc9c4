import pytest

from addressmap.configs.config import settings
from addressmap.core.coordinate_resolver import CoordinateResolver
from addressmap.core.projection import AlbersUsa
from addressmap.core.row_projector import build_render_pass
from addressmap.models.map_data import DataCell, DataPage, GeoPoint, SourceRow

ONTARIO_ADDRESS = "1 Mills Circle Ontario, California 91764"


class RecordingHost:
    """Selection host double that records every call in order."""

    def __init__(self):
        self.calls = []

    def begin(self, binding_path):
        self.calls.append(("begin", binding_path))

    def select(self, dimension_index, element_ids, toggle):
        self.calls.append(("select", dimension_index, list(element_ids), toggle))

    def confirm(self):
        self.calls.append(("confirm",))

    def select_values(self, binding_path, dimension_index, row_indices, toggle):
        self.calls.append(("select_values", binding_path, dimension_index, list(row_indices), toggle))


class StaticLoader:
    """Geometry loader double returning fixed features."""

    def __init__(self, states=None, on_load=None, url=None):
        self.url = url or settings.map.geometry_url
        self.states = states or []
        self.on_load = on_load
        self.calls = 0

    def load_states(self):
        self.calls += 1
        if self.on_load is not None:
            self.on_load(self.calls)
        return self.states


@pytest.fixture
def resolver():
    return CoordinateResolver()


@pytest.fixture
def projection():
    return AlbersUsa()


@pytest.fixture
def two_rows():
    return [
        SourceRow(address_text=ONTARIO_ADDRESS, value=100, element_id=5, row_index=0),
        SourceRow(address_text="Unknown Place", value=50, element_id=7, row_index=1),
    ]


@pytest.fixture
def two_row_page():
    return DataPage(
        matrix=[
            [DataCell(text=ONTARIO_ADDRESS, elem_number=5), DataCell(text="100", num=100)],
            [DataCell(text="Unknown Place", elem_number=7), DataCell(text="50", num=50)],
        ]
    )


@pytest.fixture
def rendered(two_rows, resolver, projection):
    """(render_pass, scale) for the two-row dataset."""
    return build_render_pass(two_rows, resolver, projection)


@pytest.fixture
def offshore_rendered(two_rows, projection):
    """Render pass whose second row falls back to a point outside every inset (Paris)."""
    offshore = CoordinateResolver(fallback=GeoPoint(lat=48.8566, lng=2.3522))
    return build_render_pass(two_rows, offshore, projection)


@pytest.fixture
def recording_host():
    return RecordingHost()


@pytest.fixture
def square_state():
    return {
        "type": "Feature",
        "id": "06",
        "properties": {"name": "California"},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[(100.0, 100.0), (200.0, 100.0), (200.0, 200.0), (100.0, 100.0)]],
        },
    }
