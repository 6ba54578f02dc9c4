"""
Factory module for the address map Dash application.
"""

import dash
from dash import dcc, html

from addressmap.configs.config import settings
from addressmap.configs.logging_init import logger
from addressmap.configs.settings_models import Settings
from addressmap.dash.modules.map_component.callbacks import register_callbacks_address_map
from addressmap.dash.modules.map_component.callbacks.core import DATA_PAGE_STORE
from addressmap.dash.modules.map_component.utils import build_map
from addressmap.models.components import AddressMapComponent
from addressmap.models.map_data import DataPage


def create_app_layout(component: AddressMapComponent, page: DataPage) -> html.Div:
    return html.Div(
        [
            dcc.Store(id=DATA_PAGE_STORE, data=page.model_dump(mode="json")),
            dcc.Store(
                id="interactive-values-store",
                data={"interactive_components_values": [], "first_load": True},
            ),
            build_map(
                **component.model_dump(),
                dimension=component.dimension,
                measure=component.measure,
            ),
        ],
        style={"height": "100vh", "width": "100vw"},
    )


def create_app(
    component: AddressMapComponent,
    page: DataPage,
    app_settings: Settings | None = None,
) -> dash.Dash:
    """
    Create and configure the Dash application for one address map.

    Args:
        component: Map component declaration (binding, columns, title)
        page: Host data page to plot
        app_settings: Settings override; defaults to environment settings

    Returns:
        dash.Dash: Configured application
    """
    app_settings = app_settings or settings
    app = dash.Dash(__name__, title=component.title or "Address Map")
    app.layout = create_app_layout(component, page)
    register_callbacks_address_map(app)
    logger.info(
        f"Address map app ready on {app_settings.dash.host}:{app_settings.dash.port} "
        f"({len(page.matrix)} rows)"
    )
    return app
