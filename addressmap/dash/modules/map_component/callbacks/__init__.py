"""
Address Map Component Callbacks.

Rendering, hover and click callbacks are all registered at app startup.
"""


def register_callbacks_address_map(app):
    """Register rendering and interaction callbacks for the address map.

    Args:
        app: Dash application instance.
    """
    from .core import register_core_callbacks
    from .interaction import register_hover_callback
    from .selection import register_map_selection_callback

    register_core_callbacks(app)
    register_hover_callback(app)
    register_map_selection_callback(app)


__all__ = ["register_callbacks_address_map"]
