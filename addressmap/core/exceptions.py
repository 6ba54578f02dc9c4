class AddressMapError(Exception):
    """Base class for address map errors."""


class DataUnavailable(AddressMapError):
    """The host delivered no rows for the current layout."""


class GeometryFetchFailed(AddressMapError):
    """The state boundary dataset could not be fetched or decoded."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SelectionProtocolUnavailable(AddressMapError):
    """The host selection object is missing at click time."""


class SelectionStateError(AddressMapError):
    """A selection call was issued outside of a begun selection context."""


class StaleRenderPassError(AddressMapError):
    """A scale context or click refers to another dataset version."""
