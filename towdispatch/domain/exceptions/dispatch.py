class DispatchError(Exception):
    """Base exception for dispatch failures."""


class NotFoundError(DispatchError):
    """Raised when a requested entity does not exist."""


class OrderNotFound(NotFoundError):
    """Raised when the order to dispatch for cannot be loaded."""


class AreaNotFound(NotFoundError):
    """Raised when a node does not belong to any known area."""


class TowTruckNotFound(NotFoundError):
    """Raised when a tow truck id is unknown."""


class InternalError(DispatchError):
    """Raised when storage fails while loading graph, truck or order data."""
