from .dispatch import (
    AreaNotFound,
    DispatchError,
    InternalError,
    NotFoundError,
    OrderNotFound,
    TowTruckNotFound,
)

__all__ = [
    "AreaNotFound",
    "DispatchError",
    "InternalError",
    "NotFoundError",
    "OrderNotFound",
    "TowTruckNotFound",
]
