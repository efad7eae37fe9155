from .map_repository import IMapRepository
from .order_repository import IOrderRepository
from .tow_truck_repository import ITowTruckRepository

__all__ = [
    "IMapRepository",
    "IOrderRepository",
    "ITowTruckRepository",
]
