from .graph import Edge, Node
from .order import Order
from .tow_truck import TowTruck, TowTruckStatus

__all__ = [
    "Edge",
    "Node",
    "Order",
    "TowTruck",
    "TowTruckStatus",
]
