from .dynamodb_order_repository import DynamoDbOrderRepository
from .dynamodb_tow_truck_repository import DynamoDbTowTruckRepository
from .local_map_repository import LocalMapRepository

__all__ = [
    "DynamoDbOrderRepository",
    "DynamoDbTowTruckRepository",
    "LocalMapRepository",
]
