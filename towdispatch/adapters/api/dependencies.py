from __future__ import annotations

import os
from functools import lru_cache

from towdispatch.adapters.persistence import (
    DynamoDbOrderRepository,
    DynamoDbTowTruckRepository,
    LocalMapRepository,
)
from towdispatch.app.services.area_graph_provider import AreaGraphProvider
from towdispatch.app.services.tow_truck_service import TowTruckService


@lru_cache(maxsize=1)
def get_area_graph_provider() -> AreaGraphProvider:
    # One provider per process so "shared" mode can keep stores between requests.
    mode = (os.getenv("GRAPH_CACHE_MODE") or "fresh").strip().lower()
    if mode not in {"fresh", "shared"}:
        raise RuntimeError(f"Unsupported GRAPH_CACHE_MODE: {mode}")

    algorithm = (os.getenv("RELAXATION_ALGORITHM") or "queue").strip().lower()
    if algorithm not in {"queue", "heap"}:
        raise RuntimeError(f"Unsupported RELAXATION_ALGORITHM: {algorithm}")

    return AreaGraphProvider(
        map_repository=LocalMapRepository(),
        mode=mode,  # type: ignore[arg-type]
        algorithm=algorithm,  # type: ignore[arg-type]
    )


def get_tow_truck_service() -> TowTruckService:
    graph_provider = get_area_graph_provider()
    service = TowTruckService(
        tow_truck_repository=DynamoDbTowTruckRepository(),
        order_repository=DynamoDbOrderRepository(),
        map_repository=graph_provider.map_repository,
        graph_provider=graph_provider,
    )

    # Allow tuning via env without changing code.
    if os.getenv("MAX_DISPATCH_DISTANCE"):
        service.max_dispatch_distance = int(os.environ["MAX_DISPATCH_DISTANCE"])

    return service
