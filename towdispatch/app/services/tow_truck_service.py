from __future__ import annotations

import logging
import time
from dataclasses import InitVar, dataclass, field
from typing import Iterable, Sequence

from towdispatch.app.ports.output import (
    IMapRepository,
    IOrderRepository,
    ITowTruckRepository,
)
from towdispatch.domain.algorithms.nearest_unit import nearest_units
from towdispatch.domain.models import TowTruck, TowTruckStatus

from .area_graph_provider import AreaGraphProvider

logger = logging.getLogger(__name__)

# Product-defined cutoff for "too far"; weights carry no physical unit.
DEFAULT_MAX_DISPATCH_DISTANCE = 10_000_000


def pick_nearest(
    candidates: Sequence[tuple[int, TowTruck]],
) -> tuple[int, TowTruck] | None:
    if not candidates:
        return None
    # min() keeps the first of equal keys: ties go to the earliest candidate.
    return min(candidates, key=lambda c: c[0])


def eligible_tow_trucks(
    tow_trucks: Iterable[TowTruck], *, area_id: int
) -> list[TowTruck]:
    return [
        t
        for t in tow_trucks
        if t.status == TowTruckStatus.AVAILABLE and t.area_id == area_id
    ]


@dataclass(slots=True)
class TowTruckService:
    """Tow truck directory and dispatch (use cases).

    Dispatch picks the available truck in the order's area with the smallest
    road-network distance to the order's node.
    """

    tow_truck_repository: ITowTruckRepository
    order_repository: IOrderRepository
    map_repository: IMapRepository
    graph_provider: InitVar[AreaGraphProvider | None] = None

    # Tuning knobs
    max_dispatch_distance: int = DEFAULT_MAX_DISPATCH_DISTANCE

    _graph_provider: AreaGraphProvider = field(init=False, repr=False)

    def __post_init__(self, graph_provider: AreaGraphProvider | None) -> None:
        self._graph_provider = graph_provider or AreaGraphProvider(
            map_repository=self.map_repository
        )

    def get_tow_truck_by_id(self, truck_id: int) -> TowTruck | None:
        return self.tow_truck_repository.find_tow_truck_by_id(truck_id)

    def get_all_tow_trucks(
        self,
        *,
        page: int,
        page_size: int,
        status: str | None = None,
        area_id: int | None = None,
    ) -> list[TowTruck]:
        return list(
            self.tow_truck_repository.get_paginated_tow_trucks(
                page=page, page_size=page_size, status=status, area_id=area_id
            )
        )

    def update_location(self, *, truck_id: int, node_id: int) -> None:
        self.tow_truck_repository.update_location(truck_id=truck_id, node_id=node_id)

    def find_nearest_available_tow_truck(self, order_id: int) -> TowTruck | None:
        """Return the closest available truck, or None if none is close enough.

        Raises OrderNotFound / AreaNotFound when the order cannot be placed on
        the map, and InternalError when storage fails.
        """

        order = self.order_repository.find_order_by_id(order_id)
        area_id = self.map_repository.get_area_id_by_node_id(order.node_id)

        tow_trucks = eligible_tow_trucks(
            self.tow_truck_repository.get_paginated_tow_trucks(
                page=0,
                page_size=-1,
                status=TowTruckStatus.AVAILABLE.value,
                area_id=area_id,
            ),
            area_id=area_id,
        )
        if not tow_trucks:
            logger.info(
                "Order %s: no available tow trucks in area %s", order_id, area_id
            )
            return None

        started = time.perf_counter()
        store = self._graph_provider.get(area_id)
        candidates = nearest_units(
            store,
            order.node_id,
            [(t, t.node_id) for t in tow_trucks],
            use_cache=self._graph_provider.shared,
        )
        logger.debug(
            "Order %s: %d/%d trucks reachable in area %s (%.1f ms)",
            order_id,
            len(candidates),
            len(tow_trucks),
            area_id,
            (time.perf_counter() - started) * 1000,
        )

        best = pick_nearest(candidates)
        if best is None:
            logger.info("Order %s: no reachable tow truck", order_id)
            return None

        distance, tow_truck = best
        if distance > self.max_dispatch_distance:
            logger.info(
                "Order %s: nearest tow truck %s is too far (%d > %d)",
                order_id,
                tow_truck.id,
                distance,
                self.max_dispatch_distance,
            )
            return None

        logger.info(
            "Order %s: dispatching tow truck %s (distance %d)",
            order_id,
            tow_truck.id,
            distance,
        )
        return tow_truck
