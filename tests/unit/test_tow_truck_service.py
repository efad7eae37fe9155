from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from towdispatch.app.services.area_graph_provider import AreaGraphProvider
from towdispatch.app.services.tow_truck_service import (
    DEFAULT_MAX_DISPATCH_DISTANCE,
    TowTruckService,
    pick_nearest,
)
from towdispatch.domain.exceptions import (
    AreaNotFound,
    InternalError,
    OrderNotFound,
    TowTruckNotFound,
)
from towdispatch.domain.models import Edge, Node, Order, TowTruck, TowTruckStatus


@dataclass(slots=True)
class FakeMapRepository:
    nodes: dict[int, int]  # node_id -> area_id
    edges: list[Edge]
    loads: int = 0

    def get_all_nodes(self, area_id: int | None = None) -> list[Node]:
        self.loads += 1
        return [
            Node(id=n, x=0, y=0)
            for n, a in self.nodes.items()
            if area_id is None or a == area_id
        ]

    def get_all_edges(self, area_id: int | None = None) -> list[Edge]:
        return [
            e
            for e in self.edges
            if area_id is None
            or (self.nodes.get(e.node_a_id) == area_id)
            and (self.nodes.get(e.node_b_id) == area_id)
        ]

    def get_area_id_by_node_id(self, node_id: int) -> int:
        if node_id not in self.nodes:
            raise AreaNotFound(f"No area found for node {node_id}")
        return self.nodes[node_id]

    def reload(self) -> None:
        pass


@dataclass(slots=True)
class FakeTowTruckRepository:
    tow_trucks: list[TowTruck]
    calls: list[dict] = field(default_factory=list)

    def get_paginated_tow_trucks(
        self,
        *,
        page: int,
        page_size: int,
        status: str | None = None,
        area_id: int | None = None,
    ) -> list[TowTruck]:
        self.calls.append(
            {"page": page, "page_size": page_size, "status": status, "area_id": area_id}
        )
        out = [
            t
            for t in sorted(self.tow_trucks, key=lambda t: t.id)
            if (status is None or t.status.value == status)
            and (area_id is None or t.area_id == area_id)
        ]
        if page_size < 0:
            return out
        return out[page * page_size : (page + 1) * page_size]

    def find_tow_truck_by_id(self, truck_id: int) -> TowTruck | None:
        return next((t for t in self.tow_trucks if t.id == truck_id), None)

    def update_location(self, *, truck_id: int, node_id: int) -> None:
        for i, t in enumerate(self.tow_trucks):
            if t.id == truck_id:
                self.tow_trucks[i] = TowTruck(
                    id=t.id,
                    driver_id=t.driver_id,
                    status=t.status,
                    node_id=node_id,
                    area_id=t.area_id,
                )
                return
        raise TowTruckNotFound(f"Tow truck {truck_id} not found")


@dataclass(slots=True)
class FakeOrderRepository:
    orders: dict[int, Order]

    def find_order_by_id(self, order_id: int) -> Order:
        if order_id not in self.orders:
            raise OrderNotFound(f"Order {order_id} not found")
        return self.orders[order_id]


class FailingTowTruckRepository(FakeTowTruckRepository):
    def get_paginated_tow_trucks(self, **kwargs) -> list[TowTruck]:
        raise InternalError("table unavailable")


def _truck(
    truck_id: int,
    node_id: int,
    *,
    area_id: int = 1,
    status: TowTruckStatus = TowTruckStatus.AVAILABLE,
) -> TowTruck:
    return TowTruck(
        id=truck_id,
        driver_id=100 + truck_id,
        status=status,
        node_id=node_id,
        area_id=area_id,
    )


def _star_map() -> FakeMapRepository:
    # Order at node 1; spokes of 12 (node 2), 7 (node 3), 7 (node 4).
    # Node 5 is isolated; nodes 10-11 form area 2.
    return FakeMapRepository(
        nodes={1: 1, 2: 1, 3: 1, 4: 1, 5: 1, 10: 2, 11: 2},
        edges=[
            Edge(node_a_id=1, node_b_id=2, weight=12),
            Edge(node_a_id=1, node_b_id=3, weight=7),
            Edge(node_a_id=4, node_b_id=1, weight=7),
            Edge(node_a_id=10, node_b_id=11, weight=1),
        ],
    )


def _service(
    tow_trucks: list[TowTruck], *, map_repository: FakeMapRepository | None = None
) -> TowTruckService:
    return TowTruckService(
        tow_truck_repository=FakeTowTruckRepository(tow_trucks),
        order_repository=FakeOrderRepository(
            {1: Order(id=1, node_id=1), 2: Order(id=2, node_id=404)}
        ),
        map_repository=map_repository or _star_map(),
    )


def test_pick_nearest_keeps_first_of_tied_minimum() -> None:
    a, b, c = _truck(1, 2), _truck(2, 3), _truck(3, 4)

    assert pick_nearest([(12, a), (7, b), (7, c)]) == (7, b)
    assert pick_nearest([]) is None


def test_dispatch_returns_closest_truck() -> None:
    service = _service([_truck(1, 2), _truck(2, 3)])

    assert service.find_nearest_available_tow_truck(1) == _truck(2, 3)


def test_dispatch_tie_goes_to_first_encountered() -> None:
    service = _service([_truck(1, 2), _truck(2, 3), _truck(3, 4)])

    best = service.find_nearest_available_tow_truck(1)

    assert best is not None
    assert best.id == 2


def test_dispatch_rejects_trucks_beyond_threshold() -> None:
    map_repository = FakeMapRepository(
        nodes={1: 1, 2: 1, 3: 1},
        edges=[
            Edge(node_a_id=1, node_b_id=2, weight=DEFAULT_MAX_DISPATCH_DISTANCE + 1),
            Edge(node_a_id=1, node_b_id=3, weight=DEFAULT_MAX_DISPATCH_DISTANCE * 2),
        ],
    )
    service = _service([_truck(1, 2), _truck(2, 3)], map_repository=map_repository)

    assert service.find_nearest_available_tow_truck(1) is None


def test_dispatch_accepts_truck_exactly_at_threshold() -> None:
    map_repository = FakeMapRepository(
        nodes={1: 1, 2: 1},
        edges=[Edge(node_a_id=1, node_b_id=2, weight=DEFAULT_MAX_DISPATCH_DISTANCE)],
    )
    service = _service([_truck(1, 2)], map_repository=map_repository)

    assert service.find_nearest_available_tow_truck(1) == _truck(1, 2)


def test_dispatch_threshold_is_configurable() -> None:
    service = _service([_truck(1, 2)])
    service.max_dispatch_distance = 10

    assert service.find_nearest_available_tow_truck(1) is None


def test_dispatch_without_candidates_returns_none() -> None:
    service = _service([])

    assert service.find_nearest_available_tow_truck(1) is None


def test_dispatch_with_only_unreachable_trucks_returns_none() -> None:
    service = _service([_truck(1, 5)])

    assert service.find_nearest_available_tow_truck(1) is None


def test_dispatch_ignores_busy_trucks_and_other_areas() -> None:
    tow_trucks = [
        _truck(1, 3, status=TowTruckStatus.BUSY),
        _truck(2, 10, area_id=2),
        _truck(3, 2),
    ]
    service = _service(tow_trucks)

    assert service.find_nearest_available_tow_truck(1) == _truck(3, 2)

    repo = service.tow_truck_repository
    assert isinstance(repo, FakeTowTruckRepository)
    assert repo.calls == [
        {"page": 0, "page_size": -1, "status": "available", "area_id": 1}
    ]


def test_dispatch_unknown_order_raises_not_found() -> None:
    with pytest.raises(OrderNotFound):
        _service([_truck(1, 2)]).find_nearest_available_tow_truck(999)


def test_dispatch_order_outside_any_area_raises_not_found() -> None:
    with pytest.raises(AreaNotFound):
        _service([_truck(1, 2)]).find_nearest_available_tow_truck(2)


def test_dispatch_propagates_storage_failures() -> None:
    service = TowTruckService(
        tow_truck_repository=FailingTowTruckRepository([]),
        order_repository=FakeOrderRepository({1: Order(id=1, node_id=1)}),
        map_repository=_star_map(),
    )

    with pytest.raises(InternalError):
        service.find_nearest_available_tow_truck(1)


def test_fresh_mode_rebuilds_graph_per_request() -> None:
    map_repository = _star_map()
    service = _service([_truck(1, 2)], map_repository=map_repository)

    service.find_nearest_available_tow_truck(1)
    service.find_nearest_available_tow_truck(1)

    assert map_repository.loads == 2


def test_shared_mode_reuses_graph_and_distances() -> None:
    map_repository = _star_map()
    provider = AreaGraphProvider(map_repository=map_repository, mode="shared")
    service = TowTruckService(
        tow_truck_repository=FakeTowTruckRepository([_truck(1, 2), _truck(2, 3)]),
        order_repository=FakeOrderRepository({1: Order(id=1, node_id=1)}),
        map_repository=map_repository,
        graph_provider=provider,
    )

    first = service.find_nearest_available_tow_truck(1)
    second = service.find_nearest_available_tow_truck(1)

    assert first == second == _truck(2, 3)
    assert map_repository.loads == 1
    assert provider.get(1).relaxations == 1


def test_directory_operations_delegate_to_repository() -> None:
    service = _service([_truck(2, 3), _truck(1, 2), _truck(3, 10, area_id=2)])

    assert service.get_tow_truck_by_id(1) == _truck(1, 2)
    assert service.get_tow_truck_by_id(42) is None
    assert [t.id for t in service.get_all_tow_trucks(page=0, page_size=2)] == [1, 2]
    assert [t.id for t in service.get_all_tow_trucks(page=1, page_size=2)] == [3]
    assert [
        t.id for t in service.get_all_tow_trucks(page=0, page_size=-1, area_id=2)
    ] == [3]

    service.update_location(truck_id=1, node_id=4)
    updated = service.get_tow_truck_by_id(1)
    assert updated is not None and updated.node_id == 4


def test_update_location_of_unknown_truck_raises() -> None:
    with pytest.raises(TowTruckNotFound):
        _service([]).update_location(truck_id=7, node_id=1)
