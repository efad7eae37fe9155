from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from towdispatch.domain.models import TowTruck, TowTruckStatus


class ITowTruckRepository(ABC):
    """Port for the tow truck directory."""

    @abstractmethod
    def get_paginated_tow_trucks(
        self,
        *,
        page: int,
        page_size: int,
        status: str | None = None,
        area_id: int | None = None,
    ) -> Sequence[TowTruck]:
        """Trucks ordered by id. A negative page_size returns every match."""

    @abstractmethod
    def find_tow_truck_by_id(self, truck_id: int) -> TowTruck | None:
        raise NotImplementedError

    @abstractmethod
    def update_location(self, *, truck_id: int, node_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, *, truck_id: int, status: TowTruckStatus) -> None:
        raise NotImplementedError
