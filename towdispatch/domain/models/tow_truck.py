from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TowTruckStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class TowTruck:
    id: int
    driver_id: int
    status: TowTruckStatus
    node_id: int  # current location
    area_id: int
