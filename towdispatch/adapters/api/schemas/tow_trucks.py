from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TowTruckSchema(BaseModel):
    id: int
    driver_id: int
    status: Literal["available", "busy"]
    node_id: int
    area_id: int


class UpdateLocationSchema(BaseModel):
    node_id: int = Field(..., ge=0)
