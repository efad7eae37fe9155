from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from towdispatch.adapters.api.dependencies import get_tow_truck_service
from towdispatch.adapters.api.schemas.tow_trucks import (
    TowTruckSchema,
    UpdateLocationSchema,
)
from towdispatch.app.services.tow_truck_service import TowTruckService
from towdispatch.domain.models import TowTruck

router = APIRouter(prefix="/tow_trucks", tags=["tow_trucks"])


def _tow_truck_to_schema(tow_truck: TowTruck) -> TowTruckSchema:
    return TowTruckSchema(
        id=tow_truck.id,
        driver_id=tow_truck.driver_id,
        status=tow_truck.status.value,
        node_id=tow_truck.node_id,
        area_id=tow_truck.area_id,
    )


@router.get("", response_model=list[TowTruckSchema])
def list_tow_trucks(
    page: int = Query(default=0, ge=0),
    page_size: int = Query(default=-1),
    status: str | None = Query(default=None),
    area: int | None = Query(default=None),
    service: TowTruckService = Depends(get_tow_truck_service),
) -> list[TowTruckSchema]:
    return [
        _tow_truck_to_schema(t)
        for t in service.get_all_tow_trucks(
            page=page, page_size=page_size, status=status, area_id=area
        )
    ]


# Declared before /{truck_id} so "nearest" is not parsed as an id.
@router.get("/nearest", response_model=TowTruckSchema | None)
def get_nearest_available_tow_truck(
    order_id: int = Query(...),
    service: TowTruckService = Depends(get_tow_truck_service),
) -> TowTruckSchema | None:
    tow_truck = service.find_nearest_available_tow_truck(order_id)
    if tow_truck is None:
        return None
    return _tow_truck_to_schema(tow_truck)


@router.get("/{truck_id}", response_model=TowTruckSchema)
def get_tow_truck(
    truck_id: int,
    service: TowTruckService = Depends(get_tow_truck_service),
) -> TowTruckSchema:
    tow_truck = service.get_tow_truck_by_id(truck_id)
    if tow_truck is None:
        raise HTTPException(status_code=404, detail="Tow truck not found")
    return _tow_truck_to_schema(tow_truck)


@router.put("/{truck_id}/location", status_code=204)
def update_location(
    truck_id: int,
    req: UpdateLocationSchema,
    service: TowTruckService = Depends(get_tow_truck_service),
) -> Response:
    service.update_location(truck_id=truck_id, node_id=req.node_id)
    return Response(status_code=204)
