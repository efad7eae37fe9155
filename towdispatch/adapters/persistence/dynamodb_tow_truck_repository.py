from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from botocore.exceptions import ClientError

from towdispatch.adapters.aws import dynamodb_client
from towdispatch.app.ports.output import ITowTruckRepository
from towdispatch.domain.exceptions import InternalError, TowTruckNotFound
from towdispatch.domain.models import TowTruck, TowTruckStatus


def _item_to_tow_truck(item: Mapping[str, Any]) -> TowTruck:
    return TowTruck(
        id=int(item["id"]["N"]),
        driver_id=int(item["driver_id"]["N"]),
        status=TowTruckStatus(item["status"]["S"]),
        node_id=int(item["node_id"]["N"]),
        area_id=int(item["area_id"]["N"]),
    )


def tow_truck_to_item(tow_truck: TowTruck) -> dict[str, Any]:
    return {
        "id": {"N": str(tow_truck.id)},
        "driver_id": {"N": str(tow_truck.driver_id)},
        "status": {"S": tow_truck.status.value},
        "node_id": {"N": str(tow_truck.node_id)},
        "area_id": {"N": str(tow_truck.area_id)},
    }


@dataclass(slots=True)
class DynamoDbTowTruckRepository(ITowTruckRepository):
    """Tow truck directory stored in DynamoDB (hash key: numeric `id`).

    Env vars:
      - DDB_TOW_TRUCKS_TABLE (default: towdispatch-tow-trucks)
      - ENDPOINT_URL (preferred for LocalStack)
      - AWS_REGION
    """

    table_name: str | None = None

    def _table(self) -> str:
        return (
            self.table_name
            or os.getenv("DDB_TOW_TRUCKS_TABLE")
            or "towdispatch-tow-trucks"
        )

    def get_paginated_tow_trucks(
        self,
        *,
        page: int,
        page_size: int,
        status: str | None = None,
        area_id: int | None = None,
    ) -> Sequence[TowTruck]:
        filters: list[str] = []
        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        if status is not None:
            filters.append("#s = :s")
            names["#s"] = "status"
            values[":s"] = {"S": status}
        if area_id is not None:
            filters.append("area_id = :a")
            values[":a"] = {"N": str(area_id)}

        kwargs: dict[str, Any] = {"TableName": self._table()}
        if filters:
            kwargs["FilterExpression"] = " AND ".join(filters)
            kwargs["ExpressionAttributeValues"] = values
        if names:
            kwargs["ExpressionAttributeNames"] = names

        ddb = dynamodb_client()
        items: list[Mapping[str, Any]] = []
        try:
            # Scan has no ordering; sort by id after collecting every page.
            while True:
                resp = ddb.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise InternalError(f"Failed to list tow trucks: {exc}") from exc

        tow_trucks = sorted((_item_to_tow_truck(i) for i in items), key=lambda t: t.id)
        if page_size < 0:
            return tow_trucks
        start = max(0, page) * page_size
        return tow_trucks[start : start + page_size]

    def find_tow_truck_by_id(self, truck_id: int) -> TowTruck | None:
        ddb = dynamodb_client()
        try:
            resp = ddb.get_item(
                TableName=self._table(),
                Key={"id": {"N": str(truck_id)}},
                ConsistentRead=True,
            )
        except ClientError as exc:
            raise InternalError(f"Failed to load tow truck {truck_id}: {exc}") from exc

        item = resp.get("Item")
        if not item:
            return None
        return _item_to_tow_truck(item)

    def update_location(self, *, truck_id: int, node_id: int) -> None:
        self._update(
            truck_id,
            UpdateExpression="SET node_id = :n",
            ExpressionAttributeValues={":n": {"N": str(node_id)}},
        )

    def update_status(self, *, truck_id: int, status: TowTruckStatus) -> None:
        self._update(
            truck_id,
            UpdateExpression="SET #s = :s",
            ExpressionAttributeNames={"#s": "status"},
            ExpressionAttributeValues={":s": {"S": status.value}},
        )

    def _update(self, truck_id: int, **kwargs: Any) -> None:
        ddb = dynamodb_client()
        try:
            ddb.update_item(
                TableName=self._table(),
                Key={"id": {"N": str(truck_id)}},
                ConditionExpression="attribute_exists(id)",
                **kwargs,
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code == "ConditionalCheckFailedException":
                raise TowTruckNotFound(f"Tow truck {truck_id} not found") from exc
            raise InternalError(
                f"Failed to update tow truck {truck_id}: {exc}"
            ) from exc

    def put_tow_truck(self, tow_truck: TowTruck) -> None:
        ddb = dynamodb_client()
        ddb.put_item(TableName=self._table(), Item=tow_truck_to_item(tow_truck))
