from __future__ import annotations

import os
from dataclasses import dataclass

from botocore.exceptions import ClientError

from towdispatch.adapters.aws import dynamodb_client
from towdispatch.app.ports.output import IOrderRepository
from towdispatch.domain.exceptions import InternalError, OrderNotFound
from towdispatch.domain.models import Order


@dataclass(slots=True)
class DynamoDbOrderRepository(IOrderRepository):
    """Orders stored in DynamoDB (hash key: numeric `id`).

    Env vars:
      - DDB_ORDERS_TABLE (default: towdispatch-orders)
    """

    table_name: str | None = None

    def _table(self) -> str:
        return self.table_name or os.getenv("DDB_ORDERS_TABLE") or "towdispatch-orders"

    def find_order_by_id(self, order_id: int) -> Order:
        ddb = dynamodb_client()
        try:
            resp = ddb.get_item(
                TableName=self._table(),
                Key={"id": {"N": str(order_id)}},
                ConsistentRead=True,
            )
        except ClientError as exc:
            raise InternalError(f"Failed to load order {order_id}: {exc}") from exc

        item = resp.get("Item")
        if not item:
            raise OrderNotFound(f"Order {order_id} not found")
        return Order(id=int(item["id"]["N"]), node_id=int(item["node_id"]["N"]))

    def put_order(self, order: Order) -> None:
        ddb = dynamodb_client()
        ddb.put_item(
            TableName=self._table(),
            Item={"id": {"N": str(order.id)}, "node_id": {"N": str(order.node_id)}},
        )
