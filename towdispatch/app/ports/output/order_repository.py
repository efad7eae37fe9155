from __future__ import annotations

from abc import ABC, abstractmethod

from towdispatch.domain.models import Order


class IOrderRepository(ABC):
    """Port for loading service orders."""

    @abstractmethod
    def find_order_by_id(self, order_id: int) -> Order:
        """Raise OrderNotFound when the order does not exist."""
