from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from towdispatch.domain.models import Edge, Node


class IMapRepository(ABC):
    """Port for loading the road network, scoped by area."""

    @abstractmethod
    def get_all_nodes(self, area_id: int | None = None) -> Sequence[Node]:
        raise NotImplementedError

    @abstractmethod
    def get_all_edges(self, area_id: int | None = None) -> Sequence[Edge]:
        """Return each road segment once (no mirrored duplicates)."""

    @abstractmethod
    def get_area_id_by_node_id(self, node_id: int) -> int:
        """Raise AreaNotFound when the node belongs to no area."""

    def reload(self) -> None:
        """Drop rows held in memory so the next read sees current map data."""
