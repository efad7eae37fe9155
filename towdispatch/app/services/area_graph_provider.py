from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Literal

from towdispatch.app.ports.output import IMapRepository
from towdispatch.domain.algorithms.graph_store import GraphStore
from towdispatch.domain.algorithms.relaxation import Algorithm

logger = logging.getLogger(__name__)

GraphCacheMode = Literal["fresh", "shared"]


@dataclass(slots=True)
class AreaGraphProvider:
    """Hands out a GraphStore holding exactly one area's nodes and edges.

    - fresh: a new store per call; nothing outlives the request.
    - shared: one store per area for the whole process, so distance tables
      computed for a source are reused by later requests. Stores are fully
      built before they are published and are not mutated afterwards;
      `invalidate` swaps them out when map data changes.
    """

    map_repository: IMapRepository
    mode: GraphCacheMode = "fresh"
    algorithm: Algorithm = "queue"

    _stores: dict[int, GraphStore] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def shared(self) -> bool:
        return self.mode == "shared"

    def get(self, area_id: int) -> GraphStore:
        if not self.shared:
            return self._build(area_id)

        store = self._stores.get(area_id)
        if store is not None:
            return store

        with self._lock:
            store = self._stores.get(area_id)
            if store is None:
                store = self._build(area_id)
                self._stores[area_id] = store
            return store

    def invalidate(self, area_id: int | None = None) -> None:
        with self._lock:
            self.map_repository.reload()
            if area_id is None:
                self._stores.clear()
            else:
                self._stores.pop(area_id, None)

    def _build(self, area_id: int) -> GraphStore:
        nodes = self.map_repository.get_all_nodes(area_id)
        edges = self.map_repository.get_all_edges(area_id)
        logger.debug(
            "Building graph for area %s (%d nodes, %d edges)",
            area_id,
            len(nodes),
            len(edges),
        )
        return GraphStore.build(nodes, edges, algorithm=self.algorithm)
