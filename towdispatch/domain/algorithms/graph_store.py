from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from towdispatch.domain.models import Edge, Node

from .relaxation import UNREACHABLE, Algorithm, single_source_distances


@dataclass(slots=True)
class GraphStore:
    """In-memory road network with a per-source distance cache.

    - Edges are undirected: `add_edge` registers both directions.
    - Distances come from one full single-source relaxation, so a cached
      table covers every node reachable from its source.
    - Unknown or unreachable nodes resolve to `UNREACHABLE`; queries never raise.
    """

    algorithm: Algorithm = "queue"

    nodes: dict[int, Node] = field(default_factory=dict)
    edges: dict[int, list[Edge]] = field(default_factory=dict)
    distances_cache: dict[int, dict[int, int]] = field(default_factory=dict)
    relaxations: int = 0

    @classmethod
    def build(
        cls,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        *,
        algorithm: Algorithm = "queue",
    ) -> "GraphStore":
        store = cls(algorithm=algorithm)
        for node in nodes:
            store.add_node(node)
        for edge in edges:
            store.add_edge(edge)
        return store

    def add_node(self, node: Node) -> None:
        self.nodes[node.id] = node

    def add_edge(self, edge: Edge) -> None:
        # Callers must insert each road segment once; duplicates only add work.
        self.edges.setdefault(edge.node_a_id, []).append(edge)
        reverse = edge.reversed()
        self.edges.setdefault(reverse.node_a_id, []).append(reverse)

        # A new edge can shorten any path.
        self.distances_cache.clear()

    def shortest_distance(self, source: int, target: int) -> int:
        distances = self._distances_from(source, use_cache=True)
        return distances.get(target, UNREACHABLE)

    def nearest_among(
        self, source: int, targets: Sequence[int], *, use_cache: bool = False
    ) -> list[tuple[int, int]]:
        """Return (distance, node_id) for every reached target, in input order.

        Unreached targets are dropped. By default the cache is neither read
        nor written, so one-shot queries leave the store untouched.
        """

        distances = self._distances_from(source, use_cache=use_cache)
        return [
            (distances[target], target) for target in targets if target in distances
        ]

    def _distances_from(self, source: int, *, use_cache: bool) -> dict[int, int]:
        if use_cache:
            cached = self.distances_cache.get(source)
            if cached is not None:
                return cached

        distances = single_source_distances(
            self.edges, source, algorithm=self.algorithm
        )
        self.relaxations += 1

        if use_cache:
            # Whole-table assignment: readers never see a partial table.
            self.distances_cache[source] = distances
        return distances
