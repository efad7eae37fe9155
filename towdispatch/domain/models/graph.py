from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    id: int
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Edge:
    """Road segment between two nodes. Traversable in both directions."""

    node_a_id: int
    node_b_id: int
    weight: int

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"Invalid edge weight: {self.weight}")

    def reversed(self) -> "Edge":
        return Edge(
            node_a_id=self.node_b_id, node_b_id=self.node_a_id, weight=self.weight
        )
