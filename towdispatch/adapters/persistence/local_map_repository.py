from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from towdispatch.app.ports.output import IMapRepository
from towdispatch.domain.exceptions import AreaNotFound, InternalError
from towdispatch.domain.models import Edge, Node


@dataclass(slots=True)
class LocalMapRepository(IMapRepository):
    """Loads the road network from a directory of CSV files.

    - nodes.csv: id,x,y,area_id
    - edges.csv: node_a_id,node_b_id,weight (one row per road segment)

    An edge belongs to an area when both of its endpoints do.

    Env vars:
      - MAP_DATA_PATH: directory containing nodes.csv and edges.csv
    """

    base_path: str | Path | None = None

    _nodes: dict[int, Node] | None = None
    _area_by_node: dict[int, int] = field(default_factory=dict)
    _edges: list[Edge] = field(default_factory=list)

    def _base(self) -> Path:
        value = self.base_path or os.getenv("MAP_DATA_PATH") or "data/map"
        return Path(value)

    def _load(self) -> dict[int, Node]:
        if self._nodes is not None:
            return self._nodes

        base = self._base()
        nodes: dict[int, Node] = {}
        area_by_node: dict[int, int] = {}
        edges: list[Edge] = []
        try:
            with (base / "nodes.csv").open("r", encoding="utf-8", newline="") as fp:
                for row in csv.DictReader(fp):
                    node = Node(id=int(row["id"]), x=int(row["x"]), y=int(row["y"]))
                    nodes[node.id] = node
                    area_by_node[node.id] = int(row["area_id"])

            with (base / "edges.csv").open("r", encoding="utf-8", newline="") as fp:
                for row in csv.DictReader(fp):
                    edges.append(
                        Edge(
                            node_a_id=int(row["node_a_id"]),
                            node_b_id=int(row["node_b_id"]),
                            weight=int(row["weight"]),
                        )
                    )
        except (OSError, KeyError, ValueError) as exc:
            raise InternalError(
                f"Failed to load map data from {base}: {exc}"
            ) from exc

        self._area_by_node = area_by_node
        self._edges = edges
        self._nodes = nodes
        return nodes

    def reload(self) -> None:
        self._nodes = None
        self._area_by_node = {}
        self._edges = []

    def get_all_nodes(self, area_id: int | None = None) -> Sequence[Node]:
        nodes = self._load()
        if area_id is None:
            return list(nodes.values())
        return [n for n in nodes.values() if self._area_by_node[n.id] == area_id]

    def get_all_edges(self, area_id: int | None = None) -> Sequence[Edge]:
        self._load()
        if area_id is None:
            return list(self._edges)
        return [
            e
            for e in self._edges
            if self._area_by_node.get(e.node_a_id) == area_id
            and self._area_by_node.get(e.node_b_id) == area_id
        ]

    def get_area_id_by_node_id(self, node_id: int) -> int:
        self._load()
        area_id = self._area_by_node.get(node_id)
        if area_id is None:
            raise AreaNotFound(f"No area found for node {node_id}")
        return area_id
