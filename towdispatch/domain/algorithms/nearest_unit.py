from __future__ import annotations

from typing import Sequence, TypeVar

from .graph_store import GraphStore

U = TypeVar("U")


def nearest_units(
    store: GraphStore,
    source: int,
    candidates: Sequence[tuple[U, int]],
    *,
    use_cache: bool = False,
) -> list[tuple[int, U]]:
    """Network distance from `source` to each candidate's node, in one traversal.

    `candidates` are (unit, node_id) pairs. Units whose node was not reached
    are left out; the rest keep their input order. Ranking is up to the caller.
    """

    if not candidates:
        return []

    targets = [node_id for _, node_id in candidates]
    reached = {
        node_id: distance
        for distance, node_id in store.nearest_among(
            source, targets, use_cache=use_cache
        )
    }
    return [
        (reached[node_id], unit) for unit, node_id in candidates if node_id in reached
    ]
