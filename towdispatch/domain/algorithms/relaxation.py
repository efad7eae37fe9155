from __future__ import annotations

import heapq
from collections import deque
from typing import Literal, Mapping, Sequence

from towdispatch.domain.models import Edge

# Largest 32-bit signed value; road data ids/weights are stored as int32.
UNREACHABLE = 2**31 - 1

Algorithm = Literal["queue", "heap"]

Adjacency = Mapping[int, Sequence[Edge]]


def saturating_add(distance: int, weight: int) -> int:
    return min(distance + weight, UNREACHABLE)


def queue_relaxation(adjacency: Adjacency, source: int) -> dict[int, int]:
    """Single-source shortest distances with a FIFO-queue Bellman-Ford.

    Nodes are re-queued whenever their distance improves and they are not
    already waiting in the queue. Nodes that are never reached get no entry.
    """

    distances: dict[int, int] = {source: 0}
    in_queue: set[int] = {source}
    queue: deque[int] = deque([source])

    while queue:
        current = queue.popleft()
        in_queue.discard(current)
        current_distance = distances[current]

        for edge in adjacency.get(current, ()):
            candidate = saturating_add(current_distance, edge.weight)
            if candidate < distances.get(edge.node_b_id, UNREACHABLE):
                distances[edge.node_b_id] = candidate
                if edge.node_b_id not in in_queue:
                    queue.append(edge.node_b_id)
                    in_queue.add(edge.node_b_id)

    return distances


def heap_relaxation(adjacency: Adjacency, source: int) -> dict[int, int]:
    """Dijkstra over a binary heap. Same result as the queue variant for
    non-negative weights."""

    distances: dict[int, int] = {source: 0}
    settled: set[int] = set()
    heap: list[tuple[int, int]] = [(0, source)]

    while heap:
        current_distance, current = heapq.heappop(heap)
        if current in settled:
            continue
        settled.add(current)

        for edge in adjacency.get(current, ()):
            candidate = saturating_add(current_distance, edge.weight)
            if candidate < distances.get(edge.node_b_id, UNREACHABLE):
                distances[edge.node_b_id] = candidate
                heapq.heappush(heap, (candidate, edge.node_b_id))

    return distances


def single_source_distances(
    adjacency: Adjacency, source: int, *, algorithm: Algorithm = "queue"
) -> dict[int, int]:
    if algorithm == "queue":
        return queue_relaxation(adjacency, source)
    if algorithm == "heap":
        return heap_relaxation(adjacency, source)
    raise ValueError(f"Unsupported relaxation algorithm: {algorithm}")
