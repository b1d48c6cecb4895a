# src/stackgraph/core/graph/resolver.py
"""Dependency closure via breadth-first traversal."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from stackgraph.core.graph.models import DependencyGraph


def closure(graph: DependencyGraph, seeds: Iterable[str]) -> list[str]:
    """Return every name reachable from seeds, each exactly once.

    Seeds come first, in the order given (repeated seeds collapse to their
    first occurrence). After that, names appear in breadth-first order,
    with each node's dependencies visited in first-declared order.

    Providers and names the graph has never seen are leaves: they are
    emitted once and not expanded. Cycles terminate because a name is
    enqueued at most once. Never mutates the graph.

    Args:
        graph: Graph to traverse (validated or not)
        seeds: Names to start from. A bare string is not a seed list.

    Returns:
        Ordered, duplicate-free closure of seeds

    Raises:
        TypeError: If seeds is a single str rather than a collection of names
    """
    if isinstance(seeds, str):
        raise TypeError(f"seeds must be a collection of names, not a str ({seeds!r}); wrap it in a list")

    queue: deque[str] = deque()
    visited: set[str] = set()
    for seed in seeds:
        if seed not in visited:
            visited.add(seed)
            queue.append(seed)

    result: list[str] = []
    while queue:
        name = queue.popleft()
        result.append(name)

        for dependency in graph.neighbors(name):
            if dependency not in visited:
                visited.add(dependency)
                queue.append(dependency)

    return result
