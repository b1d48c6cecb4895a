# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import dependency_graphs, node_names
"""

from tests.strategies.graphs import dependency_graphs, graph_entries, node_names, seed_lists

__all__ = [
    "dependency_graphs",
    "graph_entries",
    "node_names",
    "seed_lists",
]
