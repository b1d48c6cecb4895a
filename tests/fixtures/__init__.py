# tests/fixtures/__init__.py
"""Shared fixtures and graph documents for stackgraph tests."""

from tests.fixtures.graphs import (
    CYCLIC_GRAPH_BYTES,
    INFRASTRUCTURE_PROVIDERS,
    PLATFORM_APPLICATIONS,
    PLATFORM_GRAPH_BYTES,
    graph_document,
    make_graph,
)

__all__ = [
    "CYCLIC_GRAPH_BYTES",
    "INFRASTRUCTURE_PROVIDERS",
    "PLATFORM_APPLICATIONS",
    "PLATFORM_GRAPH_BYTES",
    "graph_document",
    "make_graph",
]
