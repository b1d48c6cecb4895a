# src/stackgraph/core/graph/__init__.py
"""Dependency graph model, loading, validation and closure."""

from stackgraph.core.graph.loader import load_graph, parse_graph
from stackgraph.core.graph.models import (
    DependencyEntry,
    DependencyGraph,
    GraphDeserializationError,
    GraphDocument,
    GraphLoadError,
    GraphValidationError,
    ValidationFailure,
)
from stackgraph.core.graph.resolver import closure
from stackgraph.core.graph.sources import BytesGraphSource, FileGraphSource, GraphSource
from stackgraph.core.graph.validators import (
    FunctionValidator,
    KnownProvidersValidator,
    UniqueNamesValidator,
    Validator,
    validator,
)

__all__ = [
    "BytesGraphSource",
    "DependencyEntry",
    "DependencyGraph",
    "FileGraphSource",
    "FunctionValidator",
    "GraphDeserializationError",
    "GraphDocument",
    "GraphLoadError",
    "GraphSource",
    "GraphValidationError",
    "KnownProvidersValidator",
    "UniqueNamesValidator",
    "ValidationFailure",
    "Validator",
    "closure",
    "load_graph",
    "parse_graph",
    "validator",
]
