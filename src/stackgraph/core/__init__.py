# src/stackgraph/core/__init__.py
"""Core infrastructure: dependency graph, configuration, logging."""

from stackgraph.core.config import (
    LoggingSettings,
    StackgraphSettings,
    build_validators,
    load_settings,
)
from stackgraph.core.graph import (
    DependencyEntry,
    DependencyGraph,
    FileGraphSource,
    GraphDeserializationError,
    GraphLoadError,
    GraphValidationError,
    KnownProvidersValidator,
    UniqueNamesValidator,
    ValidationFailure,
    Validator,
    closure,
    load_graph,
)
from stackgraph.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "DependencyEntry",
    "DependencyGraph",
    "FileGraphSource",
    "GraphDeserializationError",
    "GraphLoadError",
    "GraphValidationError",
    "KnownProvidersValidator",
    "LoggingSettings",
    "StackgraphSettings",
    "UniqueNamesValidator",
    "ValidationFailure",
    "Validator",
    "build_validators",
    "closure",
    "configure_logging",
    "get_logger",
    "load_graph",
    "load_settings",
]
