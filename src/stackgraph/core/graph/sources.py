# src/stackgraph/core/graph/sources.py
"""Graph sources: collaborators that fetch graph bytes and hand them to the loader.

The loader itself never touches the filesystem. Sources do, and they are
where reading and loading get logged.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from stackgraph.core.graph.loader import load_graph
from stackgraph.core.graph.models import DependencyGraph
from stackgraph.core.graph.validators import Validator
from stackgraph.core.logging import get_logger

logger = get_logger(__name__)


class GraphSource(Protocol):
    """Protocol for anything that can produce a validated DependencyGraph."""

    def get_graph(self, validators: Sequence[Validator] = ()) -> DependencyGraph:
        """Load the graph, applying validators in order."""
        ...


class FileGraphSource:
    """Loads a dependency graph document from a file on disk.

    Example:
        source = FileGraphSource(Path("deps.json"))
        graph = source.get_graph([UniqueNamesValidator()])
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"FileGraphSource(path={str(self.path)!r})"

    def read_bytes(self) -> bytes:
        """Read the raw document.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Dependency graph file not found: {self.path}")
        logger.debug("reading dependency graph", path=str(self.path))
        return self.path.read_bytes()

    def get_graph(self, validators: Sequence[Validator] = ()) -> DependencyGraph:
        """Read the file and load it, applying validators in order.

        Load errors (GraphDeserializationError, GraphValidationError)
        propagate unchanged.
        """
        data = self.read_bytes()
        graph = load_graph(data, validators)
        logger.info(
            "loaded dependency graph",
            path=str(self.path),
            entries=len(graph),
            nodes=graph.node_count,
            validators=[v.name for v in validators],
        )
        return graph


class BytesGraphSource:
    """Serves a dependency graph from bytes already held in memory."""

    def __init__(self, data: bytes) -> None:
        self.data = data

    def get_graph(self, validators: Sequence[Validator] = ()) -> DependencyGraph:
        graph = load_graph(self.data, validators)
        logger.debug("loaded dependency graph from memory", entries=len(graph), size=len(self.data))
        return graph
