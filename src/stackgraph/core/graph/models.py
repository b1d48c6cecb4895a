# src/stackgraph/core/graph/models.py
"""Types, schema and exceptions for dependency graphs.

Leaf module: no intra-package imports (prevents import cycles).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated

import networkx as nx
from networkx import DiGraph
from pydantic import BaseModel, Field, StringConstraints, field_validator

# Names are compared by exact, case-sensitive equality. No stripping.
NodeName = Annotated[str, StringConstraints(min_length=1)]


class GraphLoadError(ValueError):
    """Base class for everything load_graph() raises."""

    pass


class GraphDeserializationError(GraphLoadError):
    """Raised when input bytes do not match the graph document schema.

    Attributes:
        details: One "<location>: <message>" string per schema violation.
    """

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details: list[str] = details or []


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Descriptive failure returned by a validator.

    Attributes:
        code: Machine-readable failure code (e.g. "DUPLICATE_NAME")
        message: Human-readable description
        names: The offending node name(s), most significant first
    """

    code: str
    message: str
    names: tuple[str, ...] = ()


class GraphValidationError(GraphLoadError):
    """Raised when a validator in the loader chain rejects the graph.

    Attributes:
        validator: Name of the validator that failed
        stage: Zero-based position of that validator in the chain
        failure: The failure the validator returned
    """

    def __init__(self, validator: str, stage: int, failure: ValidationFailure) -> None:
        super().__init__(f"Validation stage {stage} ({validator}) failed: {failure.message}")
        self.validator = validator
        self.stage = stage
        self.failure = failure

    @property
    def names(self) -> tuple[str, ...]:
        """Offending node name(s) carried by the failure."""
        return self.failure.names


class DependencyEntry(BaseModel):
    """One declared node and its direct dependencies.

    Dependencies may name nodes that are never declared themselves
    (providers). That is legal.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    name: NodeName = Field(description="Application or component name")
    dependencies: tuple[NodeName, ...] = Field(
        default=(),
        description="Direct dependencies, in declaration order",
    )

    @field_validator("dependencies", mode="before")
    @classmethod
    def null_dependencies_are_empty(cls, v: object) -> object:
        """A null dependency list declares no dependencies."""
        if v is None:
            return ()
        return v


class GraphDocument(BaseModel):
    """Wire shape of a dependency graph document: {"graph": [entry, ...]}."""

    model_config = {"frozen": True, "extra": "forbid"}

    graph: tuple[DependencyEntry, ...] = Field(
        default=(),
        description="Declared entries, in document order",
    )

    @field_validator("graph", mode="before")
    @classmethod
    def null_graph_is_empty(cls, v: object) -> object:
        """A null graph is the same as an absent one."""
        if v is None:
            return ()
        return v


class DependencyGraph:
    """Declared dependency graph plus its adjacency view.

    Wraps a frozen NetworkX DiGraph with an edge name -> dependency for every
    declared dependency. The adjacency view is built once here and never
    mutated afterwards, so instances are safe to share between threads.

    Successor order in the adjacency view is first-declared order, which is
    what makes closure output reproducible.
    """

    def __init__(self, entries: Iterable[DependencyEntry] = ()) -> None:
        self._entries: tuple[DependencyEntry, ...] = tuple(entries)
        self._declared: frozenset[str] = frozenset(entry.name for entry in self._entries)

        adjacency: DiGraph[str] = nx.DiGraph()
        for entry in self._entries:
            adjacency.add_node(entry.name)
            # A repeated declaration replaces the earlier dependency list
            adjacency.remove_edges_from(list(adjacency.out_edges(entry.name)))
            for dependency in entry.dependencies:
                adjacency.add_edge(entry.name, dependency)

        self._adjacency: DiGraph[str] = nx.freeze(adjacency)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._adjacency

    def __repr__(self) -> str:
        return f"DependencyGraph(entries={len(self._entries)}, nodes={self.node_count}, edges={self.edge_count})"

    @property
    def entries(self) -> tuple[DependencyEntry, ...]:
        """Declared entries, exactly as loaded."""
        return self._entries

    @property
    def names(self) -> tuple[str, ...]:
        """Declared entry names in first-declared order, without duplicates."""
        return tuple(dict.fromkeys(entry.name for entry in self._entries))

    @property
    def providers(self) -> tuple[str, ...]:
        """Names referenced as dependencies but never declared, in first-referenced order."""
        referenced = dict.fromkeys(dependency for entry in self._entries for dependency in entry.dependencies)
        return tuple(name for name in referenced if name not in self._declared)

    @property
    def node_count(self) -> int:
        """Number of distinct names in the adjacency view (entries and providers)."""
        return self._adjacency.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Number of depends-on edges in the adjacency view."""
        return self._adjacency.number_of_edges()

    def is_declared(self, name: str) -> bool:
        """Check whether name has its own entry (as opposed to being a provider)."""
        return name in self._declared

    def neighbors(self, name: str) -> tuple[str, ...]:
        """Direct dependencies of name, in first-declared order.

        Returns an empty tuple for providers and for names not in the graph.
        """
        if name not in self._adjacency:
            return ()
        return tuple(self._adjacency.successors(name))

    def get_nx_graph(self) -> DiGraph[str]:
        """Return a frozen copy of the adjacency view.

        Use this for topology analysis (cycles, descendants, and so on).
        Mutation attempts raise nx.NetworkXError.
        """
        return nx.freeze(self._adjacency.copy())  # type: ignore[no-any-return]
