# src/stackgraph/core/graph/validators.py
"""Validator protocol and the standard graph validators.

A validator is a read-only rule the loader applies to a freshly
deserialized graph. It returns None when the graph satisfies the rule and
a ValidationFailure describing the first violation otherwise.

New rules do not require loader changes: anything with a ``name`` and a
``validate(graph)`` method can join the chain, and the ``validator``
decorator adapts plain functions::

    @validator("no_self_dependencies")
    def no_self_dependencies(graph: DependencyGraph) -> ValidationFailure | None:
        for entry in graph.entries:
            if entry.name in entry.dependencies:
                return ValidationFailure("SELF_DEPENDENCY", f"'{entry.name}' depends on itself", (entry.name,))
        return None
"""

from __future__ import annotations

import difflib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

from stackgraph.core.graph.models import DependencyGraph, ValidationFailure

ValidatorFunc: TypeAlias = Callable[[DependencyGraph], ValidationFailure | None]


@runtime_checkable
class Validator(Protocol):
    """Protocol for loader validators.

    Implementations must not mutate the graph, so chain order never
    introduces hidden coupling between validators.
    """

    name: str

    def validate(self, graph: DependencyGraph) -> ValidationFailure | None:
        """Return None if the graph passes, else the first failure found."""
        ...


class UniqueNamesValidator:
    """Rejects graphs that declare the same entry name more than once."""

    name = "unique_names"

    def validate(self, graph: DependencyGraph) -> ValidationFailure | None:
        seen: set[str] = set()
        for entry in graph.entries:
            if entry.name in seen:
                return ValidationFailure(
                    code="DUPLICATE_NAME",
                    message=f"Duplicate application name in dependency graph: '{entry.name}'",
                    names=(entry.name,),
                )
            seen.add(entry.name)
        return None


class KnownProvidersValidator:
    """Rejects dependencies that reference names outside a known provider set.

    The provider set is exactly what the caller passes. With
    ``include_declared=True`` the graph's own declared entry names are
    added to it, so applications may depend on each other without being
    listed as providers.

    Failures carry ``(dependency, declaring_entry)`` as names.
    """

    name = "known_providers"

    def __init__(self, providers: Iterable[str], *, include_declared: bool = False) -> None:
        self._providers: frozenset[str] = frozenset(providers)
        self._include_declared = include_declared

    @property
    def providers(self) -> frozenset[str]:
        return self._providers

    @property
    def include_declared(self) -> bool:
        return self._include_declared

    def validate(self, graph: DependencyGraph) -> ValidationFailure | None:
        allowed = self._providers
        if self._include_declared:
            allowed = allowed | set(graph.names)

        for entry in graph.entries:
            for dependency in entry.dependencies:
                if dependency not in allowed:
                    message = f"Dependency '{dependency}' of '{entry.name}' not found in the provider set"
                    suggestions = _suggest_similar(dependency, sorted(allowed))
                    if suggestions:
                        message += f" (did you mean: {', '.join(suggestions)}?)"
                    return ValidationFailure(
                        code="UNKNOWN_DEPENDENCY",
                        message=message,
                        names=(dependency, entry.name),
                    )
        return None


@dataclass(frozen=True, slots=True)
class FunctionValidator:
    """Adapts a plain function to the Validator protocol."""

    name: str
    func: ValidatorFunc

    def validate(self, graph: DependencyGraph) -> ValidationFailure | None:
        return self.func(graph)


def validator(name: str) -> Callable[[ValidatorFunc], FunctionValidator]:
    """Decorator turning ``func(graph) -> ValidationFailure | None`` into a Validator."""

    def decorate(func: ValidatorFunc) -> FunctionValidator:
        return FunctionValidator(name=name, func=func)

    return decorate


def _suggest_similar(name: str, candidates: list[str]) -> list[str]:
    """Suggest similar names for unknown-dependency failures."""
    return difflib.get_close_matches(name, candidates, n=3, cutoff=0.6)
