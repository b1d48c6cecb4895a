# src/stackgraph/core/graph/loader.py
"""Deserialize graph documents and run the validator chain.

No I/O and no logging happen here: callers hand in bytes they already
read, and decide themselves what to report.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError

from stackgraph.core.graph.models import (
    DependencyGraph,
    GraphDeserializationError,
    GraphDocument,
    GraphValidationError,
)
from stackgraph.core.graph.validators import Validator


def parse_graph(data: bytes) -> DependencyGraph:
    """Deserialize bytes into a DependencyGraph without validating it.

    Empty input yields an empty graph. Unknown fields, wrong types and
    malformed JSON raise GraphDeserializationError.
    """
    if not data:
        return DependencyGraph()

    try:
        document = GraphDocument.model_validate_json(data)
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}" if loc else error["msg"])
        raise GraphDeserializationError(
            f"Failed to deserialize dependency graph: {e.error_count()} error(s)",
            details=details,
        ) from e

    return DependencyGraph(document.graph)


def load_graph(data: bytes, validators: Sequence[Validator] = ()) -> DependencyGraph:
    """Load a dependency graph and apply validators in order.

    Args:
        data: Raw graph document bytes (may be empty)
        validators: Validators to apply, in order

    Returns:
        The validated graph

    Raises:
        GraphDeserializationError: If data does not match the schema
        GraphValidationError: On the first validator that fails; later
            validators are not run and no graph is returned
    """
    graph = parse_graph(data)

    for stage, check in enumerate(validators):
        failure = check.validate(graph)
        if failure is not None:
            raise GraphValidationError(validator=check.name, stage=stage, failure=failure)

    return graph
