# tests/unit/core/graph/test_sources.py
"""Tests for graph sources: the collaborators that read bytes for the loader."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from stackgraph.core.graph import (
    BytesGraphSource,
    FileGraphSource,
    GraphDeserializationError,
    GraphValidationError,
    UniqueNamesValidator,
    closure,
)
from tests.fixtures.graphs import PLATFORM_APPLICATIONS, PLATFORM_GRAPH_BYTES, graph_document


class TestFileGraphSource:
    """Loading graph documents from disk."""

    def test_loads_file(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph(PLATFORM_GRAPH_BYTES)

        graph = FileGraphSource(path).get_graph([UniqueNamesValidator()])

        assert graph.names == PLATFORM_APPLICATIONS
        assert closure(graph, ["orchestrator"]) == ["orchestrator", "objectstore", "cache", "smbdriver"]

    def test_empty_file_is_empty_graph(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph(b"")
        assert len(FileGraphSource(path).get_graph()) == 0

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="deps.json"):
            FileGraphSource(tmp_path / "deps.json").get_graph()

    def test_deserialization_error_propagates(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph(b'{"graph": [], "extra": true}')
        with pytest.raises(GraphDeserializationError):
            FileGraphSource(path).get_graph()

    def test_validation_error_propagates(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph(graph_document([("platform", []), ("platform", [])]))
        with pytest.raises(GraphValidationError) as exc_info:
            FileGraphSource(path).get_graph([UniqueNamesValidator()])
        assert exc_info.value.names == ("platform",)

    def test_read_bytes_returns_raw_document(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph(PLATFORM_GRAPH_BYTES)
        assert FileGraphSource(path).read_bytes() == PLATFORM_GRAPH_BYTES

    def test_repr_includes_path(self, tmp_path: Path) -> None:
        source = FileGraphSource(tmp_path / "deps.json")
        assert "deps.json" in repr(source)

    def test_load_is_logged(self, write_graph: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
        from stackgraph.core.logging import configure_logging

        configure_logging(json_output=True, level="DEBUG")
        path = write_graph(PLATFORM_GRAPH_BYTES)

        FileGraphSource(path).get_graph([UniqueNamesValidator()])

        captured = capsys.readouterr()
        events = [json.loads(line) for line in captured.err.strip().splitlines()]
        loaded = [e for e in events if e["event"] == "loaded dependency graph"]
        assert len(loaded) == 1
        assert loaded[0]["entries"] == len(PLATFORM_APPLICATIONS)
        assert loaded[0]["validators"] == ["unique_names"]
        assert loaded[0]["path"] == str(path)


class TestBytesGraphSource:
    """In-memory source."""

    def test_loads_bytes(self) -> None:
        graph = BytesGraphSource(PLATFORM_GRAPH_BYTES).get_graph()
        assert len(graph) == len(PLATFORM_APPLICATIONS)

    def test_applies_validators(self) -> None:
        source = BytesGraphSource(graph_document([("a", []), ("a", [])]))
        with pytest.raises(GraphValidationError):
            source.get_graph([UniqueNamesValidator()])
