# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from stackgraph.core.graph import DependencyGraph, load_graph
from tests.fixtures.graphs import PLATFORM_GRAPH_BYTES

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on shared runners
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "performance: timing-sensitive tests, excluded with -m 'not performance'")


# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def platform_graph() -> DependencyGraph:
    """The platform graph, loaded without validators."""
    return load_graph(PLATFORM_GRAPH_BYTES)


@pytest.fixture
def write_graph(tmp_path: Path) -> Callable[[bytes], Path]:
    """Write graph document bytes to a temp file and return its path."""

    def _write(data: bytes, name: str = "deps.json") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """configure_logging() binds the root handler to the current stderr; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
