# tests/property/__init__.py
"""Property-based tests for stackgraph.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: closure invariants, loader determinism, validator agreement
"""
