"""
Stackgraph: dependency closure for component stacks.

Loads a declared graph of applications and the infrastructure providers
they depend on, validates it, and computes everything a set of seed
components needs in order to run.
"""

__version__ = "0.1.0"
