"""Core utilities shared across config and runtime layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- config <- runtime

Exports:
    StrategyRegistry: Named scaling and rounding functions
    create_default_registry: New registry with built-in functions
    get_shared_registry: Shared frozen registry with built-in functions

Python 3.13+.
"""

from .strategies import StrategyRegistry, create_default_registry, get_shared_registry

__all__ = ["StrategyRegistry", "create_default_registry", "get_shared_registry"]
