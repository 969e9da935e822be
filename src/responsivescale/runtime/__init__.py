"""Scaling runtime package.

Provides breakpoint resolution, value computation, caching, accessibility
floors and the ScalingEngine API. Depends on the config package.

Python 3.13+.
"""

from .accessibility import AccessibilityEnforcer, enforce, infer_token_kind
from .cache import InMemoryStore, KeyValueStore, ValueCache
from .cache_config import CacheConfig
from .computer import (
    ScaleOptions,
    ScaledValue,
    compute,
    compute_detailed,
    origin_value,
    scaling_ratio,
)
from .context import ResponsiveContext
from .engine import ScalingEngine
from .metrics import PerformanceMetrics
from .resolver import (
    BreakpointResolver,
    BreakpointScore,
    Capabilities,
    CapabilityProvider,
    ScoreWeights,
    StaticCapabilities,
    find_breakpoint,
    resolve_breakpoint,
    score_breakpoint,
)

__all__ = [
    "AccessibilityEnforcer",
    "BreakpointResolver",
    "BreakpointScore",
    "CacheConfig",
    "Capabilities",
    "CapabilityProvider",
    "InMemoryStore",
    "KeyValueStore",
    "PerformanceMetrics",
    "ResponsiveContext",
    "ScaleOptions",
    "ScaledValue",
    "ScalingEngine",
    "ScoreWeights",
    "StaticCapabilities",
    "ValueCache",
    "compute",
    "compute_detailed",
    "enforce",
    "find_breakpoint",
    "infer_token_kind",
    "origin_value",
    "resolve_breakpoint",
    "score_breakpoint",
    "scaling_ratio",
]
