"""ResponsiveScale - proportional design-value scaling across breakpoints.

Designers author values (font sizes, spacing, radii, ...) once, for a base
breakpoint. The engine resolves a viewport to the best-matching breakpoint
and scales each value by the breakpoint's size ratio, applying per-token
constraints, rounding and accessibility floors, with memoization.

Public API:
    ScalingEngine - Breakpoint resolution and value scaling for one config
    ResponsiveContext - Tracks the current breakpoint for one consumer tree
    create_default_config - Four-breakpoint default configuration
    load_config / loads_config - Configuration from JSON
    validate_config - Collect configuration errors and warnings

Exceptions:
    ScalingError - Base exception class
    ConfigurationError - Invalid configuration (fatal)
    ValidationError - Invalid base value (recovered, logged)
    CacheError - Persisted cache backend failure (recovered, logged)

Submodules:
    responsivescale.config - Configuration model, validation, defaults, loading
    responsivescale.runtime - Resolver, computer, cache, engine
    responsivescale.core - Custom scaling and rounding function registry
    responsivescale.diagnostics - Error types and validation results
    responsivescale.introspection - Locale-aware human-readable reports
"""

from .config import (
    Breakpoint,
    ResponsiveConfig,
    ScalingStrategy,
    ScalingToken,
    apply_preset,
    create_breakpoint,
    create_default_config,
    create_scaling_strategy,
    load_config,
    loads_config,
    validate_config,
)
from .core import StrategyRegistry
from .diagnostics import CacheError, ConfigurationError, ScalingError, ValidationError
from .runtime import (
    CacheConfig,
    PerformanceMetrics,
    ResponsiveContext,
    ScaleOptions,
    ScaledValue,
    ScalingEngine,
)

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("responsivescale")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Breakpoint",
    "CacheConfig",
    "CacheError",
    "ConfigurationError",
    "PerformanceMetrics",
    "ResponsiveConfig",
    "ResponsiveContext",
    "ScaleOptions",
    "ScaledValue",
    "ScalingEngine",
    "ScalingError",
    "ScalingStrategy",
    "ScalingToken",
    "StrategyRegistry",
    "ValidationError",
    "__version__",
    "apply_preset",
    "create_breakpoint",
    "create_default_config",
    "create_scaling_strategy",
    "load_config",
    "loads_config",
    "validate_config",
]
