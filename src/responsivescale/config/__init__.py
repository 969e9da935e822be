"""Responsive configuration: model, validation, defaults and loading.

Python 3.13+.
"""

from .defaults import (
    PRESETS,
    apply_preset,
    create_breakpoint,
    create_default_config,
    create_scaling_strategy,
    default_tokens,
)
from .loading import (
    config_fingerprint,
    config_from_mapping,
    config_to_mapping,
    load_config,
    loads_config,
)
from .model import (
    AccessibilityConfig,
    Breakpoint,
    BreakpointMetadata,
    PerformanceConfig,
    ResponsiveConfig,
    RoundingConfig,
    ScalingStrategy,
    ScalingToken,
)
from .validation import ensure_valid, validate_config

__all__ = [
    "PRESETS",
    "AccessibilityConfig",
    "Breakpoint",
    "BreakpointMetadata",
    "PerformanceConfig",
    "ResponsiveConfig",
    "RoundingConfig",
    "ScalingStrategy",
    "ScalingToken",
    "apply_preset",
    "config_fingerprint",
    "config_from_mapping",
    "config_to_mapping",
    "create_breakpoint",
    "create_default_config",
    "create_scaling_strategy",
    "default_tokens",
    "ensure_valid",
    "load_config",
    "loads_config",
    "validate_config",
]
