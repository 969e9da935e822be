"""Default configuration, builders and presets.

create_default_config() gives a working four-breakpoint setup (mobile,
tablet, laptop, desktop as base) with the standard design tokens. Presets
derive replacement configurations from an existing one.

Python 3.13+. Zero external dependencies.
"""

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from responsivescale.config.model import (
    AccessibilityConfig,
    Breakpoint,
    BreakpointMetadata,
    PerformanceConfig,
    ResponsiveConfig,
    RoundingConfig,
    ScalingStrategy,
    ScalingToken,
)
from responsivescale.diagnostics import ConfigurationError, ErrorTemplate
from responsivescale.enums import DeviceType, ScalingOrigin, TokenKind

__all__ = [
    "PRESETS",
    "apply_preset",
    "create_breakpoint",
    "create_default_config",
    "create_scaling_strategy",
    "default_tokens",
]


def default_tokens() -> dict[str, ScalingToken]:
    """Standard design tokens.

    lineHeight is in em and rounds to one decimal place.
    """
    return {
        "fontSize": ScalingToken(scale=0.85, min=12, max=48, unit="px"),
        "spacing": ScalingToken(scale=0.9, step=2, unit="px"),
        "radius": ScalingToken(scale=0.95, min=2, unit="px"),
        "lineHeight": ScalingToken(scale=0.9, min=1.2, unit="em", precision=0.1),
        "shadow": ScalingToken(scale=0.8, unit="px"),
        "border": ScalingToken(scale=0.9, min=1, unit="px"),
        "tapTarget": ScalingToken(scale=0.9, unit="px", kind=TokenKind.TAP_TARGET),
    }


def create_breakpoint(
    name: str,
    width: float,
    height: float,
    alias: str | None = None,
    *,
    capabilities: Iterable[str] = (),
    device_type: DeviceType | str | None = None,
    pixel_density: float = 1.0,
) -> Breakpoint:
    """Create a breakpoint; alias defaults to name.

    Example:
        >>> create_breakpoint("phone", 375, 667, capabilities=["touch"]).capabilities
        frozenset({'touch'})
    """
    return Breakpoint(
        name=name,
        width=width,
        height=height,
        alias=alias,
        metadata=BreakpointMetadata(
            device_type=device_type,  # type: ignore[arg-type]
            capabilities=frozenset(capabilities),
            pixel_density=pixel_density,
        ),
    )


T = TypeVar("T")


def _section(default: T, override: T | Mapping[str, Any] | None) -> T:
    if override is None:
        return default
    if isinstance(override, Mapping):
        return dataclasses.replace(default, **override)  # type: ignore[type-var]
    return override


def create_scaling_strategy(
    *,
    origin: ScalingOrigin | str = ScalingOrigin.WIDTH,
    mode: str = "linear",
    tokens: Mapping[str, ScalingToken] | None = None,
    rounding: RoundingConfig | Mapping[str, Any] | None = None,
    accessibility: AccessibilityConfig | Mapping[str, Any] | None = None,
    performance: PerformanceConfig | Mapping[str, Any] | None = None,
) -> ScalingStrategy:
    """Create a strategy from defaults plus overrides.

    Tokens are merged over default_tokens(); nested sections accept either a
    complete object or a mapping of fields to override.

    Example:
        >>> strategy = create_scaling_strategy(rounding={"precision": 0.5})
        >>> strategy.rounding.precision
        0.5
        >>> "fontSize" in strategy.tokens
        True
    """
    return ScalingStrategy(
        origin=origin,  # type: ignore[arg-type]
        mode=mode,  # type: ignore[arg-type]
        tokens={**default_tokens(), **(tokens or {})},
        rounding=_section(RoundingConfig(), rounding),
        accessibility=_section(AccessibilityConfig(), accessibility),
        performance=_section(PerformanceConfig(), performance),
    )


def create_default_config() -> ResponsiveConfig:
    """Default configuration: desktop 1920x1080 is the base breakpoint."""
    desktop = create_breakpoint(
        "desktop", 1920, 1080, "base", capabilities=["hover"], device_type=DeviceType.DESKTOP
    )
    return ResponsiveConfig(
        base=desktop,
        breakpoints=(
            create_breakpoint(
                "mobile", 390, 844, capabilities=["touch"], device_type=DeviceType.MOBILE
            ),
            create_breakpoint(
                "tablet", 768, 1024, capabilities=["touch"], device_type=DeviceType.TABLET
            ),
            create_breakpoint(
                "laptop", 1366, 768, capabilities=["hover"], device_type=DeviceType.LAPTOP
            ),
            desktop,
        ),
        strategy=create_scaling_strategy(),
    )


# ============================================================================
# PRESETS
# ============================================================================


def _rescale_tokens(config: ResponsiveConfig, scales: Mapping[str, float]) -> ResponsiveConfig:
    tokens = {
        name: dataclasses.replace(config.strategy.tokens[name], scale=scale)
        for name, scale in scales.items()
        if name in config.strategy.tokens
    }
    return config.with_strategy(config.strategy.with_tokens(**tokens))


def conservative(config: ResponsiveConfig) -> ResponsiveConfig:
    """Minimal changes between breakpoints."""
    return _rescale_tokens(config, {"fontSize": 0.95, "spacing": 0.95, "radius": 0.98})


def aggressive(config: ResponsiveConfig) -> ResponsiveConfig:
    """Dramatic changes between breakpoints."""
    return _rescale_tokens(config, {"fontSize": 0.7, "spacing": 0.75, "radius": 0.8})


def mobile_first(config: ResponsiveConfig) -> ResponsiveConfig:
    """Design for the mobile breakpoint and scale up from it.

    Returns the config unchanged when it has no "mobile" breakpoint.
    """
    mobile = config.get_breakpoint("mobile")
    if mobile is None:
        return config
    strategy = dataclasses.replace(config.strategy, origin=ScalingOrigin.WIDTH)
    font_size = strategy.tokens.get("fontSize")
    if font_size is not None:
        strategy = strategy.with_tokens(
            fontSize=dataclasses.replace(font_size, scale=1.2, min=14)
        )
    return dataclasses.replace(config, base=mobile, strategy=strategy)


PRESETS: dict[str, Callable[[ResponsiveConfig], ResponsiveConfig]] = {
    "conservative": conservative,
    "aggressive": aggressive,
    "mobile-first": mobile_first,
}


def apply_preset(config: ResponsiveConfig, name: str) -> ResponsiveConfig:
    """Return the configuration transformed by a named preset.

    Raises:
        ConfigurationError: If the preset name is unknown
    """
    preset = PRESETS.get(name)
    if preset is None:
        raise ConfigurationError(ErrorTemplate.unknown_preset(name))
    return preset(config)
