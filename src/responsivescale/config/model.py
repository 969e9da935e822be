"""Immutable configuration model.

Breakpoints, tokens and the scaling strategy are frozen dataclasses. A
ResponsiveConfig is built once and never mutated; the with_* helpers return
replacement objects that a ScalingEngine picks up via replace_config().

Construction only normalises types (strings to enums, lists to tuples,
dicts to read-only mappings). Semantic checks live in
responsivescale.config.validation so that validate_config() can report every
problem of a bad configuration at once.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TypeVar

from responsivescale.diagnostics import ConfigurationError, Diagnostic, ErrorTemplate
from responsivescale.enums import (
    CacheStrategy,
    DeviceType,
    Orientation,
    RoundingMode,
    ScalingMode,
    ScalingOrigin,
    TokenKind,
)

__all__ = [
    "AccessibilityConfig",
    "Breakpoint",
    "BreakpointMetadata",
    "PerformanceConfig",
    "ResponsiveConfig",
    "RoundingConfig",
    "ScalingStrategy",
    "ScalingToken",
]


E = TypeVar("E", bound=StrEnum)


def _coerce(
    enum_type: type[E], value: object, template: Callable[[str], Diagnostic]
) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        raise ConfigurationError(template(str(value))) from e


def _frozen_setattr(obj: object, name: str, value: object) -> None:
    object.__setattr__(obj, name, value)


@dataclass(frozen=True, slots=True)
class BreakpointMetadata:
    """Optional descriptive data attached to a breakpoint.

    Attributes:
        orientation: Declared orientation (derived from size when None)
        device_type: Device class, informational only
        capabilities: Capability names such as "touch" or "hover" used by
            breakpoint scoring
        pixel_density: Device pixel ratio (default: 1.0)
    """

    orientation: Orientation | None = None
    device_type: DeviceType | None = None
    capabilities: frozenset[str] = frozenset()
    pixel_density: float = 1.0

    def __post_init__(self) -> None:
        if self.orientation is not None:
            _frozen_setattr(
                self, "orientation",
                _coerce(Orientation, self.orientation, ErrorTemplate.unknown_orientation),
            )
        if self.device_type is not None:
            _frozen_setattr(
                self, "device_type",
                _coerce(DeviceType, self.device_type, ErrorTemplate.unknown_device_type),
            )
        if not isinstance(self.capabilities, frozenset):
            _frozen_setattr(self, "capabilities", frozenset(self.capabilities))


@dataclass(frozen=True, slots=True)
class Breakpoint:
    """A named reference viewport size.

    Attributes:
        name: Human-readable identifier ("mobile", "desktop")
        width: Viewport width in CSS pixels
        height: Viewport height in CSS pixels
        alias: Unique key within a configuration; defaults to name
        metadata: Optional orientation, device type and capabilities

    Example:
        >>> bp = Breakpoint("mobile", 390, 844)
        >>> bp.alias
        'mobile'
        >>> bp.orientation
        <Orientation.PORTRAIT: 'portrait'>
    """

    name: str
    width: float
    height: float
    alias: str | None = None
    metadata: BreakpointMetadata = field(default_factory=BreakpointMetadata)

    def __post_init__(self) -> None:
        if self.alias is None:
            _frozen_setattr(self, "alias", self.name)

    @property
    def key(self) -> str:
        """Alias used in cache keys and lookups."""
        return self.alias if self.alias is not None else self.name

    @property
    def aspect_ratio(self) -> float:
        """width / height, or 0.0 for a zero height."""
        if self.height == 0:
            return 0.0
        return self.width / self.height

    @property
    def orientation(self) -> Orientation:
        """Declared orientation, or the one implied by the size."""
        if self.metadata.orientation is not None:
            return self.metadata.orientation
        if self.width > self.height:
            return Orientation.LANDSCAPE
        if self.width < self.height:
            return Orientation.PORTRAIT
        return Orientation.SQUARE

    @property
    def capabilities(self) -> frozenset[str]:
        """Declared capability names."""
        return self.metadata.capabilities


@dataclass(frozen=True, slots=True)
class ScalingToken:
    """Scaling rule shared by a class of design values.

    Attributes:
        scale: Numeric factor, or the identifier of a function registered in
            a StrategyRegistry. A function receives (base_value, ratio),
            returns the scaled value and replaces the strategy's mode for
            this token.
        min: Lower clamp bound (optional)
        max: Upper clamp bound (optional)
        step: Quantization increment (optional, must be > 0)
        round: Apply strategy rounding to this token (default: True)
        precision: Rounding increment for this token; the strategy's
            rounding precision when None
        responsive: When False the value keeps its base size at every
            breakpoint (constraints and rounding still apply)
        unit: CSS unit appended by format helpers ("px", "rem", ...)
        kind: Accessibility class; inferred from the token name when None
    """

    scale: float | str = 1.0
    min: float | None = None
    max: float | None = None
    step: float | None = None
    round: bool = True
    precision: float | None = None
    responsive: bool = True
    unit: str | None = None
    kind: TokenKind | None = None

    def __post_init__(self) -> None:
        if self.kind is not None:
            _frozen_setattr(
                self, "kind", _coerce(TokenKind, self.kind, ErrorTemplate.unknown_token_kind)
            )

    @property
    def is_function(self) -> bool:
        """True when scale names a registered function."""
        return isinstance(self.scale, str)


@dataclass(frozen=True, slots=True)
class RoundingConfig:
    """Final rounding step.

    Attributes:
        mode: nearest, up, down or custom
        precision: Rounding increment (1 = whole pixels, 0.1 = one decimal)
        custom: Registered rounding function identifier for custom mode
    """

    mode: RoundingMode = RoundingMode.NEAREST
    precision: float = 1.0
    custom: str | None = None

    def __post_init__(self) -> None:
        _frozen_setattr(self, "mode", _coerce(RoundingMode, self.mode, ErrorTemplate.unknown_mode))


@dataclass(frozen=True, slots=True)
class AccessibilityConfig:
    """Accessibility floors.

    Attributes:
        min_font_size: Floor for legibility tokens
        min_tap_target: Floor for tap-target tokens
        contrast_preservation: Pass-through flag for styling collaborators
    """

    min_font_size: float = 12.0
    min_tap_target: float = 44.0
    contrast_preservation: bool = True


@dataclass(frozen=True, slots=True)
class PerformanceConfig:
    """Caching behaviour.

    Attributes:
        memoization: Cache computed values (default: True)
        cache_strategy: memory or persisted
        precompute_values: Precompute base-to-breakpoint ratios at startup
    """

    memoization: bool = True
    cache_strategy: CacheStrategy = CacheStrategy.MEMORY
    precompute_values: bool = True

    def __post_init__(self) -> None:
        _frozen_setattr(
            self, "cache_strategy",
            _coerce(CacheStrategy, self.cache_strategy, ErrorTemplate.unknown_cache_strategy),
        )


@dataclass(frozen=True, slots=True)
class ScalingStrategy:
    """How every token scales between breakpoints.

    Attributes:
        origin: Viewport dimension used for the ratio
        mode: Scaling family
        tokens: Token name -> ScalingToken (stored read-only)
        rounding: Final rounding step
        accessibility: Accessibility floors
        performance: Caching behaviour
    """

    origin: ScalingOrigin = ScalingOrigin.WIDTH
    mode: ScalingMode = ScalingMode.LINEAR
    tokens: Mapping[str, ScalingToken] = field(default_factory=dict)
    rounding: RoundingConfig = field(default_factory=RoundingConfig)
    accessibility: AccessibilityConfig = field(default_factory=AccessibilityConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)

    def __post_init__(self) -> None:
        _frozen_setattr(
            self, "origin", _coerce(ScalingOrigin, self.origin, ErrorTemplate.unknown_origin)
        )
        _frozen_setattr(self, "mode", _coerce(ScalingMode, self.mode, ErrorTemplate.unknown_mode))
        if not isinstance(self.tokens, MappingProxyType):
            _frozen_setattr(self, "tokens", MappingProxyType(dict(self.tokens)))

    def with_tokens(self, **tokens: ScalingToken) -> ScalingStrategy:
        """Return a copy with the given tokens added or replaced."""
        return dataclasses.replace(self, tokens={**self.tokens, **tokens})


@dataclass(frozen=True, slots=True)
class ResponsiveConfig:
    """Complete responsive configuration.

    Attributes:
        base: Design-time reference breakpoint (ratio 1)
        breakpoints: Ordered breakpoints; must include base. Order matters
            for tie-breaking during resolution.
        strategy: Scaling strategy

    Use responsivescale.config.validate_config() or ensure_valid() to check
    the invariants (unique aliases, base present, positive sizes, ...).
    """

    base: Breakpoint
    breakpoints: tuple[Breakpoint, ...]
    strategy: ScalingStrategy = field(default_factory=ScalingStrategy)

    def __post_init__(self) -> None:
        if not isinstance(self.breakpoints, tuple):
            _frozen_setattr(self, "breakpoints", tuple(self.breakpoints))

    def get_breakpoint(self, name_or_alias: str) -> Breakpoint | None:
        """Find a breakpoint by alias first, then by name."""
        for bp in self.breakpoints:
            if bp.key == name_or_alias:
                return bp
        for bp in self.breakpoints:
            if bp.name == name_or_alias:
                return bp
        return None

    @property
    def aliases(self) -> tuple[str, ...]:
        """Breakpoint aliases in declaration order."""
        return tuple(bp.key for bp in self.breakpoints)

    def with_strategy(self, strategy: ScalingStrategy) -> ResponsiveConfig:
        """Return a copy using another strategy."""
        return dataclasses.replace(self, strategy=strategy)

    def with_breakpoints(
        self, breakpoints: Iterable[Breakpoint], base: Breakpoint | None = None
    ) -> ResponsiveConfig:
        """Return a copy with other breakpoints (and optionally another base)."""
        return dataclasses.replace(
            self, breakpoints=tuple(breakpoints), base=base if base is not None else self.base
        )
