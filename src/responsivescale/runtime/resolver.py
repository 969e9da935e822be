"""Breakpoint resolution by multi-factor scoring.

Maps a viewport size to the best-matching configured breakpoint. Every
breakpoint gets a weighted sum of four scores:

    width        max(0, 100 - |dw| / 1000 * 100)
    height       max(0, 100 - |dh| / 1000 * 100)
    aspect ratio 50 - |ra - rb| * 10 when orientations match, else 0
    capability   25 per capability present in the probe and declared

The highest total wins; ties go to the first-declared breakpoint. Any
viewport resolves, including (0, 0).

Resolution is pure: the resolver holds no "current breakpoint". Tracking
the active breakpoint is the job of the caller (see ResponsiveContext).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Protocol

from responsivescale.config.model import Breakpoint, ResponsiveConfig
from responsivescale.constants import (
    SCORE_ASPECT_BASE,
    SCORE_ASPECT_PENALTY,
    SCORE_CAPABILITY_BONUS,
    SCORE_DIMENSION_MAX,
    SCORE_MAX_DIMENSION_DIFF,
)
from responsivescale.diagnostics import ConfigurationError, ErrorTemplate

__all__ = [
    "BreakpointResolver",
    "BreakpointScore",
    "Capabilities",
    "CapabilityProvider",
    "ScoreWeights",
    "StaticCapabilities",
    "find_breakpoint",
    "resolve_breakpoint",
    "score_breakpoint",
    "score_breakpoints",
]


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Runtime capability probe result.

    Attributes:
        touch: Device has a touch screen
        hover: Primary pointer can hover
    """

    touch: bool = False
    hover: bool = False

    def names(self) -> frozenset[str]:
        """Names of the capabilities that are present."""
        return frozenset(
            name for name, present in (("touch", self.touch), ("hover", self.hover)) if present
        )


class CapabilityProvider(Protocol):
    """Host-injected capability probe.

    Browser hosts answer from ``ontouchstart`` / ``matchMedia``; server-side
    hosts typically answer from the User-Agent. The engine never probes.
    """

    def capabilities(self) -> Capabilities:
        """Return the current device capabilities."""
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class StaticCapabilities:
    """CapabilityProvider returning a fixed answer (default: none)."""

    value: Capabilities = Capabilities()

    def capabilities(self) -> Capabilities:
        return self.value


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Multipliers applied to each score term (all 1.0 by default)."""

    width: float = 1.0
    height: float = 1.0
    aspect_ratio: float = 1.0
    capability: float = 1.0


@dataclass(frozen=True, slots=True)
class BreakpointScore:
    """Score breakdown for one breakpoint."""

    breakpoint: Breakpoint
    width: float
    height: float
    aspect_ratio: float
    capability: float
    total: float


_DEFAULT_WEIGHTS = ScoreWeights()
_NO_CAPABILITIES = Capabilities()


def dimension_score(actual: float, target: float) -> float:
    """Closeness of one dimension: 100 at equality, 0 beyond 1000px."""
    difference = abs(actual - target)
    penalty = difference / SCORE_MAX_DIMENSION_DIFF * SCORE_DIMENSION_MAX
    return max(0.0, SCORE_DIMENSION_MAX - penalty)


def aspect_ratio_score(width: float, height: float, breakpoint: Breakpoint) -> float:
    """Orientation match, penalized by the aspect-ratio difference.

    Square or degenerate (non-positive) sizes never match.
    """
    if width <= 0 or height <= 0 or breakpoint.width <= 0 or breakpoint.height <= 0:
        return 0.0
    actual = width / height
    target = breakpoint.width / breakpoint.height
    if (actual > 1 and target > 1) or (actual < 1 and target < 1):
        return SCORE_ASPECT_BASE - abs(actual - target) * SCORE_ASPECT_PENALTY
    return 0.0


def capability_score(breakpoint: Breakpoint, capabilities: Capabilities) -> float:
    """Fixed bonus per capability both present and declared."""
    shared = capabilities.names() & breakpoint.capabilities
    return len(shared) * SCORE_CAPABILITY_BONUS


def score_breakpoint(
    width: float,
    height: float,
    breakpoint: Breakpoint,
    capabilities: Capabilities | None = None,
    weights: ScoreWeights | None = None,
) -> BreakpointScore:
    """Score a single breakpoint against a viewport."""
    caps = capabilities if capabilities is not None else _NO_CAPABILITIES
    w = weights if weights is not None else _DEFAULT_WEIGHTS
    width_part = dimension_score(width, breakpoint.width) * w.width
    height_part = dimension_score(height, breakpoint.height) * w.height
    aspect_part = aspect_ratio_score(width, height, breakpoint) * w.aspect_ratio
    capability_part = capability_score(breakpoint, caps) * w.capability
    return BreakpointScore(
        breakpoint=breakpoint,
        width=width_part,
        height=height_part,
        aspect_ratio=aspect_part,
        capability=capability_part,
        total=width_part + height_part + aspect_part + capability_part,
    )


def score_breakpoints(
    width: float,
    height: float,
    config: ResponsiveConfig,
    capabilities: Capabilities | None = None,
    weights: ScoreWeights | None = None,
) -> tuple[BreakpointScore, ...]:
    """Score every breakpoint, in declaration order."""
    return tuple(
        score_breakpoint(width, height, bp, capabilities, weights) for bp in config.breakpoints
    )


def find_breakpoint(config: ResponsiveConfig, name_or_alias: str) -> Breakpoint:
    """Look a breakpoint up by alias or name.

    Raises:
        ConfigurationError: If no breakpoint matches
    """
    found = config.get_breakpoint(name_or_alias)
    if found is None:
        raise ConfigurationError(ErrorTemplate.unknown_breakpoint(name_or_alias))
    return found


def resolve_breakpoint(
    width: float,
    height: float,
    config: ResponsiveConfig,
    capabilities: Capabilities | None = None,
    weights: ScoreWeights | None = None,
) -> Breakpoint:
    """Best-matching breakpoint for a viewport.

    Args:
        width: Viewport width
        height: Viewport height
        config: Validated configuration
        capabilities: Runtime capability probe (default: none)
        weights: Score weights (default: all 1.0)

    Returns:
        The highest-scoring breakpoint; the first declared on ties

    Raises:
        ConfigurationError: If the configuration has no breakpoints (only
            possible when it was never validated)

    Example:
        >>> resolve_breakpoint(800, 1000, create_default_config()).name
        'tablet'
    """
    if not config.breakpoints:
        raise ConfigurationError(ErrorTemplate.no_breakpoints())

    best: BreakpointScore | None = None
    for score in score_breakpoints(width, height, config, capabilities, weights):
        # Strictly greater keeps the earlier breakpoint on ties.
        if best is None or score.total > best.total:
            best = score
    assert best is not None  # noqa: S101 - non-empty checked above
    return best.breakpoint


class BreakpointResolver:
    """Resolver bound to a capability provider and score weights.

    Holds no mutable state; safe to share between threads.

    Example:
        >>> resolver = BreakpointResolver(StaticCapabilities(Capabilities(touch=True)))
        >>> resolver.resolve(390, 844, create_default_config()).name
        'mobile'
    """

    __slots__ = ("_provider", "_weights")

    def __init__(
        self,
        provider: CapabilityProvider | None = None,
        weights: ScoreWeights | None = None,
    ) -> None:
        self._provider: CapabilityProvider = (
            provider if provider is not None else StaticCapabilities()
        )
        self._weights = weights if weights is not None else _DEFAULT_WEIGHTS

    @property
    def weights(self) -> ScoreWeights:
        """Score weights in use."""
        return self._weights

    def resolve(self, width: float, height: float, config: ResponsiveConfig) -> Breakpoint:
        """Resolve using a fresh capability probe."""
        return resolve_breakpoint(
            width, height, config, self._provider.capabilities(), self._weights
        )

    def explain(
        self, width: float, height: float, config: ResponsiveConfig
    ) -> tuple[BreakpointScore, ...]:
        """Score breakdown for every breakpoint (debugging aid)."""
        return score_breakpoints(
            width, height, config, self._provider.capabilities(), self._weights
        )
