"""Pure scaling computation.

Maps (base value, token, target breakpoint) to a scaled number:

    1. ratio = origin(target) / origin(base)
    2. scaling mode (or the token's registered function); skipped for
       tokens declared with responsive=False
    3. clamp to [token.min, token.max], min first
    4. quantize to the nearest multiple of token.step
    5. strategy rounding at token.precision, or the strategy precision

ScaleOptions carries per-call overrides that are merged into the token
before any of these steps run.

Every call starts again from the base value, so switching back and forth
between breakpoints never accumulates floating-point drift.

Invalid base values (negative, NaN, infinite) never raise here: the
computer returns a safe default and leaves reporting to the caller.

Python 3.13+. Zero external dependencies.
"""

import dataclasses
import math
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from responsivescale.config.model import (
    Breakpoint,
    RoundingConfig,
    ScalingStrategy,
    ScalingToken,
)
from responsivescale.constants import GOLDEN_RATIO
from responsivescale.core.strategies import StrategyRegistry, get_shared_registry
from responsivescale.diagnostics import ConfigurationError, ErrorTemplate
from responsivescale.enums import RoundingMode, ScalingMode, ScalingOrigin

__all__ = [
    "ScaleOptions",
    "ScaledValue",
    "apply_rounding",
    "compute",
    "compute_detailed",
    "is_valid_base_value",
    "origin_value",
    "quantize",
    "safe_default",
    "scaling_ratio",
]


@dataclass(frozen=True, slots=True)
class ScaledValue:
    """Detailed scaling result.

    Attributes:
        original: Base value as authored
        scaled: Final value
        ratio: origin(target) / origin(base)
        target: Breakpoint the value was scaled to
        min_applied: token.min raised the value
        max_applied: token.max lowered the value
        step_applied: Quantization changed the value
        fallback: The safe default was returned instead of a computation
        floor_applied: An accessibility floor raised the value
        unit: Token unit, if any
        token_name: Token the value was scaled with, when known
    """

    original: float
    scaled: float
    ratio: float
    target: Breakpoint
    min_applied: bool = False
    max_applied: bool = False
    step_applied: bool = False
    fallback: bool = False
    floor_applied: bool = False
    unit: str | None = None
    token_name: str | None = None


def _tighter(
    pick: Callable[[float, float], float], a: float | None, b: float | None
) -> float | None:
    if a is None:
        return b
    if b is None:
        return a
    return pick(a, b)


@dataclass(frozen=True, slots=True)
class ScaleOptions:
    """Per-call overrides for a single scaling request.

    Bounds combine with the token's own: the larger minimum and the smaller
    maximum win. scale and step replace the token's values.

    Attributes:
        scale: Numeric factor used instead of token.scale
        min: Additional lower bound
        max: Additional upper bound
        step: Quantization increment used instead of token.step
        unit: Unit used instead of token.unit
        bypass_cache: Compute afresh instead of consulting the value cache

    Example:
        >>> engine.get_value(48, "fontSize", "mobile", ScaleOptions(min=16))
        16.0
    """

    scale: float | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None
    unit: str | None = None
    bypass_cache: bool = False

    def __post_init__(self) -> None:
        """Reject non-finite overrides.

        Raises:
            ConfigurationError: If a numeric override is not a finite number
                or step is not positive
        """
        for field in ("scale", "min", "max", "step"):
            value = getattr(self, field)
            if value is None:
                continue
            if (
                isinstance(value, bool)
                or not isinstance(value, int | float)
                or not math.isfinite(value)
            ):
                raise ConfigurationError(ErrorTemplate.invalid_number("options", field, value))
        if self.step is not None and not self.step > 0:
            raise ConfigurationError(ErrorTemplate.invalid_step("options", self.step))

    @property
    def changes_value(self) -> bool:
        """True when any override affects the computed number."""
        return any(v is not None for v in (self.scale, self.min, self.max, self.step))

    def apply(self, token: ScalingToken) -> ScalingToken:
        """Token with these overrides merged in."""
        if not self.changes_value and self.unit is None:
            return token
        return dataclasses.replace(
            token,
            scale=token.scale if self.scale is None else self.scale,
            min=_tighter(max, self.min, token.min),
            max=_tighter(min, self.max, token.max),
            step=token.step if self.step is None else self.step,
            unit=token.unit if self.unit is None else self.unit,
        )


def origin_value(breakpoint: Breakpoint, origin: ScalingOrigin) -> float:
    """The breakpoint dimension (or derived quantity) named by origin."""
    width, height = breakpoint.width, breakpoint.height
    match origin:
        case ScalingOrigin.WIDTH:
            return float(width)
        case ScalingOrigin.HEIGHT:
            return float(height)
        case ScalingOrigin.MIN:
            return float(min(width, height))
        case ScalingOrigin.MAX:
            return float(max(width, height))
        case ScalingOrigin.DIAGONAL:
            return math.hypot(width, height)
        case ScalingOrigin.AREA:
            return float(width * height)
    raise ConfigurationError(ErrorTemplate.unknown_origin(str(origin)))


def scaling_ratio(target: Breakpoint, base: Breakpoint, origin: ScalingOrigin) -> float:
    """origin(target) / origin(base).

    Raises:
        ConfigurationError: If the base breakpoint has a zero origin value
            (validated configurations never do)
    """
    denominator = origin_value(base, origin)
    if denominator == 0:
        diagnostic = ErrorTemplate.invalid_dimension(base.name, base.width, base.height)
        raise ConfigurationError(diagnostic)
    return origin_value(target, origin) / denominator


def is_valid_base_value(value: float) -> bool:
    """Finite and not negative."""
    return math.isfinite(value) and value >= 0


def safe_default(base_value: float) -> float:
    """Value used in place of a computation on bad input: the base value, unscaled."""
    return base_value


def _decimals(increment: float) -> int:
    exponent = Decimal(str(increment)).normalize().as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


def quantize(value: float, step: float) -> float:
    """Nearest multiple of step (halves round up)."""
    return round(math.floor(value / step + 0.5) * step, _decimals(step))


def apply_rounding(
    value: float, rounding: RoundingConfig, registry: StrategyRegistry | None = None
) -> float:
    """Round value to a multiple of rounding.precision."""
    precision = rounding.precision
    match rounding.mode:
        case RoundingMode.UP:
            result = math.ceil(value / precision) * precision
        case RoundingMode.DOWN:
            result = math.floor(value / precision) * precision
        case RoundingMode.CUSTOM:
            registry = registry if registry is not None else get_shared_registry()
            return registry.call_rounding(rounding.custom or "", value, precision)
        case _:
            result = math.floor(value / precision + 0.5) * precision
    return round(result, _decimals(precision))


def _apply_mode(
    base_value: float,
    ratio: float,
    token: ScalingToken,
    mode: ScalingMode,
    registry: StrategyRegistry,
    name: str | None,
) -> float:
    if isinstance(token.scale, str):
        # A registered function replaces the mode table for this token.
        return registry.call_scaling(token.scale, base_value, ratio)

    factor = float(token.scale)
    match mode:
        case ScalingMode.LINEAR:
            return base_value * ratio * factor
        case ScalingMode.EXPONENTIAL:
            return base_value * ratio**factor
        case ScalingMode.LOGARITHMIC:
            safe_ratio = ratio if ratio > 0 else 1.0
            return base_value * (1 + math.log(safe_ratio)) * factor
        case ScalingMode.GOLDEN_RATIO:
            return base_value * ratio ** (1 / GOLDEN_RATIO)
        case _:
            diagnostic = ErrorTemplate.custom_mode_requires_function(name or "<unnamed>")
            raise ConfigurationError(diagnostic)


def compute_detailed(
    base_value: float,
    token: ScalingToken,
    target: Breakpoint,
    base: Breakpoint,
    strategy: ScalingStrategy,
    registry: StrategyRegistry | None = None,
    ratio: float | None = None,
    *,
    name: str | None = None,
) -> ScaledValue:
    """Scale base_value to target and report which constraints fired.

    Args:
        base_value: Value authored for the base breakpoint
        token: Scaling rule
        target: Breakpoint to scale to
        base: Base breakpoint (ratio 1)
        strategy: Strategy supplying origin, mode and rounding
        registry: Function registry (default: shared built-ins)
        ratio: Precomputed scaling ratio for target (computed when None)
        name: Token name, recorded in the result and in error messages

    Returns:
        ScaledValue without any accessibility floor; ``fallback`` is True
        when the safe default was used. A token with responsive=False
        reports a ratio of 1.0.

    Raises:
        ConfigurationError: For configuration problems the validator would
            have rejected (unknown function, zero-size base)
    """
    registry = registry if registry is not None else get_shared_registry()
    if ratio is None:
        ratio = scaling_ratio(target, base, strategy.origin)

    if not is_valid_base_value(base_value):
        return ScaledValue(
            original=base_value,
            scaled=safe_default(base_value),
            ratio=ratio,
            target=target,
            fallback=True,
            unit=token.unit,
            token_name=name,
        )

    if token.responsive:
        value = _apply_mode(base_value, ratio, token, strategy.mode, registry, name)
    else:
        ratio = 1.0
        value = float(base_value)
    if not math.isfinite(value):
        return ScaledValue(
            original=base_value,
            scaled=safe_default(base_value),
            ratio=ratio,
            target=target,
            fallback=True,
            unit=token.unit,
            token_name=name,
        )

    min_applied = max_applied = step_applied = False
    if token.min is not None and value < token.min:
        value = float(token.min)
        min_applied = True
    if token.max is not None and value > token.max:
        value = float(token.max)
        max_applied = True

    if token.step is not None:
        stepped = quantize(value, token.step)
        step_applied = stepped != value
        value = stepped

    if token.round:
        rounding = strategy.rounding
        if token.precision is not None:
            rounding = dataclasses.replace(rounding, precision=token.precision)
        value = apply_rounding(value, rounding, registry)

    return ScaledValue(
        original=base_value,
        scaled=value,
        ratio=ratio,
        target=target,
        min_applied=min_applied,
        max_applied=max_applied,
        step_applied=step_applied,
        unit=token.unit,
        token_name=name,
    )


def compute(
    base_value: float,
    token: ScalingToken,
    target: Breakpoint,
    base: Breakpoint,
    strategy: ScalingStrategy,
    registry: StrategyRegistry | None = None,
) -> float:
    """Scaled number for base_value at target (see compute_detailed)."""
    return compute_detailed(base_value, token, target, base, strategy, registry).scaled
