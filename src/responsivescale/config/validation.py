"""Configuration validation.

validate_config() collects every problem without raising; ensure_valid()
raises ConfigurationError on the first error and is what the engine calls
before serving requests.

Checks:
    - At least one breakpoint
    - Finite, positive width and height on every breakpoint (and base)
    - Non-empty, unique aliases
    - Base breakpoint present in breakpoints
    - Token numbers are finite (scale, min, max, step, precision)
    - Token bounds (min <= max), positive step and precision
    - Registered function identifiers (token scales, custom rounding)
    - Positive rounding precision
    - Finite accessibility floors, and their recommendations (warnings)

Python 3.13+.
"""

import logging
import math

from responsivescale.config.model import (
    Breakpoint,
    ResponsiveConfig,
    ScalingStrategy,
    ScalingToken,
)
from responsivescale.constants import RECOMMENDED_MIN_FONT_SIZE, RECOMMENDED_MIN_TAP_TARGET
from responsivescale.core.strategies import StrategyRegistry, get_shared_registry
from responsivescale.diagnostics import (
    ConfigurationError,
    Diagnostic,
    ErrorTemplate,
    ValidationResult,
)
from responsivescale.enums import RoundingMode, ScalingMode

__all__ = ["ensure_valid", "validate_config"]

logger = logging.getLogger(__name__)


def _is_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _valid_dimension(value: float) -> bool:
    return _is_number(value) and value > 0


def _check_breakpoint(bp: Breakpoint, errors: list[Diagnostic]) -> None:
    if not (_valid_dimension(bp.width) and _valid_dimension(bp.height)):
        errors.append(ErrorTemplate.invalid_dimension(bp.name, bp.width, bp.height))
    if not bp.alias:
        errors.append(ErrorTemplate.missing_alias(bp.name))


def _check_token(
    name: str,
    token: ScalingToken,
    strategy: ScalingStrategy,
    registry: StrategyRegistry,
    errors: list[Diagnostic],
) -> None:
    invalid = [
        field
        for field in ("min", "max", "step", "precision")
        if getattr(token, field) is not None and not _is_number(getattr(token, field))
    ]
    for field in invalid:
        errors.append(ErrorTemplate.invalid_number(name, field, getattr(token, field)))

    if "min" not in invalid and "max" not in invalid:
        if token.min is not None and token.max is not None and token.min > token.max:
            errors.append(ErrorTemplate.token_min_exceeds_max(name, token.min, token.max))
    if "step" not in invalid and token.step is not None and not token.step > 0:
        errors.append(ErrorTemplate.invalid_step(name, token.step))
    if "precision" not in invalid and token.precision is not None and not token.precision > 0:
        errors.append(ErrorTemplate.invalid_precision(token.precision))

    if isinstance(token.scale, str):
        if not registry.has_scaling(token.scale):
            errors.append(ErrorTemplate.unknown_strategy(token.scale, "scaling"))
    elif not _is_number(token.scale):
        errors.append(ErrorTemplate.invalid_number(name, "scale", token.scale))
    elif strategy.mode is ScalingMode.CUSTOM:
        errors.append(ErrorTemplate.custom_mode_requires_function(name))


def validate_config(
    config: ResponsiveConfig, registry: StrategyRegistry | None = None
) -> ValidationResult:
    """Validate a configuration without raising.

    Args:
        config: Configuration to check
        registry: Registry used to resolve function identifiers
            (default: shared built-in registry)

    Returns:
        ValidationResult with errors and accessibility warnings

    Example:
        >>> result = validate_config(create_default_config())
        >>> result.is_valid
        True
    """
    registry = registry if registry is not None else get_shared_registry()
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []

    # Breakpoints
    if not config.breakpoints:
        errors.append(ErrorTemplate.no_breakpoints())

    seen: set[str] = set()
    for bp in config.breakpoints:
        _check_breakpoint(bp, errors)
        if bp.alias:
            if bp.alias in seen:
                errors.append(ErrorTemplate.duplicate_alias(bp.alias))
            seen.add(bp.alias)

    if config.base not in config.breakpoints:
        _check_breakpoint(config.base, errors)
        if config.breakpoints:
            errors.append(ErrorTemplate.base_not_in_breakpoints(config.base.key))

    # Tokens
    strategy = config.strategy
    for name, token in strategy.tokens.items():
        _check_token(name, token, strategy, registry, errors)

    # Rounding
    rounding = strategy.rounding
    if not (_is_number(rounding.precision) and rounding.precision > 0):
        errors.append(ErrorTemplate.invalid_precision(rounding.precision))
    if rounding.mode is RoundingMode.CUSTOM:
        identifier = rounding.custom or ""
        if not registry.has_rounding(identifier):
            errors.append(ErrorTemplate.unknown_strategy(identifier, "rounding"))

    # Accessibility floors
    accessibility = strategy.accessibility
    floors = (
        ("min_font_size", RECOMMENDED_MIN_FONT_SIZE, ErrorTemplate.min_font_size_low),
        ("min_tap_target", RECOMMENDED_MIN_TAP_TARGET, ErrorTemplate.min_tap_target_low),
    )
    for field, recommended, template in floors:
        value = getattr(accessibility, field)
        if not _is_number(value):
            errors.append(ErrorTemplate.invalid_number("accessibility", field, value))
        elif value < recommended:
            warnings.append(template(value, recommended))

    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid(
    config: ResponsiveConfig, registry: StrategyRegistry | None = None
) -> ValidationResult:
    """Validate a configuration, raising on the first error.

    Warnings are logged at WARNING level and returned.

    Raises:
        ConfigurationError: If the configuration has any error
    """
    result = validate_config(config, registry)
    if not result.is_valid:
        logger.error(
            "Invalid configuration: %d error(s); first: %s",
            result.error_count,
            result.errors[0].message,
        )
        raise ConfigurationError(result.errors[0])
    for warning in result.warnings:
        logger.warning("Configuration warning: %s", warning.message)
    return result
