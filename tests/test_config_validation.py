"""Configuration validation tests.

validate_config() collects every problem; ensure_valid() raises on the
first error and logs accessibility warnings.
"""

import dataclasses
import logging
import math

import pytest
from hypothesis import given

from responsivescale.config import (
    Breakpoint,
    ResponsiveConfig,
    ScalingToken,
    create_default_config,
    create_scaling_strategy,
    ensure_valid,
    validate_config,
)
from responsivescale.core import StrategyRegistry, create_default_registry
from responsivescale.diagnostics import ConfigurationError, DiagnosticCode
from responsivescale.enums import RoundingMode, ScalingMode
from tests.strategies import valid_configs


def _codes(
    config: ResponsiveConfig, registry: StrategyRegistry | None = None
) -> list[DiagnosticCode]:
    return [d.code for d in validate_config(config, registry).errors]


def _with_token(config: ResponsiveConfig, **tokens: ScalingToken) -> ResponsiveConfig:
    return config.with_strategy(config.strategy.with_tokens(**tokens))


class TestValidConfigurations:
    """Configurations that must pass."""

    def test_default_config_is_valid(self) -> None:
        """The default configuration has no errors and no warnings."""
        result = validate_config(create_default_config())
        assert result.is_valid
        assert result.warning_count == 0

    @given(config=valid_configs())
    def test_generated_configs_are_valid(self, config: ResponsiveConfig) -> None:
        """Generated configurations pass validation."""
        assert validate_config(config).is_valid

    def test_ensure_valid_returns_result(self) -> None:
        """ensure_valid() returns the result when there are no errors."""
        assert ensure_valid(create_default_config()).is_valid


class TestBreakpointErrors:
    """Breakpoint-level errors."""

    def test_no_breakpoints(self) -> None:
        """Zero breakpoints is an error."""
        base = Breakpoint("desktop", 1920, 1080)
        config = ResponsiveConfig(base=base, breakpoints=())
        assert DiagnosticCode.NO_BREAKPOINTS in _codes(config)

    def test_duplicate_alias(self) -> None:
        """Two breakpoints sharing an alias is an error."""
        a = Breakpoint("phone", 390, 844, alias="small")
        b = Breakpoint("phablet", 430, 932, alias="small")
        config = ResponsiveConfig(base=a, breakpoints=(a, b))
        assert _codes(config) == [DiagnosticCode.DUPLICATE_ALIAS]

    def test_empty_alias(self) -> None:
        """An empty alias is reported as missing."""
        bp = Breakpoint("phone", 390, 844, alias="")
        config = ResponsiveConfig(base=bp, breakpoints=(bp,))
        assert DiagnosticCode.MISSING_ALIAS in _codes(config)

    def test_base_not_in_breakpoints(self) -> None:
        """The base breakpoint must be one of the breakpoints."""
        config = create_default_config()
        other = Breakpoint("tv", 3840, 2160)
        assert _codes(dataclasses.replace(config, base=other)) == [
            DiagnosticCode.BASE_NOT_IN_BREAKPOINTS
        ]

    @pytest.mark.parametrize(
        ("width", "height"),
        [(0, 1080), (1920, 0), (-1, 100), (math.inf, 100), (100, math.nan)],
    )
    def test_invalid_dimensions(self, width: float, height: float) -> None:
        """Zero, negative and non-finite dimensions are errors."""
        bad = Breakpoint("bad", width, height)
        good = Breakpoint("good", 1920, 1080)
        config = ResponsiveConfig(base=good, breakpoints=(bad, good))
        assert _codes(config) == [DiagnosticCode.INVALID_DIMENSION]


class TestTokenErrors:
    """Token-level errors."""

    def test_min_exceeds_max(self) -> None:
        """min > max is an error."""
        config = _with_token(create_default_config(), fontSize=ScalingToken(min=50, max=10))
        assert _codes(config) == [DiagnosticCode.TOKEN_MIN_EXCEEDS_MAX]

    def test_min_equal_max_allowed(self) -> None:
        """min == max pins the value and is valid."""
        config = _with_token(create_default_config(), fontSize=ScalingToken(min=16, max=16))
        assert validate_config(config).is_valid

    @pytest.mark.parametrize("step", [0, -2])
    def test_non_positive_step(self, step: float) -> None:
        """step must be positive."""
        config = _with_token(create_default_config(), spacing=ScalingToken(step=step))
        assert _codes(config) == [DiagnosticCode.INVALID_STEP]

    def test_unknown_scaling_function(self) -> None:
        """A string scale must name a registered function."""
        config = _with_token(create_default_config(), spacing=ScalingToken(scale="wobble"))
        assert _codes(config) == [DiagnosticCode.UNKNOWN_STRATEGY]

    def test_registered_scaling_function(self) -> None:
        """Functions registered on a custom registry are accepted."""
        registry = create_default_registry()
        registry.register_scaling(lambda v, r: v * r, name="wobble")
        config = _with_token(create_default_config(), spacing=ScalingToken(scale="wobble"))
        assert validate_config(config, registry).is_valid

    def test_custom_mode_requires_function_tokens(self) -> None:
        """In custom mode every token needs a function identifier."""
        config = create_default_config()
        strategy = dataclasses.replace(
            config.strategy, mode=ScalingMode.CUSTOM, tokens={"fontSize": ScalingToken(scale=0.9)}
        )
        assert _codes(config.with_strategy(strategy)) == [DiagnosticCode.UNKNOWN_STRATEGY]

    def test_every_error_reported(self) -> None:
        """validate_config() does not stop at the first error."""
        config = _with_token(
            create_default_config(),
            fontSize=ScalingToken(min=50, max=10),
            spacing=ScalingToken(step=0),
        )
        assert validate_config(config).error_count == 2

    @pytest.mark.parametrize("field", ["min", "max", "step", "precision"])
    @pytest.mark.parametrize("value", ["4", math.nan, math.inf, True])
    def test_non_numeric_bounds(self, field: str, value: object) -> None:
        """Token numbers must be finite numbers."""
        token = ScalingToken(**{field: value})  # type: ignore[arg-type]
        config = _with_token(create_default_config(), spacing=token)
        assert _codes(config) == [DiagnosticCode.INVALID_NUMBER]

    @pytest.mark.parametrize("scale", [math.nan, -math.inf, False, None])
    def test_non_numeric_scale(self, scale: object) -> None:
        """A non-string scale must be a finite number."""
        token = ScalingToken(scale=scale)  # type: ignore[arg-type]
        config = _with_token(create_default_config(), spacing=token)
        assert _codes(config) == [DiagnosticCode.INVALID_NUMBER]

    def test_invalid_number_names_field(self) -> None:
        """The diagnostic names the token and the field."""
        token = ScalingToken(min="4")  # type: ignore[arg-type]
        config = _with_token(create_default_config(), fontSize=token)
        (error,) = validate_config(config).errors
        assert "fontSize.min" in error.message

    @pytest.mark.parametrize("precision", [0, -0.1])
    def test_non_positive_token_precision(self, precision: float) -> None:
        """A token precision must be positive."""
        config = _with_token(create_default_config(), lineHeight=ScalingToken(precision=precision))
        assert _codes(config) == [DiagnosticCode.INVALID_PRECISION]

    def test_token_precision_accepted(self) -> None:
        """A positive token precision is valid."""
        token = ScalingToken(precision=0.25, responsive=False)
        assert validate_config(_with_token(create_default_config(), lineHeight=token)).is_valid


class TestRoundingErrors:
    """Rounding section errors."""

    @pytest.mark.parametrize("precision", [0, -1, math.nan])
    def test_invalid_precision(self, precision: float) -> None:
        """precision must be finite and positive."""
        config = create_default_config()
        strategy = create_scaling_strategy(rounding={"precision": precision})
        assert _codes(config.with_strategy(strategy)) == [DiagnosticCode.INVALID_PRECISION]

    def test_unknown_custom_rounding(self) -> None:
        """Custom rounding must name a registered rounding function."""
        strategy = create_scaling_strategy(rounding={"mode": RoundingMode.CUSTOM, "custom": "x"})
        config = create_default_config().with_strategy(strategy)
        assert _codes(config) == [DiagnosticCode.UNKNOWN_STRATEGY]

    def test_builtin_custom_rounding(self) -> None:
        """Built-in rounding functions are accepted."""
        strategy = create_scaling_strategy(
            rounding={"mode": RoundingMode.CUSTOM, "custom": "half-even"}
        )
        assert validate_config(create_default_config().with_strategy(strategy)).is_valid


class TestAccessibilityWarnings:
    """Accessibility recommendations are warnings, not errors."""

    def test_low_floors_warn(self) -> None:
        """Floors below the recommendations produce two warnings."""
        strategy = create_scaling_strategy(
            accessibility={"min_font_size": 6, "min_tap_target": 30}
        )
        result = validate_config(create_default_config().with_strategy(strategy))
        assert result.is_valid
        assert [w.code for w in result.warnings] == [
            DiagnosticCode.MIN_FONT_SIZE_LOW,
            DiagnosticCode.MIN_TAP_TARGET_LOW,
        ]
        assert all(w.severity == "warning" for w in result.warnings)

    def test_ensure_valid_logs_warnings(self, caplog: pytest.LogCaptureFixture) -> None:
        """ensure_valid() logs each warning at WARNING level."""
        strategy = create_scaling_strategy(accessibility={"min_font_size": 6})
        with caplog.at_level(logging.WARNING, logger="responsivescale"):
            ensure_valid(create_default_config().with_strategy(strategy))
        assert any("Configuration warning" in r.message for r in caplog.records)

    @pytest.mark.parametrize("field", ["min_font_size", "min_tap_target"])
    @pytest.mark.parametrize("value", ["12", math.nan])
    def test_non_numeric_floor(self, field: str, value: object) -> None:
        """Accessibility floors must be finite numbers."""
        strategy = create_scaling_strategy(accessibility={field: value})
        assert _codes(create_default_config().with_strategy(strategy)) == [
            DiagnosticCode.INVALID_NUMBER
        ]


class TestEnsureValid:
    """ensure_valid() raising behavior."""

    def test_raises_first_error(self) -> None:
        """The first error becomes the exception's diagnostic."""
        config = _with_token(create_default_config(), fontSize=ScalingToken(min=50, max=10))
        with pytest.raises(ConfigurationError) as exc_info:
            ensure_valid(config)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.TOKEN_MIN_EXCEEDS_MAX

    def test_logs_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Invalid configurations are logged at ERROR level."""
        base = Breakpoint("desktop", 1920, 1080)
        with (
            caplog.at_level(logging.ERROR, logger="responsivescale"),
            pytest.raises(ConfigurationError),
        ):
            ensure_valid(ResponsiveConfig(base=base, breakpoints=()))
        assert any(r.levelno == logging.ERROR for r in caplog.records)
