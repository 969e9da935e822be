"""Default configuration, builders and presets."""

import pytest

from responsivescale.config import (
    PRESETS,
    AccessibilityConfig,
    RoundingConfig,
    ScalingToken,
    apply_preset,
    create_default_config,
    create_scaling_strategy,
    default_tokens,
    validate_config,
)
from responsivescale.diagnostics import ConfigurationError, DiagnosticCode
from responsivescale.enums import ScalingOrigin, TokenKind


class TestDefaultConfig:
    """create_default_config() contents."""

    def test_breakpoints(self) -> None:
        """Four breakpoints in ascending width, desktop is the base."""
        config = create_default_config()
        sizes = [(bp.name, bp.width, bp.height) for bp in config.breakpoints]
        assert sizes == [
            ("mobile", 390, 844),
            ("tablet", 768, 1024),
            ("laptop", 1366, 768),
            ("desktop", 1920, 1080),
        ]
        assert config.base.name == "desktop"
        assert config.base.key == "base"

    def test_capabilities(self) -> None:
        """Touch devices declare touch, pointer devices declare hover."""
        config = create_default_config()
        caps = {bp.name: bp.capabilities for bp in config.breakpoints}
        assert caps["mobile"] == frozenset({"touch"})
        assert caps["desktop"] == frozenset({"hover"})

    def test_font_size_token(self) -> None:
        """fontSize scales by 0.85 within [12, 48]."""
        token = create_default_config().strategy.tokens["fontSize"]
        assert (token.scale, token.min, token.max, token.unit) == (0.85, 12, 48, "px")

    def test_default_tokens_fresh(self) -> None:
        """default_tokens() returns a new dict each call."""
        first = default_tokens()
        first.pop("fontSize")
        assert "fontSize" in default_tokens()

    def test_tap_target_kind(self) -> None:
        """The tapTarget token is marked as a tap target."""
        assert default_tokens()["tapTarget"].kind is TokenKind.TAP_TARGET

    def test_line_height_precision(self) -> None:
        """lineHeight rounds to one decimal place instead of whole pixels."""
        token = default_tokens()["lineHeight"]
        assert token.round is True
        assert token.precision == 0.1
        assert token.responsive is True


class TestCreateScalingStrategy:
    """Strategy builder merging."""

    def test_mapping_overrides_merge(self) -> None:
        """Mapping overrides replace only the named fields."""
        strategy = create_scaling_strategy(rounding={"precision": 0.5})
        assert strategy.rounding.precision == 0.5
        assert strategy.rounding.mode == RoundingConfig().mode

    def test_object_override(self) -> None:
        """A complete section object replaces the default."""
        accessibility = AccessibilityConfig(min_font_size=16)
        assert create_scaling_strategy(accessibility=accessibility).accessibility is accessibility

    def test_tokens_merge_over_defaults(self) -> None:
        """Custom tokens are added to the default tokens."""
        strategy = create_scaling_strategy(tokens={"gutter": ScalingToken(scale=0.5)})
        assert "gutter" in strategy.tokens
        assert "fontSize" in strategy.tokens

    def test_origin_string(self) -> None:
        """Origin accepts its string value."""
        assert create_scaling_strategy(origin="height").origin is ScalingOrigin.HEIGHT


class TestPresets:
    """Named presets."""

    def test_registry(self) -> None:
        """The three presets are registered."""
        assert set(PRESETS) == {"conservative", "aggressive", "mobile-first"}

    @pytest.mark.parametrize(
        ("name", "font", "spacing", "radius"),
        [("conservative", 0.95, 0.95, 0.98), ("aggressive", 0.7, 0.75, 0.8)],
    )
    def test_rescaling_presets(self, name: str, font: float, spacing: float, radius: float) -> None:
        """Rescaling presets change only the token factors."""
        config = apply_preset(create_default_config(), name)
        tokens = config.strategy.tokens
        assert (tokens["fontSize"].scale, tokens["spacing"].scale, tokens["radius"].scale) == (
            font,
            spacing,
            radius,
        )
        assert tokens["fontSize"].min == 12
        assert config.breakpoints == create_default_config().breakpoints

    def test_mobile_first(self) -> None:
        """mobile-first rebases on the mobile breakpoint."""
        config = apply_preset(create_default_config(), "mobile-first")
        assert config.base.name == "mobile"
        assert config.strategy.origin is ScalingOrigin.WIDTH
        font = config.strategy.tokens["fontSize"]
        assert (font.scale, font.min) == (1.2, 14)
        assert validate_config(config).is_valid

    def test_mobile_first_without_mobile(self) -> None:
        """mobile-first leaves configurations without a mobile breakpoint alone."""
        config = create_default_config()
        desktop_only = config.with_breakpoints([config.base])
        assert apply_preset(desktop_only, "mobile-first") is desktop_only

    def test_presets_do_not_mutate_input(self) -> None:
        """Presets return new configurations."""
        config = create_default_config()
        apply_preset(config, "aggressive")
        assert config.strategy.tokens["fontSize"].scale == 0.85

    def test_unknown_preset(self) -> None:
        """Unknown preset names raise ConfigurationError(UNKNOWN_PRESET)."""
        with pytest.raises(ConfigurationError) as exc_info:
            apply_preset(create_default_config(), "wild")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNKNOWN_PRESET
