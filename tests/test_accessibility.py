"""Accessibility floor tests."""

import pytest

from responsivescale.config import ScalingToken, create_scaling_strategy
from responsivescale.enums import TokenKind
from responsivescale.runtime import AccessibilityEnforcer, enforce, infer_token_kind

STRATEGY = create_scaling_strategy(accessibility={"min_font_size": 12, "min_tap_target": 44})


class TestInferTokenKind:
    """Kind inference from token names."""

    @pytest.mark.parametrize("name", ["fontSize", "font_size", "font-size", "FONTSIZE"])
    def test_legibility(self, name: str) -> None:
        """Font size spellings are legibility tokens."""
        assert infer_token_kind(name) is TokenKind.LEGIBILITY

    @pytest.mark.parametrize("name", ["tapTarget", "tap_target", "touchTarget", "hit-area"])
    def test_tap_target(self, name: str) -> None:
        """Tap target spellings are tap-target tokens."""
        assert infer_token_kind(name) is TokenKind.TAP_TARGET

    @pytest.mark.parametrize("name", ["spacing", "radius", "fontWeight", "lineHeight"])
    def test_other(self, name: str) -> None:
        """Everything else has no floor."""
        assert infer_token_kind(name) is TokenKind.OTHER


class TestEnforce:
    """Floors by kind."""

    def test_font_floor(self) -> None:
        """Legibility values are raised to min_font_size."""
        assert enforce(8.0, ScalingToken(), TokenKind.LEGIBILITY, STRATEGY) == 12.0

    def test_tap_floor(self) -> None:
        """Tap targets are raised to min_tap_target."""
        assert enforce(30.0, ScalingToken(), TokenKind.TAP_TARGET, STRATEGY) == 44.0

    def test_above_floor_unchanged(self) -> None:
        """Values above the floor pass through."""
        assert enforce(20.0, ScalingToken(), TokenKind.LEGIBILITY, STRATEGY) == 20.0

    def test_other_unchanged(self) -> None:
        """Other tokens are never floored."""
        assert enforce(0.5, ScalingToken(), TokenKind.OTHER, STRATEGY) == 0.5


class TestAccessibilityEnforcer:
    """Name-based enforcement with explicit kinds."""

    def test_inferred_from_name(self) -> None:
        """The token name decides the floor when no kind is declared."""
        enforcer = AccessibilityEnforcer()
        assert enforcer.apply(5.0, "font_size", ScalingToken(), STRATEGY) == 12.0

    def test_explicit_kind_wins(self) -> None:
        """A declared kind overrides the name."""
        enforcer = AccessibilityEnforcer()
        token = ScalingToken(kind=TokenKind.OTHER)
        assert enforcer.apply(5.0, "fontSize", token, STRATEGY) == 5.0
        button = ScalingToken(kind=TokenKind.TAP_TARGET)
        assert enforcer.apply(5.0, "buttonHeight", button, STRATEGY) == 44.0

    def test_floor_beats_token_max(self) -> None:
        """The floor applies even above token.max."""
        enforcer = AccessibilityEnforcer()
        token = ScalingToken(max=10)
        assert enforcer.apply(10.0, "fontSize", token, STRATEGY) == 12.0

    def test_kind_of_memoized(self) -> None:
        """Inferred kinds are stable across calls."""
        enforcer = AccessibilityEnforcer()
        first = enforcer.kind_of("tapTarget", ScalingToken())
        assert enforcer.kind_of("tapTarget", ScalingToken()) is first is TokenKind.TAP_TARGET
