"""Breakpoint resolution tests.

Scores follow the four-factor formula; the first declared breakpoint wins
ties, and every viewport (including degenerate ones) resolves.
"""

import pytest
from hypothesis import event, given

from responsivescale.config import (
    Breakpoint,
    ResponsiveConfig,
    create_breakpoint,
    create_default_config,
)
from responsivescale.diagnostics import ConfigurationError, DiagnosticCode
from responsivescale.runtime import (
    BreakpointResolver,
    Capabilities,
    ScoreWeights,
    StaticCapabilities,
    find_breakpoint,
    resolve_breakpoint,
    score_breakpoint,
)
from responsivescale.runtime.resolver import (
    aspect_ratio_score,
    capability_score,
    dimension_score,
    score_breakpoints,
)
from tests.strategies import raw_dimensions

TABLET = Breakpoint("tablet", 768, 1024)


class TestScoreTerms:
    """Individual score components."""

    @pytest.mark.parametrize(
        ("actual", "target", "expected"),
        [(500, 500, 100.0), (800, 768, 96.8), (0, 1000, 0.0), (0, 1500, 0.0), (1500, 0, 0.0)],
    )
    def test_dimension_score(self, actual: float, target: float, expected: float) -> None:
        """Linear falloff reaching zero at a 1000px difference."""
        assert dimension_score(actual, target) == pytest.approx(expected)

    def test_aspect_matching_orientation(self) -> None:
        """Matching orientations score 50 minus ten times the ratio difference."""
        assert aspect_ratio_score(800, 1000, TABLET) == pytest.approx(49.5)

    def test_aspect_orientation_mismatch(self) -> None:
        """Landscape viewport against a portrait breakpoint scores zero."""
        assert aspect_ratio_score(1000, 800, TABLET) == 0.0

    def test_aspect_square_never_matches(self) -> None:
        """A square viewport is neither portrait nor landscape."""
        assert aspect_ratio_score(600, 600, TABLET) == 0.0

    @pytest.mark.parametrize(("width", "height"), [(0, 0), (0, 800), (800, 0), (-5, 100)])
    def test_aspect_degenerate_viewport(self, width: float, height: float) -> None:
        """Non-positive sizes score zero instead of dividing by zero."""
        assert aspect_ratio_score(width, height, TABLET) == 0.0

    def test_capability_bonus(self) -> None:
        """25 points per capability both present and declared."""
        bp = create_breakpoint("hybrid", 1366, 768, capabilities=["touch", "hover"])
        assert capability_score(bp, Capabilities(touch=True, hover=True)) == 50.0
        assert capability_score(bp, Capabilities(touch=True)) == 25.0
        assert capability_score(bp, Capabilities()) == 0.0

    def test_undeclared_capability_earns_nothing(self) -> None:
        """A present capability the breakpoint does not declare adds nothing."""
        assert capability_score(TABLET, Capabilities(touch=True)) == 0.0


class TestScoreBreakpoint:
    """Composite scores."""

    def test_worked_example(self) -> None:
        """800x1000 against the default tablet totals 243.9."""
        score = score_breakpoint(800, 1000, TABLET)
        assert score.width == pytest.approx(96.8)
        assert score.height == pytest.approx(97.6)
        assert score.aspect_ratio == pytest.approx(49.5)
        assert score.capability == 0.0
        assert score.total == pytest.approx(243.9)

    def test_weights_scale_terms(self) -> None:
        """Weights multiply their term."""
        weights = ScoreWeights(width=2.0, height=0.0, aspect_ratio=1.0, capability=1.0)
        score = score_breakpoint(800, 1000, TABLET, weights=weights)
        assert score.width == pytest.approx(193.6)
        assert score.height == 0.0
        assert score.total == pytest.approx(193.6 + 49.5)

    def test_scores_in_declaration_order(self) -> None:
        """score_breakpoints() keeps declaration order."""
        config = create_default_config()
        scores = score_breakpoints(800, 1000, config)
        assert [s.breakpoint.name for s in scores] == ["mobile", "tablet", "laptop", "desktop"]


class TestResolveBreakpoint:
    """Winner selection."""

    @pytest.mark.parametrize(
        ("width", "height", "expected"),
        [
            (800, 1000, "tablet"),
            (390, 844, "mobile"),
            (375, 667, "mobile"),
            (1366, 768, "laptop"),
            (1920, 1080, "desktop"),
            (2560, 1440, "desktop"),
        ],
    )
    def test_default_config(self, width: int, height: int, expected: str) -> None:
        """Common viewports resolve to the nearest default breakpoint."""
        assert resolve_breakpoint(width, height, create_default_config()).name == expected

    def test_base_alias_returned(self) -> None:
        """The desktop breakpoint is returned with its alias."""
        assert resolve_breakpoint(1920, 1080, create_default_config()).key == "base"

    def test_zero_viewport(self) -> None:
        """(0, 0) resolves without raising."""
        config = create_default_config()
        assert resolve_breakpoint(0, 0, config) in config.breakpoints

    def test_tie_goes_to_first_declared(self) -> None:
        """Identical breakpoints resolve to the one declared first."""
        first = Breakpoint("first", 800, 600)
        second = Breakpoint("second", 800, 600)
        config = ResponsiveConfig(base=first, breakpoints=(first, second))
        assert resolve_breakpoint(800, 600, config) is first

    def test_all_zero_weights_pick_first(self) -> None:
        """With every weight zero every total ties at zero."""
        weights = ScoreWeights(width=0, height=0, aspect_ratio=0, capability=0)
        config = create_default_config()
        assert resolve_breakpoint(1920, 1080, config, weights=weights).name == "mobile"

    def test_capability_breaks_size_tie(self) -> None:
        """A matching capability beats an otherwise identical breakpoint."""
        plain = Breakpoint("plain", 800, 600)
        touch = create_breakpoint("touch", 800, 600, capabilities=["touch"])
        config = ResponsiveConfig(base=plain, breakpoints=(plain, touch))
        assert resolve_breakpoint(800, 600, config, Capabilities(touch=True)) is touch
        assert resolve_breakpoint(800, 600, config) is plain

    def test_empty_breakpoints_raise(self) -> None:
        """An unvalidated configuration without breakpoints raises."""
        base = Breakpoint("desktop", 1920, 1080)
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_breakpoint(800, 600, ResponsiveConfig(base=base, breakpoints=()))
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.NO_BREAKPOINTS

    @given(width=raw_dimensions, height=raw_dimensions)
    def test_any_viewport_resolves_to_highest_score(self, width: float, height: float) -> None:
        """Resolution never raises and picks a maximal score."""
        config = create_default_config()
        winner = resolve_breakpoint(width, height, config)
        event(f"winner={winner.name}")
        scores = score_breakpoints(width, height, config)
        best = max(score.total for score in scores)
        assert next(s for s in scores if s.breakpoint is winner).total == best


class TestFindBreakpoint:
    """Lookup by alias or name."""

    def test_by_alias_and_name(self) -> None:
        """Both the alias and the name find the base breakpoint."""
        config = create_default_config()
        assert find_breakpoint(config, "base") is find_breakpoint(config, "desktop")

    def test_unknown(self) -> None:
        """Unknown names raise ConfigurationError(UNKNOWN_BREAKPOINT)."""
        with pytest.raises(ConfigurationError) as exc_info:
            find_breakpoint(create_default_config(), "watch")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNKNOWN_BREAKPOINT


class TestBreakpointResolver:
    """Resolver bound to a capability provider."""

    def test_provider_consulted(self) -> None:
        """The provider's capabilities enter the score."""
        plain = Breakpoint("plain", 800, 600)
        hover = create_breakpoint("hover", 800, 600, capabilities=["hover"])
        config = ResponsiveConfig(base=plain, breakpoints=(plain, hover))
        resolver = BreakpointResolver(StaticCapabilities(Capabilities(hover=True)))
        assert resolver.resolve(800, 600, config) is hover

    def test_provider_queried_on_each_call(self) -> None:
        """A changing provider changes the outcome between calls."""

        class Toggle:
            def __init__(self) -> None:
                self.touch = False

            def capabilities(self) -> Capabilities:
                return Capabilities(touch=self.touch)

        plain = Breakpoint("plain", 800, 600)
        touch = create_breakpoint("touch", 800, 600, capabilities=["touch"])
        config = ResponsiveConfig(base=plain, breakpoints=(plain, touch))
        provider = Toggle()
        resolver = BreakpointResolver(provider)
        assert resolver.resolve(800, 600, config) is plain
        provider.touch = True
        assert resolver.resolve(800, 600, config) is touch

    def test_explain(self) -> None:
        """explain() returns one score per breakpoint."""
        resolver = BreakpointResolver()
        scores = resolver.explain(800, 1000, create_default_config())
        assert len(scores) == 4
        assert scores[1].total == pytest.approx(243.9)

    def test_default_weights(self) -> None:
        """Default weights are all 1.0."""
        assert BreakpointResolver().weights == ScoreWeights()
