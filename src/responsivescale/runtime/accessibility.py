"""Accessibility floors for scaled values.

Legibility tokens (font sizes) never fall below
``accessibility.min_font_size`` and tap-target tokens never fall below
``accessibility.min_tap_target``. Floors run after clamping, stepping and
rounding, and deliberately win over ``token.max``.

Python 3.13+. Zero external dependencies.
"""

from responsivescale.config.model import ScalingStrategy, ScalingToken
from responsivescale.enums import TokenKind

__all__ = ["AccessibilityEnforcer", "enforce", "infer_token_kind"]

_LEGIBILITY_NAMES = frozenset({"fontsize"})
_TAP_TARGET_NAMES = frozenset({"taptarget", "touchtarget", "hitarea"})


def infer_token_kind(name: str) -> TokenKind:
    """Classify a token by name.

    Case, underscores and hyphens are ignored, so ``fontSize``,
    ``font_size`` and ``font-size`` are all legibility tokens.

    Example:
        >>> infer_token_kind("tap_target")
        <TokenKind.TAP_TARGET: 'tap-target'>
    """
    folded = name.replace("_", "").replace("-", "").lower()
    if folded in _LEGIBILITY_NAMES:
        return TokenKind.LEGIBILITY
    if folded in _TAP_TARGET_NAMES:
        return TokenKind.TAP_TARGET
    return TokenKind.OTHER


def enforce(
    value: float,
    token: ScalingToken,
    token_kind: TokenKind,
    strategy: ScalingStrategy,
) -> float:
    """Raise value to the floor for its kind.

    Args:
        value: Scaled value (after clamp, step and rounding)
        token: Token the value was scaled with (unused by the built-in floors)
        token_kind: Accessibility class of the token
        strategy: Strategy supplying the floors

    Returns:
        value, or the floor when value is below it
    """
    del token  # floors depend on the kind only
    config = strategy.accessibility
    match token_kind:
        case TokenKind.LEGIBILITY:
            return max(value, config.min_font_size)
        case TokenKind.TAP_TARGET:
            return max(value, config.min_tap_target)
        case _:
            return value


class AccessibilityEnforcer:
    """Applies floors by token name, honoring explicit ``token.kind``.

    Kind lookups are memoized per token name; the enforcer is otherwise
    stateless and may be shared between threads.
    """

    __slots__ = ("_kinds",)

    def __init__(self) -> None:
        self._kinds: dict[str, TokenKind] = {}

    def kind_of(self, name: str, token: ScalingToken) -> TokenKind:
        """Declared kind of the token, or the kind inferred from its name."""
        if token.kind is not None:
            return token.kind
        kind = self._kinds.get(name)
        if kind is None:
            kind = infer_token_kind(name)
            self._kinds[name] = kind
        return kind

    def apply(
        self, value: float, name: str, token: ScalingToken, strategy: ScalingStrategy
    ) -> float:
        """Floor value for the named token."""
        return enforce(value, token, self.kind_of(name, token), strategy)
