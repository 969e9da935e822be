"""Enumerations for responsivescale type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so configuration data written as
plain strings ("width", "golden-ratio") compares equal to the members.

Python 3.13+.
"""

from enum import StrEnum


class ScalingOrigin(StrEnum):
    """Viewport dimension used to compute the scaling ratio."""

    WIDTH = "width"
    HEIGHT = "height"
    MIN = "min"
    """min(width, height)"""

    MAX = "max"
    """max(width, height)"""

    DIAGONAL = "diagonal"
    """sqrt(width**2 + height**2)"""

    AREA = "area"
    """width * height"""


class ScalingMode(StrEnum):
    """Mathematical family mapping a ratio to a value multiplier."""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"
    GOLDEN_RATIO = "golden-ratio"
    CUSTOM = "custom"


class RoundingMode(StrEnum):
    """Final rounding applied to every scaled value."""

    NEAREST = "nearest"
    UP = "up"
    DOWN = "down"
    CUSTOM = "custom"


class CacheStrategy(StrEnum):
    """Where memoized values live."""

    MEMORY = "memory"
    PERSISTED = "persisted"


class Orientation(StrEnum):
    """Breakpoint orientation."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


class DeviceType(StrEnum):
    """Declared device class of a breakpoint (informational)."""

    MOBILE = "mobile"
    TABLET = "tablet"
    LAPTOP = "laptop"
    DESKTOP = "desktop"
    TV = "tv"


class TokenKind(StrEnum):
    """Accessibility class of a token.

    Decides which accessibility floor (if any) applies to the token's values.
    """

    LEGIBILITY = "legibility"
    """Text sizes: floored at min_font_size."""

    TAP_TARGET = "tap-target"
    """Interactive hit areas: floored at min_tap_target."""

    OTHER = "other"
    """No accessibility floor."""


__all__ = [
    "CacheStrategy",
    "DeviceType",
    "Orientation",
    "RoundingMode",
    "ScalingMode",
    "ScalingOrigin",
    "TokenKind",
]
