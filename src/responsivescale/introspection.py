"""Human-readable reports of scaling results.

Renders ScaledValue records and resolution score breakdowns as one-line
summaries with locale-aware number formatting (CLDR data via Babel), for
logs, debugging panels and CLI output.

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections.abc import Iterable
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel import numbers as babel_numbers

from responsivescale.runtime.computer import ScaledValue
from responsivescale.runtime.resolver import BreakpointScore

__all__ = ["describe_resolution", "describe_scaled_value"]

logger = logging.getLogger(__name__)

_FALLBACK_LOCALE = "en_US"
_NUMBER_FORMAT = "#,##0.###"
_PERCENT_FORMAT = "#,##0.0%"
_SCORE_FORMAT = "#,##0.0"


@lru_cache(maxsize=32)
def _babel_locale(locale_code: str) -> Locale:
    """Parse a locale code, falling back to en_US (logged once per code)."""
    try:
        return Locale.parse(locale_code.replace("-", "_"))
    except UnknownLocaleError as e:
        logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale_code, e)
    except ValueError as e:
        logger.warning("Invalid locale format '%s': %s. Falling back to en_US", locale_code, e)
    return Locale.parse(_FALLBACK_LOCALE)


def _number(value: float, locale: Locale) -> str:
    return babel_numbers.format_decimal(value, format=_NUMBER_FORMAT, locale=locale)


def _notes(scaled: ScaledValue) -> list[str]:
    notes: list[str] = []
    if scaled.fallback:
        notes.append("invalid input, unscaled")
    if scaled.min_applied:
        notes.append("min applied")
    if scaled.max_applied:
        notes.append("max applied")
    if scaled.step_applied:
        notes.append("step applied")
    if scaled.floor_applied:
        notes.append("accessibility floor applied")
    return notes


def describe_scaled_value(scaled: ScaledValue, locale: str = _FALLBACK_LOCALE) -> str:
    """One-line summary of a scaling result.

    Args:
        scaled: Result of ScalingEngine.scale_value() or compute_detailed()
        locale: Locale code for number formatting (unknown codes fall back
            to en_US with a warning)

    Returns:
        Summary such as
        ``"fontSize: 48 -> 12 px at mobile (ratio 20.3%, min applied)"``

    Example:
        >>> describe_scaled_value(engine.scale_value(1234.5, "spacing", "base"), "de_DE")
        'spacing: 1.234,5 -> 1.112 px at base (ratio 100,0%, step applied)'
    """
    babel_locale = _babel_locale(locale)
    name = scaled.token_name or "value"
    unit = f" {scaled.unit}" if scaled.unit else ""
    ratio = babel_numbers.format_percent(
        scaled.ratio, format=_PERCENT_FORMAT, locale=babel_locale
    )
    details = ", ".join([f"ratio {ratio}", *_notes(scaled)])
    return (
        f"{name}: {_number(scaled.original, babel_locale)} -> "
        f"{_number(scaled.scaled, babel_locale)}{unit} at {scaled.target.key} ({details})"
    )


def describe_resolution(
    scores: Iterable[BreakpointScore], locale: str = _FALLBACK_LOCALE
) -> list[str]:
    """One line per breakpoint score, highest total first.

    Ties keep declaration order, matching the resolver's tie-breaking, so
    the first line always names the breakpoint that resolution picks.

    Example:
        >>> describe_resolution(engine.explain_resolution(800, 1000))[0]
        'tablet: 243.9 (width 96.8, height 97.6, aspect 49.5, capability 0.0)'
    """
    babel_locale = _babel_locale(locale)

    def fmt(value: float) -> str:
        return babel_numbers.format_decimal(value, format=_SCORE_FORMAT, locale=babel_locale)

    ranked = sorted(scores, key=lambda score: score.total, reverse=True)
    return [
        f"{score.breakpoint.key}: {fmt(score.total)} (width {fmt(score.width)}, "
        f"height {fmt(score.height)}, aspect {fmt(score.aspect_ratio)}, "
        f"capability {fmt(score.capability)})"
        for score in ranked
    ]
