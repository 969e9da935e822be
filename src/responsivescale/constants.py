"""Shared constants for responsivescale.

This module provides centralized configuration constants used across
config and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Breakpoint scoring: Weights and normalisers for viewport matching
- Scaling: Mathematical constants for the scaling modes
- Accessibility: Recommended floors (WCAG / platform guidelines)
- Cache limits: Memory bounds for the value cache

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Breakpoint scoring
    "SCORE_MAX_DIMENSION_DIFF",
    "SCORE_DIMENSION_MAX",
    "SCORE_ASPECT_BASE",
    "SCORE_ASPECT_PENALTY",
    "SCORE_CAPABILITY_BONUS",
    # Scaling
    "GOLDEN_RATIO",
    # Accessibility
    "RECOMMENDED_MIN_FONT_SIZE",
    "RECOMMENDED_MIN_TAP_TARGET",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_PERSIST_INTERVAL",
    "PERSIST_KEY_PREFIX",
]

# ============================================================================
# BREAKPOINT SCORING
# ============================================================================
#
# Each breakpoint earns up to 100 points for width, 100 for height, 50 for
# aspect ratio and 25 per matching capability. The dimension score drops
# linearly to zero at a 1000px difference.

SCORE_MAX_DIMENSION_DIFF: float = 1000.0
SCORE_DIMENSION_MAX: float = 100.0
SCORE_ASPECT_BASE: float = 50.0
SCORE_ASPECT_PENALTY: float = 10.0
SCORE_CAPABILITY_BONUS: float = 25.0

# ============================================================================
# SCALING
# ============================================================================

GOLDEN_RATIO: float = 1.618033988749895

# ============================================================================
# ACCESSIBILITY
# ============================================================================

# Below these values validate_config() emits warnings (not errors).
RECOMMENDED_MIN_FONT_SIZE: float = 8.0
RECOMMENDED_MIN_TAP_TARGET: float = 44.0

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum cache entries for scaled values.
# A typical design system has well under 100 tokens x 10 breakpoints.
DEFAULT_CACHE_SIZE: int = 1000

# New entries written to a persisted store in one batch. flush() writes
# a partial batch.
DEFAULT_PERSIST_INTERVAL: int = 32

# Key under which persisted entries are stored in a KeyValueStore.
PERSIST_KEY_PREFIX: str = "responsivescale"
