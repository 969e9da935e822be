"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages for configuration, validation
and cache failures.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for ScalingError subclasses.

    Categories:
        CONFIGURATION: Invalid configuration (fatal at load time)
        VALIDATION: Invalid input value (recovered with a safe default)
        CACHE: Persisted cache backend failure (degrades to memory)
    """

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    CACHE = "cache"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (breakpoints, tokens, strategy)
        2000-2999: Validation errors (bad runtime input)
        3000-3999: Cache errors (persisted backend)
        4000-4999: Configuration warnings (accessibility recommendations)
    """

    # Configuration errors (1000-1999)
    NO_BREAKPOINTS = 1001
    DUPLICATE_ALIAS = 1002
    MISSING_ALIAS = 1003
    BASE_NOT_IN_BREAKPOINTS = 1004
    INVALID_DIMENSION = 1005
    TOKEN_MIN_EXCEEDS_MAX = 1006
    INVALID_STEP = 1007
    INVALID_PRECISION = 1008
    UNKNOWN_ORIGIN = 1009
    UNKNOWN_MODE = 1010
    UNKNOWN_STRATEGY = 1011
    UNKNOWN_TOKEN = 1012
    INVALID_CONFIG_DATA = 1013
    UNKNOWN_PRESET = 1014
    UNKNOWN_BREAKPOINT = 1015
    STRATEGY_FAILED = 1016
    UNKNOWN_ORIENTATION = 1017
    UNKNOWN_DEVICE_TYPE = 1018
    UNKNOWN_TOKEN_KIND = 1019
    UNKNOWN_CACHE_STRATEGY = 1020
    INVALID_NUMBER = 1021

    # Validation errors (2000-2999)
    NEGATIVE_VALUE = 2001
    NON_FINITE_VALUE = 2002

    # Cache errors (3000-3999)
    BACKEND_UNAVAILABLE = 3001
    CORRUPT_PAYLOAD = 3002

    # Configuration warnings (4000-4999)
    MIN_FONT_SIZE_LOW = 4001
    MIN_TAP_TARGET_LOW = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        subject: Name of the offending breakpoint, token or value (optional)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    subject: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[DUPLICATE_ALIAS]: Breakpoint alias 'mobile' is declared twice
              --> mobile
              = help: Give every breakpoint a distinct alias

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.subject is not None:
            lines.append(f"  --> {_escape(self.subject)}")
        if self.hint is not None:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    # Control characters in configuration data are escaped, never emitted raw.
    return text.encode("unicode_escape").decode("ascii") if not text.isprintable() else text
