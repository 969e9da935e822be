"""Scaling exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorCategory


class ScalingError(Exception):
    """Base exception for all scaling engine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    category: ErrorCategory | None = None

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ScalingError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(ScalingError):
    """Invalid responsive configuration.

    Raised at configuration-load time (engine construction or
    replace_config). The engine refuses to serve requests until a valid
    configuration replaces it.
    """

    category = ErrorCategory.CONFIGURATION


class ValidationError(ScalingError):
    """Invalid base value passed to a value request.

    Never propagates out of ScalingEngine.get_value(): the engine logs it
    once and returns the safe default (the unscaled base value).

    Attributes:
        value: The rejected base value
        fallback_value: Value returned in its place
    """

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str | Diagnostic, *, value: float, fallback_value: float) -> None:
        """Initialize ValidationError.

        Args:
            message: Error message string OR Diagnostic object
            value: The rejected base value
            fallback_value: Value used in its place
        """
        super().__init__(message)
        self.value = value
        self.fallback_value = fallback_value


class CacheError(ScalingError):
    """Persisted cache backend unavailable or corrupt.

    Not fatal: ValueCache degrades to memory-only caching.
    """

    category = ErrorCategory.CACHE
