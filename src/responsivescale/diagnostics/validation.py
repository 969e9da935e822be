"""Unified validation result for configuration validation.

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = ["ValidationResult"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable result of validating a ResponsiveConfig.

    Attributes:
        errors: Problems that make the configuration unusable
        warnings: Accessibility recommendations (informational)

    Example:
        >>> result = ValidationResult.valid()
        >>> result.is_valid
        True
        >>> result.error_count
        0
    """

    errors: tuple[Diagnostic, ...]
    warnings: tuple[Diagnostic, ...]

    @property
    def is_valid(self) -> bool:
        """Check if validation passed.

        Warnings do not affect validity - they're informational.
        """
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        """Get number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Get number of warnings."""
        return len(self.warnings)

    @staticmethod
    def valid() -> "ValidationResult":
        """Create a valid result with no errors or warnings."""
        return ValidationResult(errors=(), warnings=())

    def format(self) -> str:
        """Format as a human-readable report with a summary line."""
        if self.is_valid:
            parts = ["Validation passed"]
        else:
            parts = [
                f"Validation failed: {self.error_count} error(s), "
                f"{self.warning_count} warning(s)"
            ]
        parts.extend(d.format_error() for d in self.errors)
        parts.extend(d.format_error() for d in self.warnings)
        return "\n".join(parts)
