"""Diagnostic and exception hierarchy tests."""

import pytest

from responsivescale.diagnostics import (
    CacheError,
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    ErrorCategory,
    ErrorTemplate,
    ScalingError,
    ValidationError,
    ValidationResult,
)


class TestDiagnostic:
    """Diagnostic formatting."""

    def test_format_error(self) -> None:
        """Rust-style layout with subject and hint."""
        diagnostic = ErrorTemplate.duplicate_alias("mobile")
        lines = diagnostic.format_error().splitlines()
        assert lines[0].startswith("error[DUPLICATE_ALIAS]: ")
        assert lines[1] == "  --> mobile"
        assert lines[2].startswith("  = help: ")

    def test_str_is_message(self) -> None:
        """str() returns the bare message."""
        diagnostic = Diagnostic(code=DiagnosticCode.NO_BREAKPOINTS, message="none")
        assert str(diagnostic) == "none"
        assert diagnostic.format_error() == "error[NO_BREAKPOINTS]: none"

    def test_warning_severity(self) -> None:
        """Warnings are labelled as such."""
        diagnostic = ErrorTemplate.min_font_size_low(6, 8)
        assert diagnostic.format_error().startswith("warning[MIN_FONT_SIZE_LOW]")

    def test_invalid_number_message(self) -> None:
        """invalid_number names the owner, the field and the rejected value."""
        diagnostic = ErrorTemplate.invalid_number("fontSize", "min", "4")
        assert diagnostic.code is DiagnosticCode.INVALID_NUMBER
        assert diagnostic.message == "'fontSize.min' must be a finite number, got '4'"

    def test_control_characters_escaped(self) -> None:
        """Control characters in names never reach the output raw."""
        diagnostic = ErrorTemplate.unknown_token("evil\nname")
        formatted = diagnostic.format_error()
        assert "evil\\nname" in formatted
        assert "evil\nname" not in formatted

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.UNKNOWN_TOKEN, 1000, 1999),
            (DiagnosticCode.INVALID_NUMBER, 1000, 1999),
            (DiagnosticCode.UNKNOWN_ORIENTATION, 1000, 1999),
            (DiagnosticCode.NEGATIVE_VALUE, 2000, 2999),
            (DiagnosticCode.CORRUPT_PAYLOAD, 3000, 3999),
            (DiagnosticCode.MIN_TAP_TARGET_LOW, 4000, 4999),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        """Codes are grouped by category."""
        assert low <= code.value <= high


class TestExceptions:
    """Exception hierarchy."""

    @pytest.mark.parametrize(
        ("exc_type", "category"),
        [
            (ConfigurationError, ErrorCategory.CONFIGURATION),
            (CacheError, ErrorCategory.CACHE),
        ],
    )
    def test_categories(self, exc_type: type[ScalingError], category: ErrorCategory) -> None:
        """Each subclass carries its category."""
        error = exc_type("boom")
        assert isinstance(error, ScalingError)
        assert error.category is category
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        """A Diagnostic becomes the formatted exception message."""
        diagnostic = ErrorTemplate.unknown_breakpoint("watch")
        error = ConfigurationError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()

    def test_validation_error_values(self) -> None:
        """ValidationError keeps the rejected and fallback values."""
        error = ValidationError(
            ErrorTemplate.negative_value("fontSize", -1), value=-1, fallback_value=-1
        )
        assert error.category is ErrorCategory.VALIDATION
        assert (error.value, error.fallback_value) == (-1, -1)


class TestValidationResult:
    """ValidationResult reporting."""

    def test_valid(self) -> None:
        """valid() has no errors or warnings."""
        result = ValidationResult.valid()
        assert result.is_valid
        assert result.format() == "Validation passed"

    def test_warnings_do_not_invalidate(self) -> None:
        """Warnings alone keep the result valid."""
        result = ValidationResult(errors=(), warnings=(ErrorTemplate.min_tap_target_low(30, 44),))
        assert result.is_valid
        assert result.warning_count == 1
        assert "warning[MIN_TAP_TARGET_LOW]" in result.format()

    def test_format_failure(self) -> None:
        """Failures start with a summary line."""
        result = ValidationResult(
            errors=(ErrorTemplate.no_breakpoints(), ErrorTemplate.invalid_precision(0)),
            warnings=(),
        )
        report = result.format()
        assert report.startswith("Validation failed: 2 error(s), 0 warning(s)")
        assert "error[INVALID_PRECISION]" in report
