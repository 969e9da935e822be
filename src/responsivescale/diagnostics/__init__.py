"""Diagnostic system for scaling errors.

Provides structured error diagnostics with codes, hints and subjects.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import CacheError, ConfigurationError, ScalingError, ValidationError
from .templates import ErrorTemplate
from .validation import ValidationResult

__all__ = [
    "CacheError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
    "ErrorTemplate",
    "ScalingError",
    "ValidationError",
    "ValidationResult",
]
