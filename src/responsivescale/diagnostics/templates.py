"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    # ------------------------------------------------------------------
    # Breakpoints
    # ------------------------------------------------------------------

    @staticmethod
    def no_breakpoints() -> Diagnostic:
        """Configuration declares no breakpoints."""
        return Diagnostic(
            code=DiagnosticCode.NO_BREAKPOINTS,
            message="At least one breakpoint is required",
            hint="Declare the base breakpoint inside breakpoints",
        )

    @staticmethod
    def duplicate_alias(alias: str) -> Diagnostic:
        """Two breakpoints share an alias.

        Args:
            alias: The repeated alias

        Returns:
            Diagnostic for DUPLICATE_ALIAS
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_ALIAS,
            message=f"Breakpoint alias '{alias}' is declared more than once",
            hint="Give every breakpoint a distinct alias",
            subject=alias,
        )

    @staticmethod
    def missing_alias(name: str) -> Diagnostic:
        """Breakpoint has an empty alias."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_ALIAS,
            message=f"Breakpoint '{name}' has no alias",
            hint="Every breakpoint needs a non-empty alias",
            subject=name,
        )

    @staticmethod
    def base_not_in_breakpoints(alias: str) -> Diagnostic:
        """Base breakpoint missing from the breakpoint list."""
        return Diagnostic(
            code=DiagnosticCode.BASE_NOT_IN_BREAKPOINTS,
            message=f"Base breakpoint '{alias}' must be included in breakpoints",
            hint="Add the base breakpoint to the breakpoints sequence",
            subject=alias,
        )

    @staticmethod
    def invalid_dimension(name: str, width: float, height: float) -> Diagnostic:
        """Breakpoint with a zero, negative or non-finite dimension."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_DIMENSION,
            message=f"Breakpoint '{name}' has invalid size {width}x{height}",
            hint="Width and height must be finite and greater than zero",
            subject=name,
        )

    @staticmethod
    def unknown_breakpoint(name: str) -> Diagnostic:
        """Lookup by name or alias failed."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_BREAKPOINT,
            message=f"Breakpoint '{name}' not found",
            hint="Use a name or alias declared in the configuration",
            subject=name,
        )

    # ------------------------------------------------------------------
    # Tokens and strategy
    # ------------------------------------------------------------------

    @staticmethod
    def token_min_exceeds_max(token: str, minimum: float, maximum: float) -> Diagnostic:
        """Token declares min greater than max."""
        return Diagnostic(
            code=DiagnosticCode.TOKEN_MIN_EXCEEDS_MAX,
            message=f"Token '{token}' has min {minimum} greater than max {maximum}",
            hint="Swap the bounds or remove one of them",
            subject=token,
        )

    @staticmethod
    def invalid_step(token: str, step: float) -> Diagnostic:
        """Token step is not positive."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_STEP,
            message=f"Token '{token}' has non-positive step {step}",
            hint="Step must be greater than zero",
            subject=token,
        )

    @staticmethod
    def invalid_precision(precision: float) -> Diagnostic:
        """Rounding precision is not positive."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PRECISION,
            message=f"Rounding precision must be positive, got {precision!r}",
            hint="Use 1 for whole pixels or 0.1 for one decimal place",
        )

    @staticmethod
    def unknown_origin(origin: str) -> Diagnostic:
        """Unrecognised scaling origin."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ORIGIN,
            message=f"Invalid scaling origin: {origin}",
            hint="Use one of width, height, min, max, diagonal, area",
            subject=origin,
        )

    @staticmethod
    def unknown_mode(mode: str) -> Diagnostic:
        """Unrecognised scaling or rounding mode."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_MODE,
            message=f"Invalid mode: {mode}",
            subject=mode,
        )

    @staticmethod
    def unknown_orientation(orientation: str) -> Diagnostic:
        """Unrecognised breakpoint orientation."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ORIENTATION,
            message=f"Invalid orientation: {orientation}",
            hint="Use one of landscape, portrait, square",
            subject=orientation,
        )

    @staticmethod
    def unknown_device_type(device_type: str) -> Diagnostic:
        """Unrecognised breakpoint device type."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_DEVICE_TYPE,
            message=f"Invalid device type: {device_type}",
            hint="Use one of mobile, tablet, laptop, desktop, tv",
            subject=device_type,
        )

    @staticmethod
    def unknown_token_kind(kind: str) -> Diagnostic:
        """Unrecognised token accessibility kind."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_TOKEN_KIND,
            message=f"Invalid token kind: {kind}",
            hint="Use one of legibility, tap-target, other",
            subject=kind,
        )

    @staticmethod
    def unknown_cache_strategy(strategy: str) -> Diagnostic:
        """Unrecognised cache strategy."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_CACHE_STRATEGY,
            message=f"Invalid cache strategy: {strategy}",
            hint="Use memory or persisted",
            subject=strategy,
        )

    @staticmethod
    def invalid_number(owner: str, field: str, value: object) -> Diagnostic:
        """Numeric setting that is not a finite number.

        Args:
            owner: Token name, "accessibility", "rounding" or "options"
            field: Offending field
            value: Rejected value

        Returns:
            Diagnostic for INVALID_NUMBER
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_NUMBER,
            message=f"'{owner}.{field}' must be a finite number, got {value!r}",
            hint="Use a JSON number, not a string, boolean or NaN",
            subject=f"{owner}.{field}",
        )

    @staticmethod
    def unknown_strategy(identifier: str, kind: str) -> Diagnostic:
        """Registered strategy identifier not found.

        Args:
            identifier: The missing identifier
            kind: "scaling" or "rounding"

        Returns:
            Diagnostic for UNKNOWN_STRATEGY
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_STRATEGY,
            message=f"No {kind} function registered as '{identifier}'",
            hint=f"Register it with StrategyRegistry.register_{kind}() first",
            subject=identifier,
        )

    @staticmethod
    def strategy_failed(identifier: str, reason: str) -> Diagnostic:
        """Registered function rejected its arguments."""
        return Diagnostic(
            code=DiagnosticCode.STRATEGY_FAILED,
            message=f"Strategy function '{identifier}' failed: {reason}",
            hint="Scaling functions take (value, ratio); rounding functions (value, precision)",
            subject=identifier,
        )

    @staticmethod
    def custom_mode_requires_function(token: str) -> Diagnostic:
        """Custom mode with a numeric token scale."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_STRATEGY,
            message=f"Token '{token}' needs a registered function identifier in custom mode",
            hint="Set scale to the name of a registered scaling function",
            subject=token,
        )

    @staticmethod
    def unknown_token(token: str) -> Diagnostic:
        """Value requested for an undeclared token."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_TOKEN,
            message=f"Token '{token}' is not declared in the scaling strategy",
            hint="Add the token to strategy.tokens",
            subject=token,
        )

    @staticmethod
    def invalid_config_data(path: str, reason: str) -> Diagnostic:
        """Configuration mapping has the wrong shape."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_CONFIG_DATA,
            message=f"Invalid configuration data at '{path}': {reason}",
            subject=path,
        )

    @staticmethod
    def unknown_preset(name: str) -> Diagnostic:
        """Preset name not recognised."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_PRESET,
            message=f"Unknown configuration preset '{name}'",
            hint="Use conservative, aggressive or mobile-first",
            subject=name,
        )

    # ------------------------------------------------------------------
    # Runtime input
    # ------------------------------------------------------------------

    @staticmethod
    def negative_value(token: str, value: float) -> Diagnostic:
        """Negative base value."""
        return Diagnostic(
            code=DiagnosticCode.NEGATIVE_VALUE,
            message=f"Negative base value {value} for token '{token}'",
            hint="Base values are sizes and must be zero or greater",
            subject=token,
        )

    @staticmethod
    def non_finite_value(token: str, value: float) -> Diagnostic:
        """NaN or infinite base value."""
        return Diagnostic(
            code=DiagnosticCode.NON_FINITE_VALUE,
            message=f"Non-finite base value {value} for token '{token}'",
            subject=token,
        )

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    @staticmethod
    def backend_unavailable(reason: str) -> Diagnostic:
        """Persisted backend raised."""
        return Diagnostic(
            code=DiagnosticCode.BACKEND_UNAVAILABLE,
            message=f"Persisted cache backend unavailable: {reason}",
            hint="Falling back to in-memory caching",
        )

    @staticmethod
    def corrupt_payload(reason: str) -> Diagnostic:
        """Persisted payload cannot be decoded."""
        return Diagnostic(
            code=DiagnosticCode.CORRUPT_PAYLOAD,
            message=f"Persisted cache payload is corrupt: {reason}",
        )

    # ------------------------------------------------------------------
    # Warnings
    # ------------------------------------------------------------------

    @staticmethod
    def min_font_size_low(value: float, recommended: float) -> Diagnostic:
        """Accessibility font floor below recommendation."""
        return Diagnostic(
            code=DiagnosticCode.MIN_FONT_SIZE_LOW,
            message=f"Minimum font size {value} is below the recommended {recommended}px",
            severity="warning",
        )

    @staticmethod
    def min_tap_target_low(value: float, recommended: float) -> Diagnostic:
        """Accessibility tap-target floor below recommendation."""
        return Diagnostic(
            code=DiagnosticCode.MIN_TAP_TARGET_LOW,
            message=f"Minimum tap target {value} is below the recommended {recommended}px",
            severity="warning",
        )
