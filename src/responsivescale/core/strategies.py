"""Registry of named scaling and rounding functions.

Configuration stays pure data: a token whose ``scale`` is a string, and a
rounding step whose mode is ``custom``, name functions registered here.
Hosts register their own functions on a private registry and hand it to the
ScalingEngine.

Signatures:
    - Scaling functions: ``(base_value, ratio) -> scaled_value``
    - Rounding functions: ``(value, precision) -> rounded_value``

Built-ins:
    Scaling: ease-in, ease-out, ease-in-out, golden-ratio, identity
    Rounding: half-even, truncate

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from decimal import ROUND_DOWN, ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Literal, TypeAlias

from responsivescale.constants import GOLDEN_RATIO
from responsivescale.diagnostics import ConfigurationError, ErrorTemplate

__all__ = [
    "RoundingFunction",
    "ScalingFunction",
    "StrategyRegistry",
    "create_default_registry",
    "get_shared_registry",
]

ScalingFunction: TypeAlias = Callable[[float, float], float]
RoundingFunction: TypeAlias = Callable[[float, float], float]
_Kind: TypeAlias = Literal["scaling", "rounding"]


@dataclass(frozen=True, slots=True)
class StrategySignature:
    """Registered function metadata.

    Attributes:
        name: Identifier used in configuration data
        python_name: Function ``__name__``
        kind: "scaling" or "rounding"
        callable: The function itself
    """

    name: str
    python_name: str
    kind: _Kind
    callable: Callable[[float, float], float]


class StrategyRegistry:
    """Named scaling and rounding functions.

    Supports dict-like introspection over scaling function names:
        - ``in`` / ``len()`` / iteration cover scaling functions
        - list_rounding() / has_rounding() cover rounding functions

    Example:
        >>> registry = StrategyRegistry()
        >>> registry.register_scaling(lambda v, r: v * r ** 0.5, name="sqrt")
        >>> "sqrt" in registry
        True
        >>> registry.call_scaling("sqrt", 16.0, 0.25)
        8.0
    """

    __slots__ = ("_frozen", "_rounding", "_scaling")

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._scaling: dict[str, StrategySignature] = {}
        self._rounding: dict[str, StrategySignature] = {}
        self._frozen = False

    def register_scaling(self, func: ScalingFunction, *, name: str | None = None) -> None:
        """Register a scaling function.

        Args:
            func: ``(base_value, ratio) -> scaled_value``
            name: Identifier (default: ``func.__name__``)

        Raises:
            TypeError: If the registry is frozen
        """
        self._register(self._scaling, func, name, "scaling")

    def register_rounding(self, func: RoundingFunction, *, name: str | None = None) -> None:
        """Register a rounding function.

        Args:
            func: ``(value, precision) -> rounded_value``
            name: Identifier (default: ``func.__name__``)

        Raises:
            TypeError: If the registry is frozen
        """
        self._register(self._rounding, func, name, "rounding")

    def _register(
        self,
        table: dict[str, StrategySignature],
        func: Callable[[float, float], float],
        name: str | None,
        kind: _Kind,
    ) -> None:
        if self._frozen:
            msg = "Cannot register on a frozen StrategyRegistry; use copy() first"
            raise TypeError(msg)
        python_name = getattr(func, "__name__", "unknown")
        key = name if name is not None else python_name
        table[key] = StrategySignature(name=key, python_name=python_name, kind=kind, callable=func)

    def call_scaling(self, name: str, base_value: float, ratio: float) -> float:
        """Invoke a scaling function.

        Raises:
            ConfigurationError: If the function is unknown or rejects its
                arguments (TypeError/ValueError)
        """
        return self._call(self._scaling, name, "scaling", base_value, ratio)

    def call_rounding(self, name: str, value: float, precision: float) -> float:
        """Invoke a rounding function.

        Raises:
            ConfigurationError: If the function is unknown or rejects its
                arguments (TypeError/ValueError)
        """
        return self._call(self._rounding, name, "rounding", value, precision)

    @staticmethod
    def _call(
        table: dict[str, StrategySignature],
        name: str,
        kind: _Kind,
        first: float,
        second: float,
    ) -> float:
        sig = table.get(name)
        if sig is None:
            raise ConfigurationError(ErrorTemplate.unknown_strategy(name, kind))
        # Only argument errors are translated; anything else is a bug in the
        # registered function and propagates unchanged.
        try:
            return float(sig.callable(first, second))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(ErrorTemplate.strategy_failed(name, str(e))) from e

    def has_scaling(self, name: str) -> bool:
        """Check if a scaling function is registered."""
        return name in self._scaling

    def has_rounding(self, name: str) -> bool:
        """Check if a rounding function is registered."""
        return name in self._rounding

    def list_scaling(self) -> list[str]:
        """Registered scaling function names."""
        return list(self._scaling)

    def list_rounding(self) -> list[str]:
        """Registered rounding function names."""
        return list(self._rounding)

    def get_info(self, name: str) -> StrategySignature | None:
        """Metadata for a scaling function, falling back to rounding functions."""
        return self._scaling.get(name) or self._rounding.get(name)

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """Whether register_* raises TypeError."""
        return self._frozen

    def copy(self) -> "StrategyRegistry":
        """Create an unfrozen shallow copy."""
        new_registry = StrategyRegistry()
        new_registry._scaling = self._scaling.copy()
        new_registry._rounding = self._rounding.copy()
        return new_registry

    def __iter__(self) -> Iterator[str]:
        return iter(self._scaling)

    def __len__(self) -> int:
        return len(self._scaling)

    def __contains__(self, name: object) -> bool:
        return name in self._scaling

    def __repr__(self) -> str:
        return (
            f"StrategyRegistry(scaling={len(self._scaling)}, "
            f"rounding={len(self._rounding)}, frozen={self._frozen})"
        )


# ============================================================================
# BUILT-IN FUNCTIONS
# ============================================================================


def ease_in(value: float, ratio: float) -> float:
    """Shrinks slowly below the base: ``value * ratio ** 0.5``."""
    return value * ratio**0.5 if ratio > 0 else value


def ease_out(value: float, ratio: float) -> float:
    """Shrinks quickly below the base: ``value * ratio ** 2``."""
    return value * ratio**2


def ease_in_out(value: float, ratio: float) -> float:
    """Quadratic ease-in-out curve applied to the ratio."""
    if ratio < 0.5:
        return value * 2 * ratio * ratio
    return value * (1 - (-2 * ratio + 2) ** 2 / 2)


def golden_ratio(value: float, ratio: float) -> float:
    """``value * ratio ** (1 / phi)``."""
    return value * ratio ** (1 / GOLDEN_RATIO) if ratio > 0 else value


def identity(value: float, ratio: float) -> float:  # noqa: ARG001 - signature contract
    """Never scales."""
    return value


def half_even(value: float, precision: float) -> float:
    """Banker's rounding to a multiple of precision."""
    try:
        steps = (Decimal(str(value)) / Decimal(str(precision))).quantize(
            Decimal(1), rounding=ROUND_HALF_EVEN
        )
    except InvalidOperation as e:
        raise ValueError(str(e)) from e
    return float(steps * Decimal(str(precision)))


def truncate(value: float, precision: float) -> float:
    """Round toward zero to a multiple of precision."""
    try:
        steps = (Decimal(str(value)) / Decimal(str(precision))).quantize(
            Decimal(1), rounding=ROUND_DOWN
        )
    except InvalidOperation as e:
        raise ValueError(str(e)) from e
    return float(steps * Decimal(str(precision)))


def create_default_registry() -> StrategyRegistry:
    """Create a new unfrozen registry holding the built-in functions.

    See Also:
        get_shared_registry: Returns a shared frozen registry.
    """
    registry = StrategyRegistry()
    registry.register_scaling(ease_in, name="ease-in")
    registry.register_scaling(ease_out, name="ease-out")
    registry.register_scaling(ease_in_out, name="ease-in-out")
    registry.register_scaling(golden_ratio, name="golden-ratio")
    registry.register_scaling(identity, name="identity")
    registry.register_rounding(half_even, name="half-even")
    registry.register_rounding(truncate, name="truncate")
    return registry


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: StrategyRegistry | None = None


def get_shared_registry() -> StrategyRegistry:
    """Get the shared, frozen registry with built-in functions.

    Calling register_*() on it raises TypeError. To add functions, use
    ``get_shared_registry().copy()`` or create_default_registry().
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
    return _SHARED_REGISTRY
