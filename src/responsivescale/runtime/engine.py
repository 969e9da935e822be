"""ScalingEngine - Main API for responsive value scaling.

Python 3.13+. Zero external dependencies.
"""

import dataclasses
import logging
import math
import threading
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TypeAlias, TypeVar

from responsivescale.config.loading import config_fingerprint
from responsivescale.config.model import Breakpoint, ResponsiveConfig, ScalingToken
from responsivescale.config.validation import ensure_valid
from responsivescale.core.strategies import StrategyRegistry, get_shared_registry
from responsivescale.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    ValidationError,
)
from responsivescale.enums import CacheStrategy
from responsivescale.runtime.accessibility import AccessibilityEnforcer
from responsivescale.runtime.cache import KeyValueStore, ValueCache
from responsivescale.runtime.cache_config import CacheConfig
from responsivescale.runtime.computer import (
    ScaleOptions,
    ScaledValue,
    compute_detailed,
    is_valid_base_value,
    safe_default,
    scaling_ratio,
)
from responsivescale.runtime.metrics import MetricsRecorder, PerformanceMetrics
from responsivescale.runtime.resolver import (
    BreakpointResolver,
    BreakpointScore,
    Capabilities,
    CapabilityProvider,
    ScoreWeights,
    StaticCapabilities,
    find_breakpoint,
)

__all__ = ["ScalingEngine"]

logger = logging.getLogger(__name__)

BreakpointRef: TypeAlias = Breakpoint | str

T = TypeVar("T")


def _format_number(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


class ScalingEngine:
    """Responsive scaling engine for one configuration.

    Main public API. Resolves viewports to breakpoints and scales base
    values authored at the base breakpoint to any other breakpoint, with
    token constraints, rounding, accessibility floors and memoization.

    Thread Safety:
        By default, engines are NOT fully thread-safe. Value requests may run
        concurrently (the value cache has its own lock), but replace_config()
        must not race with them.

        For concurrent access including replace_config(), use
        thread_safe=True: every public method is serialized via an internal
        RLock.

    Error Handling:
        - ConfigurationError at construction and replace_config() for an
          invalid configuration, and from value requests for an undeclared
          token name or unknown breakpoint name.
        - Invalid base values (negative, NaN, infinite) never raise. The
          unscaled base value is returned and a ValidationError is logged
          once per (token, reason); see ``validation_errors``.

    Caching:
        Values are cached per (token, base value, breakpoint alias, strategy
        version). Breakpoint objects that are not part of the configuration,
        and requests with value-changing ScaleOptions, are computed without
        the cache. Persisted entries carry a fingerprint of the
        configuration and are only reloaded under an identical one.

    Examples:
        >>> engine = ScalingEngine(create_default_config())
        >>> engine.get_value(48, "fontSize", "mobile")
        12.0
        >>> engine.format_value(48, "fontSize", "desktop")
        '41px'
        >>> engine.resolve_breakpoint(800, 1000).name
        'tablet'
    """

    __slots__ = (
        "_cache",
        "_cache_config",
        "_config",
        "_enforcer",
        "_lock",
        "_metrics",
        "_ratios",
        "_registry",
        "_reported",
        "_reported_lock",
        "_resolver",
        "_store",
        "_thread_safe",
        "_version",
    )

    def __init__(
        self,
        config: ResponsiveConfig,
        *,
        cache: CacheConfig | None = None,
        functions: StrategyRegistry | None = None,
        capabilities: CapabilityProvider | Capabilities | None = None,
        weights: ScoreWeights | None = None,
        thread_safe: bool = False,
        store: KeyValueStore | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            config: Responsive configuration (validated here)
            cache: Cache sizing (default: CacheConfig()). Caching itself is
                controlled by config.strategy.performance.memoization.
            functions: Registry of custom scaling/rounding functions. The
                engine keeps its own copy; later registrations on the
                argument do not affect it. Default: shared built-ins.
            capabilities: Capability probe, or a fixed Capabilities value
                (default: no touch, no hover)
            weights: Breakpoint score weights (default: all 1.0)
            thread_safe: Serialize all public methods with an RLock
            store: Persisted cache backend, used when the configuration
                selects the "persisted" cache strategy

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._registry = functions.copy() if functions is not None else get_shared_registry()
        ensure_valid(config, self._registry)

        if isinstance(capabilities, Capabilities):
            capabilities = StaticCapabilities(capabilities)
        self._resolver = BreakpointResolver(capabilities, weights)
        self._enforcer = AccessibilityEnforcer()

        self._thread_safe = thread_safe
        self._lock: threading.RLock | None = threading.RLock() if thread_safe else None
        self._reported: dict[tuple[str, str], ValidationError] = {}
        self._reported_lock = threading.Lock()
        self._metrics = MetricsRecorder()

        self._config = config
        self._version = 0
        self._cache_config = cache if cache is not None else CacheConfig()
        self._store = store
        self._cache: ValueCache | None = self._build_cache(config)
        self._ratios: dict[str, float] = self._build_ratios(config)

        logger.info(
            "ScalingEngine initialized: %d breakpoint(s), base=%s, mode=%s "
            "(cache=%s, thread_safe=%s)",
            len(config.breakpoints),
            config.base.key,
            config.strategy.mode,
            "enabled" if self._cache is not None else "disabled",
            thread_safe,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> ResponsiveConfig:
        """Active configuration (read-only)."""
        return self._config

    @property
    def strategy_version(self) -> int:
        """Incremented by every replace_config() (starts at 0)."""
        return self._version

    @property
    def cache_enabled(self) -> bool:
        """Whether scaled values are memoized."""
        return self._cache is not None

    @property
    def is_thread_safe(self) -> bool:
        """Whether public methods are serialized by an RLock."""
        return self._thread_safe

    @property
    def functions(self) -> StrategyRegistry:
        """Registry of custom scaling and rounding functions."""
        return self._registry

    @property
    def precomputed_ratios(self) -> Mapping[str, float]:
        """Breakpoint alias -> scaling ratio, filled at configuration time.

        Empty when performance.precompute_values is False.
        """
        return MappingProxyType(self._ratios)

    @property
    def validation_errors(self) -> tuple[ValidationError, ...]:
        """ValidationErrors logged so far, one per (token, reason)."""
        with self._reported_lock:
            return tuple(self._reported.values())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_breakpoint(self, width: float, height: float) -> Breakpoint:
        """Best-matching breakpoint for a viewport size."""
        return self._locked(lambda: self._resolve_impl(width, height))

    def explain_resolution(self, width: float, height: float) -> tuple[BreakpointScore, ...]:
        """Per-breakpoint score breakdown for a viewport size."""
        return self._locked(lambda: self._resolver.explain(width, height, self._config))

    def get_value(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> float:
        """Scale a base value to a breakpoint.

        Args:
            base_value: Value authored for the base breakpoint
            token_name: Token declared in the strategy
            breakpoint: Breakpoint, or its alias or name
            options: Per-call overrides. Overrides that change the number,
                and bypass_cache, are computed without the value cache.

        Returns:
            Scaled value. For invalid base values, the base value unscaled.

        Raises:
            ConfigurationError: If the token or breakpoint name is unknown

        Example:
            >>> engine.get_value(16, "spacing", "tablet")
            6.0
        """
        return self._locked(
            lambda: self._get_value_impl(base_value, token_name, breakpoint, options)
        )

    def get_values(
        self,
        values: Mapping[str, float],
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> dict[str, float]:
        """Scale several base values with the same token (key order preserved)."""
        return self._locked(
            lambda: {
                key: self._get_value_impl(value, token_name, breakpoint, options)
                for key, value in values.items()
            }
        )

    def scale_value(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> ScaledValue:
        """Scale a base value and report which constraints fired.

        Bypasses the cache. ``scaled`` equals what get_value() returns.
        """
        return self._locked(
            lambda: self._scale_impl(base_value, token_name, breakpoint, options)
        )

    def format_value(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> str:
        """Scaled value with the token's unit appended, e.g. ``"12px"``."""
        return self._locked(
            lambda: self._format_impl(base_value, token_name, breakpoint, options)
        )

    def invalidate_cache(self) -> None:
        """Drop every cached value and reset cache statistics."""
        self._locked(self._invalidate_impl)

    def flush_cache(self) -> None:
        """Write cached values not yet persisted to the store.

        New entries reach a persisted store in batches of
        CacheConfig.persist_interval; call this before a session ends to
        keep a partial batch. No-op without a persisted store.
        """
        cache = self._cache
        if cache is not None:
            cache.flush()

    def get_cache_stats(self) -> dict[str, int | float | bool] | None:
        """Get cache statistics.

        Returns:
            Dict with cache metrics or None if caching disabled.
            Keys: size (int), maxsize (int), hits (int), misses (int),
                  hit_rate (float 0.0-1.0), version (int), persisted (bool)
        """
        cache = self._cache
        return cache.get_stats() if cache is not None else None

    def get_performance_metrics(self) -> PerformanceMetrics:
        """Operation counts, cache hit rate and average computation time.

        Counts accumulate across replace_config() and invalidate_cache().
        """
        return self._metrics.snapshot()

    def replace_config(self, config: ResponsiveConfig) -> None:
        """Validate and install a new configuration.

        Bumps the strategy version, so no value computed under the old
        configuration is served afterwards.

        Raises:
            ConfigurationError: If the configuration is invalid; the current
                configuration stays active
        """
        ensure_valid(config, self._registry)
        self._locked(lambda: self._replace_impl(config))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"ScalingEngine(base={self._config.base.key!r}, "
            f"breakpoints={len(self._config.breakpoints)}, version={self._version}, "
            f"cache={'enabled' if self._cache is not None else 'disabled'})"
        )

    # ------------------------------------------------------------------
    # Implementation (no locking)
    # ------------------------------------------------------------------

    def _locked(self, operation: Callable[[], T]) -> T:
        if self._lock is not None:
            with self._lock:
                return operation()
        return operation()

    def _resolve_impl(self, width: float, height: float) -> Breakpoint:
        breakpoint = self._resolver.resolve(width, height, self._config)
        logger.debug("Resolved viewport %sx%s to breakpoint '%s'", width, height, breakpoint.key)
        return breakpoint

    def _token(
        self, config: ResponsiveConfig, token_name: str, options: ScaleOptions | None = None
    ) -> ScalingToken:
        token = config.strategy.tokens.get(token_name)
        if token is None:
            raise ConfigurationError(ErrorTemplate.unknown_token(token_name))
        return options.apply(token) if options is not None else token

    def _target(self, config: ResponsiveConfig, breakpoint: BreakpointRef) -> Breakpoint:
        if isinstance(breakpoint, str):
            return find_breakpoint(config, breakpoint)
        return breakpoint

    @staticmethod
    def _is_configured(config: ResponsiveConfig, target: Breakpoint) -> bool:
        # An undeclared Breakpoint may reuse a declared alias with another size.
        return config.get_breakpoint(target.key) == target

    def _ratio_for(self, config: ResponsiveConfig, target: Breakpoint) -> float | None:
        ratio = self._ratios.get(target.key)
        if ratio is not None and self._is_configured(config, target):
            return ratio
        return None

    def _report_invalid(self, token_name: str, base_value: float) -> float:
        fallback = safe_default(base_value)
        if math.isfinite(base_value):
            reason = "negative"
            diagnostic = ErrorTemplate.negative_value(token_name, base_value)
        else:
            reason = "non-finite"
            diagnostic = ErrorTemplate.non_finite_value(token_name, base_value)

        with self._reported_lock:
            if (token_name, reason) in self._reported:
                return fallback
            error = ValidationError(diagnostic, value=base_value, fallback_value=fallback)
            self._reported[(token_name, reason)] = error
        logger.warning("%s (returning unscaled value)", error.diagnostic or error)
        return fallback

    def _compute(
        self,
        config: ResponsiveConfig,
        base_value: float,
        token_name: str,
        token: ScalingToken,
        target: Breakpoint,
    ) -> ScaledValue:
        strategy = config.strategy
        start = time.perf_counter()
        detailed = compute_detailed(
            base_value,
            token,
            target,
            config.base,
            strategy,
            self._registry,
            self._ratio_for(config, target),
            name=token_name,
        )
        if not detailed.fallback:
            floored = self._enforcer.apply(detailed.scaled, token_name, token, strategy)
            if floored != detailed.scaled:
                detailed = dataclasses.replace(detailed, scaled=floored, floor_applied=True)
        self._metrics.record_computation((time.perf_counter() - start) * 1000)
        return detailed

    def _get_value_impl(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> float:
        config, cache = self._config, self._cache
        token = self._token(config, token_name, options)
        target = self._target(config, breakpoint)

        if not is_valid_base_value(base_value):
            return self._report_invalid(token_name, base_value)

        cacheable = (
            cache is not None
            and self._is_configured(config, target)
            and (options is None or not (options.bypass_cache or options.changes_value))
        )
        if cache is None or not cacheable:
            return self._compute(config, base_value, token_name, token, target).scaled

        computed = False

        def compute() -> float:
            nonlocal computed
            computed = True
            return self._compute(config, base_value, token_name, token, target).scaled

        key = cache.make_key(token_name, float(base_value), target.key)
        value = cache.get_or_compute(key, compute)
        if not computed:
            self._metrics.record_hit()
        return value

    def _scale_impl(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> ScaledValue:
        config = self._config
        token = self._token(config, token_name, options)
        target = self._target(config, breakpoint)
        if not is_valid_base_value(base_value):
            self._report_invalid(token_name, base_value)
        return self._compute(config, base_value, token_name, token, target)

    def _format_impl(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef,
        options: ScaleOptions | None = None,
    ) -> str:
        value = self._get_value_impl(base_value, token_name, breakpoint, options)
        unit = self._token(self._config, token_name, options).unit or ""
        return f"{_format_number(value)}{unit}"

    def _invalidate_impl(self) -> None:
        if self._cache is not None:
            self._cache.clear()
            logger.debug("Cache manually cleared")

    def _replace_impl(self, config: ResponsiveConfig) -> None:
        previous = self._config.strategy.performance
        self._config = config
        self._version += 1
        if self._cache is not None and config.strategy.performance == previous:
            self._cache.bump_version(config_fingerprint(config))
        else:
            self._cache = self._build_cache(config)
        self._ratios = self._build_ratios(config)
        logger.info(
            "Configuration replaced: %d breakpoint(s), base=%s, strategy version %d",
            len(config.breakpoints),
            config.base.key,
            self._version,
        )

    def _build_cache(self, config: ResponsiveConfig) -> ValueCache | None:
        performance = config.strategy.performance
        if not performance.memoization:
            return None

        store: KeyValueStore | None = None
        if performance.cache_strategy == CacheStrategy.PERSISTED:
            if self._store is None:
                logger.warning(
                    "Persisted cache strategy selected but no store was provided; "
                    "using in-memory cache only"
                )
            store = self._store

        return ValueCache(
            self._cache_config.size,
            store=store,
            persist_key=self._cache_config.persist_key,
            persist_interval=self._cache_config.persist_interval,
            version=self._version,
            fingerprint=config_fingerprint(config),
        )

    @staticmethod
    def _build_ratios(config: ResponsiveConfig) -> dict[str, float]:
        strategy = config.strategy
        if not strategy.performance.precompute_values:
            return {}
        return {
            bp.key: scaling_ratio(bp, config.base, strategy.origin) for bp in config.breakpoints
        }
