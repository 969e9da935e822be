"""ResponsiveContext - tracks the current breakpoint for one consumer tree.

The engine is stateless with respect to the viewport. A context owns the
"current breakpoint" that UI bindings read, and re-resolves it when the
host reports a new viewport size.

Python 3.13+. Zero external dependencies.
"""

import logging
import threading

from responsivescale.config.model import Breakpoint
from responsivescale.runtime.computer import ScaleOptions
from responsivescale.runtime.engine import BreakpointRef, ScalingEngine
from responsivescale.runtime.resolver import find_breakpoint

__all__ = ["ResponsiveContext"]

logger = logging.getLogger(__name__)


class ResponsiveContext:
    """Current-breakpoint holder bound to a ScalingEngine.

    Viewport updates never invalidate the engine's cache: cached values
    are keyed by breakpoint, so switching back to a breakpoint reuses them.

    Example:
        >>> context = ResponsiveContext(ScalingEngine(create_default_config()))
        >>> context.current_breakpoint.name
        'desktop'
        >>> context.update_viewport(390, 844).name
        'mobile'
        >>> context.get_value(48, "fontSize")
        12.0
    """

    __slots__ = ("_current", "_engine", "_lock")

    def __init__(
        self, engine: ScalingEngine, initial_breakpoint: BreakpointRef | None = None
    ) -> None:
        """Initialize context.

        Args:
            engine: Engine answering value requests
            initial_breakpoint: Starting breakpoint (or its alias or name);
                defaults to the configuration's base breakpoint

        Raises:
            ConfigurationError: If initial_breakpoint names no breakpoint
        """
        self._engine = engine
        self._lock = threading.Lock()
        if initial_breakpoint is None:
            self._current = engine.config.base
        elif isinstance(initial_breakpoint, str):
            self._current = find_breakpoint(engine.config, initial_breakpoint)
        else:
            self._current = initial_breakpoint

    @property
    def engine(self) -> ScalingEngine:
        """Engine answering value requests."""
        return self._engine

    @property
    def current_breakpoint(self) -> Breakpoint:
        """Most recently resolved breakpoint."""
        with self._lock:
            return self._current

    def resolve_breakpoint(self, width: float, height: float) -> Breakpoint:
        """Resolve a viewport without changing the current breakpoint."""
        return self._engine.resolve_breakpoint(width, height)

    def update_viewport(self, width: float, height: float) -> Breakpoint:
        """Re-resolve for a new viewport and make the result current.

        Returns:
            The new current breakpoint
        """
        breakpoint = self._engine.resolve_breakpoint(width, height)
        with self._lock:
            previous, self._current = self._current, breakpoint
        if previous.key != breakpoint.key:
            logger.debug("Breakpoint changed: %s -> %s", previous.key, breakpoint.key)
        return breakpoint

    def get_value(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef | None = None,
        options: ScaleOptions | None = None,
    ) -> float:
        """Scale a base value, by default to the current breakpoint."""
        target = breakpoint if breakpoint is not None else self.current_breakpoint
        return self._engine.get_value(base_value, token_name, target, options)

    def format_value(
        self,
        base_value: float,
        token_name: str,
        breakpoint: BreakpointRef | None = None,
        options: ScaleOptions | None = None,
    ) -> str:
        """format_value() of the engine, by default at the current breakpoint."""
        target = breakpoint if breakpoint is not None else self.current_breakpoint
        return self._engine.format_value(base_value, token_name, target, options)

    def invalidate_cache(self) -> None:
        """Drop the engine's cached values."""
        self._engine.invalidate_cache()

    def get_cache_stats(self) -> dict[str, int | float | bool] | None:
        """Cache statistics of the engine (None when caching is disabled)."""
        return self._engine.get_cache_stats()

    def __repr__(self) -> str:
        return f"ResponsiveContext(current={self.current_breakpoint.key!r})"
