"""Cache configuration for ScalingEngine.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from responsivescale.constants import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_PERSIST_INTERVAL,
    PERSIST_KEY_PREFIX,
)

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for scaled-value caching.

    ``CacheConfig()`` is a usable default. Whether caching happens at all
    is decided by the configuration's ``performance.memoization`` flag;
    this object only sizes the cache and names the persisted entry.

    Attributes:
        size: Maximum in-memory entries (default: 1000).
        persist_key: Key under which entries are written to a persisted
            KeyValueStore (default: "responsivescale"). Used only when the
            configuration selects the "persisted" cache strategy.
        persist_interval: New entries collected before the persisted store
            is rewritten (default: 32). ScalingEngine.flush_cache() writes
            a partial batch.

    Example:
        >>> from responsivescale import ScalingEngine, create_default_config
        >>> engine = ScalingEngine(create_default_config(), cache=CacheConfig(size=64))
        >>> engine.get_cache_stats()["maxsize"]
        64
    """

    size: int = DEFAULT_CACHE_SIZE
    persist_key: str = PERSIST_KEY_PREFIX
    persist_interval: int = DEFAULT_PERSIST_INTERVAL

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size or persist_interval is not positive, or
                persist_key is empty.
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
        if not self.persist_key:
            msg = "persist_key must be a non-empty string"
            raise ValueError(msg)
        if self.persist_interval <= 0:
            msg = "persist_interval must be positive"
            raise ValueError(msg)
