"""Thread-safe LRU cache for scaled values.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Version-stamped keys; bump_version() invalidates every entry
    - Optional batched persistence to a host KeyValueStore
    - Backend failures degrade to memory-only caching (logged once)

Cache Key Structure:
    (token_name, base_value, breakpoint_alias, strategy_version)
    - token_name: str
    - base_value: float (every NaN maps to one key)
    - breakpoint_alias: str
    - strategy_version: int

Persisted Format:
    {"fingerprint": str, "entries": [{"key": [token, base_value, alias,
    version], "value": n}, ...]} stored under a single persist key. The
    fingerprint identifies the configuration that produced the entries; a
    payload written under another fingerprint is discarded on load.

Persistence:
    New entries are written in batches of persist_interval. flush() writes a
    partial batch; bump_version() and clear() write immediately.

Thread Safety:
    All operations protected by RLock. get_or_compute() runs the compute
    callable inside the critical section, so each key is computed at most
    once per version even under concurrent callers.

Python 3.13+.
"""

import json
import logging
import math
from collections import OrderedDict
from collections.abc import Callable
from threading import RLock
from typing import Any, Protocol, TypeAlias

from responsivescale.constants import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_PERSIST_INTERVAL,
    PERSIST_KEY_PREFIX,
)
from responsivescale.diagnostics import CacheError, ErrorTemplate

__all__ = ["CacheKey", "InMemoryStore", "KeyValueStore", "ValueCache"]

logger = logging.getLogger(__name__)

CacheKey: TypeAlias = tuple[str, float, str, int]

# NaN != NaN, so every NaN base value is mapped onto this one object.
_NAN_KEY: float = float("nan")


class KeyValueStore(Protocol):
    """Host-provided string store (sessionStorage, Redis, a dict...).

    Any exception raised by get() or set() is treated as the backend being
    unavailable.
    """

    def get(self, key: str) -> str | None:
        """Return the stored string or None."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def set(self, key: str, value: str) -> None:
        """Store a string."""
        ...  # pragma: no cover  # Protocol stub - not executable


class InMemoryStore:
    """Dict-backed KeyValueStore."""

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data) if data else {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


def _normalize(key: CacheKey) -> CacheKey:
    token, base_value, alias, version = key
    if isinstance(base_value, float) and math.isnan(base_value):
        return (token, _NAN_KEY, alias, version)
    return key


class ValueCache:
    """Memoizes scaled values per (token, base value, breakpoint, version).

    Attributes:
        maxsize: Maximum number of in-memory entries
        version: Current strategy version
        persisted: True while a persisted backend is attached and healthy

    Example:
        >>> cache = ValueCache(maxsize=10)
        >>> key = cache.make_key("fontSize", 48.0, "mobile")
        >>> cache.get_or_compute(key, lambda: 12.0)
        12.0
        >>> cache.get_or_compute(key, lambda: 99.0)
        12.0
    """

    __slots__ = (
        "_cache",
        "_dirty",
        "_fingerprint",
        "_hits",
        "_lock",
        "_maxsize",
        "_misses",
        "_persist_interval",
        "_persist_key",
        "_store",
        "_version",
    )

    def __init__(
        self,
        maxsize: int = DEFAULT_CACHE_SIZE,
        *,
        store: KeyValueStore | None = None,
        persist_key: str = PERSIST_KEY_PREFIX,
        persist_interval: int = DEFAULT_PERSIST_INTERVAL,
        version: int = 0,
        fingerprint: str = "",
    ) -> None:
        """Initialize value cache.

        Entries already present in the store for the current fingerprint and
        version are loaded eagerly.

        Args:
            maxsize: Maximum number of entries (default: 1000)
            store: Optional persisted backend
            persist_key: Store key holding the serialized entries
            persist_interval: New entries per batched store write (default: 32)
            version: Initial strategy version
            fingerprint: Identity of the configuration the values belong to

        Raises:
            ValueError: If maxsize or persist_interval is not positive
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)
        if persist_interval <= 0:
            msg = "persist_interval must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[CacheKey, float] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._version = version
        self._fingerprint = fingerprint
        self._persist_key = persist_key
        self._persist_interval = persist_interval
        self._dirty = 0
        self._store: KeyValueStore | None = store

        if store is not None:
            self._restore()

    @property
    def maxsize(self) -> int:
        """Maximum number of in-memory entries."""
        return self._maxsize

    @property
    def version(self) -> int:
        """Current strategy version."""
        with self._lock:
            return self._version

    @property
    def fingerprint(self) -> str:
        """Identity of the configuration the cached values belong to."""
        with self._lock:
            return self._fingerprint

    @property
    def persisted(self) -> bool:
        """True while a healthy persisted backend is attached."""
        with self._lock:
            return self._store is not None

    @property
    def pending(self) -> int:
        """Entries added since the last store write."""
        with self._lock:
            return self._dirty if self._store is not None else 0

    def make_key(self, token_name: str, base_value: float, alias: str) -> CacheKey:
        """Key for a lookup under the current version."""
        with self._lock:
            return _normalize((token_name, base_value, alias, self._version))

    def get_or_compute(self, key: CacheKey, compute: Callable[[], float]) -> float:
        """Return the cached value for key, computing and storing it on a miss.

        Thread-safe. compute() runs under the cache lock, so concurrent
        callers with the same key trigger exactly one computation.
        Exceptions from compute() propagate and nothing is stored.

        Args:
            key: (token_name, base_value, alias, version)
            compute: Zero-argument callable producing the value

        Returns:
            Cached or freshly computed value
        """
        key = _normalize(key)
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hits += 1
                return self._cache[key]

            self._misses += 1
            value = compute()
            self._insert(key, value)
            self._dirty += 1
            if self._dirty >= self._persist_interval:
                self._persist()
            return value

    def get(self, key: CacheKey) -> float | None:
        """Cached value or None. Counts as a hit or a miss."""
        key = _normalize(key)
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hits += 1
                return self._cache[key]
            self._misses += 1
            return None

    def flush(self) -> None:
        """Write entries added since the last store write."""
        with self._lock:
            if self._dirty:
                self._persist()

    def bump_version(self, fingerprint: str | None = None) -> int:
        """Invalidate every entry by advancing the version.

        Args:
            fingerprint: Identity of the new configuration (unchanged when None)

        Returns:
            The new version
        """
        with self._lock:
            self._version += 1
            if fingerprint is not None:
                self._fingerprint = fingerprint
            self._cache.clear()
            self._persist()
            return self._version

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._persist()

    def get_stats(self) -> dict[str, int | float | bool]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as a fraction (0.0-1.0)
            - version (int): Current strategy version
            - persisted (bool): Persisted backend attached and healthy
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 4),
                "version": self._version,
                "persisted": self._store is not None,
            }

    def dump_entries(self) -> str:
        """Serialize current entries, least recently used first."""
        with self._lock:
            payload = {
                "fingerprint": self._fingerprint,
                "entries": [
                    {"key": [token, base_value, alias, version], "value": value}
                    for (token, base_value, alias, version), value in self._cache.items()
                ],
            }
        return json.dumps(payload)

    def load_entries(self, text: str) -> int:
        """Restore entries produced by dump_entries().

        A payload written under another fingerprint belongs to another
        configuration and is discarded whole. Entries stamped with another
        version are discarded individually.

        Returns:
            Number of entries loaded

        Raises:
            CacheError: If the payload is malformed
        """
        fingerprint, entries = self._decode(text)
        loaded = 0
        with self._lock:
            if fingerprint != self._fingerprint:
                logger.debug(
                    "Discarding %d persisted entries from configuration %s (current: %s)",
                    len(entries),
                    fingerprint or "<none>",
                    self._fingerprint or "<none>",
                )
                return 0
            for key, value in entries:
                if key[3] != self._version:
                    continue
                self._insert(_normalize(key), value)
                loaded += 1
        return loaded

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"ValueCache(size={stats['size']}, maxsize={stats['maxsize']}, "
            f"version={stats['version']}, persisted={stats['persisted']})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, key: CacheKey, value: float) -> None:
        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self._maxsize:
            self._cache.popitem(last=False)
        self._cache[key] = value

    @staticmethod
    def _decode(text: str) -> tuple[str, list[tuple[CacheKey, float]]]:
        try:
            raw: Any = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise CacheError(ErrorTemplate.corrupt_payload(str(e))) from e
        match raw:
            case {"fingerprint": str() as fingerprint, "entries": list() as items}:
                pass
            case _:
                reason = "expected an object with 'fingerprint' and 'entries'"
                raise CacheError(ErrorTemplate.corrupt_payload(reason))

        entries: list[tuple[CacheKey, float]] = []
        for index, item in enumerate(items):
            match item:
                case {"key": [str() as token, int() | float() as base, str() as alias,
                              int() as version], "value": int() | float() as value}:
                    entries.append(((token, float(base), alias, version), float(value)))
                case _:
                    reason = f"entry {index} is not a {{key, value}} record"
                    raise CacheError(ErrorTemplate.corrupt_payload(reason))
        return fingerprint, entries

    def _restore(self) -> None:
        store = self._store
        assert store is not None  # noqa: S101 - caller checked
        try:
            text = store.get(self._persist_key)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            # Host backends raise arbitrary exception types.
            self._degrade(CacheError(ErrorTemplate.backend_unavailable(str(exc))))
            return
        if text is None:
            return
        try:
            self.load_entries(text)
        except CacheError as e:
            self._degrade(e)

    def _persist(self) -> None:
        store = self._store
        self._dirty = 0
        if store is None:
            return
        try:
            store.set(self._persist_key, self.dump_entries())
        except Exception as exc:  # pylint: disable=broad-exception-caught
            # Host backends raise arbitrary exception types.
            self._degrade(CacheError(ErrorTemplate.backend_unavailable(str(exc))))

    def _degrade(self, error: CacheError) -> None:
        # Detaching the store makes this the only log line for the failure.
        self._store = None
        logger.warning("%s; continuing with in-memory cache only", error)
