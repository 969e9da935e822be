"""Build configurations from pure data.

Configuration arrives as JSON text, a JSON file, or an already-decoded
mapping. Keys may be camelCase (as written for JavaScript hosts) or
snake_case. Executable configuration is never accepted: custom scaling and
rounding functions are referenced by registered identifier.

Shape:
    {
      "base": "desktop" | {breakpoint},
      "breakpoints": [{"name", "width", "height", "alias"?, "metadata"?}, ...],
      "strategy": {
        "origin", "mode",
        "tokens": {"fontSize": {"scale", "min"?, "max"?, "step"?, "round"?,
                                "precision"?, "responsive"?, "unit"?, "kind"?}},
        "rounding": {"mode", "precision", "custom"?},
        "accessibility": {"minFontSize", "minTapTarget", "contrastPreservation"},
        "performance": {"memoization", "cacheStrategy", "precomputeValues"}
      }
    }

A missing "tokens" section means the default tokens. A "development" section
is ignored. Any other unknown key is an error.

Python 3.13+.
"""

import dataclasses
import hashlib
import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from responsivescale.config.defaults import default_tokens
from responsivescale.config.model import (
    AccessibilityConfig,
    Breakpoint,
    BreakpointMetadata,
    PerformanceConfig,
    ResponsiveConfig,
    RoundingConfig,
    ScalingStrategy,
    ScalingToken,
)
from responsivescale.diagnostics import ConfigurationError, ErrorTemplate

__all__ = [
    "config_fingerprint",
    "config_from_mapping",
    "config_to_mapping",
    "load_config",
    "loads_config",
]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_IGNORED_TOP_LEVEL = frozenset({"development"})


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _fail(path: str, reason: str) -> ConfigurationError:
    return ConfigurationError(ErrorTemplate.invalid_config_data(path, reason))


def _mapping(value: object, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise _fail(path, f"expected an object, got {type(value).__name__}")
    return value


T = TypeVar("T")


def _fields(cls: type[T], data: object, path: str) -> T:
    """Instantiate a flat dataclass from a mapping with camel/snake keys."""
    allowed = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}
    for key, value in _mapping(data, path).items():
        name = _snake(key)
        if name not in allowed:
            raise _fail(f"{path}.{key}", "unknown field")
        kwargs[name] = value
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise _fail(path, str(e)) from e


def _breakpoint(data: object, path: str) -> Breakpoint:
    raw = dict(_mapping(data, path))
    metadata = raw.pop("metadata", None)
    for required in ("name", "width", "height"):
        if required not in raw:
            raise _fail(path, f"missing '{required}'")
    meta = (
        _fields(BreakpointMetadata, metadata, f"{path}.metadata")
        if metadata is not None
        else BreakpointMetadata()
    )
    bp = _fields(Breakpoint, raw, path)
    return dataclasses.replace(bp, metadata=meta)


def _strategy(data: object, path: str) -> ScalingStrategy:
    raw = {_snake(k): v for k, v in _mapping(data, path).items()}
    tokens_data = raw.pop("tokens", None)
    if tokens_data is None:
        tokens = default_tokens()
    else:
        tokens = {
            name: _fields(ScalingToken, token, f"{path}.tokens.{name}")
            for name, token in _mapping(tokens_data, f"{path}.tokens").items()
        }
    sections = {
        "rounding": RoundingConfig,
        "accessibility": AccessibilityConfig,
        "performance": PerformanceConfig,
    }
    kwargs: dict[str, Any] = {"tokens": tokens}
    for key, value in raw.items():
        if key in sections:
            kwargs[key] = _fields(sections[key], value, f"{path}.{key}")
        elif key in ("origin", "mode"):
            kwargs[key] = value
        else:
            raise _fail(f"{path}.{key}", "unknown field")
    return ScalingStrategy(**kwargs)


def config_from_mapping(data: Mapping[str, Any]) -> ResponsiveConfig:
    """Build a ResponsiveConfig from decoded JSON data.

    The result is not validated; pass it to ensure_valid() or straight to a
    ScalingEngine, which validates on construction.

    Raises:
        ConfigurationError: If the data has the wrong shape or unknown
            enum values

    Example:
        >>> config = config_from_mapping({
        ...     "base": "desktop",
        ...     "breakpoints": [
        ...         {"name": "mobile", "width": 390, "height": 844},
        ...         {"name": "desktop", "width": 1920, "height": 1080},
        ...     ],
        ... })
        >>> config.base.width
        1920
    """
    root = _mapping(data, "$")
    for key in root:
        if key not in ("base", "breakpoints", "strategy") and key not in _IGNORED_TOP_LEVEL:
            raise _fail(f"$.{key}", "unknown field")

    raw_breakpoints = root.get("breakpoints")
    if not isinstance(raw_breakpoints, list):
        raise _fail("$.breakpoints", "expected a list")
    breakpoints = tuple(
        _breakpoint(item, f"$.breakpoints[{i}]") for i, item in enumerate(raw_breakpoints)
    )

    raw_base = root.get("base")
    if isinstance(raw_base, str):
        matches = [bp for bp in breakpoints if raw_base in (bp.key, bp.name)]
        if not matches:
            raise ConfigurationError(ErrorTemplate.unknown_breakpoint(raw_base))
        base = matches[0]
    elif raw_base is None:
        raise _fail("$.base", "missing base breakpoint")
    else:
        base = _breakpoint(raw_base, "$.base")

    strategy_data = root.get("strategy")
    strategy = _strategy(strategy_data, "$.strategy") if strategy_data is not None else (
        ScalingStrategy(tokens=default_tokens())
    )
    return ResponsiveConfig(base=base, breakpoints=breakpoints, strategy=strategy)


def loads_config(text: str) -> ResponsiveConfig:
    """Build a ResponsiveConfig from JSON text.

    Raises:
        ConfigurationError: If the text is not JSON or has the wrong shape
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise _fail("$", f"invalid JSON: {e}") from e
    return config_from_mapping(_mapping(data, "$"))


def load_config(path: str | Path) -> ResponsiveConfig:
    """Build a ResponsiveConfig from a UTF-8 JSON file.

    Raises:
        ConfigurationError: If the content is invalid
        OSError: If the file cannot be read
    """
    return loads_config(Path(path).read_text(encoding="utf-8"))


def _dump(obj: object) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in dataclasses.fields(obj):  # type: ignore[arg-type]
        value = getattr(obj, f.name)
        if value is None:
            continue
        if isinstance(value, frozenset):
            value = sorted(value)
        result[_camel(f.name)] = value
    return result


def config_to_mapping(config: ResponsiveConfig) -> dict[str, Any]:
    """Inverse of config_from_mapping() (camelCase keys, JSON-ready).

    Enum members are StrEnum values and serialize as plain strings.
    """

    def breakpoint_data(bp: Breakpoint) -> dict[str, Any]:
        data = {"name": bp.name, "width": bp.width, "height": bp.height, "alias": bp.key}
        data["metadata"] = _dump(bp.metadata)
        return data

    strategy = config.strategy
    return {
        "base": breakpoint_data(config.base),
        "breakpoints": [breakpoint_data(bp) for bp in config.breakpoints],
        "strategy": {
            "origin": str(strategy.origin),
            "mode": str(strategy.mode),
            "tokens": {name: _dump(token) for name, token in strategy.tokens.items()},
            "rounding": _dump(strategy.rounding),
            "accessibility": _dump(strategy.accessibility),
            "performance": _dump(strategy.performance),
        },
    }


def config_fingerprint(config: ResponsiveConfig) -> str:
    """Short stable identity of a configuration.

    Equal configurations share a fingerprint across processes. Persisted
    cache entries carry it so that values computed under one configuration
    are never served under another.

    Returns:
        16 hex characters of the SHA-256 of the canonical JSON form
    """
    canonical = json.dumps(config_to_mapping(config), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]
