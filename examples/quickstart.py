"""Quickstart example for responsivescale.

This example demonstrates basic usage: resolving viewports, scaling design
values, presets, persistence and human-readable reports.

Note: Examples use the default configuration (desktop 1920x1080 is the base
breakpoint). Real projects usually load their own with load_config().
"""

import json
import tempfile
from pathlib import Path

from responsivescale import (
    ResponsiveContext,
    ScaleOptions,
    ScalingEngine,
    apply_preset,
    create_default_config,
    create_scaling_strategy,
    load_config,
)
from responsivescale.config import config_to_mapping
from responsivescale.enums import CacheStrategy
from responsivescale.introspection import describe_resolution, describe_scaled_value
from responsivescale.runtime import InMemoryStore

# Example 1: Resolve a viewport
print("=" * 50)
print("Example 1: Breakpoint Resolution")
print("=" * 50)

engine = ScalingEngine(create_default_config())

print(engine.resolve_breakpoint(800, 1000).name)
# Output: tablet

print(engine.resolve_breakpoint(1920, 1080).key)
# Output: base

for line in describe_resolution(engine.explain_resolution(800, 1000)):
    print(line)
# Output (first line):
# tablet: 243.9 (width 96.8, height 97.6, aspect 49.5, capability 0.0)

# Example 2: Scale values
print("\n" + "=" * 50)
print("Example 2: Scaling Design Values")
print("=" * 50)

print(engine.get_value(48, "fontSize", "mobile"))
# Output: 12.0  (8.29 clamped to the token minimum)

print(engine.format_value(48, "fontSize", "desktop"))
# Output: 41px

print(engine.get_value(16, "spacing", "tablet"))
# Output: 6.0  (5.76 snapped to the 2px step)

print(engine.get_values({"sm": 8, "md": 16, "lg": 32}, "spacing", "tablet"))
# Output: {'sm': 2.0, 'md': 6.0, 'lg': 12.0}

# Example 3: Explain a single value
print("\n" + "=" * 50)
print("Example 3: Scaling Reports")
print("=" * 50)

print(describe_scaled_value(engine.scale_value(48, "fontSize", "mobile")))
# Output: fontSize: 48 -> 12 px at mobile (ratio 20.3%, min applied)

print(describe_scaled_value(engine.scale_value(44, "tapTarget", "mobile"), "de_DE"))
# Output: tapTarget: 44 -> 44 px at mobile (ratio 20,3%, accessibility floor applied)

# Example 4: Follow the viewport
print("\n" + "=" * 50)
print("Example 4: ResponsiveContext")
print("=" * 50)

context = ResponsiveContext(engine)
print(context.current_breakpoint.key)
# Output: base

context.update_viewport(390, 844)
print(context.format_value(48, "fontSize"))
# Output: 12px

# Example 5: Invalid input never raises
print("\n" + "=" * 50)
print("Example 5: Invalid Base Values")
print("=" * 50)

print(engine.get_value(-8, "spacing", "mobile"))
# Output: -8  (logged once as a ValidationError, returned unscaled)

print(len(engine.validation_errors))
# Output: 1

# Example 6: Presets and configuration replacement
print("\n" + "=" * 50)
print("Example 6: Presets")
print("=" * 50)

engine.replace_config(apply_preset(create_default_config(), "aggressive"))
print(engine.strategy_version, engine.get_value(48, "fontSize", "desktop"))
# Output: 1 34.0

# Example 7: Load configuration from JSON
print("\n" + "=" * 50)
print("Example 7: JSON Configuration")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmp:
    path = Path(tmp) / "responsive.json"
    path.write_text(json.dumps(config_to_mapping(create_default_config())), encoding="utf-8")
    loaded = load_config(path)
    print(loaded.aliases)
    # Output: ('mobile', 'tablet', 'laptop', 'base')

# Example 8: Persisted cache
print("\n" + "=" * 50)
print("Example 8: Persisted Cache")
print("=" * 50)

store = InMemoryStore()
persisted = create_default_config().with_strategy(
    create_scaling_strategy(performance={"cache_strategy": CacheStrategy.PERSISTED})
)
first = ScalingEngine(persisted, store=store)
first.get_value(48, "fontSize", "mobile")
first.flush_cache()  # new values are written in batches

second = ScalingEngine(persisted, store=store)
second.get_value(48, "fontSize", "mobile")
print(second.get_cache_stats())
# Output: {'size': 1, 'maxsize': 1000, 'hits': 1, 'misses': 0, 'hit_rate': 1.0,
#          'version': 0, 'persisted': True}

# Example 9: Per-call overrides and performance metrics
print("\n" + "=" * 50)
print("Example 9: Overrides and Metrics")
print("=" * 50)

engine = ScalingEngine(create_default_config())
print(engine.get_value(48, "fontSize", "mobile", ScaleOptions(min=16)))
# Output: 16.0

print(engine.format_value(48, "fontSize", "desktop", ScaleOptions(unit="rem")))
# Output: 41rem

engine.get_value(48, "fontSize", "desktop")
metrics = engine.get_performance_metrics()
print(metrics.total_operations, metrics.cache_hits, metrics.cache_hit_rate)
# Output: 3 1 0.3333
