"""Custom Functions Example - registering scaling and rounding functions.

Configuration stays pure data: a token refers to a scaling function by name
and a custom rounding mode refers to a rounding function by name. The
functions themselves live in a StrategyRegistry handed to the engine.

This example shows:

1. A stepped scaling function (discrete sizes instead of a continuous curve)
2. A clamp-to-grid rounding function (4px baseline grid)
3. Built-in curves (ease-in, golden-ratio) referenced from JSON data

Python 3.13+.
"""

from __future__ import annotations

import json

from responsivescale import ScalingEngine, ScalingToken, create_default_config, loads_config
from responsivescale.config import config_to_mapping
from responsivescale.core import create_default_registry
from responsivescale.enums import RoundingMode


# Example 1: Stepped scaling
def stepped(value: float, ratio: float) -> float:
    """Three discrete sizes: 60%, 80% or 100% of the base value."""
    if ratio < 0.5:
        return value * 0.6
    if ratio < 0.9:
        return value * 0.8
    return value


# Example 2: Baseline-grid rounding
def baseline_grid(value: float, precision: float) -> float:
    """Round up to the next multiple of 4 * precision."""
    grid = 4 * precision
    steps = -(-value // grid)
    return steps * grid


registry = create_default_registry()
registry.register_scaling(stepped)
registry.register_rounding(baseline_grid, name="baseline-grid")

config = create_default_config()
strategy = config.strategy.with_tokens(
    heading=ScalingToken(scale="stepped", unit="px"),
    hero=ScalingToken(scale="ease-in", min=24, unit="px"),
)
config = config.with_strategy(strategy)

print("=" * 50)
print("Example 1: Stepped Scaling")
print("=" * 50)

engine = ScalingEngine(config, functions=registry)
for alias in config.aliases:
    print(alias, engine.format_value(40, "heading", alias))
# Output:
# mobile 24px
# tablet 24px
# laptop 32px
# base 40px

print("\n" + "=" * 50)
print("Example 2: Baseline-Grid Rounding")
print("=" * 50)

data = config_to_mapping(config)
data["strategy"]["rounding"] = {"mode": RoundingMode.CUSTOM.value, "custom": "baseline-grid"}
grid_engine = ScalingEngine(loads_config(json.dumps(data)), functions=registry)
print(grid_engine.get_value(18, "spacing", "tablet"))
# Output: 8.0  (6.48 snapped to step 2, then up to the 4px grid)

print("\n" + "=" * 50)
print("Example 3: Built-in Curves")
print("=" * 50)

print(engine.get_value(96, "hero", "mobile"))
# Output: 43.0  (96 * sqrt(0.203))

# Functions are resolved when the configuration is validated, so an unknown
# name fails at construction time rather than on first use.
