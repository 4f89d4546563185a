"""
Preset curves and scenarios.

Available presets:
- combat: Combat AI (attack / heal / retreat)
"""

from src.scoring.configs.combat import (
    COMBAT_SCENARIO,
    COMBAT_SCENARIO_CONFIG,
    PRESET_CURVES,
    create_combat_scenario,
    get_preset_curve,
)

PRESET_SCENARIOS = (COMBAT_SCENARIO,)

__all__ = [
    "COMBAT_SCENARIO",
    "COMBAT_SCENARIO_CONFIG",
    "PRESET_CURVES",
    "PRESET_SCENARIOS",
    "create_combat_scenario",
    "get_preset_curve",
]
