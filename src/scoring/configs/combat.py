"""
Combat AI preset: classic game-AI choice between attacking, healing and
retreating.

Score formula (per action):
    compensated(product of consideration outputs)

Actions:
- Attack:
  - Distance: closer is better (inverted quadratic)
  - Enemy Health: weaker enemies are better targets (inverted linear)
  - Ammo: gate - any ammo above 10% (step)
- Heal:
  - My Health: urgent below ~30% (inverted logistic)
  - In Combat: gate - only out of combat (inverted step)
- Retreat:
  - My Health: urgent below ~20%, sharper than Heal (inverted logistic)
  - Enemies: more enemies push toward retreat (polynomial, n=1.5)

Ids are fixed so saved references and tests stay stable.
"""

from typing import Any

from src.scoring.types import (
    Action,
    Consideration,
    CurveConfig,
    CurveParams,
    CurveType,
    PresetScenario,
)

# Reusable curves offered in the curve library
PRESET_CURVES: tuple[CurveConfig, ...] = (
    CurveConfig(
        id="preset-distance",
        name="Distance",
        type=CurveType.POLYNOMIAL,
        params=CurveParams(exponent=2, x_shift=0, y_shift=0),
        invert=True,
    ),
    CurveConfig(
        id="preset-health-low",
        name="Low Health",
        type=CurveType.LOGISTIC,
        params=CurveParams(steepness=10, midpoint=0.3, x_shift=0, y_shift=0),
        invert=True,
    ),
    CurveConfig(
        id="preset-threat",
        name="Threat",
        type=CurveType.LINEAR,
        params=CurveParams(slope=1, intercept=0, x_shift=0, y_shift=0),
        invert=False,
    ),
    CurveConfig(
        id="preset-cooldown",
        name="Cooldown Ready",
        type=CurveType.STEP,
        params=CurveParams(threshold=0.9, x_shift=0, y_shift=0),
        invert=False,
    ),
)


def get_preset_curve(curve_id: str) -> CurveConfig:
    """
    Look up a preset curve by id.

    Raises:
        KeyError: If no preset curve has that id
    """
    for curve in PRESET_CURVES:
        if curve.id == curve_id:
            return curve
    raise KeyError(
        f"Unknown preset curve '{curve_id}'. "
        f"Available: {[c.id for c in PRESET_CURVES]}"
    )


def _consideration(
    consideration_id: str,
    name: str,
    curve_type: CurveType,
    params: CurveParams,
    invert: bool,
    input_value: float,
) -> Consideration:
    return Consideration(
        id=consideration_id,
        curve=CurveConfig(
            id=f"{consideration_id}-curve",
            name=name,
            type=curve_type,
            params=params,
            invert=invert,
        ),
        input_value=input_value,
    )


def create_combat_scenario() -> PresetScenario:
    """
    Create the Combat AI preset scenario.

    Returns:
        PresetScenario with Attack, Heal and Retreat actions

    Example:
        >>> from src.scoring.selection import select_winner
        >>> scenario = create_combat_scenario()
        >>> select_winner(scenario.actions).winner_id
        'action-attack'
    """
    return PresetScenario(
        id="combat-ai",
        name="Combat AI",
        description="Classic game AI decision-making for attack, heal, retreat actions",
        actions=(
            # =================================================================
            # ATTACK
            # =================================================================
            Action(
                id="action-attack",
                name="Attack",
                considerations=(
                    # Closer targets score higher: 1 - x^2
                    _consideration(
                        "attack-distance", "Distance", CurveType.POLYNOMIAL,
                        CurveParams(exponent=2, x_shift=0, y_shift=0),
                        invert=True, input_value=0.5,
                    ),
                    _consideration(
                        "attack-enemy-health", "Enemy Health", CurveType.LINEAR,
                        CurveParams(slope=1, intercept=0, x_shift=0, y_shift=0),
                        invert=True, input_value=0.5,
                    ),
                    # No ammo kills the action outright
                    _consideration(
                        "attack-ammo", "Ammo", CurveType.STEP,
                        CurveParams(threshold=0.1, x_shift=0, y_shift=0),
                        invert=False, input_value=0.7,
                    ),
                ),
            ),
            # =================================================================
            # HEAL
            # =================================================================
            Action(
                id="action-heal",
                name="Heal",
                considerations=(
                    _consideration(
                        "heal-my-health", "My Health", CurveType.LOGISTIC,
                        CurveParams(steepness=10, midpoint=0.3, x_shift=0, y_shift=0),
                        invert=True, input_value=0.3,
                    ),
                    # Healing is only possible out of combat
                    _consideration(
                        "heal-in-combat", "In Combat", CurveType.STEP,
                        CurveParams(threshold=0.5, x_shift=0, y_shift=0),
                        invert=True, input_value=0.8,
                    ),
                ),
            ),
            # =================================================================
            # RETREAT
            # =================================================================
            Action(
                id="action-retreat",
                name="Retreat",
                considerations=(
                    _consideration(
                        "retreat-my-health", "My Health", CurveType.LOGISTIC,
                        CurveParams(steepness=15, midpoint=0.2, x_shift=0, y_shift=0),
                        invert=True, input_value=0.3,
                    ),
                    _consideration(
                        "retreat-enemies", "Enemies", CurveType.POLYNOMIAL,
                        CurveParams(exponent=1.5, x_shift=0, y_shift=0),
                        invert=False, input_value=0.6,
                    ),
                ),
            ),
        ),
    )


# Default scenario instance
COMBAT_SCENARIO = create_combat_scenario()


# Export as dict for JSON serialization
COMBAT_SCENARIO_CONFIG: dict[str, Any] = COMBAT_SCENARIO.to_dict()
