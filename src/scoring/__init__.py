"""
Utility-scoring engine for IAUS-style decision making.

Provides normalized response curves and the multiplicative scoring rule
that combines them into per-action utilities.

Curves (src.scoring.transforms):
- evaluate_curve: one of 13 curve families at x, with shift/invert
- generate_curve_points: evenly spaced samples for previews

Formulas (src.scoring.formulas):
- render_formula_template / render_formula_with_values

Scoring (src.scoring.combiner, src.scoring.selection):
- raw_score: product of consideration outputs, zero on any zero output
- apply_compensation / compensated_score: IAUS compensation
- select_winner, margin, sensitivity

Analysis (src.scoring.analysis):
- sweep_1d, decision_map_2d, combined_curve, factor_matrix
"""

from src.scoring.types import (
    CURVE_NAMES,
    DEFAULT_PARAMS,
    Action,
    Consideration,
    CurveConfig,
    CurveParams,
    CurvePoint,
    CurveType,
    PresetScenario,
    create_default_consideration,
    create_default_curve,
    resolve_params,
)
from src.scoring.transforms import (
    evaluate_consideration,
    evaluate_curve,
    generate_curve_points,
)
from src.scoring.formulas import render_formula_template, render_formula_with_values
from src.scoring.combiner import (
    ScoreBreakdown,
    apply_compensation,
    compensated_score,
    compensation_boost,
    consideration_outputs,
    modification_factor,
    raw_score,
    score_breakdown,
)
from src.scoring.selection import (
    SensitivityLevel,
    SensitivityResult,
    WinnerSelection,
    margin,
    select_winner,
    sensitivity,
)
from src.scoring.analysis import (
    CombinedCurve,
    DecisionMap,
    FactorMatrix,
    SweepResult,
    SweepTarget,
    combined_curve,
    decision_map_2d,
    factor_matrix,
    sweep_1d,
)

__all__ = [
    # Types
    "CURVE_NAMES",
    "DEFAULT_PARAMS",
    "Action",
    "Consideration",
    "CurveConfig",
    "CurveParams",
    "CurvePoint",
    "CurveType",
    "PresetScenario",
    "create_default_consideration",
    "create_default_curve",
    "resolve_params",
    # Curves
    "evaluate_consideration",
    "evaluate_curve",
    "generate_curve_points",
    # Formulas
    "render_formula_template",
    "render_formula_with_values",
    # Scoring
    "ScoreBreakdown",
    "apply_compensation",
    "compensated_score",
    "compensation_boost",
    "consideration_outputs",
    "modification_factor",
    "raw_score",
    "score_breakdown",
    "SensitivityLevel",
    "SensitivityResult",
    "WinnerSelection",
    "margin",
    "select_winner",
    "sensitivity",
    # Analysis
    "CombinedCurve",
    "DecisionMap",
    "FactorMatrix",
    "SweepResult",
    "SweepTarget",
    "combined_curve",
    "decision_map_2d",
    "factor_matrix",
    "sweep_1d",
]
