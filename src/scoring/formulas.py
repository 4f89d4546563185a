"""
Human-readable formulas for response curves.

Presentation only: nothing here is used to compute curve values. The
numeric behavior lives in src.scoring.transforms.
"""

import math
from typing import Optional, Union

from src import config
from src.scoring.types import CurveParams, CurvePoint, CurveType, resolve_params

FORMULA_TEMPLATES: dict[CurveType, str] = {
    CurveType.LINEAR: "y = mx + b",
    CurveType.POLYNOMIAL: "y = x^n",
    CurveType.EXPONENTIAL: "y = (base^x - 1) / (base - 1)",
    CurveType.LOGARITHMIC: "y = log_base(1 + x(base - 1))",
    CurveType.LOGISTIC: "y = 1 / (1 + e^(-k(x - mid)))",
    CurveType.LOGIT: "y = (log_base(x / (1 - x)) + 6) / 12",
    CurveType.SMOOTHSTEP: "y = 3x² - 2x³",
    CurveType.SMOOTHERSTEP: "y = 6x⁵ - 15x⁴ + 10x³",
    CurveType.SINE: "y = (sin(freq·πx + off) + 1) / 2",
    CurveType.COSINE: "y = 1 - cos(freq·(π/2)x)",
    CurveType.GAUSSIAN: "y = e^(-(x - μ)² / (2σ²))",
    CurveType.STEP: "y = (1 if x > t else 0)",
    CurveType.PIECEWISE_LINEAR: "y = lerp(x; (x₀, y₀) → (x₁, y₁) → … → (xₙ, yₙ))",
}


def format_number(value: float) -> str:
    """
    Format a parameter value for display.

    Example:
        >>> format_number(2.0)
        '2'
        >>> format_number(0.50)
        '0.5'
        >>> format_number(-0.0)
        '0'
    """
    text = f"{value:.{config.FORMULA_PRECISION}f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def _signed(value: float) -> str:
    """Trailing ' + v' / ' - |v|' term, empty when v displays as zero."""
    magnitude = format_number(abs(value))
    if magnitude == "0":
        return ""
    if value > 0:
        return f" + {magnitude}"
    return f" - {magnitude}"


def _coefficient(value: float, term: str) -> str:
    text = format_number(value)
    if text == "1":
        return term
    if text == "-1":
        return f"-{term}"
    return f"{text}{term}"


def _input_term(x_shift: float) -> str:
    return f"(x{_signed(-x_shift)})" if _signed(x_shift) else "x"


def _point_chain(points: list[CurvePoint]) -> str:
    return " → ".join(f"({format_number(p.x)}, {format_number(p.y)})" for p in points)


def _core_expression(curve_type: CurveType, p: CurveParams, x: str) -> str:
    """Family expression with values substituted, before y_shift and invert."""
    if curve_type == CurveType.LINEAR:
        if format_number(p.slope) == "0":
            return format_number(p.intercept)
        return f"{_coefficient(p.slope, x)}{_signed(p.intercept)}"
    if curve_type == CurveType.POLYNOMIAL:
        return f"{x}^{format_number(p.exponent)}"
    if curve_type == CurveType.EXPONENTIAL:
        if p.base <= 0 or p.base == 1:
            return x
        base = format_number(p.base)
        return f"({base}^{x} - 1) / ({base} - 1)"
    if curve_type == CurveType.LOGARITHMIC:
        if p.base <= 1:
            return x
        base = format_number(p.base)
        return f"log_{base}(1 + {x}({base} - 1))"
    if curve_type == CurveType.LOGISTIC:
        centered = _signed(-p.midpoint)
        exponent = _coefficient(-p.steepness, f"({x}{centered})" if centered else x)
        return f"1 / (1 + e^({exponent}))"
    if curve_type == CurveType.LOGIT:
        if p.base <= 0 or p.base == 1:
            return x
        log = "ln" if math.isclose(p.base, math.e) else f"log_{format_number(p.base)}"
        return f"({log}({x} / (1 - {x})) + 6) / 12"
    if curve_type == CurveType.SMOOTHSTEP:
        return f"3{x}² - 2{x}³"
    if curve_type == CurveType.SMOOTHERSTEP:
        return f"6{x}⁵ - 15{x}⁴ + 10{x}³"
    if curve_type == CurveType.SINE:
        return f"(sin({_coefficient(p.frequency, 'π')}{x}{_signed(p.offset)}) + 1) / 2"
    if curve_type == CurveType.COSINE:
        return f"1 - cos({_coefficient(p.frequency, '(π/2)')}{x})"
    if curve_type == CurveType.GAUSSIAN:
        if p.std_dev == 0:
            return f"(1 if {x} = {format_number(p.mean)} else 0)"
        width = format_number(p.std_dev)
        if p.std_dev < 0:
            width = f"({width})"
        return f"e^(-({x}{_signed(-p.mean)})² / (2·{width}²))"
    if curve_type == CurveType.STEP:
        return f"(1 if {x} > {format_number(p.threshold)} else 0)"
    if curve_type == CurveType.PIECEWISE_LINEAR:
        points = sorted(p.points or (), key=lambda point: point.x)
        if not points:
            return "0"
        if len(points) == 1:
            return format_number(points[0].y)
        return f"lerp({x}; {_point_chain(points)})"
    raise ValueError(f"Unknown curve type {curve_type!r}")


def render_formula_template(curve_type: Union[CurveType, str]) -> str:
    """
    Symbolic formula for a curve family, with parameter names.

    Example:
        >>> render_formula_template("polynomial")
        'y = x^n'
    """
    return FORMULA_TEMPLATES[CurveType(curve_type)]


def render_formula_with_values(
    curve_type: Union[CurveType, str],
    params: Optional[CurveParams] = None,
    invert: bool = False,
) -> str:
    """
    Formula for a configured curve, with parameter values substituted.

    The input shift shows up as ``(x - s)``, the output shift as a trailing
    term, and inversion wraps the whole expression as ``1 - (...)``.

    Args:
        curve_type: Curve family
        params: Family parameters; unset fields use DEFAULT_PARAMS
        invert: Whether the curve is inverted

    Returns:
        Formula string starting with "y = "

    Example:
        >>> render_formula_with_values("polynomial", CurveParams(exponent=3, x_shift=0.25))
        'y = (x - 0.25)^3'
        >>> render_formula_with_values("linear", CurveParams(slope=2, intercept=-0.5), invert=True)
        'y = 1 - (2x - 0.5)'
    """
    curve_type = CurveType(curve_type)
    p = resolve_params(curve_type, params)
    expression = _core_expression(curve_type, p, _input_term(p.x_shift))
    expression += _signed(p.y_shift)
    if invert:
        expression = f"1 - ({expression})"
    return f"y = {expression}"
