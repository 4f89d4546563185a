"""
Response-curve evaluation.

All curves map an input (nominally in [0, 1]) to a utility in [0, 1].

Pipeline shared by every family:
1. shift - subtract ``x_shift`` from the input
2. family formula - some families clamp the shifted input to [0, 1] first
3. add ``y_shift`` and clamp to [0, 1]
4. invert - return ``1 - result`` when requested

Curve families:
- linear:          slope * x + intercept
- polynomial:      x^exponent                                 (clamped input)
- exponential:     (base^x - 1) / (base - 1)                  (clamped input)
- logarithmic:     log(1 + x(base - 1)) / log(base)           (clamped input)
- logistic:        1 / (1 + e^(-steepness(x - midpoint)))
- logit:           (log_base(x / (1 - x)) + 6) / 12           (clamped input)
- smoothstep:      3x^2 - 2x^3                                (clamped input)
- smootherstep:    6x^5 - 15x^4 + 10x^3                       (clamped input)
- sine:            (sin(frequency * pi * x + offset) + 1) / 2
- cosine:          1 - cos(frequency * (pi / 2) * x)          (clamped input)
- gaussian:        e^(-(x - mean)^2 / (2 std_dev^2))
- step:            1 if x > threshold else 0
- piecewiseLinear: interpolation between sorted control points

Evaluation is a pure function of (type, x, params, invert). Inputs may be
scalars or numpy arrays; scalars come back as float.
"""

from typing import Callable, Optional, Union

import numpy as np

from src import config
from src.scoring.types import (
    Consideration,
    CurveParams,
    CurvePoint,
    CurveType,
    resolve_params,
)

# Type alias for values that can be scalar or array
NumericType = Union[float, np.ndarray]


def _clamp(value: np.ndarray) -> np.ndarray:
    return np.clip(value, 0.0, 1.0)


# =============================================================================
# FAMILY FORMULAS
# =============================================================================
# Each takes the shifted input and fully resolved params and returns the
# output before y_shift, clamping and inversion.


def _linear(x: np.ndarray, p: CurveParams) -> np.ndarray:
    return p.slope * x + p.intercept


def _polynomial(x: np.ndarray, p: CurveParams) -> np.ndarray:
    return np.power(_clamp(x), p.exponent)


def _exponential(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    # Non-positive bases have no real power; base 1 divides by zero
    if p.base <= 0 or p.base == 1:
        return x
    return (np.power(p.base, x) - 1.0) / (p.base - 1.0)


def _logarithmic(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    if p.base <= 1:
        return x
    return np.log(1.0 + x * (p.base - 1.0)) / np.log(p.base)


def _logistic(x: np.ndarray, p: CurveParams) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-p.steepness * (x - p.midpoint)))


def _logit(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    # log(base) must be defined and nonzero
    if p.base <= 0 or p.base == 1:
        return x
    safe = np.clip(x, config.LOGIT_EPSILON, 1.0 - config.LOGIT_EPSILON)
    raw = np.log(safe / (1.0 - safe)) / np.log(p.base)
    return _clamp((raw + 6.0) / 12.0)


def _smoothstep(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    return x * x * (3.0 - 2.0 * x)


def _smootherstep(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    return x * x * x * (x * (x * 6.0 - 15.0) + 10.0)


def _sine(x: np.ndarray, p: CurveParams) -> np.ndarray:
    return (np.sin(p.frequency * np.pi * x + p.offset) + 1.0) / 2.0


def _cosine(x: np.ndarray, p: CurveParams) -> np.ndarray:
    x = _clamp(x)
    return _clamp(1.0 - np.cos(p.frequency * (np.pi / 2.0) * x))


def _gaussian(x: np.ndarray, p: CurveParams) -> np.ndarray:
    diff = x - p.mean
    if p.std_dev == 0:
        # Limit of the bell as it narrows to a spike
        return np.where(diff == 0, 1.0, 0.0)
    return np.exp(-(diff * diff) / (2.0 * p.std_dev * p.std_dev))


def _step(x: np.ndarray, p: CurveParams) -> np.ndarray:
    return np.where(x > p.threshold, 1.0, 0.0)


def _piecewise_linear(x: np.ndarray, p: CurveParams) -> np.ndarray:
    points = sorted(p.points or (), key=lambda point: point.x)
    if not points:
        return np.zeros_like(x)
    if len(points) == 1:
        return np.full_like(x, points[0].y)
    # np.interp holds the end values outside the control range
    xs = [point.x for point in points]
    ys = [point.y for point in points]
    return np.interp(x, xs, ys)


# Map curve families to formulas
CURVE_FUNCTIONS: dict[CurveType, Callable[[np.ndarray, CurveParams], np.ndarray]] = {
    CurveType.LINEAR: _linear,
    CurveType.POLYNOMIAL: _polynomial,
    CurveType.EXPONENTIAL: _exponential,
    CurveType.LOGARITHMIC: _logarithmic,
    CurveType.LOGISTIC: _logistic,
    CurveType.LOGIT: _logit,
    CurveType.SMOOTHSTEP: _smoothstep,
    CurveType.SMOOTHERSTEP: _smootherstep,
    CurveType.SINE: _sine,
    CurveType.COSINE: _cosine,
    CurveType.GAUSSIAN: _gaussian,
    CurveType.STEP: _step,
    CurveType.PIECEWISE_LINEAR: _piecewise_linear,
}

_missing = set(CurveType) - set(CURVE_FUNCTIONS)
if _missing:
    raise ImportError(
        f"No formula registered for curve types: {sorted(t.value for t in _missing)}"
    )


# =============================================================================
# PUBLIC API
# =============================================================================


def evaluate_curve(
    curve_type: Union[CurveType, str],
    x: NumericType,
    params: Optional[CurveParams] = None,
    invert: bool = False,
) -> NumericType:
    """
    Evaluate a response curve.

    Degenerate parameters (exponential base <= 0 or 1, logarithmic base <= 1,
    logit input at 0 or 1, a zero gaussian width) fall back to well-defined values
    instead of raising, so the result is always in [0, 1] for finite params.

    Args:
        curve_type: Curve family (enum member or its string tag)
        x: Input value(s), nominally in [0, 1]
        params: Family parameters; unset fields use DEFAULT_PARAMS
        invert: If True, return 1 - y

    Returns:
        Curve output in [0, 1] (float for scalar input, array otherwise)

    Example:
        >>> evaluate_curve("polynomial", 0.5, CurveParams(exponent=2))
        0.25
        >>> evaluate_curve("step", 0.5, CurveParams(threshold=0.5))
        0.0
        >>> evaluate_curve("linear", 0.25, invert=True)
        0.75
    """
    curve_type = CurveType(curve_type)
    p = resolve_params(curve_type, params)
    shifted = np.asarray(x, dtype=float) - p.x_shift

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        raw = CURVE_FUNCTIONS[curve_type](shifted, p)
        result = _clamp(raw + p.y_shift)

    if invert:
        result = 1.0 - result

    # Return scalar if input was scalar
    if np.ndim(result) == 0:
        return float(result)
    return result


def generate_curve_points(
    curve_type: Union[CurveType, str],
    params: Optional[CurveParams] = None,
    invert: bool = False,
    sample_count: int = config.DEFAULT_CURVE_SAMPLES,
) -> list[CurvePoint]:
    """
    Sample a curve at evenly spaced inputs over [0, 1] inclusive.

    Args:
        curve_type: Curve family
        params: Family parameters
        invert: If True, sample the inverted curve
        sample_count: Number of intervals; sample_count + 1 points are returned

    Returns:
        List of CurvePoint from x=0 to x=1

    Raises:
        ValueError: If sample_count < 1
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")
    xs = np.linspace(0.0, 1.0, sample_count + 1)
    ys = evaluate_curve(curve_type, xs, params, invert)
    return [CurvePoint(float(x), float(y)) for x, y in zip(xs, ys)]


def evaluate_consideration(consideration: Consideration) -> float:
    """Evaluate a consideration's curve at its current input."""
    curve = consideration.curve
    return evaluate_curve(curve.type, consideration.input_value, curve.params, curve.invert)
