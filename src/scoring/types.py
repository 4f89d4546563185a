"""
Value types for response curves, considerations and actions.

Every type here is an immutable dataclass. Updates go through
``dataclasses.replace`` (or the ``with_*`` helpers) and produce new values,
so a host application can keep history, undo or share instances freely.

The dictionary forms (``to_dict`` / ``from_dict``) use the camelCase keys of
the stored scenario format so persistence collaborators round-trip every
field.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Optional

from src import config

logger = logging.getLogger(__name__)


class CurveType(str, Enum):
    """Closed set of response-curve families."""

    LINEAR = "linear"
    POLYNOMIAL = "polynomial"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"
    LOGISTIC = "logistic"
    LOGIT = "logit"
    SMOOTHSTEP = "smoothstep"
    SMOOTHERSTEP = "smootherstep"
    SINE = "sine"
    COSINE = "cosine"
    GAUSSIAN = "gaussian"
    STEP = "step"
    PIECEWISE_LINEAR = "piecewiseLinear"


@dataclass(frozen=True)
class CurvePoint:
    """Control point of a piecewise-linear curve (also used for sampled curves)."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurvePoint":
        return cls(x=float(data["x"]), y=float(data["y"]))


# Python field name -> stored key, where they differ
_PARAM_KEYS = {
    "std_dev": "stdDev",
    "x_shift": "xShift",
    "y_shift": "yShift",
}


@dataclass(frozen=True)
class CurveParams:
    """
    Sparse parameter record shared by all curve families.

    Every field is optional. Only the subset used by the active family is
    read; ``x_shift`` and ``y_shift`` apply to every family. Missing values
    are filled from DEFAULT_PARAMS by resolve_params().

    Attributes:
        slope, intercept: linear
        exponent: polynomial
        base: exponential, logarithmic, logit
        steepness, midpoint: logistic
        mean, std_dev: gaussian
        threshold: step
        frequency, offset: sine (offset), cosine
        points: piecewiseLinear control points, in any order
        x_shift: subtracted from the input before the family formula
        y_shift: added to the family output before clamping
    """

    slope: Optional[float] = None
    intercept: Optional[float] = None
    exponent: Optional[float] = None
    base: Optional[float] = None
    steepness: Optional[float] = None
    midpoint: Optional[float] = None
    mean: Optional[float] = None
    std_dev: Optional[float] = None
    threshold: Optional[float] = None
    frequency: Optional[float] = None
    offset: Optional[float] = None
    points: Optional[tuple[CurvePoint, ...]] = None
    x_shift: Optional[float] = None
    y_shift: Optional[float] = None

    def __post_init__(self):
        # Accept any iterable of points but store a tuple
        if self.points is not None and not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the fields that are set."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            key = _PARAM_KEYS.get(f.name, f.name)
            if f.name == "points":
                data[key] = [p.to_dict() for p in value]
            else:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurveParams":
        """Deserialize from dictionary. Unknown keys are ignored."""
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = _PARAM_KEYS.get(f.name, f.name)
            value = data.get(key)
            if value is None:
                continue
            if f.name == "points":
                kwargs[f.name] = tuple(CurvePoint.from_dict(p) for p in value)
            else:
                kwargs[f.name] = float(value)
        return cls(**kwargs)


# Per-family defaults. Every evaluator reads its parameters from here when
# the caller leaves them unset.
DEFAULT_PARAMS: dict[CurveType, CurveParams] = {
    CurveType.LINEAR: CurveParams(slope=1.0, intercept=0.0, x_shift=0.0, y_shift=0.0),
    CurveType.POLYNOMIAL: CurveParams(exponent=2.0, x_shift=0.0, y_shift=0.0),
    CurveType.EXPONENTIAL: CurveParams(base=2.0, x_shift=0.0, y_shift=0.0),
    CurveType.LOGARITHMIC: CurveParams(base=10.0, x_shift=0.0, y_shift=0.0),
    CurveType.LOGISTIC: CurveParams(
        steepness=10.0, midpoint=0.5, x_shift=0.0, y_shift=0.0
    ),
    CurveType.LOGIT: CurveParams(base=math.e, x_shift=0.0, y_shift=0.0),
    CurveType.SMOOTHSTEP: CurveParams(x_shift=0.0, y_shift=0.0),
    CurveType.SMOOTHERSTEP: CurveParams(x_shift=0.0, y_shift=0.0),
    CurveType.SINE: CurveParams(frequency=1.0, offset=0.0, x_shift=0.0, y_shift=0.0),
    CurveType.COSINE: CurveParams(frequency=1.0, offset=0.0, x_shift=0.0, y_shift=0.0),
    CurveType.GAUSSIAN: CurveParams(mean=0.5, std_dev=0.2, x_shift=0.0, y_shift=0.0),
    CurveType.STEP: CurveParams(threshold=0.5, x_shift=0.0, y_shift=0.0),
    CurveType.PIECEWISE_LINEAR: CurveParams(
        points=(CurvePoint(0.0, 0.0), CurvePoint(0.5, 0.8), CurvePoint(1.0, 1.0)),
        x_shift=0.0,
        y_shift=0.0,
    ),
}

CURVE_NAMES: dict[CurveType, str] = {
    CurveType.LINEAR: "Linear",
    CurveType.POLYNOMIAL: "Polynomial",
    CurveType.EXPONENTIAL: "Exponential",
    CurveType.LOGARITHMIC: "Logarithmic",
    CurveType.LOGISTIC: "Logistic",
    CurveType.LOGIT: "Logit",
    CurveType.SMOOTHSTEP: "Smoothstep",
    CurveType.SMOOTHERSTEP: "Smootherstep",
    CurveType.SINE: "Sine",
    CurveType.COSINE: "Cosine",
    CurveType.GAUSSIAN: "Gaussian",
    CurveType.STEP: "Step",
    CurveType.PIECEWISE_LINEAR: "Piecewise Linear",
}


def resolve_params(curve_type: CurveType, params: Optional[CurveParams] = None) -> CurveParams:
    """
    Fill unset parameters from the family's DEFAULT_PARAMS row.

    Args:
        curve_type: Curve family (enum member or its string tag)
        params: Caller parameters, or None for all defaults

    Returns:
        New CurveParams with every field the family uses set

    Example:
        >>> resolve_params(CurveType.POLYNOMIAL, CurveParams(x_shift=0.1)).exponent
        2.0
    """
    defaults = DEFAULT_PARAMS[CurveType(curve_type)]
    if params is None:
        return defaults
    overrides = {
        f.name: getattr(defaults, f.name)
        for f in fields(params)
        if getattr(params, f.name) is None and getattr(defaults, f.name) is not None
    }
    return replace(params, **overrides) if overrides else params


def generate_id() -> str:
    """Short random identifier for curves and considerations."""
    return uuid.uuid4().hex[:7]


@dataclass(frozen=True)
class CurveConfig:
    """
    A named, configured response curve.

    Attributes:
        id: Identifier
        name: Display name (also the factor name in heatmaps)
        type: Curve family
        params: Family parameters
        invert: If True, the curve output y becomes 1 - y
    """

    id: str
    name: str
    type: CurveType
    params: CurveParams = field(default_factory=CurveParams)
    invert: bool = False

    def __post_init__(self):
        # Allow the string tag; store the enum member
        object.__setattr__(self, "type", CurveType(self.type))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "params": self.params.to_dict(),
            "invert": self.invert,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurveConfig":
        """
        Deserialize from dictionary.

        Raises:
            ValueError: If the record has no curve type or an unknown one, or
                a non-boolean invert flag
        """
        curve_type = data.get("type")
        if curve_type is None:
            logger.warning(f"Rejecting curve {data.get('id')!r}: missing type")
            raise ValueError(f"Curve {data.get('id')!r} has no 'type'")
        try:
            curve_type = CurveType(curve_type)
        except ValueError:
            logger.warning(f"Rejecting curve {data.get('id')!r}: unknown type {curve_type!r}")
            raise ValueError(
                f"Unknown curve type {curve_type!r}. "
                f"Available: {[t.value for t in CurveType]}"
            ) from None
        invert = data.get("invert", False)
        if not isinstance(invert, bool):
            logger.warning(f"Rejecting curve {data.get('id')!r}: invert is {invert!r}")
            raise ValueError(f"Curve {data.get('id')!r} has non-boolean 'invert': {invert!r}")
        return cls(
            id=data.get("id") or generate_id(),
            name=data.get("name", CURVE_NAMES[curve_type]),
            type=curve_type,
            params=CurveParams.from_dict(data.get("params") or {}),
            invert=invert,
        )


@dataclass(frozen=True)
class Consideration:
    """
    One scored input factor: a curve plus the current sampled input.

    Attributes:
        id: Identifier
        curve: Response curve converting the input into a utility
        input_value: Current input in [0, 1]
    """

    id: str
    curve: CurveConfig
    input_value: float = config.DEFAULT_INPUT_VALUE

    def with_input(self, value: float) -> "Consideration":
        """Return a copy with a different input value."""
        return replace(self, input_value=value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "curve": self.curve.to_dict(),
            "inputValue": self.input_value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Consideration":
        """
        Deserialize from dictionary.

        Raises:
            ValueError: If the record has no curve
        """
        curve = data.get("curve")
        if not curve:
            logger.warning(f"Rejecting consideration {data.get('id')!r}: missing curve")
            raise ValueError(f"Consideration {data.get('id')!r} has no curve")
        return cls(
            id=data.get("id") or generate_id(),
            curve=CurveConfig.from_dict(curve),
            input_value=float(data.get("inputValue", config.DEFAULT_INPUT_VALUE)),
        )


@dataclass(frozen=True)
class Action:
    """
    A candidate decision scored by the product of its considerations.

    Attributes:
        id: Identifier
        name: Display name
        considerations: Ordered considerations
    """

    id: str
    name: str
    considerations: tuple[Consideration, ...] = ()

    def __post_init__(self):
        if not isinstance(self.considerations, tuple):
            object.__setattr__(self, "considerations", tuple(self.considerations))

    def with_input(self, index: int, value: float) -> "Action":
        """
        Return a copy with one consideration's input replaced.

        Raises:
            IndexError: If index does not name a consideration
        """
        if not 0 <= index < len(self.considerations):
            raise IndexError(
                f"Action '{self.id}' has {len(self.considerations)} considerations, "
                f"no index {index}"
            )
        updated = list(self.considerations)
        updated[index] = updated[index].with_input(value)
        return replace(self, considerations=tuple(updated))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "considerations": [c.to_dict() for c in self.considerations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Action":
        """Deserialize from dictionary. A missing id is generated."""
        action_id = data.get("id") or generate_id()
        return cls(
            id=action_id,
            name=data.get("name", action_id),
            considerations=tuple(
                Consideration.from_dict(c) for c in data.get("considerations", [])
            ),
        )


@dataclass(frozen=True)
class PresetScenario:
    """Read-only template set of actions."""

    id: str
    name: str
    description: str
    actions: tuple[Action, ...] = ()

    def __post_init__(self):
        if not isinstance(self.actions, tuple):
            object.__setattr__(self, "actions", tuple(self.actions))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "actions": [a.to_dict() for a in self.actions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PresetScenario":
        """Deserialize from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            actions=tuple(Action.from_dict(a) for a in data.get("actions", [])),
        )


def create_default_curve(name: Optional[str] = None) -> CurveConfig:
    """New polynomial curve with default parameters."""
    return CurveConfig(
        id=generate_id(),
        name=name or "Untitled Curve",
        type=CurveType.POLYNOMIAL,
        params=DEFAULT_PARAMS[CurveType.POLYNOMIAL],
        invert=False,
    )


def create_default_consideration(curve: Optional[CurveConfig] = None) -> Consideration:
    """New consideration at the default input value."""
    return Consideration(
        id=generate_id(),
        curve=curve or create_default_curve(),
        input_value=config.DEFAULT_INPUT_VALUE,
    )
