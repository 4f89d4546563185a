"""Pytest configuration and fixtures for scoring tests."""
import sys
from pathlib import Path

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from src.scoring.types import (
    Action,
    Consideration,
    CurveConfig,
    CurveParams,
    CurveType,
)


def _make_consideration(
    consideration_id: str,
    curve_type: CurveType = CurveType.LINEAR,
    params: CurveParams = None,
    invert: bool = False,
    input_value: float = 0.5,
    name: str = None,
) -> Consideration:
    """Build a consideration with a single-use curve."""
    return Consideration(
        id=consideration_id,
        curve=CurveConfig(
            id=f"{consideration_id}-curve",
            name=name or consideration_id,
            type=curve_type,
            params=params or CurveParams(),
            invert=invert,
        ),
        input_value=input_value,
    )


def _constant_consideration(consideration_id: str, output: float) -> Consideration:
    """Consideration whose curve outputs ``output`` for any input."""
    return _make_consideration(
        consideration_id,
        CurveType.LINEAR,
        CurveParams(slope=0.0, intercept=output),
    )


@pytest.fixture
def make_consideration():
    """Factory for considerations with a single-use curve."""
    return _make_consideration


@pytest.fixture
def constant_consideration():
    """Factory for considerations with a constant output."""
    return _constant_consideration


@pytest.fixture
def identity_consideration():
    """Linear y = x at input 0.5."""
    return _make_consideration("identity", CurveType.LINEAR, CurveParams(slope=1, intercept=0))


@pytest.fixture
def three_factor_considerations():
    """Outputs 0.8, 0.6 and 0.9 -> raw product 0.432."""
    return [
        _constant_consideration("a", 0.8),
        _constant_consideration("b", 0.6),
        _constant_consideration("c", 0.9),
    ]


@pytest.fixture
def two_actions():
    """
    Two actions whose preference flips with the shared input.

    - rises: linear y = x, at input 0.7
    - falls: linear y = 1 - x, at input 0.7
    """
    return [
        Action(
            id="rises",
            name="Rises",
            considerations=(
                _make_consideration("rises-x", CurveType.LINEAR, input_value=0.7),
            ),
        ),
        Action(
            id="falls",
            name="Falls",
            considerations=(
                _make_consideration("falls-x", CurveType.LINEAR, invert=True, input_value=0.7),
            ),
        ),
    ]
