"""
Tests for curve/consideration/action value types.

Covers the default-parameter table, parameter resolution, immutable
updates and the dictionary round-trip used by persistence collaborators.
"""

import dataclasses
import math

import pytest

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


class TestCurveType:
    """Closed set of 13 families."""

    def test_thirteen_families(self):
        assert len(CurveType) == 13

    def test_parse_tag(self):
        assert CurveType("piecewiseLinear") is CurveType.PIECEWISE_LINEAR
        assert CurveType("logit") is CurveType.LOGIT

    def test_unknown_tag_raises(self):
        with pytest.raises(ValueError):
            CurveType("spline")

    def test_every_family_has_defaults_and_name(self):
        assert set(DEFAULT_PARAMS) == set(CurveType)
        assert set(CURVE_NAMES) == set(CurveType)


class TestDefaultParams:
    """Explicit per-family defaults."""

    def test_documented_defaults(self):
        assert DEFAULT_PARAMS[CurveType.LINEAR].slope == 1.0
        assert DEFAULT_PARAMS[CurveType.LINEAR].intercept == 0.0
        assert DEFAULT_PARAMS[CurveType.POLYNOMIAL].exponent == 2.0
        assert DEFAULT_PARAMS[CurveType.EXPONENTIAL].base == 2.0
        assert DEFAULT_PARAMS[CurveType.LOGARITHMIC].base == 10.0
        assert DEFAULT_PARAMS[CurveType.LOGISTIC].steepness == 10.0
        assert DEFAULT_PARAMS[CurveType.LOGISTIC].midpoint == 0.5
        assert DEFAULT_PARAMS[CurveType.LOGIT].base == math.e
        assert DEFAULT_PARAMS[CurveType.GAUSSIAN].mean == 0.5
        assert DEFAULT_PARAMS[CurveType.GAUSSIAN].std_dev == 0.2
        assert DEFAULT_PARAMS[CurveType.STEP].threshold == 0.5
        assert len(DEFAULT_PARAMS[CurveType.PIECEWISE_LINEAR].points) == 3

    def test_shifts_default_to_zero(self):
        for params in DEFAULT_PARAMS.values():
            assert params.x_shift == 0.0
            assert params.y_shift == 0.0


class TestResolveParams:
    """Unset fields are filled from the family's defaults."""

    def test_none_gives_defaults(self):
        assert resolve_params(CurveType.GAUSSIAN) == DEFAULT_PARAMS[CurveType.GAUSSIAN]

    def test_set_fields_kept(self):
        resolved = resolve_params(CurveType.LOGISTIC, CurveParams(steepness=3.0))
        assert resolved.steepness == 3.0
        assert resolved.midpoint == 0.5
        assert resolved.x_shift == 0.0

    def test_defaults_depend_on_family(self):
        params = CurveParams()
        assert resolve_params(CurveType.EXPONENTIAL, params).base == 2.0
        assert resolve_params(CurveType.LOGARITHMIC, params).base == 10.0
        assert resolve_params(CurveType.LOGIT, params).base == math.e

    def test_input_not_modified(self):
        params = CurveParams(slope=2.0)
        resolve_params(CurveType.LINEAR, params)
        assert params.intercept is None


class TestImmutability:
    """Values are frozen; updates return copies."""

    def test_params_frozen(self):
        params = CurveParams(slope=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.slope = 2.0

    def test_points_stored_as_tuple(self):
        params = CurveParams(points=[CurvePoint(0, 0), CurvePoint(1, 1)])
        assert isinstance(params.points, tuple)

    def test_string_type_coerced(self):
        curve = CurveConfig(id="c", name="C", type="step")
        assert curve.type is CurveType.STEP

    def test_consideration_with_input(self):
        original = create_default_consideration()
        updated = original.with_input(0.9)
        assert updated.input_value == 0.9
        assert original.input_value == 0.5
        assert updated.curve is original.curve

    def test_action_with_input(self, make_consideration):
        action = Action(
            id="a",
            name="A",
            considerations=[make_consideration("x"), make_consideration("y")],
        )
        updated = action.with_input(1, 0.2)
        assert isinstance(action.considerations, tuple)
        assert updated.considerations[1].input_value == 0.2
        assert action.considerations[1].input_value == 0.5
        assert updated.considerations[0] is action.considerations[0]

    def test_action_with_input_out_of_range(self, make_consideration):
        action = Action(id="a", name="A", considerations=(make_consideration("x"),))
        with pytest.raises(IndexError):
            action.with_input(1, 0.2)
        with pytest.raises(IndexError):
            action.with_input(-1, 0.2)


class TestFactories:
    """New curves and considerations."""

    def test_default_curve(self):
        curve = create_default_curve("Health")
        assert curve.name == "Health"
        assert curve.type is CurveType.POLYNOMIAL
        assert curve.params == DEFAULT_PARAMS[CurveType.POLYNOMIAL]
        assert curve.invert is False

    def test_default_curve_name(self):
        assert create_default_curve().name == "Untitled Curve"

    def test_ids_are_unique(self):
        assert create_default_curve().id != create_default_curve().id

    def test_default_consideration(self):
        c = create_default_consideration()
        assert c.input_value == 0.5
        assert c.curve.type is CurveType.POLYNOMIAL


class TestSerialization:
    """Dictionary round-trip with the stored camelCase keys."""

    def test_params_keys(self):
        params = CurveParams(std_dev=0.1, x_shift=0.2, y_shift=-0.1)
        assert params.to_dict() == {"stdDev": 0.1, "xShift": 0.2, "yShift": -0.1}

    def test_params_round_trip(self):
        params = CurveParams(
            slope=2.0,
            intercept=0.1,
            points=(CurvePoint(0.0, 0.1), CurvePoint(1.0, 0.9)),
            x_shift=0.05,
        )
        assert CurveParams.from_dict(params.to_dict()) == params

    def test_action_round_trip(self, make_consideration):
        action = Action(
            id="attack",
            name="Attack",
            considerations=(
                make_consideration("d", CurveType.GAUSSIAN, CurveParams(std_dev=0.3), True, 0.4),
                make_consideration("e", CurveType.STEP, CurveParams(threshold=0.1), False, 0.7),
            ),
        )
        data = action.to_dict()
        assert data["considerations"][0]["inputValue"] == 0.4
        assert data["considerations"][0]["curve"]["type"] == "gaussian"
        assert data["considerations"][0]["curve"]["params"]["stdDev"] == 0.3
        assert Action.from_dict(data) == action

    def test_scenario_round_trip(self, make_consideration):
        scenario = PresetScenario(
            id="s",
            name="S",
            description="test",
            actions=[Action(id="a", name="A", considerations=(make_consideration("x"),))],
        )
        assert PresetScenario.from_dict(scenario.to_dict()) == scenario

    def test_consideration_without_curve_rejected(self):
        with pytest.raises(ValueError, match="no curve"):
            Consideration.from_dict({"id": "broken", "inputValue": 0.5})
        with pytest.raises(ValueError, match="no curve"):
            Consideration.from_dict({"id": "broken", "curve": None})

    def test_curve_without_type_rejected(self):
        with pytest.raises(ValueError, match="type"):
            CurveConfig.from_dict({"id": "c", "name": "C", "params": {}})

    def test_curve_with_unknown_type_rejected(self):
        with pytest.raises(ValueError, match="Unknown curve type"):
            CurveConfig.from_dict({"id": "c", "name": "C", "type": "bezier"})

    @pytest.mark.parametrize("invert", ["false", 1, None])
    def test_curve_with_non_boolean_invert_rejected(self, invert):
        with pytest.raises(ValueError, match="invert"):
            CurveConfig.from_dict({"id": "c", "type": "linear", "invert": invert})

    def test_action_without_id_gets_one(self):
        action = Action.from_dict({"name": "Attack", "considerations": []})
        assert action.id
        assert action.name == "Attack"

    def test_missing_optional_fields(self):
        curve = CurveConfig.from_dict({"id": "c", "type": "sine"})
        assert curve.name == "Sine"
        assert curve.params == CurveParams()
        assert curve.invert is False
