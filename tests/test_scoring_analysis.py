"""
Tests for sweeps, decision maps, combined curves and the factor matrix.

The two_actions fixture scores "rises" as its input x and "falls" as 1 - x,
so the winner flips as inputs move across the grid.
"""

import numpy as np
import pytest

from src.scoring.types import Action, CurveParams, CurveType


class TestSweep1D:
    """One input swept over [0, 1]."""

    def test_shapes(self, two_actions):
        from src.scoring.analysis import sweep_1d

        result = sweep_1d(two_actions, "rises", 0)

        assert len(result.x_values) == 51
        assert result.x_values[0] == 0.0
        assert result.x_values[-1] == 1.0
        assert set(result.series) == {"rises", "falls"}
        assert all(len(s) == 51 for s in result.series.values())

    def test_swept_action_follows_input(self, two_actions):
        from src.scoring.analysis import sweep_1d

        result = sweep_1d(two_actions, "rises", 0)
        np.testing.assert_allclose(result.series["rises"], result.x_values)

    def test_other_actions_constant(self, two_actions):
        from src.scoring.analysis import sweep_1d

        result = sweep_1d(two_actions, "rises", 0)
        np.testing.assert_allclose(result.series["falls"], 0.3)

    def test_winners_flip(self, two_actions):
        from src.scoring.analysis import sweep_1d

        winners = sweep_1d(two_actions, "rises", 0, sample_count=11).winners()
        assert winners[0] == "falls"
        assert winners[-1] == "rises"
        assert len(winners) == 11

    def test_sample_count(self, two_actions):
        from src.scoring.analysis import sweep_1d

        result = sweep_1d(two_actions, "falls", 0, sample_count=5)
        np.testing.assert_allclose(result.x_values, [0.0, 0.25, 0.5, 0.75, 1.0])
        np.testing.assert_allclose(result.series["falls"], [1.0, 0.75, 0.5, 0.25, 0.0])

    def test_inputs_not_modified(self, two_actions):
        from src.scoring.analysis import sweep_1d

        sweep_1d(two_actions, "rises", 0)
        assert two_actions[0].considerations[0].input_value == 0.7

    def test_unknown_action(self, two_actions):
        from src.scoring.analysis import sweep_1d

        with pytest.raises(KeyError, match="nope"):
            sweep_1d(two_actions, "nope", 0)

    def test_bad_index(self, two_actions):
        from src.scoring.analysis import sweep_1d

        with pytest.raises(IndexError):
            sweep_1d(two_actions, "rises", 1)
        with pytest.raises(IndexError):
            sweep_1d(two_actions, "rises", -1)

    def test_too_few_samples(self, two_actions):
        from src.scoring.analysis import sweep_1d

        with pytest.raises(ValueError, match="sample_count"):
            sweep_1d(two_actions, "rises", 0, sample_count=1)


class TestDecisionMap2D:
    """Winner over a grid of two inputs."""

    def test_shape_and_axes(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        result = decision_map_2d(two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0))

        assert result.winners.shape == (20, 20)
        assert len(result.x_values) == 20
        assert result.y_values[0] == 0.0
        assert result.y_values[-1] == 1.0

    def test_winners(self, two_actions):
        """rises = x, falls = 1 - y; rises wins where x > 1 - y."""
        from src.scoring.analysis import SweepTarget, decision_map_2d

        result = decision_map_2d(
            two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0), grid_size=5
        )

        # x = 0, y = 0: rises 0, falls 1
        assert result.winner_at(0, 0) == "falls"
        # x = 1, y = 1: rises 1, falls 0
        assert result.winner_at(4, 4) == "rises"
        # x = 0.75, y = 0.5: rises 0.75, falls 0.5
        assert result.winner_at(3, 2) == "rises"
        # x = 0.25, y = 0.5: rises 0.25, falls 0.5
        assert result.winner_at(1, 2) == "falls"

    def test_rows_indexed_by_y(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        result = decision_map_2d(
            two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0), grid_size=5
        )
        assert result.winners[2, 3] == result.winner_at(3, 2)

    def test_winner_counts(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        result = decision_map_2d(
            two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0), grid_size=4
        )
        counts = result.winner_counts()
        assert sum(counts.values()) == 16
        assert set(counts) <= {"rises", "falls"}

    def test_same_target_uses_y(self, two_actions):
        """With x and y on the same input, each row is constant."""
        from src.scoring.analysis import SweepTarget, decision_map_2d

        target = SweepTarget("rises", 0)
        result = decision_map_2d(two_actions, target, target, grid_size=5)

        # y = 0: rises 0 < falls 0.3
        assert set(result.winners[0]) == {"falls"}
        # y = 1: rises 1 > falls 0.3
        assert set(result.winners[4]) == {"rises"}

    def test_inputs_not_modified(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        decision_map_2d(
            two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0), grid_size=3
        )
        assert [a.considerations[0].input_value for a in two_actions] == [0.7, 0.7]

    def test_invalid_targets(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        with pytest.raises(KeyError):
            decision_map_2d(two_actions, SweepTarget("rises", 0), SweepTarget("ghost", 0))
        with pytest.raises(IndexError):
            decision_map_2d(two_actions, SweepTarget("rises", 3), SweepTarget("falls", 0))

    def test_grid_too_small(self, two_actions):
        from src.scoring.analysis import SweepTarget, decision_map_2d

        with pytest.raises(ValueError, match="grid_size"):
            decision_map_2d(
                two_actions, SweepTarget("rises", 0), SweepTarget("falls", 0), grid_size=1
            )


class TestCombinedCurve:
    """All considerations driven by one shared input."""

    def test_shapes(self, make_consideration):
        from src.scoring.analysis import combined_curve

        considerations = [
            make_consideration("a", CurveType.LINEAR),
            make_consideration("b", CurveType.POLYNOMIAL),
        ]
        result = combined_curve(considerations, sample_count=10)

        assert result.x_values.shape == (11,)
        assert result.outputs.shape == (2, 11)
        assert result.raw.shape == (11,)
        assert result.compensated.shape == (11,)

    def test_values(self, make_consideration):
        from src.scoring.analysis import combined_curve

        considerations = [
            make_consideration("a", CurveType.LINEAR),
            make_consideration("b", CurveType.POLYNOMIAL),
        ]
        result = combined_curve(considerations, sample_count=4)
        x = result.x_values

        np.testing.assert_allclose(result.outputs[0], x)
        np.testing.assert_allclose(result.outputs[1], x**2)
        np.testing.assert_allclose(result.raw, x**3)
        np.testing.assert_allclose(result.compensated, x**3 + (1 - x**3) * 0.5 * x**3)

    def test_single_consideration_not_compensated(self, identity_consideration):
        from src.scoring.analysis import combined_curve

        result = combined_curve([identity_consideration], sample_count=4)
        np.testing.assert_allclose(result.compensated, result.raw)

    def test_empty(self):
        from src.scoring.analysis import combined_curve

        result = combined_curve([], sample_count=4)
        assert result.outputs.shape == (0, 5)
        np.testing.assert_allclose(result.raw, 0.0)

    def test_invalid_sample_count(self, identity_consideration):
        from src.scoring.analysis import combined_curve

        with pytest.raises(ValueError):
            combined_curve([identity_consideration], sample_count=0)


class TestFactorMatrix:
    """Curve outputs by action and factor name."""

    def test_matrix(self, make_consideration):
        from src.scoring.analysis import factor_matrix

        actions = [
            Action(
                id="attack",
                name="Attack",
                considerations=(
                    make_consideration("a-health", name="Health", input_value=0.4),
                    make_consideration("a-ammo", name="Ammo", input_value=0.9),
                ),
            ),
            Action(
                id="heal",
                name="Heal",
                considerations=(
                    make_consideration("h-health", name="Health", invert=True, input_value=0.4),
                ),
            ),
        ]
        result = factor_matrix(actions)

        assert result.factors == ("Health", "Ammo")
        assert result.values["attack"]["Health"] == pytest.approx(0.4)
        assert result.values["attack"]["Ammo"] == pytest.approx(0.9)
        assert result.values["heal"]["Health"] == pytest.approx(0.6)
        assert result.values["heal"]["Ammo"] is None

    def test_duplicate_names_use_first(self, make_consideration):
        from src.scoring.analysis import factor_matrix

        action = Action(
            id="a",
            name="A",
            considerations=(
                make_consideration("one", name="Dup", input_value=0.2),
                make_consideration("two", name="Dup", input_value=0.8),
            ),
        )
        result = factor_matrix([action])
        assert result.factors == ("Dup",)
        assert result.values["a"]["Dup"] == pytest.approx(0.2)

    def test_empty(self):
        from src.scoring.analysis import factor_matrix

        result = factor_matrix([])
        assert result.factors == ()
        assert result.values == {}


class TestCombatPresetAnalysis:
    """Analysis over the shipped combat scenario."""

    def test_attack_ammo_gate(self):
        from src.scoring.analysis import sweep_1d
        from src.scoring.configs import create_combat_scenario

        actions = create_combat_scenario().actions
        result = sweep_1d(actions, "action-attack", 2, sample_count=11)

        # Ammo at or below 10% zeroes the attack
        assert result.series["action-attack"][0] == 0.0
        assert result.series["action-attack"][1] == 0.0
        assert result.series["action-attack"][-1] > 0.5
