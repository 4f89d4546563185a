"""
Resampling the scoring pipeline across input ranges.

Every function here re-runs curve evaluation and scoring with some inputs
overridden; none of them adds numeric logic of its own. Inputs are never
mutated, so each grid cell or sample is independent.

Provides:
- sweep_1d: every action's compensated score while one input sweeps [0, 1]
- decision_map_2d: winning action over a grid of two swept inputs
- combined_curve: raw/compensated score when all inputs share one value
- factor_matrix: curve output per (action, factor name)
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from src import config
from src.scoring.combiner import apply_compensation, compensated_score, raw_score
from src.scoring.selection import select_winner
from src.scoring.transforms import evaluate_consideration, evaluate_curve
from src.scoring.types import Action, Consideration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepTarget:
    """One input of one action: (action id, consideration index)."""

    action_id: str
    consideration_index: int


def _validate_target(actions: Sequence[Action], target: SweepTarget) -> None:
    """
    Fail fast on a target that does not name an existing input.

    Raises:
        KeyError: If no action has the target's id
        IndexError: If the consideration index is out of range
    """
    for action in actions:
        if action.id == target.action_id:
            count = len(action.considerations)
            if not 0 <= target.consideration_index < count:
                raise IndexError(
                    f"Action '{action.id}' has {count} considerations, "
                    f"no index {target.consideration_index}"
                )
            return
    raise KeyError(
        f"Unknown action '{target.action_id}'. "
        f"Available: {[a.id for a in actions]}"
    )


def _with_overrides(
    actions: Sequence[Action], overrides: Sequence[tuple[SweepTarget, float]]
) -> list[Action]:
    """Copy of the actions with the targeted inputs replaced (later overrides win)."""
    updated = list(actions)
    for target, value in overrides:
        for i, action in enumerate(updated):
            if action.id == target.action_id:
                updated[i] = action.with_input(target.consideration_index, value)
    return updated


def _check_samples(name: str, value: int) -> None:
    if value < 2:
        raise ValueError(f"{name} must be >= 2, got {value}")


@dataclass(frozen=True)
class SweepResult:
    """
    Compensated scores along a one-input sweep.

    Attributes:
        target: The swept input
        x_values: Sampled input values, ascending over [0, 1]
        series: Action id -> compensated score at each x value
    """

    target: SweepTarget
    x_values: np.ndarray
    series: dict[str, np.ndarray]

    def winners(self) -> list[str]:
        """Winning action id at each sample (first action wins ties)."""
        ids = list(self.series)
        stacked = np.vstack([self.series[i] for i in ids])
        # argmax returns the first maximum, matching select_winner
        return [ids[k] for k in np.argmax(stacked, axis=0)]


def sweep_1d(
    actions: Sequence[Action],
    target_action_id: str,
    target_consideration_index: int,
    sample_count: int = config.SWEEP_SAMPLES,
) -> SweepResult:
    """
    Sweep one action input over [0, 1] and score every action at each sample.

    Args:
        actions: All candidate actions
        target_action_id: Action owning the swept input
        target_consideration_index: Index of the swept consideration
        sample_count: Number of samples including both ends

    Returns:
        SweepResult with one series per action

    Raises:
        KeyError: If target_action_id is unknown
        IndexError: If the consideration index is out of range
        ValueError: If sample_count < 2
    """
    target = SweepTarget(target_action_id, target_consideration_index)
    _validate_target(actions, target)
    _check_samples("sample_count", sample_count)

    x_values = np.linspace(0.0, 1.0, sample_count)
    series = {action.id: np.zeros(sample_count) for action in actions}

    for i, x in enumerate(x_values):
        for action in _with_overrides(actions, [(target, float(x))]):
            series[action.id][i] = compensated_score(action.considerations)

    logger.debug(
        f"Swept {target_action_id}[{target_consideration_index}] over "
        f"{sample_count} samples for {len(actions)} actions"
    )
    return SweepResult(target=target, x_values=x_values, series=series)


@dataclass(frozen=True)
class DecisionMap:
    """
    Winning action over a grid of two swept inputs.

    Attributes:
        x_target: Input swept along columns
        y_target: Input swept along rows
        x_values: Column input values, ascending
        y_values: Row input values, ascending (row 0 is y = 0)
        winners: Object array of action ids, indexed [row, column]
    """

    x_target: SweepTarget
    y_target: SweepTarget
    x_values: np.ndarray
    y_values: np.ndarray
    winners: np.ndarray

    def winner_at(self, xi: int, yi: int) -> Optional[str]:
        return self.winners[yi, xi]

    def winner_counts(self) -> dict[str, int]:
        """Number of cells won by each action."""
        return dict(Counter(self.winners.ravel().tolist()))


def decision_map_2d(
    actions: Sequence[Action],
    x_target: SweepTarget,
    y_target: SweepTarget,
    grid_size: int = config.DECISION_MAP_GRID_SIZE,
) -> DecisionMap:
    """
    Record the winning action at every cell of a grid of two inputs.

    If both targets name the same input, the y value is used.

    Args:
        actions: All candidate actions
        x_target: Input varied along the x axis
        y_target: Input varied along the y axis
        grid_size: Cells per axis

    Returns:
        DecisionMap with a (grid_size, grid_size) array of winner ids

    Raises:
        KeyError: If a target action id is unknown
        IndexError: If a target consideration index is out of range
        ValueError: If grid_size < 2
    """
    _validate_target(actions, x_target)
    _validate_target(actions, y_target)
    _check_samples("grid_size", grid_size)

    axis = np.linspace(0.0, 1.0, grid_size)
    winners = np.empty((grid_size, grid_size), dtype=object)

    for yi, y in enumerate(axis):
        for xi, x in enumerate(axis):
            cell_actions = _with_overrides(
                actions, [(x_target, float(x)), (y_target, float(y))]
            )
            winners[yi, xi] = select_winner(cell_actions).winner_id

    result = DecisionMap(
        x_target=x_target,
        y_target=y_target,
        x_values=axis,
        y_values=axis.copy(),
        winners=winners,
    )
    logger.debug(f"Decision map {grid_size}x{grid_size}: {result.winner_counts()}")
    return result


@dataclass(frozen=True)
class CombinedCurve:
    """
    Scores when every consideration sees the same input x.

    Attributes:
        x_values: Sampled input values
        outputs: Per-consideration curve output, shape (n_considerations, n_samples)
        raw: Raw score at each x
        compensated: Compensated score at each x
    """

    x_values: np.ndarray
    outputs: np.ndarray
    raw: np.ndarray
    compensated: np.ndarray


def combined_curve(
    considerations: Sequence[Consideration],
    sample_count: int = config.DEFAULT_CURVE_SAMPLES,
) -> CombinedCurve:
    """
    Score a consideration set with all inputs tied to one sweeping value.

    Args:
        considerations: Considerations of one action
        sample_count: Number of intervals; sample_count + 1 samples

    Returns:
        CombinedCurve
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")

    x_values = np.linspace(0.0, 1.0, sample_count + 1)
    outputs = np.array(
        [
            evaluate_curve(c.curve.type, x_values, c.curve.params, c.curve.invert)
            for c in considerations
        ]
    ).reshape(len(considerations), len(x_values))

    raw = np.zeros_like(x_values)
    for i, x in enumerate(x_values):
        raw[i] = raw_score([c.with_input(float(x)) for c in considerations])
    compensated = np.array([apply_compensation(r, len(considerations)) for r in raw])

    return CombinedCurve(x_values=x_values, outputs=outputs, raw=raw, compensated=compensated)


@dataclass(frozen=True)
class FactorMatrix:
    """
    Curve outputs arranged by action and factor (curve name).

    Attributes:
        factors: Factor names in first-seen order
        values: Action id -> factor name -> output, or None if the action
            has no consideration with that name
    """

    factors: tuple[str, ...]
    values: dict[str, dict[str, Optional[float]]]


def factor_matrix(actions: Sequence[Action]) -> FactorMatrix:
    """
    Tabulate every action's curve outputs by factor name.

    When an action has several considerations with the same curve name, the
    first one is used.
    """
    factors: list[str] = []
    for action in actions:
        for c in action.considerations:
            if c.curve.name not in factors:
                factors.append(c.curve.name)

    values: dict[str, dict[str, Optional[float]]] = {}
    for action in actions:
        row: dict[str, Optional[float]] = {}
        for name in factors:
            match = next((c for c in action.considerations if c.curve.name == name), None)
            row[name] = evaluate_consideration(match) if match is not None else None
        values[action.id] = row

    return FactorMatrix(factors=tuple(factors), values=values)
