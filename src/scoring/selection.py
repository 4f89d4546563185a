"""
Choosing between actions and explaining the choice.

- select_winner: highest compensated score, first action wins ties
- margin: lead of the best action over the runner-up
- sensitivity: how strongly each input of an action moves its score
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from src import config
from src.scoring.combiner import compensated_score
from src.scoring.types import Action

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinnerSelection:
    """
    Outcome of scoring a set of actions.

    Attributes:
        winner_id: Id of the highest-scoring action, or None if there were no actions
        scores_by_id: Compensated score of every action, in input order
    """

    winner_id: Optional[str]
    scores_by_id: dict[str, float] = field(default_factory=dict)

    @property
    def winner_score(self) -> float:
        if self.winner_id is None:
            return 0.0
        return self.scores_by_id[self.winner_id]


def select_winner(actions: Sequence[Action]) -> WinnerSelection:
    """
    Pick the action with the highest compensated score.

    Only a strictly greater score replaces the current best, so the first
    action in iteration order wins a tie.

    Args:
        actions: Candidate actions

    Returns:
        WinnerSelection with the winner id and every action's score
    """
    scores_by_id: dict[str, float] = {}
    winner_id: Optional[str] = None
    best_score = float("-inf")

    for action in actions:
        score = compensated_score(action.considerations)
        scores_by_id[action.id] = score
        if score > best_score:
            best_score = score
            winner_id = action.id

    return WinnerSelection(winner_id=winner_id, scores_by_id=scores_by_id)


def margin(actions: Sequence[Action]) -> float:
    """
    Lead of the best action's compensated score over the second best.

    With a single action the margin is that action's score; with none it is 0.
    """
    scores = sorted(
        (compensated_score(action.considerations) for action in actions),
        reverse=True,
    )
    if not scores:
        return 0.0
    if len(scores) < 2:
        return scores[0]
    return scores[0] - scores[1]


class SensitivityLevel(str, Enum):
    """Coarse classification of a sensitivity value."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def classify_sensitivity(value: float) -> SensitivityLevel:
    """Map a sensitivity value to High (> 0.4), Medium (> 0.2) or Low."""
    if value > config.SENSITIVITY_HIGH_THRESHOLD:
        return SensitivityLevel.HIGH
    if value > config.SENSITIVITY_MEDIUM_THRESHOLD:
        return SensitivityLevel.MEDIUM
    return SensitivityLevel.LOW


@dataclass(frozen=True)
class SensitivityResult:
    """Sensitivity of an action's score to one consideration's input."""

    consideration_id: str
    name: str
    sensitivity: float
    level: SensitivityLevel


def sensitivity(
    action: Action,
    low: float = config.SENSITIVITY_LOW_PROBE,
    high: float = config.SENSITIVITY_HIGH_PROBE,
) -> list[SensitivityResult]:
    """
    Probe each consideration of an action at a low and a high input.

    For every consideration the compensated score is computed twice, with
    that consideration's input forced to ``low`` and then ``high`` while the
    others keep their current inputs. The absolute difference is the
    sensitivity. This is a finite-difference measure, so it also works for
    curves without a derivative (e.g. step).

    Args:
        action: Action to analyze (usually the current winner)
        low: Low probe input
        high: High probe input

    Returns:
        One SensitivityResult per consideration, most sensitive first
        (equal values keep consideration order)

    Example:
        >>> # Single linear consideration: |0.9 - 0.1| = 0.8 -> High
        >>> [r.level for r in sensitivity(action)]  # doctest: +SKIP
        [<SensitivityLevel.HIGH: 'High'>]
    """
    results = []
    for index, consideration in enumerate(action.considerations):
        score_low = compensated_score(action.with_input(index, low).considerations)
        score_high = compensated_score(action.with_input(index, high).considerations)
        value = abs(score_high - score_low)
        results.append(
            SensitivityResult(
                consideration_id=consideration.id,
                name=consideration.curve.name,
                sensitivity=value,
                level=classify_sensitivity(value),
            )
        )

    logger.debug(
        f"Sensitivity for action '{action.id}': "
        + ", ".join(f"{r.name}={r.sensitivity:.3f}" for r in results)
    )
    return sorted(results, key=lambda r: r.sensitivity, reverse=True)
