"""
Multiplicative score combination with IAUS compensation.

Provides:
- raw_score: product of consideration outputs, zero as soon as any output is zero
- apply_compensation: counteracts the collapse of many-factor products
- score_breakdown: per-consideration outputs plus raw/compensated totals

Formula:
    raw = product of consideration outputs
    compensated = raw + (1 - raw) * (1 - 1/n) * raw      (n > 1)
"""

from dataclasses import dataclass
from typing import Sequence

from src.scoring.transforms import evaluate_consideration
from src.scoring.types import Action, Consideration


def raw_score(considerations: Sequence[Consideration]) -> float:
    """
    Product of consideration outputs, in order, with early termination.

    An output <= 0 makes the whole score 0 and the remaining considerations
    are not evaluated. An empty list scores 0 so an action with nothing to
    evaluate is never selected.

    Example:
        >>> raw_score([])
        0.0
    """
    if not considerations:
        return 0.0

    score = 1.0
    for consideration in considerations:
        value = evaluate_consideration(consideration)
        if value <= 0:
            return 0.0
        score *= value
    return score


def modification_factor(count: int) -> float:
    """Compensation strength for ``count`` considerations: 1 - 1/count, or 0 for count <= 1."""
    if count <= 1:
        return 0.0
    return 1.0 - 1.0 / count


def apply_compensation(score: float, count: int) -> float:
    """
    Boost a raw product according to how many factors produced it.

    Fixed at 0 and 1, monotonic on [0, 1] and a no-op for a single factor.

    Args:
        score: Raw product score
        count: Number of considerations that produced it

    Returns:
        Compensated score

    Example:
        >>> round(apply_compensation(0.432, 3), 4)
        0.5956
        >>> apply_compensation(0.5, 1)
        0.5
    """
    if count <= 1:
        return score
    mod_factor = modification_factor(count)
    return score + (1.0 - score) * mod_factor * score


def compensated_score(considerations: Sequence[Consideration]) -> float:
    """Raw score of the considerations with compensation applied."""
    return apply_compensation(raw_score(considerations), len(considerations))


def compensation_boost(score: float, count: int) -> float:
    """How much compensation adds to a raw score."""
    return apply_compensation(score, count) - score


def consideration_outputs(considerations: Sequence[Consideration]) -> list[float]:
    """Curve output of every consideration (no early termination)."""
    return [evaluate_consideration(c) for c in considerations]


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Full scoring record for one action.

    Attributes:
        action_id: Scored action
        outputs: Curve output per consideration, in order
        raw_score: Product score (with early termination)
        compensated_score: raw_score after compensation
        modification_factor: 1 - 1/n for n considerations (0 when n <= 1)
        compensation_boost: compensated_score - raw_score
    """

    action_id: str
    outputs: tuple[float, ...]
    raw_score: float
    compensated_score: float
    modification_factor: float
    compensation_boost: float


def score_breakdown(action: Action) -> ScoreBreakdown:
    """
    Compute every score figure shown for an action.

    Args:
        action: Action to score

    Returns:
        ScoreBreakdown for the action
    """
    considerations = action.considerations
    count = len(considerations)
    raw = raw_score(considerations)
    return ScoreBreakdown(
        action_id=action.id,
        outputs=tuple(consideration_outputs(considerations)),
        raw_score=raw,
        compensated_score=apply_compensation(raw, count),
        modification_factor=modification_factor(count),
        compensation_boost=compensation_boost(raw, count),
    )
