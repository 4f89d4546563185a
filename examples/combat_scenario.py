#!/usr/bin/env python3
"""
Combat AI scoring walkthrough.

Scores the Combat AI preset (attack / heal / retreat) and prints, for the
current inputs:

1. Per-action breakdown - curve outputs, raw and compensated score
2. Winner and decision margin
3. Sensitivity of the winning action to each of its inputs
4. Factor matrix - curve output by action and factor name

Usage:
    # Default preset inputs
    python examples/combat_scenario.py

    # Override inputs as ACTION_ID:INDEX=VALUE
    python examples/combat_scenario.py --set action-heal:1=0.0 --set action-attack:0=0.9

    # Dump the scenario as JSON
    python examples/combat_scenario.py --json
"""

import sys
import json
import argparse
import logging
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src import config
from src.scoring import (
    factor_matrix,
    margin,
    score_breakdown,
    select_winner,
    sensitivity,
)
from src.scoring.configs import create_combat_scenario

logging.basicConfig(
    level=getattr(logging, config.DEFAULT_LOG_LEVEL),
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def parse_override(text: str) -> tuple[str, int, float]:
    """Parse ACTION_ID:INDEX=VALUE."""
    try:
        target, value = text.split("=", 1)
        action_id, index = target.rsplit(":", 1)
        return action_id, int(index), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Expected ACTION_ID:INDEX=VALUE, got '{text}'"
        )


def apply_overrides(actions, overrides):
    """Return a copy of the actions with the given inputs replaced."""
    actions = list(actions)
    ids = [a.id for a in actions]
    for action_id, index, value in overrides:
        if action_id not in ids:
            raise KeyError(f"Unknown action '{action_id}'. Available: {ids}")
        position = ids.index(action_id)
        actions[position] = actions[position].with_input(index, value)
        logger.info(f"Set {action_id}[{index}] = {value}")
    return actions


def print_breakdowns(actions):
    print("=" * 70)
    print("ACTION SCORES")
    print("=" * 70)
    for action in actions:
        breakdown = score_breakdown(action)
        print(f"\n{action.name} ({action.id})")
        for consideration, output in zip(action.considerations, breakdown.outputs):
            print(
                f"  {consideration.curve.name:<14} input={consideration.input_value:.2f}"
                f"  output={output:.4f}"
            )
        print(f"  raw score:         {breakdown.raw_score:.4f}")
        print(f"  modification:      {breakdown.modification_factor:.4f}")
        print(f"  compensated score: {breakdown.compensated_score:.4f}"
              f" (+{breakdown.compensation_boost:.4f})")


def print_decision(actions):
    selection = select_winner(actions)
    print("\n" + "=" * 70)
    print("DECISION")
    print("=" * 70)
    if selection.winner_id is None:
        print("No actions to score")
        return

    winner = next(a for a in actions if a.id == selection.winner_id)
    print(f"Winner: {winner.name} ({selection.winner_score:.4f})")
    print(f"Margin over runner-up: {margin(actions):.4f}")

    print(f"\nSensitivity of {winner.name}:")
    for result in sensitivity(winner):
        print(f"  {result.name:<14} {result.sensitivity:.4f}  [{result.level.value}]")


def print_factor_matrix(actions):
    matrix = factor_matrix(actions)
    print("\n" + "=" * 70)
    print("FACTOR MATRIX")
    print("=" * 70)
    header = f"{'':<10}" + "".join(f"{name:>14}" for name in matrix.factors)
    print(header)
    for action in actions:
        row = matrix.values[action.id]
        cells = "".join(
            f"{'-':>14}" if row[name] is None else f"{row[name]:>14.4f}"
            for name in matrix.factors
        )
        print(f"{action.name:<10}{cells}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Combat AI scoring walkthrough",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        type=parse_override,
        action="append",
        default=[],
        metavar="ACTION_ID:INDEX=VALUE",
        help="Override one consideration input (repeatable)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the scenario as JSON and exit"
    )
    args = parser.parse_args()

    scenario = create_combat_scenario()
    actions = apply_overrides(scenario.actions, args.overrides)

    if args.json:
        scenario_dict = scenario.to_dict()
        scenario_dict["actions"] = [a.to_dict() for a in actions]
        print(json.dumps(scenario_dict, indent=2))
        return 0

    logger.info(f"Scenario: {scenario.name} - {scenario.description}")
    print_breakdowns(actions)
    print_decision(actions)
    print_factor_matrix(actions)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except (KeyError, IndexError) as e:
        logger.error(str(e))
        sys.exit(1)
