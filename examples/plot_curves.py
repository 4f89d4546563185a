#!/usr/bin/env python3
"""
Plot the response-curve gallery and Combat AI analysis charts.

Produces:
1. curve_gallery.png - every curve family at default parameters, with formula
2. combat_sweep.png - all action scores while one input sweeps [0, 1]
3. combat_decision_map.png - winning action over a grid of two inputs
4. combat_combined.png - raw vs compensated score for the Attack action

Usage:
    python examples/plot_curves.py
    python examples/plot_curves.py --output-dir ./plots
    python examples/plot_curves.py --sweep action-retreat:1

Requires matplotlib (pip install -e .[viz]).
"""

import sys
import argparse
import logging
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src import config
from src.scoring import (
    CURVE_NAMES,
    CurveType,
    SweepTarget,
    combined_curve,
    decision_map_2d,
    generate_curve_points,
    render_formula_with_values,
    sweep_1d,
)
from src.scoring.configs import create_combat_scenario

logging.basicConfig(
    level=getattr(logging, config.DEFAULT_LOG_LEVEL),
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def plot_curve_gallery(output_path: Path) -> None:
    """Grid of every curve family at its default parameters."""
    families = list(CurveType)
    cols = 4
    rows = int(np.ceil(len(families) / cols))
    fig, axes = plt.subplots(rows, cols, figsize=(16, 3.5 * rows))

    for ax, curve_type in zip(axes.ravel(), families):
        points = generate_curve_points(curve_type)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        ax.plot(xs, ys, color="steelblue", linewidth=2)
        ax.set_title(CURVE_NAMES[curve_type], fontsize=11, fontweight="bold")
        ax.text(
            0.5, -0.22, render_formula_with_values(curve_type),
            transform=ax.transAxes, ha="center", fontsize=7,
        )
        ax.set_xlim(0, 1)
        ax.set_ylim(-0.05, 1.05)
        ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)

    for ax in axes.ravel()[len(families):]:
        ax.axis("off")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()
    logger.info(f"✓ Saved curve gallery to {output_path}")


def plot_sweep(actions, target: SweepTarget, output_path: Path) -> None:
    """Score of every action while one input sweeps."""
    result = sweep_1d(actions, target.action_id, target.consideration_index)
    names = {a.id: a.name for a in actions}
    owner = next(a for a in actions if a.id == target.action_id)
    swept = owner.considerations[target.consideration_index].curve.name

    fig, ax = plt.subplots(figsize=(10, 6))
    for action_id, scores in result.series.items():
        ax.plot(result.x_values, scores, linewidth=2, label=names[action_id])

    ax.set_title(f"Scores vs {owner.name}: {swept}", fontsize=14, fontweight="bold")
    ax.set_xlabel(f"{swept} input")
    ax.set_ylabel("Compensated score")
    ax.set_ylim(-0.05, 1.05)
    ax.legend()
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()
    logger.info(f"✓ Saved sweep to {output_path}")


def plot_decision_map(actions, x_target: SweepTarget, y_target: SweepTarget, output_path: Path) -> None:
    """Winner per grid cell, colored by action."""
    result = decision_map_2d(actions, x_target, y_target)
    ids = [a.id for a in actions]
    index_grid = np.vectorize(ids.index)(result.winners)

    fig, ax = plt.subplots(figsize=(8, 7))
    cmap = ListedColormap(plt.cm.tab10.colors[: len(ids)])
    im = ax.imshow(
        index_grid,
        cmap=cmap,
        vmin=-0.5,
        vmax=len(ids) - 0.5,
        extent=[0, 1, 0, 1],
        origin="lower",
        interpolation="nearest",
    )
    cbar = plt.colorbar(im, ax=ax, ticks=range(len(ids)))
    cbar.ax.set_yticklabels([a.name for a in actions])

    ax.set_title("Decision Map", fontsize=14, fontweight="bold")
    ax.set_xlabel(f"{x_target.action_id}[{x_target.consideration_index}]")
    ax.set_ylabel(f"{y_target.action_id}[{y_target.consideration_index}]")

    counts = result.winner_counts()
    stats_text = "  |  ".join(f"{k}: {v}" for k, v in counts.items())
    fig.text(0.5, 0.01, stats_text, ha="center", fontsize=9)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()
    logger.info(f"✓ Saved decision map to {output_path}")


def plot_combined(action, output_path: Path) -> None:
    """Per-consideration outputs with raw and compensated totals."""
    result = combined_curve(action.considerations)

    fig, ax = plt.subplots(figsize=(10, 6))
    for consideration, outputs in zip(action.considerations, result.outputs):
        ax.plot(result.x_values, outputs, linewidth=1, alpha=0.6, label=consideration.curve.name)
    ax.plot(result.x_values, result.raw, "k--", linewidth=2, label="Raw")
    ax.plot(result.x_values, result.compensated, "k-", linewidth=2, label="Compensated")

    ax.set_title(f"{action.name}: combined score", fontsize=14, fontweight="bold")
    ax.set_xlabel("Shared input")
    ax.set_ylabel("Score")
    ax.set_ylim(-0.05, 1.05)
    ax.legend()
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()
    logger.info(f"✓ Saved combined curve to {output_path}")


def parse_target(text: str) -> SweepTarget:
    """Parse ACTION_ID:INDEX."""
    try:
        action_id, index = text.rsplit(":", 1)
        return SweepTarget(action_id, int(index))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected ACTION_ID:INDEX, got '{text}'")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Plot response curves and Combat AI analysis")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help=f"Output directory for plots (default: {config.OUTPUT_DIR})",
    )
    parser.add_argument(
        "--sweep",
        type=parse_target,
        default=SweepTarget("action-attack", 0),
        metavar="ACTION_ID:INDEX",
        help="Input to sweep (default: action-attack:0)",
    )
    parser.add_argument(
        "--map-x",
        type=parse_target,
        default=SweepTarget("action-attack", 0),
        metavar="ACTION_ID:INDEX",
        help="Decision map x axis (default: action-attack:0)",
    )
    parser.add_argument(
        "--map-y",
        type=parse_target,
        default=SweepTarget("action-retreat", 0),
        metavar="ACTION_ID:INDEX",
        help="Decision map y axis (default: action-retreat:0)",
    )
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    actions = create_combat_scenario().actions

    plot_curve_gallery(args.output_dir / "curve_gallery.png")
    plot_sweep(actions, args.sweep, args.output_dir / "combat_sweep.png")
    plot_decision_map(actions, args.map_x, args.map_y, args.output_dir / "combat_decision_map.png")
    plot_combined(actions[0], args.output_dir / "combat_combined.png")

    logger.info(f"Outputs saved to: {args.output_dir}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except (KeyError, IndexError) as e:
        logger.error(str(e))
        sys.exit(1)
