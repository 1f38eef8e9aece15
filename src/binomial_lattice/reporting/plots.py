"""Matplotlib rendering of the binomial lattice diagram."""

from __future__ import annotations

from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from binomial_lattice.options.types import PricingResult

from .themes import DEFAULT_THEME, get_tree_theme

# Node labels are dropped as the lattice gets too dense to read.
FULL_LABELS_MAX_STEPS = 10
SHORT_LABELS_MAX_STEPS = 15

_FONT_FAMILY = "monospace"


@dataclass(frozen=True, slots=True)
class Padding:
    top: float = 40.0
    right: float = 60.0
    bottom: float = 40.0
    left: float = 60.0


def compute_node_positions(
    steps: int,
    width: float,
    height: float,
    padding: Padding = Padding(),
) -> list[np.ndarray]:
    """Return `(i + 1, 2)` arrays of x/y canvas coordinates per step.

    Steps are spread evenly along x. Each column is centred vertically, with
    state `j` (up-move count) placed one row higher per up-move.
    """
    available_width = width - padding.left - padding.right
    available_height = height - padding.top - padding.bottom

    step_width = available_width / steps if steps > 0 else 0.0
    row_height = available_height / (steps + 1)

    positions: list[np.ndarray] = []
    for i in range(steps + 1):
        j = np.arange(i + 1)
        x = np.full(i + 1, padding.left + i * step_width)
        y = padding.bottom + (steps - i) * row_height / 2 + j * row_height
        positions.append(np.column_stack([x, y]))
    return positions


def _node_radius(steps: int) -> float:
    return max(8.0, min(25.0, 200.0 / (steps + 1)))


def _font_size(steps: int) -> float:
    return max(7.0, min(11.0, 100.0 / (steps + 1)))


def _edge_segments(positions: list[np.ndarray]) -> list[np.ndarray]:
    segments = []
    for i in range(len(positions) - 1):
        for j in range(i + 1):
            start = positions[i][j]
            segments.append(np.vstack([start, positions[i + 1][j + 1]]))
            segments.append(np.vstack([start, positions[i + 1][j]]))
    return segments


def plot_tree(
    result: PricingResult,
    *,
    theme: str = DEFAULT_THEME,
    width: float = 1000.0,
    height: float = 600.0,
    dpi: float = 100.0,
    title: str | None = None,
) -> Figure:
    """Draw the lattice as a node-and-edge diagram.

    Early-exercise nodes take the exercise colour, terminal nodes the terminal
    colour and every other node the interior fill/stroke. Stock prices are
    printed above and option values below each node for small lattices.
    """
    colors = get_tree_theme(theme)
    steps = result.steps

    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.patch.set_facecolor(colors.background)
    ax.set_facecolor(colors.background)
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_axis_off()

    if steps == 0:
        return fig

    positions = compute_node_positions(steps, width, height)
    radius = _node_radius(steps)
    font_size = _font_size(steps)
    # Scatter sizes are in points**2; radius is in canvas pixels.
    marker_size = (2.0 * radius * 72.0 / dpi) ** 2

    ax.add_collection(
        LineCollection(
            _edge_segments(positions), colors=colors.grid, linewidths=1.0, zorder=1
        )
    )

    for i in range(steps + 1):
        xy = positions[i]
        exercised = np.asarray(result.early_exercise[i], dtype=bool)
        if i == steps:
            fill = np.full(i + 1, colors.terminal, dtype=object)
            stroke = fill
        else:
            fill = np.where(exercised, colors.exercise, colors.node_fill)
            stroke = np.where(exercised, colors.exercise, colors.node_stroke)
        ax.scatter(
            xy[:, 0],
            xy[:, 1],
            s=marker_size,
            c=list(fill),
            edgecolors=list(stroke),
            linewidths=1.5,
            zorder=2,
        )

        if steps > SHORT_LABELS_MAX_STEPS:
            continue

        for j in range(i + 1):
            x, y = xy[j]
            stock = float(result.stock_tree[i][j])
            if steps <= FULL_LABELS_MAX_STEPS:
                ax.text(
                    x,
                    y + radius + font_size * 0.8,
                    f"{stock:.1f}",
                    color=colors.text,
                    fontsize=font_size,
                    family=_FONT_FAMILY,
                    ha="center",
                    va="center",
                    zorder=3,
                )
                value = float(result.option_tree[i][j])
                ax.text(
                    x,
                    y - radius - font_size * 0.8,
                    f"{value:.2f}",
                    color=colors.exercise if exercised[j] else colors.value_text,
                    fontsize=font_size,
                    family=_FONT_FAMILY,
                    ha="center",
                    va="center",
                    zorder=3,
                )
            else:
                ax.text(
                    x,
                    y + radius + font_size * 0.6,
                    f"{stock:.0f}",
                    color=colors.text,
                    fontsize=font_size * 0.8,
                    family=_FONT_FAMILY,
                    ha="center",
                    va="center",
                    zorder=3,
                )

    label_size = max(9.0, font_size)
    for i in range(steps + 1):
        ax.text(
            positions[i][0][0],
            height - 15,
            f"t={i}",
            color=colors.text,
            fontsize=label_size,
            family=_FONT_FAMILY,
            ha="center",
            va="center",
        )

    if title:
        ax.set_title(title, color=colors.text)

    return fig
