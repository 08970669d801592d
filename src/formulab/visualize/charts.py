"""Matplotlib renderings of computed results — range histograms and scatter plots."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")
import matplotlib.figure
import matplotlib.pyplot as plt
import pandas as pd

from formulab.visualize.histogram import HistogramResult

Figure = matplotlib.figure.Figure


def histogram_chart(
    result: HistogramResult,
    input_field: str,
    output_field: str = "",
    show_empty: bool = True,
) -> Figure:
    """Bar chart of a range histogram.  Empty bins are drawn unless ``show_empty`` is off."""
    bins = [b for b in result.bins if show_empty or b.count > 0]

    fig, ax = plt.subplots(figsize=(6, 3.5))
    if bins:
        ax.bar([b.label for b in bins], [b.count for b in bins], color="#4f46e5")
        ax.tick_params(axis="x", labelrotation=30, labelsize=8)
    else:
        ax.text(0.5, 0.5, "No matching runs", ha="center", va="center", transform=ax.transAxes)
        ax.set_xticks([])

    title = input_field
    if output_field:
        title = f"{input_field} ({result.matching_count} runs in {output_field} window)"
    ax.set_title(title, fontsize=10)
    ax.set_xlabel(input_field)
    ax.set_ylabel("Runs")
    fig.tight_layout(pad=1.5)
    return fig


def scatter_chart(points: pd.DataFrame, x_key: str, y_key: str) -> Figure:
    """Scatter plot of the ``x``/``y`` columns produced by ``scatter_points``."""
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.scatter(points["x"], points["y"], s=30, alpha=0.8, color="#0ea5e9")
    ax.set_title(f"{y_key} vs {x_key}")
    ax.set_xlabel(x_key)
    ax.set_ylabel(y_key)
    ax.grid(True, linestyle="--", alpha=0.4)
    fig.tight_layout(pad=1.5)
    return fig
