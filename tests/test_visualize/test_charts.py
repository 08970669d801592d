"""Tests for visualize/charts.py."""

import matplotlib.pyplot as plt
import pytest

from formulab.explore.scatter import scatter_points
from formulab.visualize.charts import histogram_chart, scatter_chart
from formulab.visualize.histogram import HistogramBin, HistogramResult, build_histogram


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_histogram_chart(store):
    result = build_histogram(store, "Co-Agent 1", "Tensile Strength", 10, 30)
    fig = histogram_chart(result, "Co-Agent 1", "Tensile Strength")
    ax = fig.axes[0]
    assert len(ax.patches) == 6
    assert ax.get_title() == "Co-Agent 1 (3 runs in Tensile Strength window)"


def test_histogram_chart_hides_empty_bins():
    result = HistogramResult(bins=(HistogramBin("a", 2), HistogramBin("b", 0)), matching_count=2)
    fig = histogram_chart(result, "X", show_empty=False)
    assert len(fig.axes[0].patches) == 1
    assert fig.axes[0].get_title() == "X"


def test_histogram_chart_no_data():
    fig = histogram_chart(HistogramResult(), "X", "Y")
    ax = fig.axes[0]
    assert not ax.patches
    assert any(t.get_text() == "No matching runs" for t in ax.texts)


def test_scatter_chart(store):
    points = scatter_points(store, "Co-Agent 1", "Tensile Strength")
    fig = scatter_chart(points, "Co-Agent 1", "Tensile Strength")
    ax = fig.axes[0]
    assert ax.get_title() == "Tensile Strength vs Co-Agent 1"
    assert len(ax.collections[0].get_offsets()) == 3
