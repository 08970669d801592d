"""Measurement-range histograms and chart rendering."""

from formulab.visualize.histogram import (
    DEFAULT_BIN_COUNT,
    HistogramBin,
    HistogramResult,
    build_histogram,
    clamp_range,
    histogram_grid,
    default_output,
    order_inputs,
)
from formulab.visualize.charts import histogram_chart, scatter_chart

__all__ = [
    "DEFAULT_BIN_COUNT",
    "HistogramBin",
    "HistogramResult",
    "build_histogram",
    "clamp_range",
    "histogram_grid",
    "default_output",
    "order_inputs",
    "histogram_chart",
    "scatter_chart",
]
