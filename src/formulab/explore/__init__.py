"""Dataset exploration — field statistics and scatter data."""

from formulab.explore.stats import (
    FieldRange,
    FieldStats,
    FieldSummary,
    compute_output_ranges,
    compute_stats,
    describe_dataset,
    stats_for_field,
    summarize_values,
)
from formulab.explore.scatter import default_axes, scatter_points

__all__ = [
    "FieldRange",
    "FieldStats",
    "FieldSummary",
    "compute_output_ranges",
    "compute_stats",
    "describe_dataset",
    "stats_for_field",
    "summarize_values",
    "default_axes",
    "scatter_points",
]
