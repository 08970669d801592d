"""formulab — statistics, advice and range histograms for formulation experiments.

formulab explores a small dataset of elastomer formulation runs (named
numeric inputs and measured outputs).  It computes field statistics,
compares an anchor run against the dataset with fixed threshold rules,
bins input values for runs whose output falls in a chosen window, and
compiles a compact prompt for optional model-backed advice.

Quick start::

    from formulab import load_dataset, build_advisor_sections, build_histogram

    store = load_dataset("elastomer")
    anchor = store.records[0]
    for section in build_advisor_sections(anchor, store.records):
        print(section.title, section.bullets)

    result = build_histogram(store, "Co-Agent 1", "Tensile Strength", 12.0, 16.0)
"""

__version__ = "0.3.0"

# Core types
from formulab.core.fields import FieldKind, FieldRegistry, UnknownFieldError

# Data loading
from formulab.data.store import DatasetStore, Record, load_json, load_mapping
from formulab.datasets import load_configured, load_dataset

# Statistics
from formulab.explore.stats import (
    FieldStats, FieldSummary, compute_output_ranges, compute_stats, describe_dataset,
    stats_for_field, summarize_values,
)
from formulab.explore.scatter import scatter_points

# Advisor
from formulab.advisor.engine import AdvisorSection, build_advisor_sections

# Histograms
from formulab.visualize.histogram import (
    HistogramBin, HistogramResult, build_histogram, clamp_range, histogram_grid,
)

# Model-backed advice
from formulab.ai.prompt import PromptPreview, build_prompt, estimate_tokens, get_prompt_preview
from formulab.ai.parse import LlmSection, parse_sections
from formulab.ai.session import AdvisorSession

__all__ = [
    # Core
    "FieldKind", "FieldRegistry", "UnknownFieldError",
    # Data
    "DatasetStore", "Record", "load_json", "load_mapping", "load_dataset", "load_configured",
    # Statistics
    "FieldStats", "FieldSummary", "compute_stats", "stats_for_field", "summarize_values",
    "compute_output_ranges", "describe_dataset", "scatter_points",
    # Advisor
    "AdvisorSection", "build_advisor_sections",
    # Histograms
    "HistogramBin", "HistogramResult", "build_histogram", "clamp_range", "histogram_grid",
    # AI
    "PromptPreview", "build_prompt", "estimate_tokens", "get_prompt_preview",
    "LlmSection", "parse_sections", "AdvisorSession",
]
