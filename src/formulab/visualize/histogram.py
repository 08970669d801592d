"""Measurement-range histograms.

Pick an output metric and a target window for it; for each input
ingredient, count how its values are distributed across the experiments
whose output falls inside that window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from formulab.core import as_finite
from formulab.core.profile import get_profile

if TYPE_CHECKING:
    from formulab.data.store import DatasetStore, Record
    from formulab.explore.stats import FieldRange

DEFAULT_BIN_COUNT = 6
PREFERRED_OUTPUT = "Tensile Strength"

# Inputs that appear first in the grid; everything else follows in dataset order.
INPUT_ORDER_HINTS: tuple[str, ...] = (
    "Polymer 1",
    "Polymer 2",
    "Polymer 3",
    "Polymer 4",
    "Silica Filler 1",
    "Silica Filler 2",
    "Carbon Black High Grade",
    "Carbon Black Low Grade",
    "Plasticizer 1",
    "Plasticizer 2",
    "Plasticizer 3",
    "Oven Temperature",
)


@dataclass(frozen=True)
class HistogramBin:
    """One histogram bar."""
    label: str
    count: int = 0


@dataclass(frozen=True)
class HistogramResult:
    """Bins for one (input, output window) pair plus the number of matching runs."""
    bins: tuple[HistogramBin, ...] = field(default_factory=tuple)
    matching_count: int = 0

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)


def _edge(low: float, high: float, t: float) -> float:
    """Point at fraction *t* between *low* and *high*, without forming ``high - low``."""
    return low * (1 - t) + high * t


def build_histogram(
    records: Iterable[Record],
    input_field: str,
    output_field: str,
    range_min: float,
    range_max: float,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> HistogramResult:
    """Histogram of *input_field* over records whose *output_field* lies in ``[range_min, range_max]``.

    ``matching_count`` counts every record inside the window, even those
    without a value for the input.  Bins are contiguous, ascending and
    equal-width; the last one is closed at the maximum value.  When all
    collected values are identical a single bin is returned.
    """
    if bin_count < 1:
        raise ValueError(f"bin_count must be at least 1, got {bin_count}")

    matching = []
    for rec in records:
        out = as_finite(rec.outputs.get(output_field))
        if out is not None and range_min <= out <= range_max:
            matching.append(rec)
    matching_count = len(matching)

    values = [v for v in (as_finite(rec.inputs.get(input_field)) for rec in matching) if v is not None]
    if not values:
        return HistogramResult(bins=(), matching_count=matching_count)

    min_val = min(values)
    max_val = max(values)

    if min_val == max_val:
        return HistogramResult(
            bins=(HistogramBin(label=f"{min_val:.2f}", count=len(values)),),
            matching_count=matching_count,
        )

    # Bin positions are computed on halved values so the spread of two
    # finite extremes cannot overflow.
    half_span = max_val / 2 - min_val / 2
    counts = [0] * bin_count
    for v in values:
        if half_span > 0:
            fraction = (v / 2 - min_val / 2) / half_span
            index = min(math.floor(fraction * bin_count), bin_count - 1)
        else:
            # Spread too small to resolve: only the maximum leaves the first bin.
            index = bin_count - 1 if v == max_val else 0
        counts[index] += 1

    bins = []
    for i, count in enumerate(counts):
        start = _edge(min_val, max_val, i / bin_count)
        end = max_val if i == bin_count - 1 else _edge(min_val, max_val, (i + 1) / bin_count)
        bins.append(HistogramBin(label=f"{start:.1f}–{end:.1f}", count=count))

    return HistogramResult(bins=tuple(bins), matching_count=matching_count)


def histogram_grid(
    store: DatasetStore,
    output_field: str,
    range_min: float,
    range_max: float,
    bin_count: int | None = None,
) -> dict[str, HistogramResult]:
    """Histograms for every input (hinted order first) over a clamped output window.

    ``bin_count`` defaults to the user profile's ``bins`` setting.
    """
    if bin_count is None:
        bin_count = get_profile().bins
    low, high = clamp_range(store.output_ranges, output_field, range_min, range_max)
    return {
        name: build_histogram(store, name, output_field, low, high, bin_count)
        for name in order_inputs(store.input_keys)
    }


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------

def default_output(output_keys: Sequence[str]) -> str:
    """Prefer tensile strength as the starting metric, else the first output."""
    if PREFERRED_OUTPUT in output_keys:
        return PREFERRED_OUTPUT
    return output_keys[0] if output_keys else ""


def order_inputs(input_keys: Sequence[str]) -> list[str]:
    """Hinted ingredients first (in hint order), then the remaining inputs."""
    hinted = [k for k in INPUT_ORDER_HINTS if k in input_keys]
    return hinted + [k for k in input_keys if k not in hinted]


def clamp_range(
    ranges: Mapping[str, FieldRange],
    output_field: str,
    range_min: float,
    range_max: float,
) -> tuple[float, float]:
    """Clamp a user-entered window to the observed bounds of *output_field*.

    The returned window never has ``low > high``.  Unknown outputs clamp
    to ``(0, 0)``.
    """
    bounds = ranges.get(output_field)
    lo_bound = bounds.min if bounds is not None else 0.0
    hi_bound = bounds.max if bounds is not None else 0.0
    low = min(max(range_min, lo_bound), hi_bound)
    high = max(min(range_max, hi_bound), low)
    return low, high
