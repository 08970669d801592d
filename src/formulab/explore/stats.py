"""Field statistics — mean/min/max, median summaries, output range table."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

import numpy as np
import pandas as pd

from formulab.core import as_finite
from formulab.core.fields import FieldKind

if TYPE_CHECKING:
    from formulab.data.store import DatasetStore, Record


@dataclass(frozen=True)
class FieldStats:
    """Mean, minimum and maximum of one field over one record subset."""
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class FieldRange:
    """Observed bounds of one output field."""
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class FieldSummary:
    """Count, mean, median, min and max of the valid values of a field."""
    count: int
    mean: float
    median: float
    min: float
    max: float


EMPTY_STATS = FieldStats()


def _finite(values: Iterable[object]) -> np.ndarray:
    """Drop missing, non-numeric and non-finite entries."""
    kept = [v for v in (as_finite(x) for x in values) if v is not None]
    return np.asarray(kept, dtype=float)


def compute_stats(values: Iterable[object]) -> FieldStats:
    """Mean, min and max of the finite values; ``{0, 0, 0}`` when there are none."""
    valid = _finite(values)
    if valid.size == 0:
        return EMPTY_STATS
    lo, hi = float(valid.min()), float(valid.max())
    # Summation rounding can push the mean of equal values past the bounds.
    mean = min(max(float(valid.mean()), lo), hi)
    return FieldStats(mean=mean, min=lo, max=hi)


def _project(records: Iterable[Record], field: str, kind: FieldKind) -> list[object]:
    return [rec.fields(kind).get(field) for rec in records]


def stats_for_field(records: Iterable[Record], field: str, kind: FieldKind | str) -> FieldStats:
    """Compute ``FieldStats`` for *field* read from the inputs or outputs of each record."""
    return compute_stats(_project(records, field, FieldKind(kind)))


def summarize_values(values: Iterable[object]) -> FieldSummary | None:
    """Summarize the finite values, or ``None`` if there are none.

    The median is the element at ``n // 2`` of the sorted values, so for an
    even count it is the upper of the two middle values.
    """
    valid = np.sort(_finite(values))
    if valid.size == 0:
        return None
    return FieldSummary(
        count=int(valid.size),
        mean=float(valid.mean()),
        median=float(valid[valid.size // 2]),
        min=float(valid[0]),
        max=float(valid[-1]),
    )


def compute_output_ranges(
    records: Iterable[Record], output_keys: Iterable[str],
) -> Mapping[str, FieldRange]:
    """Build the read-only ``{output: (min, max)}`` table used by the histogram view.

    Outputs without any valid value map to ``(0, 0)``.
    """
    records = tuple(records)
    table: dict[str, FieldRange] = {}
    for key in output_keys:
        valid = _finite(_project(records, key, FieldKind.OUTPUT))
        if valid.size == 0:
            table[key] = FieldRange()
        else:
            table[key] = FieldRange(min=float(valid.min()), max=float(valid.max()))
    return MappingProxyType(table)


def describe_dataset(store: DatasetStore) -> pd.DataFrame:
    """One row per registered field with count, mean, median, min and max."""
    rows = []
    for kind in (FieldKind.INPUT, FieldKind.OUTPUT):
        for name in store.registry.names(kind):
            summary = summarize_values(_project(store.records, name, kind))
            row = {"field": name, "kind": kind.value, "count": 0}
            if summary is not None:
                row.update(
                    count=summary.count, mean=summary.mean, median=summary.median,
                    min=summary.min, max=summary.max,
                )
            rows.append(row)
    return pd.DataFrame(rows, columns=["field", "kind", "count", "mean", "median", "min", "max"])
