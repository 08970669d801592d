"""Scatter explorer data — pair any two fields across all records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import pandas as pd

from formulab.core import as_finite

if TYPE_CHECKING:
    from formulab.data.store import DatasetStore

PREFERRED_X = "Silica Filler 1"
PREFERRED_Y = "Tensile Strength"


def default_axes(all_keys: Sequence[str]) -> tuple[str, str]:
    """Pick the initial (x, y) fields, preferring filler vs. tensile strength."""
    fallback = all_keys[0] if all_keys else ""
    x = PREFERRED_X if PREFERRED_X in all_keys else fallback
    y = PREFERRED_Y if PREFERRED_Y in all_keys else fallback
    return x, y


def scatter_points(store: DatasetStore, x_key: str, y_key: str) -> pd.DataFrame:
    """Return ``id, x, y`` rows for every record where both values are finite."""
    rows = []
    if x_key and y_key:
        for rec in store:
            x = as_finite(store.value(rec, x_key))
            y = as_finite(store.value(rec, y_key))
            if x is not None and y is not None:
                rows.append({"id": rec.id, "x": x, "y": y})
    return pd.DataFrame(rows, columns=["id", "x", "y"])
