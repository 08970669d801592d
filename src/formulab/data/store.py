"""Experiment records and the in-memory dataset store."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import pandas as pd

from formulab.core.fields import FieldKind, FieldRegistry
from formulab.explore.stats import compute_output_ranges

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """One experiment: named numeric inputs and measured outputs."""
    id: str
    inputs: Mapping[str, float] = field(default_factory=dict)
    outputs: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only views so a record cannot be edited after load.
        object.__setattr__(self, "inputs", MappingProxyType(dict(self.inputs)))
        object.__setattr__(self, "outputs", MappingProxyType(dict(self.outputs)))

    def fields(self, kind: FieldKind) -> Mapping[str, float]:
        return self.inputs if kind is FieldKind.INPUT else self.outputs


class DatasetStore:
    """Holds the normalized records and the field names derived from them.

    The store is a plain data holder.  The only derived values are the key
    lists, the field registry and the per-output ``{min, max}`` table, all
    computed once here and read-only afterwards.
    """

    def __init__(self, records: list[Record] | tuple[Record, ...] = ()) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._by_id: dict[str, Record] = {r.id: r for r in self._records}

        # Key lists come from the first record only.
        first = self._records[0] if self._records else None
        self.input_keys: tuple[str, ...] = tuple(first.inputs) if first else ()
        self.output_keys: tuple[str, ...] = tuple(first.outputs) if first else ()
        self.all_keys: tuple[str, ...] = tuple(dict.fromkeys(self.input_keys + self.output_keys))

        inputs: dict[str, None] = {}
        outputs: dict[str, None] = {}
        for rec in self._records:
            inputs.update(dict.fromkeys(rec.inputs))
            outputs.update(dict.fromkeys(rec.outputs))
        self.registry = FieldRegistry(inputs, outputs)

        self.output_ranges = compute_output_ranges(self._records, self.output_keys)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def get(self, record_id: str) -> Record | None:
        return self._by_id.get(record_id)

    def __getitem__(self, record_id: str) -> Record:
        return self._by_id[record_id]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        return (
            f"DatasetStore({len(self._records)} records, "
            f"{len(self.input_keys)} inputs, {len(self.output_keys)} outputs)"
        )

    @staticmethod
    def value(record: Record, key: str) -> float:
        """Look *key* up in inputs, then outputs; ``nan`` when absent."""
        if key in record.inputs:
            return record.inputs[key]
        if key in record.outputs:
            return record.outputs[key]
        return math.nan

    def to_frame(self) -> pd.DataFrame:
        """Flatten the records into a DataFrame: an ``id`` column plus one column per field."""
        columns = ["id", *self.registry]
        rows = [
            {"id": rec.id, **dict(rec.outputs), **dict(rec.inputs)}
            for rec in self._records
        ]
        return pd.DataFrame(rows, columns=columns)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _field_mapping(value: Any) -> dict[str, Any]:
    """Keep a raw ``inputs``/``outputs`` entry only if it is a mapping."""
    if not isinstance(value, Mapping):
        return {}
    return {str(k): v for k, v in value.items()}


def load_mapping(raw: Mapping[str, Any] | None) -> DatasetStore:
    """Build a store from ``{id: {"inputs": {...}, "outputs": {...}}}``.

    Missing or malformed ``inputs``/``outputs`` default to empty mappings.
    """
    records: list[Record] = []
    for record_id, value in (raw or {}).items():
        if not isinstance(value, Mapping):
            logger.warning("Record %r is not a mapping; loading it with no fields", record_id)
            value = {}
        records.append(
            Record(
                id=str(record_id),
                inputs=_field_mapping(value.get("inputs")),
                outputs=_field_mapping(value.get("outputs")),
            )
        )
    store = DatasetStore(records)
    logger.debug("Loaded %r", store)
    return store


def load_json(path: str | Path) -> DatasetStore:
    """Load a dataset mapping from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Dataset file must contain a JSON object keyed by record id: {path}")
    return load_mapping(raw)
