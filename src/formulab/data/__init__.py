"""Experiment records and dataset loading."""

from formulab.data.store import DatasetStore, Record, load_json, load_mapping

__all__ = ["DatasetStore", "Record", "load_json", "load_mapping"]
