"""Bundled datasets for formulab."""

from __future__ import annotations

import logging
from pathlib import Path

from formulab.core.profile import UserProfile, get_profile
from formulab.data.store import DatasetStore, load_json

logger = logging.getLogger(__name__)

_DATASETS_DIR = Path(__file__).parent

_DATASET_INFO: dict[str, dict] = {
    "elastomer": {
        "description": "Elastomer formulation trials — 8 runs with ingredient loadings (phr), "
                       "oven temperature and measured performance",
        "source": "formulab synthetic",
        "files": ["experiments.json"],
    },
}


def list_datasets() -> list[str]:
    """List all bundled dataset names."""
    return sorted(_DATASET_INFO)


def load_dataset(name: str = "elastomer") -> DatasetStore:
    """Load a bundled dataset by name."""
    if name not in _DATASET_INFO:
        available = ", ".join(list_datasets())
        raise ValueError(f"Unknown dataset '{name}'. Available: {available}")

    path = _DATASETS_DIR / name / _DATASET_INFO[name]["files"][0]
    store = load_json(path)
    logger.debug("Loaded bundled dataset %r: %r", name, store)
    return store


def load_configured(profile: UserProfile | None = None) -> DatasetStore:
    """Load the dataset named in the user profile, or the bundled sample."""
    profile = profile if profile is not None else get_profile()
    if profile.dataset is not None:
        return load_json(profile.dataset)
    return load_dataset()


def get_dataset_info(name: str) -> dict:
    """Get metadata about a bundled dataset, with record and field counts."""
    if name not in _DATASET_INFO:
        raise ValueError(f"Unknown dataset: {name}")

    info = _DATASET_INFO[name].copy()
    store = load_dataset(name)
    info["records"] = len(store)
    info["inputs"] = list(store.input_keys)
    info["outputs"] = list(store.output_keys)
    return info
