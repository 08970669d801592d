"""Shared test fixtures for formulab."""

import pytest

from formulab.data.store import load_mapping


@pytest.fixture(autouse=True)
def isolated_profile(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.formulab and environment."""
    import formulab.core.profile as profile_mod

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("FORMULAB_DATASET", raising=False)
    monkeypatch.delenv("FORMULAB_BINS", raising=False)
    monkeypatch.setattr(profile_mod, "_profile", None)


@pytest.fixture
def raw_experiments():
    """Small formulation dataset in the ingestion mapping format."""
    return {
        "A": {
            "inputs": {"Co-Agent 1": 1.0, "Co-Agent 2": 1.0, "Carbon Black High Grade": 20.0,
                       "Oven Temperature": 300.0},
            "outputs": {"Cure Time": 8.0, "Compression Set": 20.0, "Elongation": 400.0,
                        "Tensile Strength": 10.0},
        },
        "B": {
            "inputs": {"Co-Agent 1": 1.0, "Co-Agent 2": 1.0, "Carbon Black High Grade": 20.0,
                       "Oven Temperature": 300.0},
            "outputs": {"Cure Time": 8.0, "Compression Set": 30.0, "Elongation": 400.0,
                        "Tensile Strength": 20.0},
        },
        "C": {
            "inputs": {"Co-Agent 1": 4.0, "Co-Agent 2": 4.0, "Carbon Black High Grade": 50.0,
                       "Oven Temperature": 450.0},
            "outputs": {"Cure Time": 14.0, "Compression Set": 25.0, "Elongation": 700.0,
                        "Tensile Strength": 30.0},
        },
    }


@pytest.fixture
def store(raw_experiments):
    return load_mapping(raw_experiments)
