"""Tests for explore/scatter.py."""

import math

from formulab.data.store import load_mapping
from formulab.explore.scatter import default_axes, scatter_points


def test_default_axes_prefers_known_fields():
    keys = ["Polymer 1", "Silica Filler 1", "Tensile Strength"]
    assert default_axes(keys) == ("Silica Filler 1", "Tensile Strength")


def test_default_axes_falls_back_to_first_key():
    assert default_axes(["a", "b"]) == ("a", "a")
    assert default_axes([]) == ("", "")


def test_scatter_points(store):
    df = scatter_points(store, "Co-Agent 1", "Tensile Strength")
    assert list(df.columns) == ["id", "x", "y"]
    assert list(df["id"]) == ["A", "B", "C"]
    assert list(df["y"]) == [10.0, 20.0, 30.0]


def test_scatter_drops_missing_and_non_finite():
    s = load_mapping({
        "ok": {"inputs": {"x": 1}, "outputs": {"y": 2}},
        "nan": {"inputs": {"x": math.nan}, "outputs": {"y": 2}},
        "missing": {"inputs": {}, "outputs": {"y": 3}},
    })
    df = scatter_points(s, "x", "y")
    assert list(df["id"]) == ["ok"]


def test_scatter_without_keys(store):
    assert scatter_points(store, "", "Tensile Strength").empty
