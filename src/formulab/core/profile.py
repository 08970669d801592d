"""User profile and personal settings.

Reads settings from ``~/.formulab/profile.yaml`` with environment
variable overrides.  Creates the config directory and a commented
template on first use.

Precedence (highest to lowest):
  1. Environment variables  (``OPENAI_API_KEY``, ``FORMULAB_DATASET``, ``FORMULAB_BINS``)
  2. ``~/.formulab/profile.yaml``
  3. Built-in defaults

Usage:
    from formulab.core.profile import get_profile
    profile = get_profile()
    api_key = profile.api_key       # str or None
    bins = profile.bins             # int (default 6)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BINS = 6
MAX_BINS = 50


# ---------------------------------------------------------------------------
# Template written when ~/.formulab/profile.yaml doesn't exist yet
# ---------------------------------------------------------------------------

_TEMPLATE = """\
# formulab User Profile
# =====================
# Personal settings for the formulation explorer.
#
# SECURITY: Keep this file private. Never commit it to version control.

# OpenAI API key for the "ask the model" advisor.
# You can also set the OPENAI_API_KEY environment variable instead.
# Without a key the model-backed advisor is disabled; rule-based advice
# and histograms keep working.
# api_key: "sk-..."

# Path to a JSON experiment dataset ({id: {inputs: {...}, outputs: {...}}}).
# Leave unset to use the bundled sample dataset.
# dataset: "~/data/experiments.json"

defaults:
  bins: 6                 # histogram bins for the measurement-range view
"""


# ---------------------------------------------------------------------------
# Config directory helpers
# ---------------------------------------------------------------------------

def _config_dir() -> Path:
    """Return the path to ``~/.formulab/``, creating it if needed."""
    d = Path.home() / ".formulab"
    d.mkdir(parents=True, exist_ok=True)
    return d


def _config_path() -> Path:
    """Return the path to ``~/.formulab/profile.yaml``."""
    return _config_dir() / "profile.yaml"


def _ensure_template() -> Path:
    """Create a template profile.yaml if one does not exist yet."""
    path = _config_path()
    if not path.exists():
        path.write_text(_TEMPLATE, encoding="utf-8")
    return path


def _valid_bins(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_BINS


# ---------------------------------------------------------------------------
# UserProfile dataclass
# ---------------------------------------------------------------------------

@dataclass
class UserProfile:
    """Resolved user settings (env vars + profile.yaml + defaults)."""

    api_key: str | None = None
    dataset: Path | None = None
    bins: int = DEFAULT_BINS
    _raw: dict = field(default_factory=dict, repr=False)

    @property
    def llm_enabled(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def load(path: Path | str | None = None) -> "UserProfile":
        """Load a profile from *path* (default ``~/.formulab/profile.yaml``).

        Missing files or parse errors produce a profile with defaults.
        Environment variables always take precedence over the file.
        """
        raw: dict[str, Any] = {}

        # --- Read YAML ------------------------------------------------
        if path is None:
            path = _ensure_template()
        else:
            path = Path(path)

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
                if isinstance(loaded, dict):
                    raw = loaded
            except (yaml.YAMLError, UnicodeDecodeError, OSError):
                logger.warning("Ignoring malformed profile %s", path, exc_info=True)

        # --- Resolve values -------------------------------------------
        defaults = raw.get("defaults", {}) or {}
        if not isinstance(defaults, dict):
            defaults = {}

        # API key: env > profile > None
        api_key = os.environ.get("OPENAI_API_KEY", "").strip() or None
        if api_key is None:
            file_key = raw.get("api_key")
            if isinstance(file_key, str) and file_key.strip():
                api_key = file_key.strip()

        # Dataset: env > profile > None (bundled)
        dataset: Path | None = None
        env_ds = os.environ.get("FORMULAB_DATASET", "").strip()
        file_ds = raw.get("dataset")
        if env_ds:
            dataset = Path(env_ds).expanduser()
        elif isinstance(file_ds, str) and file_ds.strip():
            dataset = Path(file_ds.strip()).expanduser()

        # Bins: env > profile > 6
        bins = DEFAULT_BINS
        env_bins = os.environ.get("FORMULAB_BINS", "").strip()
        if env_bins.isdigit() and _valid_bins(int(env_bins)):
            bins = int(env_bins)
        elif _valid_bins(defaults.get("bins")):
            bins = defaults["bins"]

        return UserProfile(
            api_key=api_key,
            dataset=dataset,
            bins=bins,
            _raw=raw,
        )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_profile: UserProfile | None = None


def get_profile(*, reload: bool = False) -> UserProfile:
    """Return the cached ``UserProfile``, loading it on first call.

    Pass ``reload=True`` to force re-reading the file (e.g., after
    the user edits their profile).
    """
    global _profile
    if _profile is None or reload:
        _profile = UserProfile.load()
    return _profile


def get_api_key() -> str | None:
    """Convenience shortcut: return the resolved API key or ``None``."""
    return get_profile().api_key
