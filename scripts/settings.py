# scripts/settings.py
# Paths and switches for the explorer. Everything can be overridden from the environment.

import os
import sys
import pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
DATA_DIR = ROOT / "data"

GATING_FAUX_ONLY = "faux-only"
GATING_ALL_DIMENSIONS = "all-dimensions"
GATING_MODES = (GATING_FAUX_ONLY, GATING_ALL_DIMENSIONS)


def _flag(name, default):
    raw = os.environ.get(name, "")
    if not raw:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


_PARSE_ERRORS = []

def _int(name, default):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _PARSE_ERRORS.append(f"{name} must be a whole number, got {raw!r}")
        return default


# Data files
DATA_PATH = pathlib.Path(os.environ.get("FEELINGS_DATA") or DATA_DIR / "faux-feelings-worksheet.json")
SYNONYMS_PATH = pathlib.Path(os.environ.get("FEELINGS_SYNONYMS") or DATA_DIR / "synonyms.json")
CATEGORIES_PATH = pathlib.Path(os.environ.get("FEELINGS_CATEGORIES") or DATA_DIR / "categories.json")
EMB_NPY = DATA_DIR / "feelings_embeds.npy"
IDX_JSON = DATA_DIR / "feelings_index.json"

# Behaviour
GRAPH_GATING = os.environ.get("FEELINGS_GRAPH_GATING") or GATING_FAUX_ONLY
STRICT_SYNONYMS = _flag("FEELINGS_STRICT_SYNONYMS", True)
SUGGEST = _flag("FEELINGS_SUGGEST", True)
SUGGEST_K = _int("FEELINGS_SUGGEST_K", 5)

# Flask
HOST = os.environ.get("FEELINGS_HOST") or "127.0.0.1"
PORT = _int("FEELINGS_PORT", 7860)
SECRET_KEY = os.environ.get("FEELINGS_SECRET_KEY") or "dev-only-change-me"


def check_settings():
    """Return a list of readable problems; empty when the settings are usable."""
    errors = list(_PARSE_ERRORS)
    if GRAPH_GATING not in GATING_MODES:
        errors.append(f"FEELINGS_GRAPH_GATING must be one of {', '.join(GATING_MODES)}, got {GRAPH_GATING!r}")
    if SUGGEST_K < 1:
        errors.append(f"FEELINGS_SUGGEST_K must be positive, got {SUGGEST_K}")
    if not (0 < PORT < 65536):
        errors.append(f"FEELINGS_PORT out of range: {PORT}")
    return errors


def validate_settings():
    """
    Check settings at startup and exit with a readable list of problems.
    """
    errors = check_settings()
    if errors:
        print("SETTINGS VALIDATION FAILED:", file=sys.stderr)
        for i, error in enumerate(errors, 1):
            print(f"  [{i}] {error}", file=sys.stderr)
        sys.exit(1)
