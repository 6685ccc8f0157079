# scripts/feelings_data.py
# Loaders for the worksheet (faux feeling -> feelings -> needs), the synonym table and categories.

import json, logging, pathlib

import settings

log = logging.getLogger(__name__)


class DatasetLoadError(Exception):
    """The primary worksheet could not be read or has the wrong shape."""


def _read_json(path):
    path = pathlib.Path(path)
    return json.loads(path.read_text(encoding="utf-8"))


def _str_list(value):
    # absent or null lists read as empty
    if not value:
        return []
    return [str(v) for v in value if str(v).strip()]


def load_records(path=None):
    """
    Read the worksheet and normalise every entry to
    {"fauxFeeling": str, "feelings": [str], "needs": [str]}.
    Duplicate faux-feeling labels keep their first entry.
    """
    path = pathlib.Path(path or settings.DATA_PATH)
    try:
        raw = _read_json(path)
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Missing worksheet: {path}") from e
    except (OSError, ValueError) as e:
        raise DatasetLoadError(f"Could not read {path}: {e}") from e

    if not isinstance(raw, list):
        raise DatasetLoadError(f"{path} must hold a JSON list of records")

    records, seen = [], set()
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("fauxFeeling"):
            raise DatasetLoadError(f"{path}: record {i} has no fauxFeeling")
        label = str(item["fauxFeeling"])
        if label in seen:
            log.warning("duplicate faux feeling %r in %s, keeping the first", label, path)
            continue
        for field in ("feelings", "needs"):
            if item.get(field) is not None and not isinstance(item[field], list):
                raise DatasetLoadError(f"{path}: record {i} ({label}) has {field} that is not a list")
        seen.add(label)
        records.append({
            "fauxFeeling": label,
            "feelings": _str_list(item.get("feelings")),
            "needs": _str_list(item.get("needs")),
        })
    return records


def load_synonym_table(path=None):
    """
    Read {canonical: [synonyms]}. Keys and values are lowercased.
    A missing or unreadable file gives an empty table; search then skips expansion.
    """
    path = pathlib.Path(path or settings.SYNONYMS_PATH)
    try:
        raw = _read_json(path)
    except FileNotFoundError:
        log.warning("no synonym table at %s, synonym expansion disabled", path)
        return {}
    except (OSError, ValueError) as e:
        log.warning("could not read synonym table %s (%s), synonym expansion disabled", path, e)
        return {}
    if not isinstance(raw, dict):
        log.warning("synonym table %s is not an object, synonym expansion disabled", path)
        return {}

    table = {}
    for canonical, syns in raw.items():
        key = str(canonical).strip().lower()
        if not key:
            continue
        if syns is not None and not isinstance(syns, list):
            log.warning("synonyms for %r in %s are not a list, skipping that entry", key, path)
            continue
        table[key] = [s.strip().lower() for s in _str_list(syns)]
    return table


def load_categories(path=None):
    """Optional browse-by-category entries; [] when the file is absent or malformed."""
    path = pathlib.Path(path or settings.CATEGORIES_PATH)
    try:
        raw = _read_json(path)
    except FileNotFoundError:
        return []
    except (OSError, ValueError) as e:
        log.warning("could not read categories %s: %s", path, e)
        return []
    if not isinstance(raw, list):
        return []

    out = []
    for item in raw:
        if not isinstance(item, dict) or "id" not in item:
            continue
        if item.get("feelings") is not None and not isinstance(item["feelings"], list):
            log.warning("category %r in %s lists feelings that are not a list, skipping it", item["id"], path)
            continue
        out.append({
            "id": str(item["id"]),
            "label": item.get("label") or str(item["id"]),
            "description": item.get("description", ""),
            "color": item.get("color", "#cbd5e0"),
            "feelings": _str_list(item.get("feelings")),
        })
    return out


def find_record(records, label):
    """Exact-label lookup; None when the label is not in the worksheet."""
    for r in records:
        if r["fauxFeeling"] == label:
            return r
    return None
