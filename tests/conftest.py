"""
Shared fixtures: a tiny worksheet and synonym table, both in memory and on disk.
"""

import json

import pytest

from synonyms import SynonymResolver

RECORDS = [
    {"fauxFeeling": "Overwhelmed", "feelings": ["anxious", "stressed", "overwhelmed"], "needs": ["rest", "support"]},
    {"fauxFeeling": "Numb", "feelings": ["empty"], "needs": ["rest"]},
    {"fauxFeeling": "Rejected", "feelings": ["hurt", "anxious"], "needs": ["belonging", "acceptance"]},
    {"fauxFeeling": "Unheard", "feelings": ["frustrated"], "needs": ["understanding"]},
]

SYNONYMS = {
    "anxious": ["worried", "nervous"],
    "hurt": ["wounded"],
    "frustrated": ["irritated"],
}


@pytest.fixture
def records():
    return [dict(r, feelings=list(r["feelings"]), needs=list(r["needs"])) for r in RECORDS]


@pytest.fixture
def resolver():
    return SynonymResolver(SYNONYMS)


@pytest.fixture
def data_files(tmp_path, monkeypatch):
    """Write the fixtures to disk and point settings at them."""
    import settings

    data = tmp_path / "worksheet.json"
    syn = tmp_path / "synonyms.json"
    cats = tmp_path / "categories.json"
    data.write_text(json.dumps(RECORDS), encoding="utf-8")
    syn.write_text(json.dumps(SYNONYMS), encoding="utf-8")
    cats.write_text(json.dumps([
        {"id": "fear", "label": "Fear", "description": "Feeling unsafe.", "color": "#fefcbf", "feelings": ["anxious"]},
    ]), encoding="utf-8")
    monkeypatch.setattr(settings, "DATA_PATH", data)
    monkeypatch.setattr(settings, "SYNONYMS_PATH", syn)
    monkeypatch.setattr(settings, "CATEGORIES_PATH", cats)
    return {"data": data, "synonyms": syn, "categories": cats}
