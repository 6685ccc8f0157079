# scripts/selection.py
# Selection state, the toggle rules, and the Explorer controller the web page talks to.

from dataclasses import dataclass, field
from typing import List

import settings
from derive import build_graph, candidate_feelings, candidate_needs, derive_needs, is_suppressed
from search import match_faux_feelings, normalize_query, rank_feelings


def _toggle(items, value):
    if value in items:
        items.remove(value)
    else:
        items.append(value)


@dataclass
class SelectionState:
    selected_faux_feelings: List[str] = field(default_factory=list)
    selected_feelings: List[str] = field(default_factory=list)
    selected_needs: List[str] = field(default_factory=list)
    unselected_matching_faux_feelings: List[str] = field(default_factory=list)
    query: str = ""

    def to_dict(self):
        return {
            "faux": list(self.selected_faux_feelings),
            "feelings": list(self.selected_feelings),
            "needs": list(self.selected_needs),
            "query": self.query,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            selected_faux_feelings=list(data.get("faux", [])),
            selected_feelings=list(data.get("feelings", [])),
            selected_needs=list(data.get("needs", [])),
            query=data.get("query", ""),
        )


class Explorer:
    """
    Owns the worksheet, the synonym resolver and one SelectionState.
    Toggles are the only mutators; every read derives its result from the state again.
    """

    def __init__(self, records, resolver=None, gating_mode=None, state=None):
        self.records = records
        self.resolver = resolver
        self.gating_mode = gating_mode or settings.GRAPH_GATING
        if self.gating_mode not in settings.GATING_MODES:
            raise ValueError(f"unknown graph gating mode {self.gating_mode!r}, expected one of {settings.GATING_MODES}")
        self.state = state or SelectionState()
        self._labels = {r["fauxFeeling"] for r in records}

    # --- search ---

    def search(self, query):
        """(ranked feelings, faux feelings matching the query); also refreshes the unselected matches."""
        s = self.state
        s.query = query or ""
        if not normalize_query(query):
            s.unselected_matching_faux_feelings = []
            return [], []
        ranked = [w for w, _ in rank_feelings(query, self.records, self.resolver, s.selected_faux_feelings)]
        matches = match_faux_feelings(self.records, query)
        s.unselected_matching_faux_feelings = [m for m in matches if m not in s.selected_faux_feelings]
        return ranked, matches

    def ranked_with_ranks(self, query):
        return rank_feelings(query, self.records, self.resolver, self.state.selected_faux_feelings)

    # --- toggles ---

    def toggle_faux_feeling(self, label):
        if label not in self._labels:
            return
        s = self.state
        if label in s.selected_faux_feelings:
            s.selected_faux_feelings.remove(label)
            q = normalize_query(s.query)
            if q and q in label.lower() and label not in s.unselected_matching_faux_feelings:
                s.unselected_matching_faux_feelings.append(label)
        else:
            s.selected_faux_feelings.append(label)
            if label in s.unselected_matching_faux_feelings:
                s.unselected_matching_faux_feelings.remove(label)
            low = label.lower()
            s.selected_feelings = [f for f in s.selected_feelings if f.lower() != low]

    def toggle_feeling(self, label):
        low = (label or "").lower()
        if not low or not self._is_known_feeling(low) or is_suppressed(low, self.state.selected_faux_feelings):
            return
        _toggle(self.state.selected_feelings, low)

    def toggle_need(self, label):
        if not label or not any(label in r["needs"] for r in self.records):
            return
        _toggle(self.state.selected_needs, label)

    def reset(self):
        query = self.state.query
        self.state = SelectionState(query=query)
        self.search(query)

    def _is_known_feeling(self, low):
        for r in self.records:
            if any(f.lower() == low for f in r["feelings"]):
                return True
        return bool(self.resolver) and self.resolver.canonical_of(low) is not None

    # --- derived views ---

    def get_selected_needs(self):
        return derive_needs(self.records, self.state.selected_faux_feelings)

    def get_graph(self):
        s = self.state
        return build_graph(self.records, s.selected_faux_feelings, s.selected_feelings,
                           s.selected_needs, gating_mode=self.gating_mode)

    def view_model(self):
        """Everything the page needs, rebuilt from state."""
        s = self.state
        ranked, matches = self.search(s.query)
        return {
            "query": s.query,
            "ranked_feelings": ranked,
            "matching_faux_feelings": matches,
            "selected_faux_feelings": list(s.selected_faux_feelings),
            "unselected_matching_faux_feelings": list(s.unselected_matching_faux_feelings),
            "selected_feelings": list(s.selected_feelings),
            "selected_needs": list(s.selected_needs),
            "needs": self.get_selected_needs(),
            "feeling_choices": candidate_feelings(self.records, s.selected_faux_feelings),
            "need_choices": candidate_needs(self.records, s.selected_faux_feelings),
            "graph": self.get_graph(),
            "gating_mode": self.gating_mode,
        }
