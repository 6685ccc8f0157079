"""
Tests for selection.py: the toggle protocol and the Explorer controller.
"""

import pytest

from selection import Explorer, SelectionState
from settings import GATING_ALL_DIMENSIONS


@pytest.fixture
def explorer(records, resolver):
    return Explorer(records, resolver, gating_mode="faux-only")


class TestToggleFaux:

    def test_on_moves_out_of_unselected_matches(self, explorer):
        explorer.search("um")
        assert explorer.state.unselected_matching_faux_feelings == ["Numb"]
        explorer.toggle_faux_feeling("Numb")
        assert explorer.state.selected_faux_feelings == ["Numb"]
        assert explorer.state.unselected_matching_faux_feelings == []

    def test_off_returns_to_matches_when_query_still_matches(self, explorer):
        explorer.search("numb")
        explorer.toggle_faux_feeling("Numb")
        explorer.toggle_faux_feeling("Numb")
        assert explorer.state.selected_faux_feelings == []
        assert explorer.state.unselected_matching_faux_feelings == ["Numb"]

    def test_off_with_other_query_stays_hidden(self, explorer):
        explorer.search("numb")
        explorer.toggle_faux_feeling("Numb")
        explorer.search("rej")
        explorer.toggle_faux_feeling("Numb")
        assert explorer.state.unselected_matching_faux_feelings == ["Rejected"]

    def test_on_drops_promoted_feeling(self, explorer):
        explorer.toggle_feeling("overwhelmed")
        explorer.toggle_feeling("anxious")
        explorer.toggle_faux_feeling("Overwhelmed")
        assert explorer.state.selected_feelings == ["anxious"]

    def test_double_toggle_restores_state(self, explorer):
        explorer.toggle_faux_feeling("Rejected")
        explorer.toggle_feeling("hurt")
        explorer.toggle_need("rest")
        before = explorer.state.to_dict()
        explorer.toggle_faux_feeling("Numb")
        explorer.toggle_faux_feeling("Numb")
        assert explorer.state.to_dict() == before

    def test_unknown_label_is_noop(self, explorer):
        explorer.toggle_faux_feeling("numb")
        explorer.toggle_faux_feeling("Nope")
        assert explorer.state.selected_faux_feelings == []


class TestToggleFeelingAndNeed:

    def test_presence_toggle(self, explorer):
        explorer.toggle_feeling("Anxious")
        assert explorer.state.selected_feelings == ["anxious"]
        explorer.toggle_feeling("anxious")
        assert explorer.state.selected_feelings == []

    def test_synonym_word_is_a_known_feeling(self, explorer):
        explorer.toggle_feeling("worried")
        assert explorer.state.selected_feelings == ["worried"]

    def test_promoted_feeling_cannot_be_selected(self, explorer):
        explorer.toggle_faux_feeling("Overwhelmed")
        explorer.toggle_feeling("overwhelmed")
        assert explorer.state.selected_feelings == []

    def test_need_toggle(self, explorer):
        explorer.toggle_need("rest")
        explorer.toggle_need("unknown need")
        assert explorer.state.selected_needs == ["rest"]
        explorer.toggle_need("rest")
        assert explorer.state.selected_needs == []


class TestDerivedViews:

    def test_numb_scenario(self):
        explorer = Explorer([{"fauxFeeling": "Numb", "feelings": ["empty"], "needs": ["rest"]}])
        assert explorer.search("num") == ([], ["Numb"])
        explorer.toggle_faux_feeling("Numb")
        assert explorer.get_selected_needs() == ["rest"]

    def test_search_suppresses_selected_faux(self, explorer):
        explorer.toggle_faux_feeling("Overwhelmed")
        ranked, matches = explorer.search("over")
        assert "overwhelmed" not in ranked
        assert matches == ["Overwhelmed"]

    def test_empty_query_ignores_selection(self, explorer):
        explorer.toggle_faux_feeling("Numb")
        assert explorer.search("") == ([], [])

    def test_graph_one_chain(self):
        explorer = Explorer([{"fauxFeeling": "Numb", "feelings": ["empty"], "needs": ["rest"]}], gating_mode="faux-only")
        explorer.toggle_faux_feeling("Numb")
        g = explorer.get_graph()
        assert len(g["nodes"]) == 3
        assert [l["value"] for l in g["links"]] == [1, 1]

    def test_all_dimensions_gating(self, records, resolver):
        explorer = Explorer(records, resolver, gating_mode=GATING_ALL_DIMENSIONS)
        explorer.toggle_faux_feeling("Numb")
        assert explorer.get_graph()["nodes"] == []
        explorer.toggle_feeling("empty")
        explorer.toggle_need("rest")
        assert len(explorer.get_graph()["nodes"]) == 3

    def test_view_model(self, explorer):
        explorer.state.query = "rej"
        explorer.toggle_faux_feeling("Rejected")
        vm = explorer.view_model()
        assert vm["selected_faux_feelings"] == ["Rejected"]
        assert vm["unselected_matching_faux_feelings"] == []
        assert vm["needs"] == ["belonging", "acceptance"]
        assert vm["feeling_choices"] == ["hurt", "anxious"]
        assert vm["graph"]["nodes"]

    def test_reset_keeps_query(self, explorer):
        explorer.search("numb")
        explorer.toggle_faux_feeling("Numb")
        explorer.reset()
        assert explorer.state.selected_faux_feelings == []
        assert explorer.state.unselected_matching_faux_feelings == ["Numb"]
        assert explorer.state.query == "numb"


def test_unknown_gating_mode_rejected(records):
    with pytest.raises(ValueError):
        Explorer(records, gating_mode="sometimes")


def test_state_round_trips_through_dict():
    s = SelectionState(["Numb"], ["empty"], ["rest"], ["Used"], "u")
    restored = SelectionState.from_dict(s.to_dict())
    assert restored.selected_faux_feelings == ["Numb"]
    assert restored.selected_needs == ["rest"]
    assert restored.query == "u"
    # transient matches are recomputed, not stored
    assert restored.unselected_matching_faux_feelings == []


def test_from_dict_handles_missing_session():
    assert SelectionState.from_dict(None) == SelectionState()
