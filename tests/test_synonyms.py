"""
Tests for synonyms.py: canonical lookup, expansion and the uniqueness check.
"""

import pytest

from synonyms import SynonymConflictError, SynonymResolver, find_conflicts


class TestCanonicalOf:

    def test_canonical_key_maps_to_itself(self, resolver):
        assert resolver.canonical_of("anxious") == "anxious"

    def test_synonym_maps_to_canonical(self, resolver):
        assert resolver.canonical_of("worried") == "anxious"

    def test_lookup_ignores_case(self, resolver):
        assert resolver.canonical_of("NeRvOuS") == "anxious"

    def test_unknown_word(self, resolver):
        assert resolver.canonical_of("calm") is None
        assert resolver.canonical_of("") is None


class TestSynonymsOf:

    def test_group_is_canonical_plus_synonyms(self, resolver):
        assert resolver.synonyms_of("Worried") == {"anxious", "worried", "nervous"}

    def test_unknown_word_kept_as_given(self, resolver):
        assert resolver.synonyms_of("Calm") == {"Calm"}

    def test_expansion_order_is_canonical_then_table_order(self, resolver):
        assert resolver.expansion_of("nervous") == ["anxious", "worried", "nervous"]

    def test_empty_table_expands_to_word_only(self):
        r = SynonymResolver({})
        assert not r
        assert r.synonyms_of("anxious") == {"anxious"}


class TestUniqueness:

    TABLE = {"anxious": ["worried"], "scared": ["worried", "afraid"]}

    def test_find_conflicts(self):
        assert find_conflicts(self.TABLE) == {"worried": ["anxious", "scared"]}

    def test_no_conflicts(self, resolver):
        assert find_conflicts(resolver.table) == {}

    def test_strict_mode_raises(self):
        with pytest.raises(SynonymConflictError) as exc:
            SynonymResolver(self.TABLE, strict=True)
        assert "worried" in exc.value.conflicts

    def test_lenient_mode_first_entry_wins(self):
        r = SynonymResolver(self.TABLE, strict=False)
        assert r.canonical_of("worried") == "anxious"
        assert r.canonical_of("afraid") == "scared"

    def test_canonical_listed_as_synonym_elsewhere_is_a_conflict(self):
        assert "scared" in find_conflicts({"scared": ["afraid"], "fear": ["scared"]})


def test_all_words_in_table_order(resolver):
    assert resolver.all_words() == ["anxious", "worried", "nervous", "hurt", "wounded", "frustrated", "irritated"]


def test_table_is_lowercased():
    r = SynonymResolver({"Anxious": ["Worried"]})
    assert r.table == {"anxious": ["worried"]}
