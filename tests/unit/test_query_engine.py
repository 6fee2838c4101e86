# ============================================================================
# FILE: tests/unit/test_query_engine.py
# ============================================================================
"""
Unit tests for the query engine
"""

import pytest

from ordo_facile.core.corpus import build_corpus
from ordo_facile.core.enums import ViewMode
from ordo_facile.core.query_engine import QueryEngine, compute_results
from ordo_facile.core.view_state import ViewState


def titles(results):
    return [item.prescription.title for item in results]


def tag_ids(item):
    return [tag.id for tag in item.specialty_tags]


def find(results, prescription_id):
    matches = [item for item in results if item.prescription.id == prescription_id]
    assert len(matches) == 1, f"expected exactly one {prescription_id}, got {len(matches)}"
    return matches[0]


@pytest.fixture(params=["cached", "uncached"])
def any_engine(request, engine, uncached_engine):
    """Every behaviour must hold with and without memoization"""
    return engine if request.param == "cached" else uncached_engine


class TestDashboard:

    def test_dashboard_has_no_results(self, any_engine):
        assert any_engine.get_results(ViewState()) == ()


class TestUnknownMode:

    def test_unknown_mode_yields_empty(self, any_engine):
        assert any_engine.query(mode="inconnu") == ()
        assert any_engine.query(mode="inconnu", specialty_id="cardio") == ()

    def test_mode_given_as_string(self, any_engine):
        by_value = any_engine.query(mode="specialty", specialty_id="cardio")
        assert titles(by_value) == ["B-drug", "A-drug", "Antalgie simple"]

    def test_search_still_applies(self, any_engine):
        assert titles(any_engine.query(mode="inconnu", search_term="aspirine")) == ["Antalgie simple"]

    def test_unknown_mode_is_cached_once(self, engine):
        engine.query(mode="inconnu")
        engine.query(mode="autre")
        assert engine.cache_info()["misses"] == 1
        assert engine.cache_info()["hits"] == 1


class TestSpecialtyMode:

    def test_authored_order_is_kept(self, any_engine):
        state = ViewState(mode=ViewMode.SPECIALTY, selected_specialty_id="cardio")
        assert titles(any_engine.get_results(state)) == ["B-drug", "A-drug", "Antalgie simple"]

    def test_single_tag_is_the_specialty(self, any_engine):
        state = ViewState(mode=ViewMode.SPECIALTY, selected_specialty_id="cardio")
        for item in any_engine.get_results(state):
            assert tag_ids(item) == ["cardio"]
            assert item.specialty_tags[0].name == "Cardiologie"
            assert item.specialty_tags[0].color == "red"

    def test_unknown_specialty_yields_empty(self, any_engine):
        state = ViewState(mode=ViewMode.SPECIALTY, selected_specialty_id="inconnue")
        assert any_engine.get_results(state) == ()

    def test_missing_specialty_id_yields_empty(self, any_engine):
        assert any_engine.get_results(ViewState(mode=ViewMode.SPECIALTY)) == ()


class TestAlphabeticalMode:

    def test_every_prescription_once_in_collation_order(self, any_engine):
        results = any_engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL))
        assert titles(results) == [
            "A-drug",
            "Antalgie simple",
            "B-drug",
            "Cataracte",
            "Échardes",
            "Eczéma",
            "Zona",
        ]

    def test_shared_id_collapses_with_both_tags(self, any_engine):
        results = any_engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL))
        item = find(results, "antalgie-simple")
        assert tag_ids(item) == ["dermato", "cardio"]

    def test_selected_specialty_is_ignored(self, any_engine):
        state = ViewState(mode=ViewMode.ALPHABETICAL, selected_specialty_id="cardio")
        assert len(any_engine.get_results(state)) == 7


class TestSearchMode:

    def test_accent_insensitive(self, any_engine):
        results = any_engine.get_results(ViewState(search_term="medicament"))
        assert titles(results) == ["A-drug"]

    def test_accented_term_matches_unaccented_text(self, any_engine):
        results = any_engine.get_results(ViewState(search_term="sâchets"))
        assert titles(results) == ["B-drug"]

    def test_case_insensitive(self, any_engine):
        results = any_engine.get_results(ViewState(search_term="ASPIRINE"))
        assert titles(results) == ["Antalgie simple"]

    def test_matches_title(self, any_engine):
        assert titles(any_engine.get_results(ViewState(search_term="ECZEMA"))) == ["Eczéma"]

    def test_matches_subtitle(self, any_engine):
        assert titles(any_engine.get_results(ViewState(search_term="forme aigue"))) == ["Eczéma"]

    def test_matches_header_line(self, any_engine):
        assert titles(any_engine.get_results(ViewState(search_term="post operatoire"))) == ["Cataracte"]

    def test_matches_note_only_line(self, any_engine):
        results = any_engine.get_results(ViewState(search_term="antitetanique"))
        assert titles(results) == ["Échardes"]

    def test_footer_notes_are_not_searched(self, any_engine):
        assert any_engine.get_results(ViewState(search_term="visage")) == ()

    def test_no_match_is_empty(self, any_engine):
        assert any_engine.get_results(ViewState(search_term="introuvable")) == ()

    def test_search_overrides_every_mode(self, any_engine):
        expected = titles(any_engine.get_results(ViewState(search_term="zelitrex")))
        for mode in ViewMode:
            state = ViewState(mode=mode, selected_specialty_id="cardio", search_term="zelitrex")
            assert titles(any_engine.get_results(state)) == expected == ["Zona"]

    def test_dedup_and_tags(self, any_engine):
        results = any_engine.get_results(ViewState(search_term="aspirine"))
        assert len(results) == 1
        assert tag_ids(results[0]) == ["dermato", "cardio"]

    def test_results_are_sorted(self, any_engine):
        # "j" appears in nearly every line
        results = any_engine.get_results(ViewState(search_term="/j"))
        assert titles(results) == ["A-drug", "Antalgie simple", "B-drug", "Cataracte", "Eczéma", "Zona"]


class TestIndependentlyAuthoredDuplicates:
    """Same id defined separately under two specialties"""

    @pytest.fixture
    def twin_engine(self):
        corpus = build_corpus([
            {"id": "infectio", "name": "Infectiologie", "color": "yellow", "prescriptions": [
                {"id": "zona-ophtalmique", "title": "Zona ophtalmique", "lines": ["-ZELITREX 500mg"]},
            ]},
            {"id": "ophtalmo", "name": "Ophtalmologie", "color": "indigo", "prescriptions": [
                {"id": "zona-ophtalmique", "title": "Zona ophtalmique", "lines": ["-Consultation ophtalmo"]},
            ]},
        ])
        return QueryEngine(corpus, cache_size=0)

    def test_alphabetical_has_one_item_with_two_tags(self, twin_engine):
        results = twin_engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL))
        assert len(results) == 1
        assert tag_ids(results[0]) == ["infectio", "ophtalmo"]

    def test_search_tags_only_matching_specialties(self, twin_engine):
        results = twin_engine.get_results(ViewState(search_term="consultation"))
        assert len(results) == 1
        assert tag_ids(results[0]) == ["ophtalmo"]
        assert results[0].prescription.lines[0].text == "-Consultation ophtalmo"

    def test_title_match_tags_both(self, twin_engine):
        results = twin_engine.get_results(ViewState(search_term="zona"))
        assert tag_ids(results[0]) == ["infectio", "ophtalmo"]


class TestMemoization:

    def test_cache_hits_return_identical_results(self, engine):
        state = ViewState(search_term="aspirine")
        first = engine.get_results(state)
        second = engine.get_results(state)
        assert first == second
        assert engine.cache_info()["hits"] == 1
        assert engine.cache_info()["misses"] == 1

    def test_search_key_ignores_mode(self, engine):
        engine.get_results(ViewState(mode=ViewMode.DASHBOARD, search_term="zona"))
        engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL, search_term="zona"))
        assert engine.cache_info()["hits"] == 1

    def test_lru_eviction(self, corpus):
        small = QueryEngine(corpus, cache_size=2)
        small.query(search_term="a")
        small.query(search_term="b")
        small.query(search_term="c")
        assert small.cache_info()["size"] == 2

    def test_disabled_cache_stays_empty(self, uncached_engine):
        uncached_engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL))
        assert uncached_engine.cache_info() == {"hits": 0, "misses": 0, "size": 0, "max_size": 0}

    def test_clear_cache(self, engine):
        engine.get_results(ViewState(mode=ViewMode.ALPHABETICAL))
        engine.clear_cache()
        assert engine.cache_info()["size"] == 0

    def test_default_cache_size_comes_from_settings(self, corpus):
        from ordo_facile.config import search_settings
        assert QueryEngine(corpus).cache_size == search_settings.QUERY_CACHE_SIZE

    def test_default_construction_answers_queries(self, raw_definitions):
        engine = QueryEngine(build_corpus(raw_definitions))
        assert titles(engine.query(mode=ViewMode.ALPHABETICAL))[0] == "A-drug"


def test_compute_results_matches_engine(corpus, engine):
    for state in (
        ViewState(),
        ViewState(mode=ViewMode.ALPHABETICAL),
        ViewState(mode=ViewMode.SPECIALTY, selected_specialty_id="dermato"),
        ViewState(search_term="aspirine"),
    ):
        assert compute_results(corpus, state) == engine.get_results(state)
