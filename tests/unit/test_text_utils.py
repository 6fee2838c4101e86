# ============================================================================
# FILE: tests/unit/test_text_utils.py
# ============================================================================
"""
Unit tests for text folding and French collation
"""

import pytest

from ordo_facile.utils.text import collation_key, fold_text


@pytest.mark.parametrize("raw,expected", [
    ("Médicament", "medicament"),
    ("ASPIRINE", "aspirine"),
    ("Gastro-Hépato-Entérologie", "gastro-hepato-enterologie"),
    ("Œil rouge", "oeil rouge"),
    ("Nitrofurantoïne", "nitrofurantoine"),
    ("d’irritation", "d'irritation"),
    ("", ""),
])
def test_fold_text(raw, expected):
    assert fold_text(raw) == expected


def test_accented_title_sorts_with_unaccented_neighbours():
    titles = ["Zona", "Eczéma", "Échardes", "Acné"]
    assert sorted(titles, key=collation_key) == ["Acné", "Échardes", "Eczéma", "Zona"]


def test_unaccented_before_accented_when_letters_equal():
    assert sorted(["École", "Ecole"], key=collation_key) == ["Ecole", "École"]


def test_lowercase_before_uppercase_when_letters_equal():
    assert sorted(["Zona", "zona"], key=collation_key) == ["zona", "Zona"]


def test_case_does_not_beat_letters():
    # Byte order would put every uppercase title first
    assert sorted(["angor", "Zona", "Bronchite"], key=collation_key) == ["angor", "Bronchite", "Zona"]


def test_colon_sorts_before_parenthesis():
    titles = [
        "Asthme (Épisode modéré à sévère)",
        "Asthme : Traitement de Fond",
        "Asthme : Crise Modérée à Sévère",
        "Asthme : Crise Légère",
        "Traitement de fond Asthme",
    ]
    assert sorted(titles, key=collation_key) == [
        "Asthme : Crise Légère",
        "Asthme : Crise Modérée à Sévère",
        "Asthme : Traitement de Fond",
        "Asthme (Épisode modéré à sévère)",
        "Traitement de fond Asthme",
    ]


def test_shorter_prefix_sorts_first():
    assert sorted(["Angor stable: BASIC", "Angor stable"], key=collation_key) == [
        "Angor stable",
        "Angor stable: BASIC",
    ]


def test_equal_titles_keep_input_order():
    first, second = ("Zona", 1), ("Zona", 2)
    assert sorted([first, second], key=lambda item: collation_key(item[0])) == [first, second]
