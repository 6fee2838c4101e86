# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from ordo_facile.core.corpus import build_corpus
from ordo_facile.core.query_engine import QueryEngine
from ordo_facile.core.view_state import ViewStateController
from ordo_facile.library import PrescriptionLibrary


@pytest.fixture
def raw_definitions():
    """Small corpus covering every line shape, a shared id and accented titles"""
    return [
        {
            "id": "dermato",
            "name": "Dermatologie",
            "icon": "Activity",
            "color": "pink",
            "prescriptions": [
                {"title": "Zona", "lines": ["-ZELITREX 500mg cp : 2cp*3/j pendant 7 jours"]},
                {
                    "title": "Échardes",
                    "lines": [
                        "Retrait à la pince après désinfection",
                        {"type": "note", "content": "Vérifier la vaccination antitétanique"}
                    ]
                },
                {
                    "title": "Eczéma",
                    "subtitle": "Forme aiguë",
                    "lines": ["-DIPROSONE crème : 1app/j pendant 7 jours"],
                    "notes": ["Pas d'application sur le visage"]
                },
                {
                    "id": "antalgie-simple",
                    "title": "Antalgie simple",
                    "lines": ["aspirine 500mg : 1cp*3/j"]
                },
            ]
        },
        {
            "id": "cardio",
            "name": "Cardiologie",
            "icon": "Heart",
            "color": "red",
            "prescriptions": [
                {"title": "B-drug", "lines": ["-KARDEGIC 75mg sachets : 1 sachet /j à vie"]},
                {"title": "A-drug", "lines": [{"drug": "Médicament X", "dosage": "1cp/j"}]},
                {
                    "id": "antalgie-simple",
                    "title": "Antalgie simple",
                    "lines": ["aspirine 500mg : 1cp*3/j"]
                },
            ]
        },
        {
            "id": "ophtalmo",
            "name": "Ophtalmologie",
            "icon": "Eye",
            "color": "indigo",
            "prescriptions": [
                {
                    "title": "Cataracte",
                    "lines": [
                        {"type": "header", "content": "En post opératoire"},
                        {"name": "TOBRADEX collyre", "dosage": "1 goutte*3/j", "duration": "8 jours"}
                    ],
                    "warnings": ["Surveiller la pression intra-oculaire"]
                },
            ]
        },
    ]


@pytest.fixture
def corpus(raw_definitions):
    return build_corpus(raw_definitions)


@pytest.fixture
def engine(corpus):
    return QueryEngine(corpus, cache_size=16)


@pytest.fixture
def uncached_engine(corpus):
    return QueryEngine(corpus, cache_size=0)


@pytest.fixture
def controller(engine):
    return ViewStateController(engine)


@pytest.fixture
def library(corpus):
    return PrescriptionLibrary(corpus, cache_size=16)

