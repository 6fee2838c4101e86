# ============================================================================
# src/ordo_facile/core/__init__.py
# ============================================================================
"""
Core components: data model, normalizer, corpus, query engine, view state.
"""

from .enums import LineKind, ViewMode
from .models import (
    PrescriptionLine,
    Prescription,
    Specialty,
    SpecialtyTag,
    SpecialtySummary,
    ResultItem,
)
from .normalizer import normalize_line, normalize_lines, derive_prescription_id
from .corpus import Corpus, RawPrescription, RawSpecialty, build_corpus, load_corpus
from .query_engine import QueryEngine, compute_results
from .view_state import ViewState, ViewStateController

__all__ = [
    "LineKind",
    "ViewMode",
    "PrescriptionLine",
    "Prescription",
    "Specialty",
    "SpecialtyTag",
    "SpecialtySummary",
    "ResultItem",
    "normalize_line",
    "normalize_lines",
    "derive_prescription_id",
    "Corpus",
    "RawPrescription",
    "RawSpecialty",
    "build_corpus",
    "load_corpus",
    "QueryEngine",
    "compute_results",
    "ViewState",
    "ViewStateController",
]
