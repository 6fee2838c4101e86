"""
Ordo Facile - reference library of prescription templates grouped by
medical specialty, with browse, A-Z index and free-text search views.
"""

from .library import PrescriptionLibrary, load_library
from .core import (
    LineKind,
    ViewMode,
    PrescriptionLine,
    Prescription,
    Specialty,
    SpecialtyTag,
    SpecialtySummary,
    ResultItem,
    Corpus,
    build_corpus,
    load_corpus,
    QueryEngine,
    compute_results,
    ViewState,
    ViewStateController,
    normalize_line,
)

__all__ = [
    "PrescriptionLibrary",
    "load_library",
    "LineKind",
    "ViewMode",
    "PrescriptionLine",
    "Prescription",
    "Specialty",
    "SpecialtyTag",
    "SpecialtySummary",
    "ResultItem",
    "Corpus",
    "build_corpus",
    "load_corpus",
    "QueryEngine",
    "compute_results",
    "ViewState",
    "ViewStateController",
    "normalize_line",
]

__version__ = "1.0.0"
