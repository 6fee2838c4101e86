# ============================================================================
# src/ordo_facile/library.py
# ============================================================================
"""
Public Interface for the prescription library.
Clean entry point for the presentation layer.
"""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple, Union

from .core.corpus import Corpus, build_corpus, load_corpus
from .core.models import Prescription, Specialty, SpecialtySummary
from .core.query_engine import QueryEngine, Results
from .core.view_state import ViewState, ViewStateController

logger = logging.getLogger(__name__)


class PrescriptionLibrary:
    """
    Corpus plus query engine, shared by every controller.

    The corpus is read-only, so one library can back any number of
    ViewStateControllers.
    """

    def __init__(self, corpus: Corpus, cache_size: Optional[int] = None):
        self.corpus = corpus
        self.engine = QueryEngine(corpus, cache_size=cache_size)

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[Mapping],
        cache_size: Optional[int] = None
    ) -> "PrescriptionLibrary":
        return cls(build_corpus(definitions), cache_size=cache_size)

    def get_results(self, view_state: ViewState) -> Results:
        return self.engine.get_results(view_state)

    def get_specialty_summaries(self) -> Tuple[SpecialtySummary, ...]:
        """Dashboard cards, in corpus order."""
        return tuple(
            SpecialtySummary(
                id=specialty.id,
                name=specialty.name,
                icon=specialty.icon,
                color=specialty.color,
                prescription_count=specialty.prescription_count,
            )
            for specialty in self.corpus
        )

    def get_specialty_by_id(self, specialty_id: str) -> Optional[Specialty]:
        return self.corpus.get_specialty(specialty_id)

    def get_prescription_by_id(self, prescription_id: str) -> Optional[Prescription]:
        return self.corpus.get_prescription(prescription_id)

    def create_controller(self, initial_state: Optional[ViewState] = None) -> ViewStateController:
        return ViewStateController(self.engine, initial_state=initial_state)


def load_library(
    data_file: Optional[Union[str, Path]] = None,
    cache_size: Optional[int] = None
) -> PrescriptionLibrary:
    """
    Load the library from the configured dataset.

    Args:
        data_file: Dataset path. Defaults to DATA_FILE from settings.
        cache_size: Result memoization size. Defaults to QUERY_CACHE_SIZE.

    Raises:
        CorpusLoadError: the dataset is missing or malformed
    """
    if data_file is None:
        from .config import base_settings
        data_file = base_settings.DATA_FILE

    corpus = load_corpus(data_file)
    logger.info(f"Prescription library ready ({len(corpus)} specialties from {data_file})")
    return PrescriptionLibrary(corpus, cache_size=cache_size)
