# ============================================================================
# src/ordo_facile/core/view_state.py
# ============================================================================
"""
View-State Controller

Holds what the user is looking at:
- navigation mode (dashboard, one specialty, A-Z index)
- the selected specialty (specialty mode only)
- the open prescription, if any (a detail overlay on top of the list)
- the search term (non-empty search overrides the mode's list)

Every transition replaces the immutable ViewState; none of them can fail.
There is no history: "back" just closes the detail overlay.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .enums import ViewMode
from .models import Prescription
from .query_engine import QueryEngine, Results

logger = logging.getLogger(__name__)

SEARCH_HEADLINE = 'Résultats pour : "{}"'
ALPHABETICAL_HEADLINE = "Index Alphabétique (A-Z)"
DEFAULT_HEADLINE = "Spécialité"
SEARCH_BREADCRUMB = "Recherche"
ALPHABETICAL_BREADCRUMB = "Index Global"


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode = ViewMode.DASHBOARD
    selected_specialty_id: Optional[str] = None
    selected_prescription: Optional[Prescription] = None
    search_term: str = ""

    @property
    def is_searching(self) -> bool:
        return bool(self.search_term)


class ViewStateController:
    """
    Navigation state machine over a QueryEngine.

    Example:
        controller = ViewStateController(engine)
        controller.select_specialty("dermato")
        for item in controller.results:
            print(item.prescription.title)
    """

    def __init__(self, engine: QueryEngine, initial_state: Optional[ViewState] = None):
        self.engine = engine
        self._state = initial_state or ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    def _transition(self, name: str, new_state: ViewState) -> ViewState:
        logger.debug(f"{name}: {self._state} -> {new_state}")
        self._state = new_state
        return new_state

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_dashboard(self) -> ViewState:
        return self._transition("select_dashboard", ViewState(mode=ViewMode.DASHBOARD))

    def select_specialty(self, specialty_id: str) -> ViewState:
        """Open a specialty. Unknown ids are accepted and yield no results."""
        return self._transition(
            "select_specialty",
            ViewState(mode=ViewMode.SPECIALTY, selected_specialty_id=specialty_id)
        )

    def select_alphabetical(self) -> ViewState:
        return self._transition("select_alphabetical", ViewState(mode=ViewMode.ALPHABETICAL))

    def select_prescription(self, prescription: Prescription) -> ViewState:
        return self._transition(
            "select_prescription",
            replace(self._state, selected_prescription=prescription)
        )

    def clear_selection(self) -> ViewState:
        return self._transition(
            "clear_selection",
            replace(self._state, selected_prescription=None)
        )

    def set_search_term(self, term: str) -> ViewState:
        """
        Update the search term.

        Typing a non-empty term closes any open detail; clearing the term
        leaves everything else as it was.
        """
        if term:
            new_state = replace(self._state, search_term=term, selected_prescription=None)
        else:
            new_state = replace(self._state, search_term="")
        return self._transition("set_search_term", new_state)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def results(self) -> Results:
        return self.engine.get_results(self._state)

    @property
    def is_dashboard(self) -> bool:
        state = self._state
        return (
            state.mode == ViewMode.DASHBOARD
            and not state.is_searching
            and state.selected_prescription is None
        )

    @property
    def shows_specialty_tags(self) -> bool:
        return self._state.is_searching or self._state.mode == ViewMode.ALPHABETICAL

    @property
    def headline(self) -> str:
        """Title of the current list."""
        state = self._state
        if state.is_searching:
            return SEARCH_HEADLINE.format(state.search_term)
        if state.mode == ViewMode.ALPHABETICAL:
            return ALPHABETICAL_HEADLINE
        specialty = self.engine.corpus.get_specialty(state.selected_specialty_id)
        return specialty.name if specialty else DEFAULT_HEADLINE

    @property
    def breadcrumb(self) -> Optional[str]:
        """Label shown above an open prescription."""
        state = self._state
        if state.is_searching:
            return SEARCH_BREADCRUMB
        if state.mode == ViewMode.ALPHABETICAL:
            return ALPHABETICAL_BREADCRUMB
        specialty = self.engine.corpus.get_specialty(state.selected_specialty_id)
        return specialty.name if specialty else None

    @property
    def result_count_label(self) -> str:
        count = len(self.results)
        return f"{count} ordonnance{'s' if count > 1 else ''}"
