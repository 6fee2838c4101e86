# ============================================================================
# src/ordo_facile/core/query_engine.py
# ============================================================================
"""
Query Engine

Turns the corpus and the current view state into the ordered list of
ResultItems the presentation layer renders.

Priority of rules:
1. Non-empty search term -> accent/case-insensitive scan of every specialty
   (title, subtitle, every line of any kind), deduplicated, sorted A-Z.
2. Alphabetical mode     -> every prescription, deduplicated, sorted A-Z.
3. Specialty mode        -> that specialty's list, authored order kept.
4. Dashboard             -> nothing.

Deduplication groups entries by prescription id and collects the tags of
every specialty the prescription appeared under.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from .corpus import Corpus
from .enums import ViewMode
from .models import Prescription, ResultItem, SpecialtyTag
from ..utils.text import collation_key, fold_text

if TYPE_CHECKING:
    from .view_state import ViewState

logger = logging.getLogger(__name__)

Results = Tuple[ResultItem, ...]
CacheKey = Tuple[Optional[str], Optional[str], str]


@dataclass(frozen=True)
class _IndexEntry:
    tag: SpecialtyTag
    prescription: Prescription
    folded_fields: Tuple[str, ...]

    def matches(self, folded_term: str) -> bool:
        return any(folded_term in field for field in self.folded_fields)


def _fold_prescription(prescription: Prescription) -> Tuple[str, ...]:
    fields = [fold_text(prescription.title)]
    if prescription.subtitle:
        fields.append(fold_text(prescription.subtitle))
    fields.extend(fold_text(line.text) for line in prescription.lines)
    return tuple(fields)


def build_index(corpus: Corpus) -> Tuple[_IndexEntry, ...]:
    """Flatten the corpus into searchable entries, one per listing."""
    return tuple(
        _IndexEntry(
            tag=specialty.tag(),
            prescription=prescription,
            folded_fields=_fold_prescription(prescription),
        )
        for specialty, prescription in corpus.iter_entries()
    )


def group_by_prescription(entries: Iterable[_IndexEntry]) -> List[ResultItem]:
    """
    Collapse entries sharing a prescription id into one ResultItem.

    The first entry seen supplies the prescription; tags are deduplicated by
    specialty id and kept in first-encountered order.
    """
    grouped: "OrderedDict[str, Tuple[Prescription, Dict[str, SpecialtyTag]]]" = OrderedDict()
    for entry in entries:
        prescription_id = entry.prescription.id
        if prescription_id not in grouped:
            grouped[prescription_id] = (entry.prescription, {})
        tags = grouped[prescription_id][1]
        tags.setdefault(entry.tag.id, entry.tag)

    return [
        ResultItem(prescription=prescription, specialty_tags=tuple(tags.values()))
        for prescription, tags in grouped.values()
    ]


def sort_by_title(items: Iterable[ResultItem]) -> List[ResultItem]:
    return sorted(items, key=lambda item: collation_key(item.prescription.title))


def _search(index: Tuple[_IndexEntry, ...], term: str) -> Results:
    folded_term = fold_text(term)
    matches = (entry for entry in index if entry.matches(folded_term))
    return tuple(sort_by_title(group_by_prescription(matches)))


def _alphabetical(index: Tuple[_IndexEntry, ...]) -> Results:
    return tuple(sort_by_title(group_by_prescription(index)))


def _specialty(corpus: Corpus, specialty_id: Optional[str]) -> Results:
    specialty = corpus.get_specialty(specialty_id)
    if specialty is None:
        logger.debug(
            f"No specialty with id {specialty_id!r}, returning no results",
            extra={"specialty_id": specialty_id}
        )
        return ()
    tag = specialty.tag()
    return tuple(
        ResultItem(prescription=prescription, specialty_tags=(tag,))
        for prescription in specialty.prescriptions
    )


def _coerce_mode(mode) -> Optional[ViewMode]:
    """ViewMode for a mode value, or None when the value names no mode."""
    try:
        return ViewMode(mode)
    except ValueError:
        logger.debug(f"Unknown view mode {mode!r}, treated as showing no results", extra={"mode": mode})
        return None


def _compute(
    corpus: Corpus,
    index: Tuple[_IndexEntry, ...],
    mode: Optional[ViewMode],
    specialty_id: Optional[str],
    search_term: str
) -> Results:
    if search_term:
        return _search(index, search_term)
    if mode == ViewMode.ALPHABETICAL:
        return _alphabetical(index)
    if mode == ViewMode.SPECIALTY:
        return _specialty(corpus, specialty_id)
    return ()


def compute_results(corpus: Corpus, view_state: "ViewState") -> Results:
    """
    Compute the result list for a view state from scratch.

    Args:
        corpus: Loaded corpus
        view_state: Current navigation state

    Returns:
        Ordered tuple of ResultItems (possibly empty)
    """
    return _compute(
        corpus,
        build_index(corpus),
        _coerce_mode(view_state.mode),
        view_state.selected_specialty_id,
        view_state.search_term,
    )


class QueryEngine:
    """
    Query engine bound to one corpus.

    The search index is built once at construction. Result sets are
    memoized per (mode, specialty, search term) in a small LRU; since the
    corpus never changes, a cached answer is always identical to a fresh
    one.

    Example:
        engine = QueryEngine(corpus)
        items = engine.get_results(ViewState(search_term="aspirine"))
    """

    def __init__(self, corpus: Corpus, cache_size: Optional[int] = None):
        if cache_size is None:
            from ..config import search_settings
            cache_size = search_settings.QUERY_CACHE_SIZE

        self.corpus = corpus
        self.cache_size = max(0, cache_size)
        self._index = build_index(corpus)
        self._cache: "OrderedDict[CacheKey, Results]" = OrderedDict()
        self.hits = 0
        self.misses = 0

        logger.debug(f"QueryEngine indexed {len(self._index)} entries (cache size {self.cache_size})")

    @staticmethod
    def _cache_key(mode: Optional[ViewMode], specialty_id: Optional[str], search_term: str) -> CacheKey:
        # Search ignores the underlying mode
        if search_term:
            return ("search", None, search_term)
        if mode is None:
            return (None, None, "")
        if mode is ViewMode.SPECIALTY:
            return (mode.value, specialty_id, "")
        return (mode.value, None, "")

    def query(
        self,
        mode: ViewMode = ViewMode.DASHBOARD,
        specialty_id: Optional[str] = None,
        search_term: str = ""
    ) -> Results:
        """Results for an explicit (mode, specialty, search term) triple."""
        mode = _coerce_mode(mode)
        if self.cache_size == 0:
            return _compute(self.corpus, self._index, mode, specialty_id, search_term)

        key = self._cache_key(mode, specialty_id, search_term)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        results = _compute(self.corpus, self._index, mode, specialty_id, search_term)
        logger.debug(
            f"Computed {len(results)} results",
            extra={
                "mode": mode.value if mode is not None else None,
                "specialty_id": specialty_id,
                "search_term": search_term,
                "result_count": len(results),
            }
        )
        self._cache[key] = results
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return results

    def get_results(self, view_state: "ViewState") -> Results:
        return self.query(
            view_state.mode,
            view_state.selected_specialty_id,
            view_state.search_term,
        )

    def clear_cache(self):
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def cache_info(self) -> Dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "size": len(self._cache),
            "max_size": self.cache_size,
        }
