# ============================================================================
# src/ordo_facile/utils/text.py
# ============================================================================
"""
Text folding and collation for French-language content.

Search compares folded text: lowercased, accents removed, ligatures
expanded. Sorting uses the Unicode Collation Algorithm (pyuca), which orders
French titles the way a French-locale comparison does: accented titles sit
next to their unaccented neighbours ("Échardes" before "Eczéma") and
punctuation is weighted below letters ("Asthme : ..." before
"Asthme (...)").
"""

import unicodedata
from functools import lru_cache
from typing import Tuple

from pyuca import Collator

# Characters NFKD leaves intact but French readers treat as letter pairs
_EXPANSIONS = str.maketrans({
    "œ": "oe",
    "Œ": "oe",
    "æ": "ae",
    "Æ": "ae",
    "’": "'",
    "‘": "'",
})


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


@lru_cache(maxsize=4096)
def fold_text(text: str) -> str:
    """
    Fold text for accent- and case-insensitive comparison.

    >>> fold_text("Médicament")
    'medicament'
    >>> fold_text("Œil")
    'oeil'
    """
    if not text:
        return ""
    return _strip_marks(text.translate(_EXPANSIONS)).casefold()


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Parses the bundled DUCET table, built once on first sort
    return Collator()


def collation_key(text: str) -> Tuple[Tuple[int, ...], str]:
    """
    Sort key following Unicode collation (DUCET).

    Letters compare first, then accents (unaccented first), then case
    (lowercase first). The raw string breaks remaining ties.
    """
    return _collator().sort_key(text), text
