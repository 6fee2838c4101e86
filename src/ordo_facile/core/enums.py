# ============================================================================
# src/ordo_facile/core/enums.py
# ============================================================================
"""
Library Enums
- Prescription line kinds
- Navigation modes
"""

from enum import Enum

class LineKind(str, Enum):
    INSTRUCTION = "instruction"
    HEADER = "header"
    NOTE = "note"

class ViewMode(str, Enum):
    DASHBOARD = "dashboard"         # specialty grid, no prescription list
    SPECIALTY = "specialty"         # one specialty, authored order
    ALPHABETICAL = "alphabetical"   # whole corpus, A-Z
