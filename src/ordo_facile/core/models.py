# ============================================================================
# src/ordo_facile/core/models.py
# ============================================================================
"""
Corpus data model
- Lines, prescriptions, specialties (built once at load, never mutated)
- Query outputs: result items, specialty tags, dashboard summaries
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .enums import LineKind


@dataclass(frozen=True)
class PrescriptionLine:
    kind: LineKind
    text: str

    @classmethod
    def instruction(cls, text: str) -> "PrescriptionLine":
        return cls(LineKind.INSTRUCTION, text)

    @classmethod
    def header(cls, text: str) -> "PrescriptionLine":
        return cls(LineKind.HEADER, text)

    @classmethod
    def note(cls, text: str) -> "PrescriptionLine":
        return cls(LineKind.NOTE, text)

    @property
    def is_header(self) -> bool:
        return self.kind is LineKind.HEADER

    @property
    def is_note(self) -> bool:
        return self.kind is LineKind.NOTE


@dataclass(frozen=True)
class Prescription:
    id: str
    title: str
    subtitle: Optional[str] = None
    lines: Tuple[PrescriptionLine, ...] = ()

    # Footer
    notes: Optional[Tuple[str, ...]] = None
    warnings: Optional[Tuple[str, ...]] = None

    def to_plain_text(self) -> str:
        """Line texts, one per row, as copied to the clipboard."""
        return "\n".join(line.text for line in self.lines)


@dataclass(frozen=True)
class SpecialtyTag:
    id: str
    name: str
    color: str


@dataclass(frozen=True)
class Specialty:
    id: str
    name: str
    icon: str
    color: str
    prescriptions: Tuple[Prescription, ...] = field(default_factory=tuple)

    @property
    def prescription_count(self) -> int:
        return len(self.prescriptions)

    def tag(self) -> SpecialtyTag:
        return SpecialtyTag(id=self.id, name=self.name, color=self.color)


@dataclass(frozen=True)
class SpecialtySummary:
    id: str
    name: str
    icon: str
    color: str
    prescription_count: int


@dataclass(frozen=True)
class ResultItem:
    """
    One row of a result list.

    specialty_tags holds every specialty the prescription matched under,
    deduplicated by id, in first-encountered order.
    """
    prescription: Prescription
    specialty_tags: Tuple[SpecialtyTag, ...]

    @property
    def prescription_id(self) -> str:
        return self.prescription.id
