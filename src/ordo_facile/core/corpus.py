# ============================================================================
# src/ordo_facile/core/corpus.py
# ============================================================================
"""
Corpus construction

Raw specialty definitions (JSON or plain Python data) are validated against
a pydantic schema, every prescription body goes through the line normalizer,
and the result is frozen into a Corpus. Any structural problem is fatal:
the library refuses to start on a malformed dataset.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import Prescription, Specialty
from .normalizer import derive_prescription_id, normalize_lines
from ..utils.exceptions import CorpusLoadError, DataFileNotFoundError, InvalidDefinitionError
from ..utils.logging import log_performance

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# Raw definition schema
# ----------------------------------------------------------------------------

class RawPrescription(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: str = Field(min_length=1)
    subtitle: Optional[str] = None
    lines: List[Any] = Field(default_factory=list)
    notes: Optional[List[str]] = None
    warnings: Optional[List[str]] = None

    @field_validator("id")
    @classmethod
    def _blank_id_is_absent(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def build(self) -> Prescription:
        return Prescription(
            id=self.id or derive_prescription_id(self.title),
            title=self.title,
            subtitle=self.subtitle,
            lines=normalize_lines(self.lines),
            notes=tuple(self.notes) if self.notes is not None else None,
            warnings=tuple(self.warnings) if self.warnings is not None else None,
        )


class RawSpecialty(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    icon: str = "Activity"
    color: str = "gray"
    # Raw prescription objects, or prebuilt Prescription instances shared
    # between specialties
    prescriptions: List[Any] = Field(default_factory=list)


# ----------------------------------------------------------------------------
# Corpus
# ----------------------------------------------------------------------------

class Corpus:
    """
    Read-only, ordered collection of specialties.

    The same prescription id may be listed under several specialties,
    either as one shared object or as independently authored entries.
    get_prescription() returns the first occurrence in corpus order.
    """

    def __init__(self, specialties: Sequence[Specialty]):
        self._specialties: Tuple[Specialty, ...] = tuple(specialties)
        self._specialties_by_id: Dict[str, Specialty] = {}
        self._prescriptions_by_id: Dict[str, Prescription] = {}

        for specialty in self._specialties:
            if specialty.id in self._specialties_by_id:
                raise InvalidDefinitionError(
                    f"Duplicate specialty id '{specialty.id}'",
                    location=f"specialty '{specialty.id}'"
                )
            self._specialties_by_id[specialty.id] = specialty
            for prescription in specialty.prescriptions:
                self._prescriptions_by_id.setdefault(prescription.id, prescription)

    @property
    def specialties(self) -> Tuple[Specialty, ...]:
        return self._specialties

    def __iter__(self) -> Iterator[Specialty]:
        return iter(self._specialties)

    def __len__(self) -> int:
        return len(self._specialties)

    def get_specialty(self, specialty_id: Optional[str]) -> Optional[Specialty]:
        if specialty_id is None:
            return None
        return self._specialties_by_id.get(specialty_id)

    def get_prescription(self, prescription_id: str) -> Optional[Prescription]:
        return self._prescriptions_by_id.get(prescription_id)

    def iter_entries(self) -> Iterator[Tuple[Specialty, Prescription]]:
        """Every (specialty, prescription) pair, in authored order."""
        for specialty in self._specialties:
            for prescription in specialty.prescriptions:
                yield specialty, prescription

    @property
    def entry_count(self) -> int:
        return sum(specialty.prescription_count for specialty in self._specialties)

    @property
    def distinct_prescription_count(self) -> int:
        return len(self._prescriptions_by_id)


# ----------------------------------------------------------------------------
# Builders
# ----------------------------------------------------------------------------

def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        loc = ".".join(str(part) for part in detail.get("loc", ()))
        parts.append(f"{loc}: {detail.get('msg')}" if loc else detail.get("msg", ""))
    return "; ".join(parts)


def _build_prescription(entry: Any, location: str) -> Prescription:
    if isinstance(entry, Prescription):
        return entry
    if isinstance(entry, RawPrescription):
        return entry.build()
    if not isinstance(entry, Mapping):
        raise InvalidDefinitionError(
            f"{location}: expected an object, got {type(entry).__name__}",
            location=location
        )
    try:
        return RawPrescription.model_validate(entry).build()
    except ValidationError as e:
        raise InvalidDefinitionError(
            f"{location}: {_describe_validation_error(e)}",
            location=location
        ) from e


def _build_specialty(raw: Union[RawSpecialty, Mapping], index: int) -> Specialty:
    location = f"specialties[{index}]"

    if not isinstance(raw, RawSpecialty):
        if not isinstance(raw, Mapping):
            raise InvalidDefinitionError(
                f"{location}: expected an object, got {type(raw).__name__}",
                location=location
            )
        try:
            raw = RawSpecialty.model_validate(raw)
        except ValidationError as e:
            raise InvalidDefinitionError(
                f"{location}: {_describe_validation_error(e)}",
                location=location
            ) from e

    prescriptions = tuple(
        _build_prescription(entry, f"{location}.prescriptions[{position}]")
        for position, entry in enumerate(raw.prescriptions)
    )

    seen = set()
    for prescription in prescriptions:
        if prescription.id in seen:
            logger.warning(
                f"Specialty '{raw.id}' lists prescription id '{prescription.id}' more than once",
                extra={"specialty_id": raw.id, "prescription_id": prescription.id}
            )
        seen.add(prescription.id)

    return Specialty(
        id=raw.id,
        name=raw.name,
        icon=raw.icon,
        color=raw.color,
        prescriptions=prescriptions,
    )


def build_corpus(definitions: Iterable[Union[RawSpecialty, Mapping]]) -> Corpus:
    """
    Build the corpus from raw specialty definitions.

    Raises:
        InvalidDefinitionError: a definition is malformed or a specialty id repeats
    """
    specialties = [_build_specialty(raw, index) for index, raw in enumerate(definitions)]
    corpus = Corpus(specialties)
    logger.info(
        f"Corpus built: {len(corpus)} specialties, "
        f"{corpus.entry_count} prescriptions ({corpus.distinct_prescription_count} distinct ids)"
    )
    return corpus


@log_performance(logger, "Corpus load")
def load_corpus(path: Union[str, Path]) -> Corpus:
    """
    Load the corpus from a JSON file.

    The file holds either a list of specialty definitions or an object with
    a "specialties" list.

    Raises:
        DataFileNotFoundError: the file does not exist
        CorpusLoadError: the file is not valid JSON or has the wrong layout
        InvalidDefinitionError: a definition is malformed
    """
    path = Path(path)
    if not path.is_file():
        raise DataFileNotFoundError(f"Dataset file not found: {path}", path=str(path))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise CorpusLoadError(f"Dataset {path} is not valid JSON: {e}") from e

    if isinstance(payload, Mapping):
        payload = payload.get("specialties")
    if not isinstance(payload, list):
        raise CorpusLoadError(
            f"Dataset {path} must be a list of specialties or an object with a 'specialties' list"
        )

    logger.debug(
        f"Loaded {len(payload)} specialty definitions from {path}",
        extra={"data_file": str(path)}
    )
    return build_corpus(payload)
