# ============================================================================
# src/ordo_facile/core/normalizer.py
# ============================================================================
"""
Line Normalizer

Authored prescriptions mix several line shapes:
- plain strings
- tagged objects ({"isHeader": true, "text"}, {"type": "note", "content"}, ...)
- drug records ({"drug", "dosage", "duration"})
- name records ({"name", "dosage", "note", "duration"})

normalize_line() turns any of them into exactly one PrescriptionLine. It runs
once per line while the corpus is built; nothing downstream looks at raw
shapes again. Unknown shapes are rendered as JSON instead of being dropped.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Iterable, Tuple

from .models import PrescriptionLine

logger = logging.getLogger(__name__)

_ID_INVALID_CHARS = re.compile(r"[^a-z0-9]+")


def derive_prescription_id(title: str) -> str:
    """
    Build an id from a title when none was authored.

    Every run of characters outside [a-z0-9] (accented letters included)
    becomes a single '-'.
    """
    return _ID_INVALID_CHARS.sub("-", title.lower())


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _fallback_text(raw: Any) -> str:
    try:
        return json.dumps(raw, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return repr(raw)


def _record_text(base: Any, *suffixes: Tuple[str, Any]) -> str:
    text = _as_text(base)
    for template, value in suffixes:
        if value:
            text += template.format(_as_text(value))
    return text


def normalize_line(raw: Any) -> PrescriptionLine:
    """
    Normalize one raw line entry. First matching rule wins.

    Never raises.
    """
    if isinstance(raw, PrescriptionLine):
        return raw

    if isinstance(raw, str):
        return PrescriptionLine.instruction(raw)

    if not isinstance(raw, Mapping):
        text = _fallback_text(raw)
        logger.warning(f"Unrecognized line shape {type(raw).__name__}, rendered as {text!r}")
        return PrescriptionLine.instruction(text)

    line_type = raw.get("type")

    if raw.get("isHeader"):
        return PrescriptionLine.header(_as_text(raw.get("text")))
    if line_type == "header":
        return PrescriptionLine.header(_as_text(raw.get("content")))
    if line_type == "note":
        return PrescriptionLine.note(_as_text(raw.get("content")))
    if raw.get("isNote"):
        return PrescriptionLine.note(_as_text(raw.get("text")))
    if line_type in ("drug", "instruction"):
        return PrescriptionLine.instruction(_as_text(raw.get("content")))

    if raw.get("drug"):
        return PrescriptionLine.instruction(_record_text(
            raw["drug"],
            (": {}", raw.get("dosage")),
            (" ({})", raw.get("duration")),
        ))

    if raw.get("name"):
        return PrescriptionLine.instruction(_record_text(
            raw["name"],
            (": {}", raw.get("dosage")),
            (" ({})", raw.get("note")),
            (" ({})", raw.get("duration")),
        ))

    # Already normalized
    if raw.get("text"):
        return PrescriptionLine.instruction(_as_text(raw["text"]))

    text = _fallback_text(raw)
    logger.warning(f"Unrecognized line shape, rendered as {text!r}")
    return PrescriptionLine.instruction(text)


def normalize_lines(raw_lines: Iterable[Any]) -> Tuple[PrescriptionLine, ...]:
    """Normalize a whole prescription body, keeping order."""
    return tuple(normalize_line(raw) for raw in raw_lines)
