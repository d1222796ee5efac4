"""Technician notes with an optional JSON metadata prefix.

Stored format::

    {"nextOilChangeMileage":"55000"}
    Human-authored note text...

Notes that do not start with ``{`` carry no metadata.
"""

import json
import logging
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

METADATA_TERMINATOR = "}\n"
NEXT_OIL_CHANGE_KEY = "nextOilChangeMileage"


def encode_notes(next_oil_change_mileage: str, technician_notes: str) -> str:
    notes = (technician_notes or "").strip()
    if not next_oil_change_mileage:
        return notes
    prefix = json.dumps(
        {NEXT_OIL_CHANGE_KEY: next_oil_change_mileage},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return f"{prefix}\n{notes}"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def decode_notes(stored: Optional[str]) -> Tuple[str, str]:
    """Split stored notes into ``(next_oil_change_mileage, plain_notes)``.

    An unterminated or unparseable prefix leaves the whole string as the
    plain note with empty metadata.
    """
    if not stored:
        return "", ""
    if not isinstance(stored, str):
        stored = str(stored)
    if not stored.startswith("{"):
        return "", stored

    end = stored.find(METADATA_TERMINATOR)
    if end == -1:
        logger.debug("Notes start with '{' but have no metadata terminator")
        return "", stored

    try:
        metadata = json.loads(stored[: end + 1])
    except ValueError:
        logger.warning("Could not parse notes metadata prefix, keeping raw notes")
        return "", stored

    if not isinstance(metadata, dict):
        return "", stored

    mileage = _as_text(metadata.get(NEXT_OIL_CHANGE_KEY))
    return mileage, stored[end + len(METADATA_TERMINATOR):]
