"""Определение формата PNM по магическому числу."""
from __future__ import annotations

from pnm_viewer.models.pnm_model import PNMFormat

_DIGIT_ONE = ord("1")
_DIGIT_SIX = ord("6")


def detect_format(data: bytes) -> PNMFormat:
    """Классифицирует буфер по первым двум байтам: `P1`..`P6` или INVALID.

    Читает только `data[0]` и `data[1]`; буфер короче двух байт даёт INVALID.
    """
    if len(data) < 2 or data[0] != ord("P"):
        return PNMFormat.INVALID
    digit = data[1]
    if _DIGIT_ONE <= digit <= _DIGIT_SIX:
        return PNMFormat(digit - ord("0"))
    return PNMFormat.INVALID
