"""Декодирование тел бинарных форматов P4 (PBM), P5 (PGM), P6 (PPM).

Тело читается как есть, начиная с `body_offset`: никаких разделителей и
комментариев.
"""
from __future__ import annotations

import numpy as np

from pnm_viewer.codec.samples import bits_to_gray, complete_triples, scale_samples
from pnm_viewer.models.pnm_model import PNMFormat, PNMHeader


def unpack_bitmap_rows(body: np.ndarray, width: int, height: int) -> np.ndarray:
    """Распаковывает биты PBM построчно, старший бит первым.

    Каждая строка начинается с границы байта: неиспользованные младшие биты
    последнего байта строки отбрасываются. Неполная последняя строка даёт
    столько пикселей, сколько в ней есть битов.
    """
    row_bytes = (width + 7) // 8
    full_rows = min(height, len(body) // row_bytes)
    rows = body[: full_rows * row_bytes].reshape(full_rows, row_bytes)
    bits = np.unpackbits(rows, axis=1)[:, :width].reshape(-1)

    if full_rows < height:
        rest = body[full_rows * row_bytes:]
        if len(rest):
            bits = np.concatenate([bits, np.unpackbits(rest)[:width]])
    return bits


def decode_raw_body(data: bytes, header: PNMHeader) -> np.ndarray:
    """Декодирует бинарное тело в отсчёты.

    Returns:
        `uint8`-массив (n,) для PBM/PGM или (n, 3) для PPM, n <= width * height.
    """
    body = np.frombuffer(data, dtype=np.uint8)[header.body_offset:]
    fmt = header.format
    limit = header.pixel_count
    if fmt is PNMFormat.PBM_BINARY:
        return bits_to_gray(unpack_bitmap_rows(body, header.width, header.height))
    if fmt is PNMFormat.PGM_BINARY:
        return scale_samples(body[:limit], header.max_value)
    if fmt is PNMFormat.PPM_BINARY:
        return scale_samples(complete_triples(body[: limit * 3]), header.max_value)
    raise ValueError(f"not a raw PNM format: {fmt!r}")
