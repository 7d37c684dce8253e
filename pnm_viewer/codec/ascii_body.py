"""Декодирование тел текстовых форматов P1 (PBM), P2 (PGM), P3 (PPM).

Правило длины строки (классические 70 символов) проверяется со смещением
на единицу: счётчик увеличивается после каждого байта, в том числе после
LF, который его сбросил, а проверка выполняется как `(counter - 1) > 70`.
"""
from __future__ import annotations

from typing import List, Union

import numpy as np

from pnm_viewer.codec.header import strip_comments
from pnm_viewer.codec.samples import bits_to_gray, complete_triples, scale_samples
from pnm_viewer.models.pnm_model import DecodeError, PNMFormat, PNMHeader

MAX_LINE_LENGTH = 70

_SPACE = 0x20
_TAB = 0x09
_CR = 0x0D
_LF = 0x0A
_ZERO = 0x30
_NINE = 0x39


def _header_line_too_long(data: bytes, header: PNMHeader) -> bool:
    # строки заголовка считаются после удаления комментариев
    lines = strip_comments(data[: header.body_offset]).split(b"\n")
    if any(len(line) > MAX_LINE_LENGTH for line in lines[:-1]):
        return True
    tail = lines[-1]
    if not tail:
        return False
    # последняя строка заголовка продолжается в теле до ближайшего LF
    end = data.find(b"\n", header.body_offset)
    if end < 0:
        end = len(data)
    return len(tail) + (end - header.body_offset) > MAX_LINE_LENGTH


def tokenize(data: bytes, header: PNMHeader) -> Union[List[int], DecodeError]:
    """Разбивает тело на числовые токены, проверяя длину строк.

    Для PBM каждая цифра является отдельным токеном. Значения больше
    максимума заголовка насыщаются до него.
    """
    per_digit = header.format is PNMFormat.PBM
    cap = header.scale_max
    tokens: List[int] = []
    pending = None
    counter = 0

    for byte in data[header.body_offset:]:
        if byte == _SPACE or byte == _CR or byte == _TAB:
            if pending is not None:
                tokens.append(min(pending, cap))
                pending = None
        elif byte == _LF:
            if pending is not None:
                tokens.append(min(pending, cap))
                pending = None
            if (counter - 1) > MAX_LINE_LENGTH:
                return DecodeError.LINE_TOO_LONG
            counter = 0
        elif _ZERO <= byte <= _NINE:
            digit = byte - _ZERO
            if per_digit:
                tokens.append(digit)
            else:
                pending = digit if pending is None else pending * 10 + digit
        else:
            # комментарии допустимы только в заголовке
            return DecodeError.INVALID_FORMAT
        counter += 1

    if pending is not None:
        tokens.append(min(pending, cap))
    return tokens


def decode_ascii_body(data: bytes, header: PNMHeader) -> Union[np.ndarray, DecodeError]:
    """Декодирует текстовое тело в отсчёты.

    Returns:
        `uint8`-массив (n,) для PBM/PGM или (n, 3) для PPM, n <= width * height;
        либо `DecodeError.LINE_TOO_LONG` / `DecodeError.INVALID_FORMAT`.
    """
    if _header_line_too_long(data, header):
        return DecodeError.LINE_TOO_LONG

    tokens = tokenize(data, header)
    if isinstance(tokens, DecodeError):
        return tokens

    fmt = header.format
    limit = header.pixel_count
    if fmt is PNMFormat.PBM:
        return bits_to_gray(np.asarray(tokens[:limit], dtype=np.int64))
    if fmt is PNMFormat.PGM:
        return scale_samples(np.asarray(tokens[:limit], dtype=np.int64), header.scale_max)
    if fmt is PNMFormat.PPM:
        triples = complete_triples(np.asarray(tokens[: limit * 3], dtype=np.int64))
        return scale_samples(triples, header.scale_max)
    raise ValueError(f"not a plain PNM format: {fmt!r}")
