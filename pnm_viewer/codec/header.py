"""Разбор заголовка PNM.

Грамматики всех шести форматов описаны данными (`HEADER_GRAMMARS`) и
компилируются одной функцией в байтовые регулярные выражения. Сопоставление
идёт по исходному буферу, поэтому `body_offset` всегда указывает на реальный
байт начала пиксельных данных, а бинарное тело никогда не трактуется как
комментарий.

Грамматика:
    magic SEP width SEP height [SEP max_value] TERMINATOR

- SEP: один или более разделителей {пробел, CR, LF, TAB} или комментариев;
- комментарий: от `#` до ближайшего LF включительно;
- TERMINATOR: ровно один разделитель либо один комментарий (его LF
  завершает заголовок).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple, Union

from pnm_viewer.models.pnm_model import DecodeError, PNMFormat, PNMHeader

MAX_SAMPLE_VALUE = 255

_DELIMITER = rb"[ \r\n\t]"
_COMMENT = rb"#[^\n]*\n"
_SEPARATOR = rb"(?:" + _DELIMITER + rb"|" + _COMMENT + rb")+"
_TERMINATOR = rb"(?:" + _COMMENT + rb"|" + _DELIMITER + rb")"
_COMMENT_RE = re.compile(_COMMENT)


@dataclass(frozen=True)
class HeaderGrammar:
    magic: bytes
    fields: Tuple[str, ...]


_PBM_FIELDS = ("width", "height")
_PXM_FIELDS = ("width", "height", "max_value")

HEADER_GRAMMARS: Dict[PNMFormat, HeaderGrammar] = {
    fmt: HeaderGrammar(magic=fmt.magic, fields=_PXM_FIELDS if fmt.has_max_value else _PBM_FIELDS)
    for fmt in PNMFormat
    if fmt is not PNMFormat.INVALID
}


def compile_grammar(grammar: HeaderGrammar) -> Pattern[bytes]:
    """Собирает регулярное выражение заголовка из описания грамматики."""
    parts = [re.escape(grammar.magic)]
    for name in grammar.fields:
        parts.append(_SEPARATOR)
        parts.append(rb"(?P<" + name.encode("ascii") + rb">[0-9]+)")
    parts.append(_TERMINATOR)
    return re.compile(b"".join(parts))


_HEADER_PATTERNS: Dict[PNMFormat, Pattern[bytes]] = {
    fmt: compile_grammar(grammar) for fmt, grammar in HEADER_GRAMMARS.items()
}


def strip_comments(data: bytes) -> bytes:
    """Удаляет комментарии (`#` ... LF). Применяется только к области заголовка."""
    return _COMMENT_RE.sub(b"", data)


def parse_header(data: bytes, fmt: PNMFormat) -> Union[PNMHeader, DecodeError]:
    """Разбирает заголовок формата `fmt`.

    Returns:
        `PNMHeader` при успехе, иначе `DecodeError.INVALID_FORMAT` (несовпадение
        грамматики, нулевые размеры или максимум) либо
        `DecodeError.UNSUPPORTED_SAMPLE_DEPTH` (максимум больше 255).
    """
    pattern = _HEADER_PATTERNS.get(fmt)
    if pattern is None:
        return DecodeError.INVALID_FORMAT

    match = pattern.match(data)
    if match is None:
        return DecodeError.INVALID_FORMAT

    width = int(match.group("width"))
    height = int(match.group("height"))
    if width <= 0 or height <= 0:
        return DecodeError.INVALID_FORMAT

    max_value = None
    if "max_value" in HEADER_GRAMMARS[fmt].fields:
        max_value = int(match.group("max_value"))
        if max_value <= 0:
            return DecodeError.INVALID_FORMAT
        if max_value > MAX_SAMPLE_VALUE:
            # 16 бит на отсчёт не поддерживается
            return DecodeError.UNSUPPORTED_SAMPLE_DEPTH

    return PNMHeader(
        format=fmt,
        width=width,
        height=height,
        max_value=max_value,
        body_offset=match.end(),
    )
