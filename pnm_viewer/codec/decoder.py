"""Точка входа декодера PNM.

Конвейер: определение формата -> разбор заголовка -> декодирование тела ->
RGBA-буфер. Функции чистые: ни логирования, ни файлового ввода-вывода, ни
общего состояния между вызовами; ошибка возвращается вместе с результатом.
"""
from __future__ import annotations

from pnm_viewer.codec.ascii_body import decode_ascii_body
from pnm_viewer.codec.header import parse_header
from pnm_viewer.codec.raw_body import decode_raw_body
from pnm_viewer.codec.samples import to_rgba
from pnm_viewer.codec.sniffer import detect_format
from pnm_viewer.models.pnm_model import DecodedImage, DecodeError, DecodeOutcome, PNMFormat, PNMHeader

__all__ = ["decode", "detect_format"]


def decode(file_bytes: bytes) -> DecodeOutcome:
    """Декодирует полностью прочитанный файл PNM.

    Args:
        file_bytes: Содержимое файла целиком.

    Returns:
        `DecodeOutcome` с `DecodedImage` либо с одной из ошибок
        `INVALID_FORMAT`, `LINE_TOO_LONG`, `UNSUPPORTED_SAMPLE_DEPTH`.
    """
    data = bytes(file_bytes)
    fmt = detect_format(data)
    if fmt is PNMFormat.INVALID:
        return DecodeOutcome.failure(DecodeError.INVALID_FORMAT)

    header = parse_header(data, fmt)
    if isinstance(header, DecodeError):
        return DecodeOutcome.failure(header)

    samples = _decode_body(data, header)
    if isinstance(samples, DecodeError):
        return DecodeOutcome.failure(samples)

    image = DecodedImage(
        width=header.width,
        height=header.height,
        format=fmt,
        max_value=header.max_value,
        pixels=to_rgba(samples),
    )
    return DecodeOutcome.success(image)


def _decode_body(data: bytes, header: PNMHeader):
    if header.format.is_binary:
        return decode_raw_body(data, header)
    return decode_ascii_body(data, header)
