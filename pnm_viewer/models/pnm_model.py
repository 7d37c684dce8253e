"""Модели данных декодера PNM (PBM/PGM/PPM).

Принципы:
- SRP: только структуры данных и их производные свойства, без разбора байтов.
- Чистый код: неизменяемость (`frozen=True`); результат декодирования
  возвращается значением, а не через глобальное состояние.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np


class PNMFormat(IntEnum):
    """Формат PNM; значение n соответствует магическому числу `Pn`."""
    INVALID = 0
    PBM = 1
    PGM = 2
    PPM = 3
    PBM_BINARY = 4
    PGM_BINARY = 5
    PPM_BINARY = 6

    @property
    def magic(self) -> bytes:
        if self is PNMFormat.INVALID:
            return b""
        return b"P%d" % int(self)

    @property
    def is_binary(self) -> bool:
        return self in (PNMFormat.PBM_BINARY, PNMFormat.PGM_BINARY, PNMFormat.PPM_BINARY)

    @property
    def has_max_value(self) -> bool:
        """У PBM максимума нет (1 бит на пиксель), у PGM/PPM он обязателен."""
        return self in (PNMFormat.PGM, PNMFormat.PPM, PNMFormat.PGM_BINARY, PNMFormat.PPM_BINARY)

    @property
    def channels(self) -> int:
        return 3 if self in (PNMFormat.PPM, PNMFormat.PPM_BINARY) else 1

    @property
    def label(self) -> str:
        if self is PNMFormat.INVALID:
            return "—"
        family = ("PBM", "PGM", "PPM")[(int(self) - 1) % 3]
        return f"{family} ({self.magic.decode('ascii')})"


class DecodeError(Enum):
    """Классифицированные ошибки декодирования."""
    INVALID_FORMAT = "invalid_format"
    LINE_TOO_LONG = "line_too_long"
    UNSUPPORTED_SAMPLE_DEPTH = "unsupported_sample_depth"


@dataclass(frozen=True)
class PNMHeader:
    """Разобранный заголовок.

    Fields:
        format: Формат файла.
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        max_value: Максимальное значение отсчёта (None для PBM).
        body_offset: Смещение первого байта пиксельных данных в исходном буфере.
    """
    format: PNMFormat
    width: int
    height: int
    max_value: Optional[int]
    body_offset: int

    @property
    def scale_max(self) -> int:
        return self.max_value if self.max_value is not None else 1

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class DecodedImage:
    """Декодированное изображение в RGBA (8 бит на канал).

    Fields:
        width: Ширина, px.
        height: Высота, px.
        format: Исходный формат PNM.
        max_value: Максимум из заголовка (None для PBM).
        pixels: `uint8`-массив формы (n, 4) в порядке строк, n <= width * height.
            Если тело файла короче заявленного, n меньше (усечение, а не ошибка).
    """
    width: int
    height: int
    format: PNMFormat
    max_value: Optional[int]
    pixels: np.ndarray

    @property
    def pixel_count(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def is_truncated(self) -> bool:
        return self.pixel_count < self.width * self.height

    def as_array(self) -> np.ndarray:
        """Возвращает массив (height, width, 4); недостающие пиксели прозрачные."""
        canvas = np.zeros((self.width * self.height, 4), dtype=np.uint8)
        canvas[: self.pixel_count] = self.pixels
        return canvas.reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class DecodeOutcome:
    """Результат `decode`: либо изображение, либо классифицированная ошибка."""
    image: Optional[DecodedImage] = None
    error: Optional[DecodeError] = None

    def __post_init__(self) -> None:
        if (self.image is None) == (self.error is None):
            raise ValueError("DecodeOutcome requires exactly one of image or error")

    @classmethod
    def success(cls, image: DecodedImage) -> "DecodeOutcome":
        return cls(image=image)

    @classmethod
    def failure(cls, error: DecodeError) -> "DecodeOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.image is not None
