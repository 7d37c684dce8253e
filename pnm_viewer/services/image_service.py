"""Загрузка изображений с диска, упаковка метаданных и экспорт.

Принципы:
- SRP: класс отвечает только за чтение/запись файлов и базовое извлечение свойств.
- OCP: PNM декодируется собственным декодером, остальные форматы отдаются Pillow.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from pnm_viewer.codec.decoder import decode, detect_format
from pnm_viewer.config import Config
from pnm_viewer.models.image_model import ImageData
from pnm_viewer.models.pnm_model import DecodeError, DecodedImage, PNMFormat

logger = logging.getLogger(__name__)

PNM_EXTENSIONS = (".pbm", ".pgm", ".ppm", ".pnm")

# экспорт только через Pillow; кодировщика PNM нет
SAVE_FORMATS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".gif": "GIF",
}

_ERROR_MESSAGES = {
    DecodeError.INVALID_FORMAT: "Файл не является корректным изображением PNM.",
    DecodeError.LINE_TOO_LONG: "Строка файла длиннее 70 символов.",
    DecodeError.UNSUPPORTED_SAMPLE_DEPTH: "16-битные PNM (максимум больше 255) не поддерживаются.",
}


def describe_error(error: DecodeError) -> str:
    """Текст для пользователя по классу ошибки декодирования."""
    return _ERROR_MESSAGES[error]


class PNMDecodeError(ValueError):
    """Файл PNM не удалось декодировать; `error` хранит класс ошибки."""

    def __init__(self, error: DecodeError, path: Optional[Path] = None) -> None:
        self.error = error
        self.path = path
        super().__init__(f"{describe_error(error)} ({path})" if path else describe_error(error))


def decoded_to_pil(image: DecodedImage) -> Image.Image:
    """Собирает RGBA-изображение PIL; недостающие при усечении пиксели прозрачные."""
    return Image.fromarray(image.as_array())


class ImageService:
    def __init__(self, max_file_bytes: Optional[int] = None) -> None:
        self._max_file_bytes = Config.MAX_FILE_BYTES if max_file_bytes is None else max_file_bytes

    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            PNMDecodeError: если файл PNM повреждён или не поддерживается.
            ValueError: если файл или объявленные в заголовке размеры слишком велики,
                либо файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        size_bytes: Optional[int] = path.stat().st_size
        if size_bytes > self._max_file_bytes:
            logger.warning("Refusing %s: %d bytes exceeds limit %d", path, size_bytes, self._max_file_bytes)
            raise ValueError(f"Файл слишком большой: {path}")

        data = path.read_bytes()
        if detect_format(data) is not PNMFormat.INVALID or path.suffix.lower() in PNM_EXTENSIONS:
            return self._load_pnm(path, data, size_bytes)

        try:
            pil_image = Image.open(io.BytesIO(data))
            source_format = pil_image.format or "—"
            pil_image = pil_image.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc

        width, height = pil_image.size
        logger.info("Loaded %s via Pillow (%s, %dx%d)", path, source_format, width, height)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
            source_format=source_format,
        )

    def save_image(self, image: Image.Image, file_path: str | Path) -> Path:
        """Сохраняет изображение в PNG, BMP или GIF (по расширению).

        Raises:
            ValueError: если расширение не поддерживается для записи (в том числе PNM).
        """
        path = Path(file_path)
        fmt = SAVE_FORMATS.get(path.suffix.lower())
        if fmt is None:
            raise ValueError(f"Сохранение в формат {path.suffix or '(без расширения)'} не поддерживается")

        # альфа-канал сохраняется только в PNG
        out = image if fmt == "PNG" else image.convert("RGB")
        out.save(path, format=fmt)
        logger.info("Saved %s as %s", path, fmt)
        return path

    def _load_pnm(self, path: Path, data: bytes, size_bytes: Optional[int]) -> ImageData:
        outcome = decode(data)
        if not outcome.ok:
            logger.warning("Failed to decode %s: %s", path, outcome.error.value)
            raise PNMDecodeError(outcome.error, path)

        decoded = outcome.image
        declared = decoded.width * decoded.height
        # тот же предел, что Pillow применяет в Image.open
        limit = Image.MAX_IMAGE_PIXELS
        if limit is not None and declared > limit:
            logger.warning("Refusing %s: %dx%d exceeds %d pixels", path, decoded.width, decoded.height, limit)
            raise ValueError(f"Изображение слишком большое ({decoded.width}x{decoded.height}): {path}")
        if decoded.is_truncated:
            logger.warning(
                "%s: body holds %d of %d pixels", path, decoded.pixel_count, declared
            )
        pil_image = decoded_to_pil(decoded)
        logger.info("Loaded %s (%s, %dx%d)", path, decoded.format.label, decoded.width, decoded.height)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=decoded.width,
            height=decoded.height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
            source_format=decoded.format.label,
            max_value=decoded.max_value,
            truncated=decoded.is_truncated,
        )
