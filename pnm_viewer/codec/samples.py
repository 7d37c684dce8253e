"""Общие помощники: масштабирование отсчётов в 8 бит и сборка RGBA."""
from __future__ import annotations

import numpy as np

WHITE = 255
BLACK = 0


def bits_to_gray(bits: np.ndarray) -> np.ndarray:
    """PBM: 0 -> белый, любое ненулевое -> чёрный."""
    return np.where(np.asarray(bits) != 0, BLACK, WHITE).astype(np.uint8)


def scale_samples(values: np.ndarray, max_value: int) -> np.ndarray:
    """Приводит отсчёты [0, max_value] к [0, 255]: round(255 * v / max_value).

    Значения больше `max_value` насыщаются до 255. Половины округляются к
    чётному, как встроенный `round`.
    """
    v = np.minimum(np.asarray(values, dtype=np.float64), float(max_value))
    return np.rint(255.0 * v / max_value).astype(np.uint8)


def complete_triples(values: np.ndarray) -> np.ndarray:
    """Группирует поток каналов по три (R, G, B); неполная тройка в конце отбрасывается."""
    usable = (len(values) // 3) * 3
    return np.asarray(values[:usable]).reshape(-1, 3)


def to_rgba(samples: np.ndarray) -> np.ndarray:
    """Серые (n,) или цветные (n, 3) отсчёты -> RGBA (n, 4) с непрозрачной альфой."""
    samples = np.asarray(samples, dtype=np.uint8)
    if samples.ndim == 1:
        rgb = np.repeat(samples[:, None], 3, axis=1)
    else:
        rgb = samples
    alpha = np.full((rgb.shape[0], 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=1)
