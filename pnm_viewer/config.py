"""Настройки просмотрщика (переменные окружения с разумными значениями по умолчанию)."""
import os


class Config:
    """Application configuration."""
    # customtkinter: "system" | "light" | "dark"
    APPEARANCE_MODE = os.environ.get('PNM_VIEWER_APPEARANCE', 'system')
    COLOR_THEME = os.environ.get('PNM_VIEWER_THEME', 'blue')

    LOG_LEVEL = os.environ.get('PNM_VIEWER_LOG_LEVEL', 'WARNING').upper()

    # файл буферизуется целиком, поэтому размер ограничивается до чтения
    MAX_FILE_BYTES = int(os.environ.get('PNM_VIEWER_MAX_FILE_BYTES', str(256 * 1024 * 1024)))

    MIN_WIDTH = 900
    MIN_HEIGHT = 600
