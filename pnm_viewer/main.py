"""Точка входа в приложение."""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from pnm_viewer.config import Config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pnm-viewer", description="Просмотр изображений PBM/PGM/PPM.")
    parser.add_argument("path", nargs="?", help="файл, который нужно открыть при запуске")
    parser.add_argument(
        "--log-level",
        default=Config.LOG_LEVEL,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="уровень логирования (по умолчанию PNM_VIEWER_LOG_LEVEL или WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Создаёт и запускает главное окно приложения."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # GUI импортируется только при запуске окна
    from pnm_viewer.app import PNMViewerApp

    app = PNMViewerApp()
    if args.path:
        app.open_path(args.path)
    app.mainloop()


if __name__ == "__main__":
    main()
