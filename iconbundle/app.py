"""Точка входа командной строки."""
import argparse
from typing import List, Optional

from . import __version__
from .builder import build
from .core.errors import IconBuildError
from .utils.logger import get_logger, setup_logging
from .utils.settings import Settings

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="iconbundle",
        description="Сборка иконок приложения и типов документов",
    )
    parser.add_argument("--root", default=".", help="корневой каталог (по умолчанию текущий)")
    parser.add_argument("--config", help="JSON-файл настроек")
    parser.add_argument("--threads", type=int, help="число потоков (0 = авто)")
    parser.add_argument("--debug", action="store_true", help="подробный лог")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Запуск сборки; возвращает код выхода процесса."""
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        settings = Settings(args.config)
        if args.threads is not None:
            settings.set("performance", "thread_count", args.threads)
        result = build(settings, args.root)
    except (IconBuildError, OSError) as e:
        logger.error(f"Сборка прервана: {e}")
        return 1

    logger.info(f"Записано файлов: {len(result.files)}")
    return 0
