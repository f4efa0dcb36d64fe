"""Ошибки сборки иконок."""
from pathlib import Path
from typing import Optional, Union


class IconBuildError(Exception):
    """Базовая ошибка сборки: любая из них прерывает весь запуск."""

    def __init__(self, operation: str, path: Optional[Union[str, Path]] = None, detail: str = ""):
        self.operation = operation
        self.path = Path(path) if path is not None else None
        self.detail = detail
        message = operation
        if self.path is not None:
            message += f": {self.path}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class ImageLoadError(IconBuildError):
    """Не удалось открыть или декодировать исходное изображение."""


class ArtifactWriteError(IconBuildError):
    """Не удалось закодировать или записать выходной файл."""
