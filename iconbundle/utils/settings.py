"""Модуль для загрузки настроек сборки."""
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.errors import IconBuildError


@dataclass(frozen=True)
class BuildPaths:
    """Разрешённые пути одного запуска."""
    artifacts: Path
    app_image: Path
    doc_image: Path
    types_dir: Path
    resources: Optional[Path]
    # Как каталог артефактов записывается в файлах ассоциаций
    artifacts_label: str

    def format_dir(self, fmt: str) -> Path:
        return self.artifacts / fmt

    @property
    def associations_dir(self) -> Path:
        return self.artifacts / "file_associations"


class Settings:
    """Класс для управления настройками сборки."""

    DEFAULT_SETTINGS = {
        "paths": {
            "artifacts": "artifacts",
            "artwork": "artifacts/artwork_prep",
            # Относительно каталога artwork
            "app_image": "app.png",
            "doc_image": "doc.png",
            "types_dir": "types",
            # Пустая строка отключает ресурсы приложения
            "resources": "resources/images"
        },
        "associations": {
            "vendor": "gcs"
        },
        "performance": {
            "thread_count": 0  # 0 = auto (CPU - 1)
        }
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Инициализация настроек."""
        self.config_path = Path(config_path) if config_path is not None else None
        self.settings = self._deep_copy(self.DEFAULT_SETTINGS)
        if self.config_path is not None:
            self.load()

    def _deep_copy(self, obj: Any) -> Any:
        """Глубокое копирование объекта."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        return obj

    def _deep_merge(self, base: Dict, updates: Dict) -> Dict:
        """Глубокое слияние словарей."""
        result = self._deep_copy(base)
        for key, value in updates.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = self._deep_copy(value)
        return result

    def load(self) -> None:
        """Загрузка настроек из файла."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise IconBuildError("Ошибка загрузки настроек", self.config_path, str(e)) from e

        if not isinstance(loaded, dict):
            raise IconBuildError("Ошибка загрузки настроек", self.config_path, "ожидался JSON-объект")
        self.settings = self._deep_merge(self.DEFAULT_SETTINGS, loaded)

    def get(self, *keys: str, default: Any = None) -> Any:
        """Получение значения по ключам."""
        result = self.settings
        for key in keys:
            if isinstance(result, dict) and key in result:
                result = result[key]
            else:
                return default
        return result

    def set(self, *keys_and_value) -> None:
        """Установка значения по ключам."""
        if len(keys_and_value) < 2:
            raise TypeError("set() требует хотя бы один ключ и значение")

        keys = keys_and_value[:-1]
        value = keys_and_value[-1]

        current = self.settings
        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    @property
    def thread_count(self) -> int:
        """Размер пула потоков; 0 в настройках означает автоопределение."""
        value = self.get("performance", "thread_count", default=0)
        try:
            count = int(value or 0)
        except (TypeError, ValueError) as e:
            raise IconBuildError(
                "Недопустимое число потоков", self.config_path, f"performance.thread_count = {value!r}"
            ) from e
        if count <= 0:
            count = max(2, min((os.cpu_count() or 1) - 1, 16))
        return count

    def build_paths(self, root: Union[str, Path] = ".") -> BuildPaths:
        """Разрешение путей из настроек относительно корня запуска."""
        root = Path(root)
        artifacts_label = self.get("paths", "artifacts")
        artwork = root / self.get("paths", "artwork")
        resources = self.get("paths", "resources")

        return BuildPaths(
            artifacts=root / artifacts_label,
            app_image=artwork / self.get("paths", "app_image"),
            doc_image=artwork / self.get("paths", "doc_image"),
            types_dir=artwork / self.get("paths", "types_dir"),
            resources=root / resources if resources else None,
            artifacts_label=Path(artifacts_label).as_posix(),
        )
