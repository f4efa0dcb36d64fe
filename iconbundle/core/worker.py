"""Модуль многопоточной сборки."""
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from PIL import Image

from ..utils.logger import get_logger
from .associations import AssociationWriter
from .icon_writer import IconWriter
from .image_processor import create_icons, load_image, scale_to, stack

logger = get_logger(__name__)

# Маркер типа строится из самого глифа, без рамки документа
MARKER_SIZES = [(128, 128), (64, 64)]


@dataclass
class AppIconTask:
    """Задача: иконка приложения."""
    image_path: Path
    name: str = "app"

    def run(self, icons: IconWriter, associations: AssociationWriter) -> List[Path]:
        images = create_icons(load_image(self.image_path))
        written = icons.write_all(self.name, images)
        written += icons.write_app_resources(images)
        return written


@dataclass
class DocIconTask:
    """Задача: иконка и ассоциации одного типа документа."""
    code: str
    glyph_path: Path
    doc_image: Image.Image = field(repr=False)

    @property
    def name(self) -> str:
        return f"{self.code}_doc"

    def run(self, icons: IconWriter, associations: AssociationWriter) -> List[Path]:
        glyph = load_image(self.glyph_path)
        images = create_icons(stack(self.doc_image, glyph))
        written = icons.write_all(self.name, images)
        written += associations.write_all(self.code)
        written += icons.write_resources(f"{self.code}_file", images, 16)
        written += icons.write_resources(f"{self.code}_marker", scale_to(glyph, MARKER_SIZES), 64)
        return written


@dataclass
class TaskResult:
    """Результат одной задачи."""
    name: str
    files: List[Path]
    processing_time: float


@dataclass
class BuildResult:
    """Итог всего запуска."""
    results: List[TaskResult]
    elapsed: float

    @property
    def files(self) -> List[Path]:
        return [path for result in self.results for path in result.files]


class BuildWorker:
    """Пул потоков для независимых задач сборки.

    Первая же ошибка в любой задаче отменяет ещё не начатые задачи и
    пробрасывается из run(); частичного успеха не бывает.
    """

    def __init__(
        self,
        tasks: Sequence,
        icons: IconWriter,
        associations: AssociationWriter,
        thread_count: int = 2
    ):
        self.tasks = list(tasks)
        self.icons = icons
        self.associations = associations
        self._thread_count = max(1, thread_count)
        self._start_time: Optional[float] = None

    def run(self) -> BuildResult:
        """Запуск всех задач и ожидание их завершения."""
        self._start_time = time.time()
        results: List[TaskResult] = []
        logger.info(f"Задач: {len(self.tasks)}, потоков: {self._thread_count}")

        with ThreadPoolExecutor(max_workers=self._thread_count) as executor:
            futures: Dict[Future, object] = {
                executor.submit(self._process_single_task, task): task
                for task in self.tasks
            }
            try:
                for future in as_completed(futures):
                    results.append(future.result())
            except Exception as e:
                task = futures.get(future)
                logger.error(f"Задача {getattr(task, 'name', task)} завершилась ошибкой: {e}")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        elapsed = time.time() - self._start_time
        logger.info(f"Готово за {elapsed:.2f} с")
        return BuildResult(results=results, elapsed=elapsed)

    def _process_single_task(self, task) -> TaskResult:
        """Выполнение одной задачи."""
        start_time = time.time()
        logger.info(f"Сборка {task.name}")
        files = task.run(self.icons, self.associations)
        return TaskResult(task.name, files, time.time() - start_time)
