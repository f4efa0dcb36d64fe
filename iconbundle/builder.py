"""Подготовка каталогов и запуск всех задач сборки."""
import shutil
from pathlib import Path
from typing import List, Union

from .core.associations import PLATFORMS, AssociationWriter
from .core.errors import IconBuildError
from .core.icon_writer import IconWriter
from .core.image_processor import load_image
from .core.worker import AppIconTask, BuildResult, BuildWorker, DocIconTask
from .utils.logger import get_logger
from .utils.settings import BuildPaths, Settings

logger = get_logger(__name__)

SOURCE_EXTENSION = '.png'


def discover_types(types_dir: Union[str, Path]) -> List[str]:
    """Коды типов документов по файлам глифов в каталоге."""
    types_dir = Path(types_dir)
    try:
        entries = list(types_dir.iterdir())
    except OSError as e:
        raise IconBuildError("Ошибка чтения каталога типов", types_dir, str(e)) from e
    return sorted(
        entry.name[:-len(SOURCE_EXTENSION)] for entry in entries
        if entry.name.endswith(SOURCE_EXTENSION) and entry.is_file()
    )


def prepare_output_dirs(paths: BuildPaths) -> None:
    """Пересоздание выходных каталогов: от прошлого запуска ничего не остаётся."""
    dirs = [paths.format_dir(fmt) for fmt in IconWriter.FORMATS] + [paths.associations_dir]
    try:
        for directory in dirs:
            if directory.exists():
                shutil.rmtree(directory)
            directory.mkdir(parents=True)
        for platform in PLATFORMS:
            (paths.associations_dir / platform).mkdir(parents=True, exist_ok=True)
        # Ресурсы лежат в исходниках приложения, их не чистим
        if paths.resources is not None:
            paths.resources.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IconBuildError("Ошибка подготовки каталога", getattr(e, 'filename', None), str(e)) from e


def build(settings: Settings, root: Union[str, Path] = ".") -> BuildResult:
    """Полный запуск: иконка приложения плюс все типы документов."""
    paths = settings.build_paths(root)
    doc_image = load_image(paths.doc_image)
    codes = discover_types(paths.types_dir)
    logger.info(f"Найдено типов документов: {len(codes)}")

    prepare_output_dirs(paths)

    tasks = [AppIconTask(paths.app_image)]
    for code in codes:
        tasks.append(DocIconTask(code, paths.types_dir / f"{code}{SOURCE_EXTENSION}", doc_image))

    worker = BuildWorker(
        tasks,
        IconWriter(paths.artifacts, paths.resources),
        AssociationWriter(
            paths.associations_dir,
            vendor=settings.get("associations", "vendor"),
            artifacts_label=paths.artifacts_label,
        ),
        thread_count=settings.thread_count,
    )
    return worker.run()
