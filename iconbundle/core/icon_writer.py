"""Запись иконок в контейнерные форматы."""
import io
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image
from icnsutil import IcnsFile

from ..utils.logger import get_logger
from .errors import ArtifactWriteError
from .image_processor import get_image, get_images

logger = get_logger(__name__)

# Тип записи ICNS для каждой ширины, все кадры в PNG
ICNS_TYPES = {
    1024: "ic10",
    512: "ic09",
    256: "ic08",
    128: "ic07",
    64: "icp6",
    32: "ic11",
    16: "icp4",
}
ICNS_SIZES = tuple(ICNS_TYPES)

# Ширины ICO и одиночного PNG
ICO_SIZES = (256, 48, 32, 16)
PNG_SIZE = 256


class IconWriter:
    """Класс для записи набора вариантов иконки на диск."""

    FORMATS = ('icns', 'ico', 'png')

    def __init__(self, artifacts_dir: Path, resources_dir: Optional[Path] = None):
        """Инициализация writer'а."""
        self.artifacts_dir = Path(artifacts_dir)
        self.resources_dir = Path(resources_dir) if resources_dir is not None else None

    def path_for(self, name: str, fmt: str) -> Path:
        return self.artifacts_dir / fmt / f"{name}.{fmt}"

    def write_all(self, name: str, images: Sequence[Image.Image]) -> List[Path]:
        """Запись иконки во всех трёх форматах."""
        return [
            self.write_icns(name, images),
            self.write_ico(name, images),
            self.write_png(name, images),
        ]

    def write_icns(self, name: str, images: Sequence[Image.Image]) -> Path:
        path = self.path_for(name, 'icns')
        selected = self._select(path, ICNS_SIZES, images)
        icns = IcnsFile()
        try:
            # Ровно одна запись на каждую найденную ширину
            for img in selected:
                buffer = io.BytesIO()
                img.save(buffer, format='PNG')
                icns.add_media(ICNS_TYPES[img.width], data=buffer.getvalue())
            icns.write(str(path), toc=True)
        except (OSError, ValueError) as e:
            raise ArtifactWriteError("Ошибка записи файла", path, str(e)) from e
        logger.debug(f"Записан {path}")
        return path

    def write_ico(self, name: str, images: Sequence[Image.Image]) -> Path:
        path = self.path_for(name, 'ico')
        selected = self._select(path, ICO_SIZES, images)
        self._save(
            path,
            selected[0],
            format='ICO',
            sizes=[img.size for img in selected],
            append_images=selected[1:],
        )
        return path

    def write_png(self, name: str, images: Sequence[Image.Image]) -> Path:
        path = self.path_for(name, 'png')
        self._save(path, self._require(path, PNG_SIZE, images), format='PNG')
        return path

    def write_app_resources(self, images: Sequence[Image.Image]) -> List[Path]:
        """Ресурсы приложения: по одному PNG на каждый вариант."""
        if self.resources_dir is None:
            return []
        written = []
        for img in images:
            path = self.resources_dir / f"app_{img.width}.png"
            self._save(path, img, format='PNG')
            written.append(path)
        return written

    def write_resources(self, name: str, images: Sequence[Image.Image], base_size: int) -> List[Path]:
        """Пара ресурсов: обычный размер и @2x."""
        if self.resources_dir is None:
            return []
        normal = self.resources_dir / f"{name}.png"
        retina = self.resources_dir / f"{name}@2x.png"
        self._save(normal, self._require(normal, base_size, images), format='PNG')
        self._save(retina, self._require(retina, base_size * 2, images), format='PNG')
        return [normal, retina]

    def _select(self, path: Path, widths: Sequence[int], images: Sequence[Image.Image]) -> List[Image.Image]:
        selected = get_images(widths, images)
        if not selected:
            raise ArtifactWriteError(
                "Нет ни одного подходящего размера",
                path,
                "нужны ширины " + ", ".join(str(w) for w in widths),
            )
        return selected

    def _require(self, path: Path, width: int, images: Sequence[Image.Image]) -> Image.Image:
        img = get_image(width, images)
        if img is None:
            raise ArtifactWriteError("Нет варианта нужной ширины", path, f"ширина {width}")
        return img

    def _save(self, path: Path, image: Image.Image, **params) -> None:
        try:
            image.save(path, **params)
        except (OSError, ValueError) as e:
            raise ArtifactWriteError("Ошибка записи файла", path, str(e)) from e
        logger.debug(f"Записан {path}")
