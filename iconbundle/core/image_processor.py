"""Модуль для загрузки, композиции и масштабирования изображений."""
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageOps

from .errors import ImageLoadError

# Размеры всех вариантов иконки, от большего к меньшему
ICON_SIZES = (1024, 512, 256, 128, 64, 48, 32, 16)

TRANSPARENT = (0, 0, 0, 0)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Загрузка и полное декодирование изображения в RGBA."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            # Image.open ленивый: форсируем декодирование здесь,
            # чтобы битый файл не всплыл позже в потоке записи
            img.load()
            return img.convert('RGBA')
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError("Ошибка загрузки изображения", path, str(e)) from e


def stack(*images: Image.Image) -> Image.Image:
    """Наложение изображений снизу вверх, каждое по центру общего холста."""
    if not images:
        raise ValueError("stack() требует хотя бы одно изображение")

    width = max(img.width for img in images)
    height = max(img.height for img in images)
    canvas = Image.new('RGBA', (width, height), TRANSPARENT)
    for img in images:
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        offset = ((width - img.width) // 2, (height - img.height) // 2)
        canvas.alpha_composite(img, dest=offset)
    return canvas


def scale_to(image: Image.Image, sizes: Iterable[Tuple[int, int]]) -> List[Image.Image]:
    """Масштабирование изображения под каждый размер из списка.

    Возвращает ровно одно изображение на каждый запрошенный размер, в том же
    порядке. Если пропорции не совпадают, содержимое вписывается в размер и
    центрируется на прозрачном фоне.
    """
    if image.mode != 'RGBA':
        image = image.convert('RGBA')

    result = []
    for width, height in sizes:
        if width <= 0 or height <= 0:
            raise ValueError(f"Недопустимый размер: {width}x{height}")
        if image.size == (width, height):
            result.append(image.copy())
        else:
            result.append(ImageOps.pad(
                image,
                (width, height),
                method=Image.Resampling.LANCZOS,
                color=TRANSPARENT,
            ))
    return result


def create_icons(image: Image.Image) -> List[Image.Image]:
    """Полный набор квадратных вариантов иконки."""
    return scale_to(image, [(size, size) for size in ICON_SIZES])


def get_image(width: int, images: Sequence[Image.Image]) -> Optional[Image.Image]:
    """Вариант заданной ширины или None, если такого нет."""
    for img in images:
        if img.width == width:
            return img
    return None


def get_images(widths: Iterable[int], images: Sequence[Image.Image]) -> List[Image.Image]:
    """Варианты заданных ширин; отсутствующие пропускаются."""
    result = []
    for width in widths:
        img = get_image(width, images)
        if img is not None:
            result.append(img)
    return result
