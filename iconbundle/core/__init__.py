"""Ядро сборки иконок."""
from .associations import AssociationWriter, get_description, render_association
from .errors import ArtifactWriteError, IconBuildError, ImageLoadError
from .icon_writer import IconWriter
from .image_processor import create_icons, get_image, get_images, load_image, scale_to, stack
from .worker import AppIconTask, BuildResult, BuildWorker, DocIconTask

__all__ = [
    'AssociationWriter', 'get_description', 'render_association',
    'ArtifactWriteError', 'IconBuildError', 'ImageLoadError',
    'IconWriter',
    'create_icons', 'get_image', 'get_images', 'load_image', 'scale_to', 'stack',
    'AppIconTask', 'BuildResult', 'BuildWorker', 'DocIconTask',
]
