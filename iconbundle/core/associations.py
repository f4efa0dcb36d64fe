"""Файлы ассоциаций типов документов."""
from pathlib import Path, PurePosixPath
from types import MappingProxyType

from ..utils.logger import get_logger
from .errors import ArtifactWriteError

logger = get_logger(__name__)

DESCRIPTIONS = MappingProxyType({
    "adm": "GCS Advantage Modifiers Library",
    "adq": "GCS Advantages Library",
    "eqm": "GCS Equipment Modifiers Library",
    "eqp": "GCS Equipment Library",
    "gcs": "GURPS Character Sheet",
    "gct": "GCS Character Template",
    "not": "GCS Notes Library",
    "skl": "GCS Skills Library",
    "spl": "GCS Spells Library",
})

# Платформа -> формат иконки, на который ссылается ассоциация
PLATFORMS = MappingProxyType({
    "linux": "png",
    "macos": "icns",
    "windows": "ico",
})

DEFAULT_VENDOR = "gcs"

TEMPLATE = (
    "extension={code}\n"
    "mime-type=application/{vendor}.{code}\n"
    "icon={icon}\n"
    "description={description}\n"
)


def get_description(code: str) -> str:
    """Описание типа; неизвестный код описывает сам себя."""
    return DESCRIPTIONS.get(code, code)


def render_association(code: str, file_type: str, vendor: str = DEFAULT_VENDOR,
                       artifacts_label: str = "artifacts") -> str:
    icon = PurePosixPath(artifacts_label) / file_type / f"{code}_doc.{file_type}"
    return TEMPLATE.format(
        code=code,
        vendor=vendor,
        icon=icon.as_posix(),
        description=get_description(code),
    )


class AssociationWriter:
    """Запись .properties файлов ассоциаций по платформам."""

    def __init__(self, associations_dir: Path, vendor: str = DEFAULT_VENDOR,
                 artifacts_label: str = "artifacts"):
        self.associations_dir = Path(associations_dir)
        self.vendor = vendor
        self.artifacts_label = artifacts_label

    def path_for(self, code: str, platform: str) -> Path:
        return self.associations_dir / platform / f"{code}_ext.properties"

    def write(self, code: str, platform: str, file_type: str) -> Path:
        path = self.path_for(code, platform)
        content = render_association(code, file_type, self.vendor, self.artifacts_label)
        try:
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        except OSError as e:
            raise ArtifactWriteError("Ошибка записи ассоциации", path, str(e)) from e
        logger.debug(f"Записан {path}")
        return path

    def write_all(self, code: str) -> list:
        """Ассоциации типа для всех платформ."""
        return [self.write(code, platform, file_type) for platform, file_type in PLATFORMS.items()]
