"""
Файлы книг и обложек на диске. Ключ - ISBN книги:
``<BOOKS_DIR>/<isbn13>`` и ``<COVERS_DIR>/<isbn13>``.
"""
import logging
import shutil
from enum import Enum
from pathlib import Path

from bookreview.core.config import settings
from bookreview.utils.isbn import format_isbn13

logger = logging.getLogger(__name__)


class AssetKind(str, Enum):
    BOOK = "book"
    COVER = "cover"


def asset_dir(kind: AssetKind) -> Path:
    if kind is AssetKind.BOOK:
        return Path(settings.BOOKS_DIR)
    return Path(settings.COVERS_DIR)


def ensure_asset_dirs():
    for kind in AssetKind:
        asset_dir(kind).mkdir(parents=True, exist_ok=True)
    logger.info(f"📁 Asset dirs ready: {settings.BOOKS_DIR}, {settings.COVERS_DIR}")


def asset_path(kind: AssetKind, isbn: int) -> Path:
    return asset_dir(kind) / format_isbn13(isbn)


def store_asset(kind: AssetKind, isbn: int, source: str | Path) -> Path:
    """Скопировать файл книги/обложки на место; если это уже он - ничего не делаем"""
    source = Path(source)
    target = asset_path(kind, isbn)
    if source.resolve() == target.resolve():
        return target
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    logger.info(f"✅ Stored {kind.value} for {isbn}: {target}")
    return target


def export_asset(kind: AssetKind, isbn: int, target: str | Path) -> Path:
    source = asset_path(kind, isbn)
    if not source.is_file():
        raise FileNotFoundError(f"No {kind.value} file for {isbn}: {source}")
    target = Path(target)
    shutil.copyfile(source, target)
    logger.info(f"📤 Exported {kind.value} for {isbn} to {target}")
    return target
