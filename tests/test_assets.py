import pytest

from bookreview.services.asset_service import (
    AssetKind,
    asset_path,
    ensure_asset_dirs,
    export_asset,
    store_asset,
)

ISBN = 9780747542155


def test_paths_are_keyed_by_isbn(tmp_path):
    assert asset_path(AssetKind.BOOK, ISBN) == tmp_path / "books" / "9780747542155"
    assert asset_path(AssetKind.COVER, 123) == tmp_path / "covers" / "0000000000123"


def test_ensure_asset_dirs_is_idempotent(tmp_path):
    ensure_asset_dirs()
    ensure_asset_dirs()
    assert (tmp_path / "books").is_dir()
    assert (tmp_path / "covers").is_dir()


def test_store_and_export(tmp_path):
    source = tmp_path / "cover.png"
    source.write_bytes(b"\x89PNG")

    target = store_asset(AssetKind.COVER, ISBN, source)
    assert target.read_bytes() == b"\x89PNG"
    assert target.parent == tmp_path / "covers"

    # повторное сохранение того же файла ничего не делает
    assert store_asset(AssetKind.COVER, ISBN, target) == target

    exported = export_asset(AssetKind.COVER, ISBN, tmp_path / "copy.png")
    assert exported.read_bytes() == b"\x89PNG"


def test_export_missing_asset(tmp_path):
    ensure_asset_dirs()
    with pytest.raises(FileNotFoundError):
        export_asset(AssetKind.BOOK, ISBN, tmp_path / "book.pdf")
