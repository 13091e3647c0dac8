import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from bookreview.core.config import settings
from bookreview.database.db import ConnectionPool


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'bookreview.db'}"


# Каждый тест работает со своей базой и своими каталогами файлов
@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch, database_url):
    monkeypatch.setattr(settings, "DATABASE_URL", database_url)
    monkeypatch.setattr(settings, "BOOKS_DIR", str(tmp_path / "books"))
    monkeypatch.setattr(settings, "COVERS_DIR", str(tmp_path / "covers"))


@pytest.fixture
async def pool(database_url):
    pool = ConnectionPool(database_url, size=2, timeout=1.0)
    await pool.create_all()
    yield pool
    await pool.dispose()


@pytest.fixture
async def db(pool):
    async with pool.acquire() as session:
        yield session


@pytest.fixture
def client():
    from bookreview.main import app

    with TestClient(app) as client:
        yield client
