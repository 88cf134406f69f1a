"""Конфигурационный файл pytest с общими фикстурами для тестов favorite_service."""

import os
import sys

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.pool import AsyncAdaptedQueuePool

# Добавляем пути импорта для тестирования
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import Settings  # noqa: E402
from database import Database  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture
def sqlite_url(tmp_path):
    """URL файловой SQLite-базы во временном каталоге"""
    return f"sqlite+aiosqlite:///{tmp_path / 'favorites.db'}"


@pytest.fixture
def test_settings(sqlite_url):
    return Settings(DATABASE_URL=sqlite_url, CORS_ORIGINS=["*"])


@pytest_asyncio.fixture
async def database(sqlite_url):
    """База данных для тестов хранилища"""
    db = Database(sqlite_url)
    await db.setup()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def single_connection_database(sqlite_url):
    """
    Пул из одного соединения: параллельные операции ждут друг друга на уровне пула,
    а не на блокировках SQLite.
    """
    db = Database(sqlite_url, poolclass=AsyncAdaptedQueuePool, pool_size=1, max_overflow=0)
    await db.setup()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_maker() as session:
        yield session


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """Тестовый клиент; контекстный менеджер запускает lifespan приложения."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
