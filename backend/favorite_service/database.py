"""
Модуль для настройки асинхронного подключения к базе данных и управления сессиями.
"""
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Depends, Request
from sqlalchemy import MetaData, Table, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.schema import DropConstraint

from config import Settings, get_db_url, get_engine_options, logger
from models import Base, Favorite


class Database:
    """
    Движок SQLAlchemy и фабрика сессий.

    Создается один раз при запуске приложения, хранится в app.state
    и закрывается при остановке.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.engine: AsyncEngine = create_async_engine(url, **engine_options)
        self.session_maker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "Database":
        return cls(get_db_url(config), **get_engine_options(config))

    async def setup(self) -> None:
        await setup_database(self.engine)

    async def ping(self) -> None:
        """Проверка доступности базы данных (SELECT 1)"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


def _drop_legacy_foreign_keys(conn: Connection) -> int:
    """
    Удаляет внешние ключи, оставшиеся на таблице favorites от прежних версий схемы.

    Возвращает количество удаленных ограничений.
    """
    if conn.dialect.name == "sqlite":
        # SQLite не поддерживает ALTER TABLE ... DROP CONSTRAINT
        return 0
    table_name = Favorite.__tablename__
    if not inspect(conn).has_table(table_name):
        return 0
    table = Table(table_name, MetaData(), autoload_with=conn)
    dropped = 0
    for constraint in list(table.foreign_key_constraints):
        if not constraint.name:
            continue
        logger.info(f"Удаление устаревшего внешнего ключа {constraint.name} из {table_name}")
        conn.execute(DropConstraint(constraint))
        dropped += 1
    return dropped


async def setup_database(engine: AsyncEngine) -> None:
    """
    Инициализация базы данных при запуске приложения.
    Создает таблицу favorites, если она еще не существует; существующие данные не трогает.
    """
    try:
        logger.info("Начало инициализации базы данных...")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(_drop_legacy_foreign_keys)
        logger.info("Таблица favorites готова")
    except Exception as e:
        logger.error(f"Ошибка при инициализации базы данных: {str(e)}")
        raise


def get_database(request: Request) -> Database:
    """Возвращает общий для процесса объект Database"""
    return request.app.state.database


async def get_async_session(
    db: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Получение сессии базы данных на время запроса

    Yields:
        AsyncSession: Сессия базы данных
    """
    async with db.session_maker() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Ошибка сессии БД: {str(e)}")
            raise
