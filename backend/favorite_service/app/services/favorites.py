"""
Хранилище избранного: список, добавление и удаление пар (пользователь, товар).

Уникальность пары обеспечивает ограничение в базе данных, а не код приложения.
"""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import DEFAULT_USER_ID
from models import Favorite

# Ошибки драйвера при подключении (OSError) SQLAlchemy не оборачивает
STORAGE_ERRORS = (SQLAlchemyError, OSError)

logger = logging.getLogger("favorite_service")


def resolve_user_id(query_user_id: Optional[str] = None, body_user_id: Optional[str] = None) -> str:
    """Первое непустое значение из query, затем из тела запроса, иначе пользователь по умолчанию."""
    for candidate in (query_user_id, body_user_id):
        if candidate:
            return candidate
    return DEFAULT_USER_ID


class AddOutcome(enum.Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class AddResult:
    outcome: AddOutcome
    cause: Optional[BaseException] = None


class FavoriteStorageError(Exception):
    """Ошибка хранилища (потеря соединения, сбой запроса)"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def detail(self) -> str:
        return str(self.cause) if self.cause is not None else self.message


class FavoriteRepository:
    """Операции над таблицей favorites в рамках одной сессии"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_product_ids(self, user_id: str) -> List[str]:
        """Все productId пользователя в порядке добавления"""
        try:
            result = await self.session.execute(
                select(Favorite.product_id)
                .where(Favorite.user_id == user_id)
                .order_by(Favorite.id)
            )
            return list(result.scalars().all())
        except STORAGE_ERRORS as e:
            logger.error(f"Ошибка при получении избранного пользователя {user_id}: {str(e)}")
            raise FavoriteStorageError("Failed to fetch favorites", e) from e

    async def exists(self, user_id: str, product_id: str) -> bool:
        result = await self.session.execute(
            select(Favorite.id).where(
                Favorite.user_id == user_id, Favorite.product_id == product_id
            )
        )
        return result.first() is not None

    async def add(self, user_id: str, product_id: str) -> AddResult:
        """
        Добавляет товар в избранное.

        Повторное добавление не считается ошибкой: нарушение уникальности
        (в том числе при гонке двух параллельных запросов) дает ALREADY_EXISTS.
        """
        if not product_id:
            raise ValueError("product_id must be a non-empty string")

        try:
            self.session.add(Favorite(user_id=user_id, product_id=product_id))
            await self.session.commit()
            logger.info(f"Товар {product_id} добавлен в избранное пользователя {user_id}")
            return AddResult(AddOutcome.INSERTED)
        except IntegrityError as e:
            await self.session.rollback()
            try:
                already = await self.exists(user_id, product_id)
            except STORAGE_ERRORS as check_error:
                logger.error(f"Ошибка при проверке избранного: {str(check_error)}")
                return AddResult(AddOutcome.FAILED, check_error)
            if already:
                logger.info(f"Товар {product_id} уже в избранном пользователя {user_id}")
                return AddResult(AddOutcome.ALREADY_EXISTS)
            logger.error(f"Нарушение ограничения при добавлении в избранное: {str(e)}")
            return AddResult(AddOutcome.FAILED, e)
        except STORAGE_ERRORS as e:
            logger.error(f"Ошибка при добавлении в избранное: {str(e)}")
            return AddResult(AddOutcome.FAILED, e)

    async def remove(self, user_id: str, product_id: str) -> int:
        """Удаляет запись и возвращает число затронутых строк (0 - записи не было)"""
        try:
            result = await self.session.execute(
                delete(Favorite).where(
                    Favorite.user_id == user_id, Favorite.product_id == product_id
                )
            )
            await self.session.commit()
            return result.rowcount
        except STORAGE_ERRORS as e:
            logger.error(f"Ошибка при удалении товара {product_id} из избранного: {str(e)}")
            raise FavoriteStorageError("Failed to remove favorite", e) from e
