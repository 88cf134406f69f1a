import json

from fastapi import Depends, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.favorites import FavoriteRepository
from database import get_async_session
from exceptions import ApiError
from schema import FavoriteIn

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_favorite_repository(
    session: AsyncSession = Depends(get_async_session),
) -> FavoriteRepository:
    return FavoriteRepository(session)


async def get_favorite_payload(request: Request) -> FavoriteIn:
    """
    Тело запроса на добавление в избранное: JSON или HTML-форма.

    Пустое тело дает пустой FavoriteIn; отсутствие productId проверяет роутер.
    """
    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            raw = await request.body()
            if not raw.strip():
                return FavoriteIn()
            data = json.loads(raw)
        if not isinstance(data, dict):
            raise ApiError(400, "Invalid request", "request body must be an object")
        return FavoriteIn.model_validate(data)
    except json.JSONDecodeError as e:
        raise ApiError(400, "Invalid request", str(e))
    except ValidationError as e:
        raise ApiError(400, "Invalid request", str(e.errors()))
