from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.services.favorites import (
    AddOutcome,
    FavoriteRepository,
    FavoriteStorageError,
    resolve_user_id,
)
from config import logger
from dependencies import get_favorite_payload, get_favorite_repository
from exceptions import ApiError
from schema import ErrorResponse, FavoriteData, FavoriteIn, FavoriteListResponse, FavoriteResponse

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])

ADDED_MESSAGE = "Favorite added successfully"
ALREADY_ADDED_MESSAGE = "Already in favorites"
REMOVED_MESSAGE = "Favorite removed successfully"

_error_responses = {500: {"model": ErrorResponse}}


@router.get("", response_model=FavoriteListResponse, responses=_error_responses)
async def list_favorites(
    user_id: Optional[str] = Query(None, alias="userId"),
    repository: FavoriteRepository = Depends(get_favorite_repository),
):
    """Список productId, добавленных пользователем в избранное"""
    user_id = resolve_user_id(user_id)
    try:
        product_ids = await repository.list_product_ids(user_id)
    except FavoriteStorageError as e:
        logger.error(f"Ошибка при получении избранного: {e.detail}")
        raise ApiError(500, "Failed to fetch favorites", e.detail)
    return {"data": product_ids}


@router.post(
    "",
    response_model=FavoriteResponse,
    responses={400: {"model": ErrorResponse}, **_error_responses},
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": FavoriteIn.model_json_schema(by_alias=True)},
                "application/x-www-form-urlencoded": {"schema": FavoriteIn.model_json_schema(by_alias=True)},
            }
        }
    },
)
async def add_favorite(
    payload: FavoriteIn = Depends(get_favorite_payload),
    user_id: Optional[str] = Query(None, alias="userId"),
    repository: FavoriteRepository = Depends(get_favorite_repository),
):
    """
    Добавление товара в избранное.

    Повторный вызов для той же пары не является ошибкой и возвращает "Already in favorites".
    """
    if not payload.product_id:
        raise ApiError(400, "productId is required")

    user_id = resolve_user_id(user_id, payload.user_id)
    result = await repository.add(user_id, payload.product_id)
    if result.outcome is AddOutcome.FAILED:
        logger.error(f"Ошибка при добавлении в избранное: {result.cause}")
        raise ApiError(500, "Failed to add favorite", str(result.cause))

    message = ADDED_MESSAGE if result.outcome is AddOutcome.INSERTED else ALREADY_ADDED_MESSAGE
    return {"data": FavoriteData(user_id=user_id, product_id=payload.product_id, message=message)}


@router.delete(
    "/{product_id}",
    response_model=FavoriteResponse,
    responses={404: {"model": ErrorResponse}, **_error_responses},
)
async def remove_favorite(
    product_id: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    repository: FavoriteRepository = Depends(get_favorite_repository),
):
    user_id = resolve_user_id(user_id)
    try:
        removed = await repository.remove(user_id, product_id)
    except FavoriteStorageError as e:
        logger.error(f"Ошибка при удалении из избранного: {e.detail}")
        raise ApiError(500, "Failed to remove favorite", e.detail)

    if removed == 0:
        raise ApiError(404, "Favorite not found")
    return {"data": FavoriteData(user_id=user_id, product_id=product_id, message=REMOVED_MESSAGE)}
