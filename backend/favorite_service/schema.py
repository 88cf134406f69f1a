from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FavoriteIn(CamelModel):
    product_id: Optional[str] = None
    user_id: Optional[str] = None

    @field_validator("product_id", "user_id", mode="before")
    @classmethod
    def coerce_number(cls, value):
        # Мобильный клиент может прислать идентификатор числом
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class FavoriteData(CamelModel):
    user_id: str
    product_id: str
    message: str


class FavoriteResponse(BaseModel):
    data: FavoriteData


class FavoriteListResponse(BaseModel):
    data: List[str]


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    database: str
