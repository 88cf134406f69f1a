"""
Конфигурация сервиса избранного с использованием Pydantic Settings.
"""
import os
import logging
from typing import Any, Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

# Настройка логирования
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("favorite_service")

# Пользователь, от имени которого работает клиент без userId
DEFAULT_USER_ID = "default_user"


class Settings(BaseSettings):
    # Настройки базы данных
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "favorites_db"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_POOL_SIZE: int = 10
    DB_ECHO: bool = False

    # Полный URL (например sqlite+aiosqlite:///./favorites.db) перекрывает DB_*
    DATABASE_URL: Optional[str] = None

    # Настройки HTTP-сервера
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Настройки CORS
    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"),
        extra="ignore",
    )


# Инициализируем настройки
settings = Settings()


def get_db_url(config: Optional[Settings] = None) -> str:
    """Возвращает URL для подключения к базе данных."""
    config = config or settings
    if config.DATABASE_URL:
        return config.DATABASE_URL
    return (
        f"{config.DB_DRIVER}://{config.DB_USER}:{config.DB_PASSWORD}@"
        f"{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"
    )


def is_sqlite_url(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def get_engine_options(config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Параметры пула соединений для create_async_engine.

    Для файловой SQLite размер пула не задается: им управляет сам диалект.
    """
    config = config or settings
    options: Dict[str, Any] = {"echo": config.DB_ECHO}
    if not is_sqlite_url(get_db_url(config)):
        options["pool_size"] = config.DB_POOL_SIZE
        options["pool_pre_ping"] = True
    return options


def get_safe_db_url(config: Optional[Settings] = None) -> str:
    """URL базы данных со скрытым паролем, пригодный для логов."""
    return make_url(get_db_url(config)).render_as_string(hide_password=True)


def get_cors_origins(config: Optional[Settings] = None) -> List[str]:
    """Возвращает список разрешенных источников для CORS."""
    config = config or settings
    return config.CORS_ORIGINS
