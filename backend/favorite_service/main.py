from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_cors_origins, get_safe_db_url, logger, settings as default_settings
from database import Database, get_database
from exceptions import error_body, register_exception_handlers
from routers import favorites_router
from schema import ErrorResponse, HealthResponse


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Инициализация базы данных при запуске приложения и закрытие пула соединений при остановке
        """
        logger.info(f"Подключение к базе данных: {get_safe_db_url(settings)}")
        database = Database.from_settings(settings)
        try:
            await database.setup()
        except Exception:
            await database.dispose()
            raise
        app.state.database = database
        logger.info("База данных инициализирована")

        yield

        logger.info("Закрытие соединений с базой данных...")
        await database.dispose()
        logger.info("Соединения закрыты")

    app = FastAPI(
        title="Favorites API",
        description="Сервис избранных товаров мобильного магазина",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware для логирования запросов
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Получен запрос: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"Отправлен ответ: {response.status_code}")
        return response

    register_exception_handlers(app)
    app.include_router(favorites_router)

    @app.get("/", tags=["info"])
    async def root():
        """Информация о сервисе"""
        return {
            "name": "Favorites API",
            "version": "1.0.0",
            "description": "Сервис избранных товаров мобильного магазина",
        }

    @app.get(
        "/health",
        tags=["info"],
        response_model=HealthResponse,
        responses={500: {"model": ErrorResponse}},
    )
    async def health_check(database: Database = Depends(get_database)):
        """Проверка работоспособности сервиса и доступности базы данных"""
        try:
            await database.ping()
        except Exception as e:
            logger.error(f"База данных недоступна: {str(e)}")
            return JSONResponse(
                status_code=500,
                content=error_body("Database is unreachable", str(e)),
            )
        return {"status": "ok", "message": "Favorites API is running", "database": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=default_settings.HOST, port=default_settings.PORT)
