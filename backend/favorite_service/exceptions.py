"""
Ошибки API и их преобразование в JSON-ответ вида {"message": ..., "error": ...}.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import logger


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error


def error_body(message: str, error: Optional[str] = None) -> dict:
    body = {"message": message}
    if error is not None:
        body["error"] = error
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.error))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404 для неизвестных путей, 405 для неподдерживаемых методов
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Некорректный запрос {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content=error_body("Invalid request", str(exc.errors())))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
