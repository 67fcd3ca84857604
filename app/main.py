import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http import (
    comments_router, health_router, recommendations_router, reservations_router, users_router
)
from app.core.config import settings
from app.core.db import init_models
from app.db.errors import StoreError, UnsafeSortError, ValidationFailedError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info(f"Starting server, env={settings.env}")
    yield
    logger.info("Server stopped")


app = FastAPI(
    title="Tunecast",
    description="Сервис музыкальных рекомендаций, комментариев и бронирований",
    version="1.0.0",
    lifespan=lifespan
)

# CORS только для доверенных источников из настроек
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_trusted_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError):
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Ошибки разбора запроса в том же виде {поле: сообщение}"""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "header", "path"))
        errors.setdefault(field or "body", error["msg"])
    return JSONResponse(status_code=422, content={"detail": errors})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": SERVER_ERROR_MESSAGE})


@app.exception_handler(UnsafeSortError)
async def unsafe_sort_handler(request: Request, exc: UnsafeSortError):
    logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": SERVER_ERROR_MESSAGE})


# Подключаем роутеры
app.include_router(health_router)
app.include_router(recommendations_router)
app.include_router(reservations_router)
app.include_router(comments_router)
app.include_router(users_router)
