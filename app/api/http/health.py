from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(prefix="/v1", tags=["health"])

VERSION = "1.0.0"


@router.get("/healthcheck")
async def healthcheck():
    """Проверка доступности сервиса"""
    return {
        "status": "available",
        "system_info": {
            "environment": settings.env,
            "version": VERSION
        }
    }
