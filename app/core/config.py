from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    env: str = "development"  # development|staging|production
    log_level: str = "INFO"

    # Каждая операция хранилища ограничена этим временем (секунды)
    query_timeout: float = 3.0

    # Пул соединений PostgreSQL
    db_max_open_conns: int = 25
    db_max_idle_conns: int = 25
    db_max_idle_time: int = 900
    db_echo: bool = False

    cors_trusted_origins: List[str] = []

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
