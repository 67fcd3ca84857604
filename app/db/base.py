from sqlalchemy import Column, DateTime, Integer, text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Базовый класс для моделей
Base = declarative_base()

# Верхняя граница колонки INTEGER; большие id заведомо не существуют
MAX_RECORD_ID = 2_147_483_647


def valid_record_id(record_id: int) -> bool:
    return 1 <= record_id <= MAX_RECORD_ID


class BaseModel(Base):
    """Общие колонки версионируемых таблиц"""
    __abstract__ = True
    # В SQLite без AUTOINCREMENT id удаленной последней строки выдается повторно
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    version = Column(Integer, nullable=False, server_default=text("1"))
