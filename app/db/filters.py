"""Параметры пагинации/сортировки и расчет метаданных выборки.

Сортировка разрешается только по токенам из safelist конкретного эндпоинта.
Валидатор отсекает недопустимые значения заранее, а ``sort_column`` служит
последним рубежом перед построением запроса.
"""
import math
from dataclasses import dataclass, field
from typing import Tuple

from app.core.validator import Validator, permitted_value
from app.db.errors import UnsafeSortError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT = "-created_at"
MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Filters:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    sort: str = DEFAULT_SORT
    sort_safelist: Tuple[str, ...] = field(default_factory=tuple)

    def sort_column(self) -> str:
        """Имя колонки сортировки; токен обязан быть в safelist"""
        if self.sort not in self.sort_safelist:
            raise UnsafeSortError(f"unsafe sort parameter: {self.sort}")
        return self.sort.lstrip("-")

    def sort_direction(self) -> str:
        return "DESC" if self.sort.startswith("-") else "ASC"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def validate_filters(v: Validator, filters: Filters) -> None:
    v.check(filters.page > 0, "page", "must be greater than zero")
    v.check(filters.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(filters.page_size > 0, "page_size", "must be greater than zero")
    v.check(filters.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100")
    v.check(permitted_value(filters.sort, filters.sort_safelist), "sort", "invalid sort value")


@dataclass(frozen=True)
class Metadata:
    current_page: int = 0
    page_size: int = 0
    total_pages: int = 0
    total_records: int = 0


def calculate_metadata(total_records: int, page: int, page_size: int) -> Metadata:
    """Метаданные страницы; нулевые, если записей нет"""
    if total_records == 0:
        return Metadata()

    return Metadata(
        current_page=page,
        page_size=page_size,
        total_pages=math.ceil(total_records / page_size),
        total_records=total_records,
    )
