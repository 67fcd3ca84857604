from typing import Optional, Tuple

from fastapi import Header, HTTPException, Query, status

from app.db.base import valid_record_id
from app.db.errors import ValidationFailedError
from app.db.filters import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DEFAULT_SORT, Filters


def parse_id(value: str) -> int:
    """Разбор id из пути; некорректное значение дает 404"""
    try:
        record_id = int(value)
    except ValueError:
        raise not_found()

    if not valid_record_id(record_id):
        raise not_found()
    return record_id


def expected_version(x_expected_version: Optional[str] = Header(None)) -> Optional[int]:
    """Версия из заголовка X-Expected-Version, если клиент ее передал"""
    if x_expected_version is None:
        return None
    try:
        return int(x_expected_version)
    except ValueError:
        raise ValidationFailedError({"X-Expected-Version": "must be an integer value"})


def filters_dependency(sort_safelist: Tuple[str, ...]):
    """Зависимость, собирающая Filters из query-параметров"""

    def dependency(
        page: int = Query(DEFAULT_PAGE),
        page_size: int = Query(DEFAULT_PAGE_SIZE),
        sort: str = Query(DEFAULT_SORT)
    ) -> Filters:
        return Filters(page=page, page_size=page_size, sort=sort, sort_safelist=sort_safelist)

    return dependency


def not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="the requested resource could not be found")


def edit_conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="unable to update the record due to an edit conflict, please try again"
    )
