from typing import Dict


class RecordNotFoundError(Exception):
    """Запись отсутствует или id меньше допустимого"""

    def __init__(self, message: str = "record not found"):
        super().__init__(message)


class EditConflictError(Exception):
    """Версия записи изменилась с момента чтения"""

    def __init__(self, message: str = "edit conflict"):
        super().__init__(message)


class ValidationFailedError(Exception):
    """Ошибки валидации полей, собранные за один проход"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("validation failed")
        self.errors = dict(errors)


class StoreError(Exception):
    """Сбой базы данных или инфраструктуры"""


class StoreTimeoutError(StoreError):
    """Операция хранилища не уложилась в отведенное время"""


class UnsafeSortError(RuntimeError):
    """Параметр сортировки не прошел safelist"""
