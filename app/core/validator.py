import re
from typing import Dict, Iterable


HEX_COLOR_RX = re.compile(r"^#[0-9a-fA-F]{6}$")


class Validator:
    """Накопитель ошибок валидации вида {поле: сообщение}"""

    def __init__(self):
        self.errors: Dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        # Для каждого поля сохраняется только первое сообщение
        self.errors.setdefault(key, message)

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def permitted_value(value, permitted: Iterable) -> bool:
    return value in set(permitted)


def matches(value: str, rx: re.Pattern) -> bool:
    return bool(rx.match(value))


def byte_length(value: str) -> int:
    return len(value.encode("utf-8"))
