"""Проверка параметра count из пути запроса"""
import re
from typing import Optional

INVALID_COUNT_MESSAGE = "Invalid count. Please provide a positive integer."
TOO_LARGE_COUNT_MESSAGE = "Invalid count. Please request at most {} users."

# Ведущее целое число: "3abc" -> 3, "1.5" -> 1
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


class InvalidCountError(ValueError):
    """Некорректное значение count (не число, меньше 1 или больше максимума)"""

    def __init__(self, message: str = INVALID_COUNT_MESSAGE):
        super().__init__(message)
        self.message = message


def parse_count(raw: str, max_count: Optional[int] = None) -> int:
    """
    Разбирает count как десятичное целое число по ведущим цифрам,
    остаток строки игнорируется.

    Args:
        raw: Значение из URL
        max_count: Максимально допустимое значение (None или 0 — без ограничения)

    Returns:
        Положительное целое число

    Raises:
        InvalidCountError: если в начале нет числа, значение меньше 1 или больше max_count
    """
    match = _LEADING_INT_RE.match(raw or "")
    if match is None:
        raise InvalidCountError()

    count = int(match.group(1))
    if count < 1:
        raise InvalidCountError()
    if max_count and count > max_count:
        raise InvalidCountError(TOO_LARGE_COUNT_MESSAGE.format(max_count))
    return count
