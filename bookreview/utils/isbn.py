ISBN13_LENGTH = 13
_DIGITS = frozenset("0123456789")


def _weighted_sum(digits: str) -> int:
    # веса 1, 3, 1, 3, ... начиная с позиции 0
    return sum((1 if i % 2 == 0 else 3) * int(d) for i, d in enumerate(digits))


def parse_isbn13(s: str) -> int | None:
    """
    Проверяет строку ISBN-13 и возвращает ее числовое значение.

    Строка должна состоять ровно из 13 ASCII-цифр, а взвешенная сумма цифр
    (веса 1, 3, 1, 3, ...) должна делиться на 10. Во всех остальных случаях
    возвращается None.
    """
    if not isinstance(s, str) or len(s) != ISBN13_LENGTH:
        return None
    if not all(ch in _DIGITS for ch in s):
        return None
    if _weighted_sum(s) % 10 != 0:
        return None
    return int(s)


def isbn13_check_digit(first12: str) -> int:
    """Контрольная цифра, дополняющая 12 цифр до корректного ISBN-13"""
    if len(first12) != ISBN13_LENGTH - 1 or not all(ch in _DIGITS for ch in first12):
        raise ValueError(f"Expected 12 ASCII digits, got {first12!r}")
    return (10 - _weighted_sum(first12) % 10) % 10


def format_isbn13(isbn: int) -> str:
    """Числовой ISBN обратно в 13 символов (с ведущими нулями)"""
    if isbn < 0 or isbn >= 10**ISBN13_LENGTH:
        raise ValueError(f"Not a 13-digit ISBN: {isbn}")
    return f"{isbn:013d}"
