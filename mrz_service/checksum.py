from __future__ import annotations

_WEIGHTS = (7, 3, 1)
_DIGITS = "0123456789"


def char_value(char: str) -> int:
    if "0" <= char <= "9":
        return ord(char) - 48
    if "A" <= char <= "Z":
        return ord(char) - 55
    return 0


def compute_check_digit(value: str) -> int:
    total = 0
    for i, ch in enumerate(value):
        total += char_value(ch) * _WEIGHTS[i % 3]
    return total % 10


def validate(value: str, check_char: str) -> bool:
    if len(check_char or "") != 1 or check_char not in _DIGITS:
        return False
    return compute_check_digit(value) == int(check_char)
