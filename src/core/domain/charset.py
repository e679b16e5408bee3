"""Alfabeto fijo y predicado de complejidad.

Por qué en el dominio:
- Es la definición de qué es una contraseña válida, no de cómo se genera.
- Lo comparten el generador, la API y los tests.
"""

from __future__ import annotations

import string

MIN_LENGTH = 12
MAX_LENGTH = 255

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{}|;:,.<>?/~`'"

# 26 + 26 + 10 + 30 = 92 símbolos.
ALPHABET = LOWERCASE + UPPERCASE + DIGITS + SYMBOLS


def clamp_length(length: int) -> int:
    """Ajusta `length` al rango admitido [12, 255]."""

    if length < MIN_LENGTH:
        return MIN_LENGTH
    if length > MAX_LENGTH:
        return MAX_LENGTH
    return length


def has_required_complexity(password: str) -> bool:
    """True si hay al menos una minúscula, una mayúscula, un dígito y un símbolo.

    Cualquier carácter que no sea letra ASCII ni dígito cuenta como símbolo.
    """

    has_lower = has_upper = has_digit = has_symbol = False
    for ch in password:
        if "a" <= ch <= "z":
            has_lower = True
        elif "A" <= ch <= "Z":
            has_upper = True
        elif "0" <= ch <= "9":
            has_digit = True
        else:
            has_symbol = True
    return has_lower and has_upper and has_digit and has_symbol
