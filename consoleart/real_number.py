"""A real-number value type with arithmetic against plain numbers."""

from __future__ import annotations

import functools
import math
from typing import Union

PRECISION = 10

_Operand = Union["RealNumber", int, float]


def _coerce(other: object) -> float | None:
    if isinstance(other, RealNumber):
        return other._number
    if isinstance(other, (int, float)):
        return float(other)
    return None


@functools.total_ordering
class RealNumber:
    """Wraps a float; mixes freely with ints and floats in arithmetic."""

    __slots__ = ("_number",)

    def __init__(self, value: _Operand = 0.0) -> None:
        number = _coerce(value)
        if number is None:
            raise TypeError(f"cannot make a RealNumber from {type(value).__name__}")
        self._number = number

    def __float__(self) -> float:
        return self._number

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"RealNumber({self._number!r})"

    def __eq__(self, other: object) -> bool:
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return self._number == number

    def __lt__(self, other: object) -> bool:
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return self._number < number

    def __gt__(self, other: object) -> bool:
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return self._number > number

    def __hash__(self) -> int:
        return hash(self._number)

    def __pos__(self) -> "RealNumber":
        # Unary plus yields the absolute value.
        return RealNumber(abs(self._number))

    def __neg__(self) -> "RealNumber":
        return RealNumber(-self._number)

    def __add__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(self._number + number)

    def __radd__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(number + self._number)

    def __sub__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(self._number - number)

    def __rsub__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(number - self._number)

    def __mul__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(self._number * number)

    def __rmul__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(number * self._number)

    def __truediv__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(self._number / number)

    def __rtruediv__(self, other: object) -> "RealNumber":
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return RealNumber(number / self._number)

    def __mod__(self, other: object) -> float:
        """Floating-point remainder with the sign of the dividend."""
        number = _coerce(other)
        if number is None:
            return NotImplemented
        return math.fmod(self._number, number)

    def to_string(self) -> str:
        """Fixed-point text with ten decimals."""
        return f"{self._number:.{PRECISION}f}"

    @property
    def value(self) -> float:
        return self._number

    @property
    def integer_part(self) -> float:
        return math.modf(self._number)[1]

    @property
    def decimal_part(self) -> float:
        return math.modf(self._number)[0]