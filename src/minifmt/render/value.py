import dataclasses
import decimal
import enum
import fractions
import math
from collections.abc import Callable
from typing import Any

import mpmath
import numpy as np

from minifmt.typing import Displayable, SelfFormatting


class ValueKind(enum.Enum):
    """Runtime kind of a value.

    Attributes
    ----------
    INTEGER
    FLOAT
    TEXT
    OBJECT
    """

    INTEGER = enum.auto()
    FLOAT = enum.auto()
    TEXT = enum.auto()
    OBJECT = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


@dataclasses.dataclass(frozen=True, slots=True)
class Integer:
    """Integer value.

    Attributes
    ----------
    value : int | numpy.integer | numpy.bool_
        The original object; its :func:`str` is the default stringification.
    """

    value: Any
    kind = ValueKind.INTEGER

    @property
    def number(self) -> int:
        return int(self.value)


@dataclasses.dataclass(frozen=True, slots=True)
class Float:
    """Floating-point value.

    Attributes
    ----------
    value : float | numpy.floating | mpmath.mpf | decimal.Decimal
        The original object. Its exact value is used for rounding.
    """

    value: Any
    kind = ValueKind.FLOAT

    def exact(self) -> fractions.Fraction:
        """Return the exact value as a fraction.

        Raises
        ------
        ValueError
            If the value is infinite or NaN.
        """
        if not self.isfinite():
            raise ValueError(f"cannot convert {self.value!r} to a fraction")

        match self.value:
            case decimal.Decimal():
                return fractions.Fraction(self.value)

            case mpmath.mpf():
                man, exp = self.value.man_exp
                return fractions.Fraction(int(man)) * fractions.Fraction(2) ** int(exp)

            case _:
                return fractions.Fraction(*self.value.as_integer_ratio())

    def isfinite(self) -> bool:
        return not (self.isinf() or self.isnan())

    def isinf(self) -> bool:
        match self.value:
            case decimal.Decimal():
                return self.value.is_infinite()

            case mpmath.mpf():
                return bool(mpmath.isinf(self.value))

            case _:
                return bool(np.isinf(self.value))

    def isnan(self) -> bool:
        match self.value:
            case decimal.Decimal():
                return self.value.is_nan()

            case mpmath.mpf():
                return bool(mpmath.isnan(self.value))

            case _:
                return bool(np.isnan(self.value))

    @property
    def negative(self) -> bool:
        """``True`` if the sign bit is set, including negative zero, but not for
        NaN."""
        if self.isnan():
            return False

        match self.value:
            case decimal.Decimal():
                return self.value.is_signed()

            case mpmath.mpf():
                return self.value < 0

            case float():
                return math.copysign(1.0, self.value) < 0

            case _:
                return bool(np.signbit(self.value))


@dataclasses.dataclass(frozen=True, slots=True)
class Text:
    value: str
    kind = ValueKind.TEXT


@dataclasses.dataclass(frozen=True, slots=True)
class Object:
    """Non-primitive value, represented by its capability set.

    Attributes
    ----------
    display : Callable[[], str]
        Default string conversion.
    debug : Callable[[], str]
        Debug string conversion.
    formatter : Callable[[str], str] | None
        Self-formatting override, which receives the specifier text verbatim.
    """

    display: Callable[[], str]
    debug: Callable[[], str]
    formatter: Callable[[str], str] | None = None
    kind = ValueKind.OBJECT


type Value = Integer | Float | Text | Object


def coerce(obj: object) -> Value:
    """Map a Python object to the corresponding :data:`Value` variant.

    Examples
    --------
    >>> coerce(42)
    Integer(value=42)
    >>> coerce("abc")
    Text(value='abc')
    """
    match obj:
        case Integer() | Float() | Text() | Object():
            return obj

        case bool() | int() | np.integer() | np.bool_():
            return Integer(obj)

        case float() | np.floating() | decimal.Decimal() | mpmath.mpf():
            return Float(obj)

        case str():
            return Text(str(obj))

        case SelfFormatting():
            return Object(obj.to_display_string, obj.to_debug_string, obj.format_with)

        case Displayable():
            return Object(obj.to_display_string, obj.to_debug_string)

    formatter = None

    if type(obj).__format__ is not object.__format__:
        formatter = obj.__format__

    return Object(lambda: str(obj), lambda: repr(obj), formatter)
