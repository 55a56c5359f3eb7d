import decimal
import fractions
import math
from typing import assert_never

import mpmath
import numpy as np

from minifmt.context import RoundingMode

_LOG10_2 = math.log10(2)


def to_base(value: int, base: int) -> str:
    """Return the digits of ``abs(value)`` in the given base.

    Examples
    --------
    >>> to_base(-255, 16)
    'ff'
    """
    value = abs(value)

    match base:
        case 2:
            return bin(value)[2:]

        case 8:
            return oct(value)[2:]

        case 10:
            return str(value)

        case 16:
            return hex(value)[2:]

    raise ValueError(f"unsupported base {base}")


def round_fraction(value: fractions.Fraction, rounding: RoundingMode) -> int:
    """Round the fraction to an integer."""
    match rounding:
        case RoundingMode.ROUND_HALF_EVEN:
            return round(value)

        case RoundingMode.ROUND_HALF_UP:
            half = fractions.Fraction(1, 2)

            if value < 0:
                return -math.floor(half - value)

            return math.floor(value + half)

        case RoundingMode.ROUND_CEILING:
            return math.ceil(value)

        case RoundingMode.ROUND_FLOOR:
            return math.floor(value)

        case _ as unreachable:
            assert_never(unreachable)


def decimal_exponent(value: fractions.Fraction) -> int:
    """Return ``floor(log10(abs(value)))`` of a nonzero fraction."""
    if value == 0:
        raise ValueError("zero has no decimal exponent")

    value = abs(value)
    bits = value.numerator.bit_length() - value.denominator.bit_length()
    result = math.floor(bits * _LOG10_2)

    while value >= fractions.Fraction(10) ** (result + 1):
        result += 1

    while value < fractions.Fraction(10) ** result:
        result -= 1

    return result


def fixed_digits(
    value: fractions.Fraction, prec: int, rounding: RoundingMode
) -> tuple[str, str]:
    """Round `value` to `prec` decimal places and return the digits of its magnitude
    before and after the decimal point.

    Rounding is applied to the signed value, so directed rounding modes are honored
    for negative numbers.

    Examples
    --------
    >>> from fractions import Fraction
    >>> from minifmt.context import ROUND_HALF_EVEN
    >>> fixed_digits(Fraction(-1234567, 1000), 2, ROUND_HALF_EVEN)
    ('1234', '57')
    """
    n = abs(round_fraction(value * 10**prec, rounding))
    digits = str(n).rjust(prec + 1, "0")
    split = len(digits) - prec
    return digits[:split], digits[split:]


def exp_digits(
    value: fractions.Fraction, prec: int, rounding: RoundingMode
) -> tuple[str, int]:
    """Round `value` to ``prec + 1`` significant digits.

    Returns
    -------
    digits : str
        ``prec + 1`` digits of the magnitude.
    exponent : int
        Decimal exponent of the first digit, after rounding.
    """
    if value == 0:
        return "0" * (prec + 1), 0

    exponent = decimal_exponent(value)
    scale = fractions.Fraction(10) ** (exponent - prec)
    n = abs(round_fraction(value / scale, rounding))

    if n >= 10 ** (prec + 1):
        exponent += 1
        scale = fractions.Fraction(10) ** (exponent - prec)
        n = abs(round_fraction(value / scale, rounding))

    return str(n), exponent


def shortest_digits(value) -> tuple[str, int]:
    """Return the shortest digits that round-trip to `value` at its own precision,
    together with the decimal exponent of the first digit.

    `value` must be finite, otherwise :exc:`ValueError` is raised. Trailing zeros are
    removed, and zero is ``("0", 0)``.

    Examples
    --------
    >>> shortest_digits(0.1)
    ('1', -1)
    >>> shortest_digits(1234.5)
    ('12345', 3)
    """
    match value:
        case decimal.Decimal():
            text = str(value)

        case mpmath.mpf():
            text = mpmath.nstr(value, mpmath.mp.dps)

        case float():
            text = repr(float(value))

        case np.floating():
            text = np.format_float_scientific(value, unique=True)

        case _:
            raise TypeError(f"expected a float-like value, got {type(value).__name__}")

    _, digits, exponent = decimal.Decimal(text).as_tuple()

    if not isinstance(exponent, int):
        raise ValueError(f"{value!r} is not finite")

    result = "".join(map(str, digits)).lstrip("0")

    if not result:
        return "0", 0

    exponent += len(result) - 1
    return result.rstrip("0"), exponent


def group(digits: str, sep: str, min_width: int = 0, size: int = 3) -> str:
    """Insert `sep` between every `size` digits, counting from the right.

    If the result would be shorter than `min_width`, `digits` is padded with leading
    zeros first. The result never begins with a separator, so it may exceed
    `min_width` by one character.

    Examples
    --------
    >>> group("1234567", ",")
    '1,234,567'
    >>> group("123", "_", 4)
    '0_123'
    """
    if not sep:
        return digits.rjust(min_width, "0")

    n = max(len(digits), 1, min_width * size // (size + len(sep)))

    while n + (n - 1) // size * len(sep) < min_width:
        n += 1

    digits = digits.rjust(n, "0")
    head = len(digits) % size or size
    chunks = [digits[:head]]
    chunks.extend(digits[i : i + size] for i in range(head, len(digits), size))
    return sep.join(chunks)


def scale_percent(value: fractions.Fraction) -> fractions.Fraction:
    return value * 100
