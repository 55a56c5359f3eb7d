import dataclasses
import fractions
import logging
from collections.abc import Callable

from minifmt.context import Context, RoundingMode, getcontext
from minifmt.errors import DomainError, TypeMismatch
from minifmt.render.numeric import (
    exp_digits,
    fixed_digits,
    group,
    scale_percent,
    shortest_digits,
    to_base,
)
from minifmt.render.value import (
    Float,
    Integer,
    Object,
    Text,
    Value,
    ValueKind,
    coerce,
)
from minifmt.spec.formatspec import (
    Align,
    Conversion,
    FormatSpec,
    PresentationType,
    Sign,
)
from minifmt.spec.parser import parse

log = logging.getLogger(__name__)

_BASES = {
    PresentationType.BINARY: 2,
    PresentationType.OCTAL: 8,
    PresentationType.HEX: 16,
    PresentationType.HEX_UPPER: 16,
}

_PREFIXES = {
    PresentationType.BINARY: "0b",
    PresentationType.OCTAL: "0o",
    PresentationType.HEX: "0x",
    PresentationType.HEX_UPPER: "0X",
}

_CONVERSION_PREFIXES = ("!r", "!s", "!a")
_MAX_CODEPOINT = 0x10FFFF
_REPR_EXP_LIMIT = 16


@dataclasses.dataclass(frozen=True, slots=True)
class _Number:
    """A rendered number, split into the parts that padding and grouping treat
    differently."""

    negative: bool
    prefix: str = ""
    digits: str = ""
    fraction: str = ""
    point: bool = False
    suffix: str = ""

    @property
    def iszero(self) -> bool:
        return bool(self.digits) and not (self.digits + self.fraction).strip("0")


class FormatRenderer:
    """Renderer of values under format specifications.

    Parameters
    ----------
    context : Context, optional
        Context to render with. If no context is given, the current context of the
        active thread is looked up on every call.

    Examples
    --------
    >>> renderer = FormatRenderer()
    >>> renderer.render(",.2f", 1234567.89)
    '1,234,567.89'
    >>> renderer.render("#x", 255)
    '0xff'
    """

    __slots__ = ("_context",)
    _context: Context | None

    def __init__(self, context: Context | None = None):
        self._context = context

    @property
    def context(self) -> Context:
        if self._context is not None:
            return self._context

        return getcontext()

    def render(self, spec: FormatSpec | str, value: object) -> str:
        """Render `value` under `spec`.

        Parameters
        ----------
        spec : FormatSpec | str
            Parsed format specification, or the text of one.
        value : object
            Value to render. Python objects are mapped to :data:`Value` variants by
            :func:`~minifmt.render.value.coerce`.

        Returns
        -------
        str

        Raises
        ------
        MalformedSpec
            If `spec` is a string that does not parse.
        TypeMismatch
            If the presentation type or an option does not apply to `value`.
        DomainError
            If `value` is outside the domain of the presentation type.
        """
        value = coerce(value)
        delegates = isinstance(value, Object) and value.formatter is not None

        if isinstance(spec, str):
            if delegates and not spec.startswith(_CONVERSION_PREFIXES):
                return _delegate(value, spec)  # type: ignore

            spec = parse(spec)

        if delegates and spec.conversion is None:
            return _delegate(value, str(spec))  # type: ignore

        value = _convert(value, spec.conversion)

        if not spec.replace(conversion=None):
            return str(value.value)

        if (handler := _DISPATCH.get((spec.type, value.kind))) is None:
            raise TypeMismatch(
                f"unknown format code {spec.type.value!r} for "
                f"{value.kind.name.lower()} value"
            )

        return handler(spec, value, self.context)


def _delegate(value: Object, spec_text: str) -> str:
    log.debug("delegating format spec %r to %r", spec_text, value.formatter)
    return _checked(value.formatter(spec_text), "self-formatter")  # type: ignore


def _checked(result: object, hook: str) -> str:
    if not isinstance(result, str):
        raise TypeMismatch(f"{hook} returned {type(result).__name__}, not str")

    return result


def _convert(value: Value, conversion: Conversion | None) -> Integer | Float | Text:
    match conversion, value:
        case None, Object():
            return Text(_checked(value.display(), "display hook"))

        case None, _:
            return value  # type: ignore

        case Conversion.STR, Object():
            return Text(_checked(value.display(), "display hook"))

        case Conversion.STR, _:
            return Text(str(value.value))

        case (Conversion.REPR | Conversion.ASCII), Object():
            result = _checked(value.debug(), "debug hook")

        case (Conversion.REPR | Conversion.ASCII), _:
            result = repr(value.value)

        case _:
            raise TypeError(f"unknown conversion flag {conversion!r}")

    if conversion is Conversion.ASCII:
        result = result.encode("ascii", "backslashreplace").decode("ascii")

    return Text(result)


def _pad(lead: str, body: str, spec: FormatSpec, align: Align) -> str:
    width = spec.width or 0
    fill = spec.fillchar
    n = width - len(lead) - len(body)

    if n <= 0:
        return lead + body

    match align:
        case Align.LEFT:
            return lead + body + fill * n

        case Align.RIGHT:
            return fill * n + lead + body

        case Align.CENTER:
            return fill * (n // 2) + lead + body + fill * (n - n // 2)

        case Align.SIGN_AWARE:
            return lead + fill * n + body


def _sign(spec: FormatSpec, negative: bool) -> str:
    if negative:
        return "-"

    match spec.sign:
        case Sign.ALWAYS:
            return "+"

        case Sign.SPACE:
            return " "

    return ""


def _separator(spec: FormatSpec, ctx: Context) -> str:
    if spec.type is PresentationType.LOCALE:
        return ctx.locale.grouping_separator()

    if spec.grouping is None:
        return ""

    return spec.grouping.value


def _assemble(spec: FormatSpec, number: _Number, ctx: Context) -> str:
    negative = number.negative and not (spec.z and number.iszero)
    lead = _sign(spec, negative) + number.prefix
    align = spec.align

    if align is None:
        align = Align.SIGN_AWARE if spec.zfill else Align.RIGHT

    point = ""

    if number.point:
        point = "."

        if spec.type is PresentationType.LOCALE:
            point = ctx.locale.decimal_point()

    rest = point + number.fraction + number.suffix
    digits = number.digits

    if digits and (sep := _separator(spec, ctx)):
        min_width = 0

        if spec.fillchar == "0" and align is Align.SIGN_AWARE and spec.width:
            min_width = spec.width - len(lead) - len(rest)

        digits = group(digits, sep, min_width)

    return _pad(lead, digits + rest, spec, align)


def _render_text(spec: FormatSpec, value: Text, ctx: Context) -> str:
    if spec.sign is not Sign.NEGATIVE:
        raise TypeMismatch("sign not allowed in string format specifier")

    if spec.alt:
        raise TypeMismatch("alternate form not allowed in string format specifier")

    if spec.z:
        raise TypeMismatch("negative zero coercion not allowed for strings")

    if spec.grouping is not None:
        raise TypeMismatch(f"cannot specify {spec.grouping.value!r} with strings")

    if spec.align is Align.SIGN_AWARE:
        raise TypeMismatch("'=' alignment not allowed in string format specifier")

    text = value.value

    if spec.prec is not None:
        text = text[: spec.prec]

    return _pad("", text, spec, spec.align or Align.LEFT)


def _render_integer(spec: FormatSpec, value: Integer, ctx: Context) -> str:
    if spec.prec is not None:
        raise TypeMismatch("precision not allowed in integer format specifier")

    if spec.z:
        raise TypeMismatch("negative zero coercion not allowed for integers")

    n = value.number
    digits = to_base(n, _BASES.get(spec.type, 10))
    prefix = _PREFIXES.get(spec.type, "") if spec.alt else ""

    if spec.type is PresentationType.HEX_UPPER:
        digits = digits.upper()

    return _assemble(spec, _Number(n < 0, prefix, digits), ctx)


def _render_char(spec: FormatSpec, value: Integer, ctx: Context) -> str:
    n = value.number

    if not 0 <= n <= _MAX_CODEPOINT:
        raise DomainError(f"code point {n} not in range(0x110000)")

    return _assemble(spec, _Number(False, suffix=chr(n)), ctx)


def _exponent(exponent: int, upper: bool) -> str:
    return f"{'E' if upper else 'e'}{'-' if exponent < 0 else '+'}{abs(exponent):02d}"


def _fixed(x: fractions.Fraction, prec: int, alt: bool, mode: RoundingMode):
    digits, fraction = fixed_digits(x, prec, mode)
    return digits, fraction, bool(fraction) or alt, ""


def _scientific(
    x: fractions.Fraction, prec: int, alt: bool, upper: bool, mode: RoundingMode
):
    digits, exponent = exp_digits(x, prec, mode)
    return digits[0], digits[1:], prec > 0 or alt, _exponent(exponent, upper)


def _general(
    x: fractions.Fraction,
    prec: int,
    alt: bool,
    upper: bool,
    mode: RoundingMode,
    threshold: int,
):
    """General format with `prec` significant digits.

    Fixed-point notation is used if ``-4 <= exponent < threshold``, where `exponent`
    is the decimal exponent after rounding.
    """
    _, exponent = exp_digits(x, prec - 1, mode)

    if -4 <= exponent < threshold:
        digits, fraction, _, _ = _fixed(x, prec - 1 - exponent, alt, mode)
        suffix = ""
    else:
        digits, fraction, _, suffix = _scientific(x, prec - 1, alt, upper, mode)

    if not alt:
        fraction = fraction.rstrip("0")

    return digits, fraction, bool(fraction) or alt, suffix


def _shortest(value: Float, alt: bool):
    digits, exponent = shortest_digits(value.value)

    if -4 <= exponent < _REPR_EXP_LIMIT:
        if exponent < 0:
            return "0", "0" * (-exponent - 1) + digits, True, ""

        digits = digits.ljust(exponent + 1, "0")
        fraction = digits[exponent + 1 :] or "0"
        return digits[: exponent + 1], fraction, True, ""

    return digits[0], digits[1:], len(digits) > 1 or alt, _exponent(exponent, False)


def _render_float(spec: FormatSpec, value: Integer | Float, ctx: Context) -> str:
    tp = spec.type
    upper = tp.is_upper

    if isinstance(value, Float):
        negative = value.negative

        if not value.isfinite():
            text = "nan" if value.isnan() else "inf"
            text = text.upper() if upper else text

            if tp is PresentationType.PERCENT:
                text += "%"

            return _assemble(spec, _Number(negative, suffix=text), ctx)

        x = value.exact()
    else:
        negative = value.number < 0
        x = fractions.Fraction(value.number)

    mode = ctx.rounding
    prec = spec.prec
    fprec = 6 if prec is None else prec

    match tp:
        case PresentationType.FIXED | PresentationType.FIXED_UPPER:
            parts = _fixed(x, fprec, spec.alt, mode)

        case PresentationType.PERCENT:
            parts = _fixed(scale_percent(x), fprec, spec.alt, mode)
            parts = parts[:3] + ("%",)

        case PresentationType.EXP | PresentationType.EXP_UPPER:
            parts = _scientific(x, fprec, spec.alt, upper, mode)

        case PresentationType.GENERAL | PresentationType.GENERAL_UPPER:
            prec = max(1, fprec)
            parts = _general(x, prec, spec.alt, upper, mode, prec)

        case PresentationType.LOCALE:
            prec = max(1, fprec)
            parts = _general(x, prec, spec.alt, False, mode, prec)

        case PresentationType.NONE if prec is None:
            parts = _shortest(value, spec.alt)  # type: ignore

        case PresentationType.NONE:
            prec = max(1, prec)
            digits, fraction, point, suffix = _general(
                x, prec, spec.alt, False, mode, prec - 1
            )

            if not suffix and not fraction:
                fraction, point = "0", True

            parts = digits, fraction, point, suffix

        case _:
            raise TypeMismatch(f"unknown format code {tp.value!r} for float value")

    digits, fraction, point, suffix = parts
    return _assemble(spec, _Number(negative, "", digits, fraction, point, suffix), ctx)


type _Handler = Callable[[FormatSpec, Value, Context], str]

_DISPATCH: dict[tuple[PresentationType, ValueKind], _Handler] = {
    (PresentationType.NONE, ValueKind.TEXT): _render_text,
    (PresentationType.STRING, ValueKind.TEXT): _render_text,
    (PresentationType.NONE, ValueKind.INTEGER): _render_integer,
    (PresentationType.DECIMAL, ValueKind.INTEGER): _render_integer,
    (PresentationType.BINARY, ValueKind.INTEGER): _render_integer,
    (PresentationType.OCTAL, ValueKind.INTEGER): _render_integer,
    (PresentationType.HEX, ValueKind.INTEGER): _render_integer,
    (PresentationType.HEX_UPPER, ValueKind.INTEGER): _render_integer,
    (PresentationType.LOCALE, ValueKind.INTEGER): _render_integer,
    (PresentationType.CHAR, ValueKind.INTEGER): _render_char,
    (PresentationType.NONE, ValueKind.FLOAT): _render_float,
}  # type: ignore

for _tp in PresentationType:
    if _tp.is_float:
        _DISPATCH[_tp, ValueKind.INTEGER] = _render_float  # type: ignore
        _DISPATCH[_tp, ValueKind.FLOAT] = _render_float  # type: ignore

_DISPATCH[PresentationType.LOCALE, ValueKind.FLOAT] = _render_float  # type: ignore

del _tp

_default = FormatRenderer()


def render(spec: FormatSpec | str, value: object) -> str:
    """Render `value` under `spec` with the current context.

    Examples
    --------
    >>> render(".5", "Hello, World!")
    'Hello'
    >>> render("+", 42)
    '+42'
    """
    return _default.render(spec, value)


def format_value(
    spec_text: str, value: object, conversion: Conversion | str | None = None
) -> str:
    """Parse `spec_text` and render `value` under it.

    If `value` formats itself and no conversion flag is given, `spec_text` is passed
    to it verbatim, without being parsed.

    Examples
    --------
    >>> format_value("*>10.2f", 1234.56789)
    '***1234.57'
    >>> format_value(".0%", 0.75)
    '75%'
    """
    if conversion is None:
        return _default.render(spec_text, value)

    return _default.render(parse(spec_text, conversion), value)
