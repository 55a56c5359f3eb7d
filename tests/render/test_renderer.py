import datetime
from decimal import Decimal

import mpmath
import numpy as np
import pytest

from minifmt import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_UP,
    Context,
    DomainError,
    FormatRenderer,
    MalformedSpec,
    TypeMismatch,
    format_value,
    localcontext,
    render,
)
from minifmt.locale import StaticLocale
from minifmt.render import Object, Text
from minifmt.render.renderer import _convert
from minifmt.spec import FormatSpec, PresentationType, parse


class Temperature:
    def __init__(self, kelvin):
        self.kelvin = kelvin

    def to_display_string(self):
        return f"{self.kelvin}K"

    def to_debug_string(self):
        return f"Temperature({self.kelvin})"


class Celsius(Temperature):
    def format_with(self, spec_text):
        return f"{self.kelvin - 273}C[{spec_text}]"


def test_basic():
    assert render(parse(",.2f"), 1234567.89) == "1,234,567.89"
    assert render(parse(".0%"), 0.75) == "75%"
    assert render(parse("0>5"), 42) == "00042"
    assert render(parse("#x"), 255) == "0xff"
    assert render(parse("+"), 42) == "+42"
    assert render(parse("+"), -42) == "-42"
    assert render(parse(".5"), "Hello, World!") == "Hello"
    assert render(parse("*>10.2f"), 1234.56789) == "***1234.57"


def test_empty_spec():
    assert format_value("", 42) == "42"
    assert format_value("", True) == "True"
    assert format_value("", 1.5) == "1.5"
    assert format_value("", "abc") == "abc"
    assert format_value("", Temperature(300)) == "300K"


def test_text():
    assert format_value("<6", "abc") == "abc   "
    assert format_value(">6", "abc") == "   abc"
    assert format_value("^6", "abc") == " abc  "
    assert format_value("*^7", "abc") == "**abc**"
    assert format_value("6", "abc") == "abc   "
    assert format_value("05", "abc") == "abc00"
    assert format_value("2", "abcd") == "abcd"
    assert format_value(".2s", "héllo") == "hé"

    for text in ["+s", "#s", "z", ",", "=5"]:
        with pytest.raises(TypeMismatch):
            format_value(text, "abc")


def test_integer():
    assert format_value("d", -17) == "-17"
    assert format_value("b", 10) == "1010"
    assert format_value("#b", -10) == "-0b1010"
    assert format_value("#o", 8) == "0o10"
    assert format_value("X", 255) == "FF"
    assert format_value("#X", 255) == "0XFF"
    assert format_value(" d", 5) == " 5"
    assert format_value(",", 1234567) == "1,234,567"
    assert format_value("_d", -1234) == "-1_234"
    assert format_value("=+8", 42) == "+     42"
    assert format_value("^+8", 42) == "  +42   "
    assert format_value("08", -42) == "-0000042"
    assert format_value("#010x", 256) == "0x00000100"
    assert format_value("0^+#10x", 512) == "00+0x20000"
    assert format_value("04_", 123) == "0_123"
    assert format_value("09,", -1234) == "-0,001,234"
    assert format_value("x", np.int64(-255)) == "-ff"
    assert format_value("d", True) == "1"

    with pytest.raises(TypeMismatch):
        format_value(".2", 5)

    with pytest.raises(TypeMismatch):
        format_value("z", 5)


def test_char():
    assert format_value("c", 65) == "A"
    assert format_value(">3c", 0x263A) == "  ☺"
    assert format_value("03c", 66) == "00B"

    with pytest.raises(DomainError):
        format_value("c", -1)

    with pytest.raises(DomainError):
        format_value("c", 0x110000)

    with pytest.raises(ValueError):
        format_value("c", -1)

    with pytest.raises(TypeMismatch):
        format_value("c", 65.0)


def test_fixed():
    assert format_value("f", 1.5) == "1.500000"
    assert format_value(".2f", 2.675) == "2.67"
    assert format_value(".2f", Decimal("2.675")) == "2.68"
    assert format_value(".0f", 0.5) == "0"
    assert format_value(".0f", 1.5) == "2"
    assert format_value("#.0f", 3.0) == "3."
    assert format_value(".3F", float("inf")) == "INF"
    assert format_value("f", float("nan")) == "nan"
    assert format_value(".1f", -0.04) == "-0.0"
    assert format_value("z.1f", -0.04) == "0.0"
    assert format_value("z.1f", -0.0) == "0.0"
    assert format_value("z", -0.0) == "0.0"
    assert format_value("z.1f", float("-inf")) == "-inf"
    assert format_value("08.2f", float("-inf")) == "-0000inf"
    assert format_value("f", 7) == "7.000000"
    assert format_value(".1f", 10**30) == "1000000000000000000000000000000.0"
    assert format_value(".3f", 1e-10) == "0.000"


def test_exponent():
    assert format_value("e", 12345.678) == "1.234568e+04"
    assert format_value(".2E", 0.000123) == "1.23E-04"
    assert format_value(".0e", 5) == "5e+00"
    assert format_value("#.0e", 5) == "5.e+00"
    assert format_value(".1e", 9.99) == "1.0e+01"
    assert format_value(".2e", 1e100) == "1.00e+100"
    assert format_value("e", 0.0) == "0.000000e+00"
    assert format_value("E", float("-inf")) == "-INF"


def test_general():
    assert format_value("g", 1234567.0) == "1.23457e+06"
    assert format_value("g", 123456.0) == "123456"
    assert format_value("g", 0.0001) == "0.0001"
    assert format_value("g", 0.00001) == "1e-05"
    assert format_value(".3g", 1.0) == "1"
    assert format_value("#.3g", 1.0) == "1.00"
    assert format_value(".2g", 99.5) == "1e+02"
    assert format_value(".0g", 0.5) == "0.5"
    assert format_value("G", 1e-10) == "1E-10"
    assert format_value(".3G", float("nan")) == "NAN"
    assert format_value("g", -0.0) == "-0"


def test_none_float():
    assert format_value("", 0.1) == "0.1"
    assert format_value(">6", 0.1) == "   0.1"
    assert format_value("<", 100.0) == "100.0"
    assert format_value("<", 1e16) == "1e+16"
    assert format_value("<", 1e15) == "1000000000000000.0"
    assert format_value("<", 1.5e-5) == "1.5e-05"
    assert format_value("<", 0.0001) == "0.0001"
    assert format_value("#", 1e16) == "1.e+16"
    assert format_value(",", 1234.5) == "1,234.5"
    assert format_value("+011,", 123.456) == "+00,123.456"
    assert format_value("<", np.float32(0.1)) == "0.1"
    assert format_value("<", np.float16(0.1)) == "0.1"
    assert format_value(">8", mpmath.mpf("0.25")) == "    0.25"
    assert format_value(">8", Decimal("1.50")) == "     1.5"


def test_none_float_with_precision():
    assert format_value(".3", 100.0) == "1e+02"
    assert format_value(".1", 1.5) == "2e+00"
    assert format_value(".3", 1.0) == "1.0"
    assert format_value(".3", 123.0) == "1.23e+02"
    assert format_value(".3", 12.0) == "12.0"
    assert format_value(".4", 0.00001234) == "1.234e-05"
    assert format_value(".12", 0.1) == "0.1"


def test_percent():
    assert format_value("%", 0.5) == "50.000000%"
    assert format_value(".1%", 1) == "100.0%"
    assert format_value(".0%", float("inf")) == "inf%"
    assert format_value(">7.0%", -0.25) == "   -25%"


def test_locale():
    assert format_value("n", 1234567) == "1234567"
    assert format_value("n", 1234.5) == "1234.5"

    with localcontext(locale=StaticLocale(",", ".")):
        assert format_value("n", 1234567) == "1.234.567"
        assert format_value("n", 1234.5) == "1.234,5"
        assert format_value("n", 1234567.0) == "1,23457e+06"
        assert format_value("012n", 1234) == "0.000.001.234"

        with pytest.raises(TypeMismatch):
            format_value("n", "abc")


def test_rounding_modes():
    with localcontext(rounding=ROUND_CEILING):
        assert format_value(".3f", 0.001) == "0.002"
        assert format_value(".2f", 0.001) == "0.01"
        assert format_value(".3g", -1.23) == "-1.22"
        assert format_value(".3e", -12.1) == "-1.209e+01"
        assert format_value(".0f", -0.5) == "-0"

    with localcontext(rounding=ROUND_FLOOR):
        assert format_value(".2f", 0.001) == "0.00"
        assert format_value(".3g", -1.23) == "-1.23"
        assert format_value(".3e", -12.1) == "-1.210e+01"
        assert format_value("z.0f", -0.5) == "-1"

    with localcontext(rounding=ROUND_HALF_UP):
        assert format_value(".2f", Decimal("2.665")) == "2.67"
        assert format_value(".0f", 2.5) == "3"
        assert format_value(".0f", -2.5) == "-3"

    assert format_value(".0f", 2.5) == "2"


def test_renderer_context():
    renderer = FormatRenderer(Context(ROUND_CEILING))
    assert renderer.render(".1f", 0.01) == "0.1"
    assert render(".1f", 0.01) == "0.0"

    with localcontext(rounding=ROUND_FLOOR):
        assert renderer.render(".1f", 0.01) == "0.1"
        assert FormatRenderer().render(".1f", 0.09) == "0.0"


def test_conversion():
    assert format_value("!r", "abc") == "'abc'"
    assert format_value("!s:>5", 42) == "   42"
    assert format_value("!a", "café") == ascii("café")
    assert format_value("!r:^9", 1.5) == "   1.5   "
    assert format_value(">6", "ab", "r") == "  'ab'"
    assert format_value("!r", Temperature(5)) == "Temperature(5)"
    assert format_value("!s", Temperature(5)) == "5K"

    with pytest.raises(TypeMismatch):
        format_value("!r:d", 42)


def test_displayable():
    assert format_value(">6", Temperature(5)) == "    5K"
    assert format_value(".1", Temperature(300)) == "3"

    with pytest.raises(TypeMismatch):
        format_value("d", Temperature(5))


def test_self_formatting():
    assert format_value("anything goes", Celsius(300)) == "27C[anything goes]"
    assert format_value(">10", Celsius(300)) == "27C[>10]"
    assert render(FormatSpec(width=3), Celsius(300)) == "27C[3]"
    assert format_value("!s:>6", Celsius(300)) == "  300K"
    assert format_value("%Y-%m", datetime.date(2024, 1, 2)) == "2024-01"
    assert format_value("!r", datetime.date(2024, 1, 2)) == "datetime.date(2024, 1, 2)"


def test_hook_results_are_checked():
    value = Object(lambda: 1, lambda: "x")  # type: ignore

    with pytest.raises(TypeMismatch):
        format_value(">3", value)

    value = Object(lambda: "x", lambda: "x", lambda spec: None)  # type: ignore

    with pytest.raises(TypeMismatch):
        format_value(">3", value)


def test_malformed():
    with pytest.raises(MalformedSpec):
        format_value("10.f", 1.0)

    with pytest.raises(MalformedSpec):
        format_value("!x", 1.0)


@pytest.mark.parametrize("tp", list(PresentationType))
@pytest.mark.parametrize("value", [65, 1.5, "a"])
def test_dispatch_is_total(tp, value):
    try:
        result = render(FormatSpec(type=tp), value)
    except TypeMismatch:
        return

    assert isinstance(result, str)
    assert result


def test_value_variants():
    assert render(FormatSpec(width=3), Text("a")) == "a  "
    assert render("^5", Text("ab")) == " ab  "


def test_unknown_conversion():
    with pytest.raises(TypeError, match="unknown conversion flag 'x'"):
        _convert(Text("a"), "x")  # type: ignore
