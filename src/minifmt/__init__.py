from .array import format_array
from .context import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    RoundingMode,
    getcontext,
    localcontext,
    setcontext,
)
from .errors import DomainError, FormatError, MalformedSpec, TypeMismatch
from .render import FormatRenderer, format_value, render
from .spec import FormatSpec, parse

__all__ = [
    "format_array",
    "ROUND_CEILING",
    "ROUND_FLOOR",
    "ROUND_HALF_EVEN",
    "ROUND_HALF_UP",
    "Context",
    "RoundingMode",
    "getcontext",
    "localcontext",
    "setcontext",
    "DomainError",
    "FormatError",
    "MalformedSpec",
    "TypeMismatch",
    "FormatRenderer",
    "format_value",
    "render",
    "FormatSpec",
    "parse",
]
