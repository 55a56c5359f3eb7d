"""
################################
Context (:mod:`minifmt.context`)
################################

.. currentmodule:: minifmt.context

This module provides the rendering context, which holds the settings that are not
expressed by a format specifier: the rounding mode of float presentation types and
the locale collaborator of the ``"n"`` presentation type.

.. autosummary::
    :toctree: generated/

    Context
    RoundingMode
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
import enum
from typing import Final, Self

from minifmt.locale import CLocale
from minifmt.typing import LocaleService


class RoundingMode(enum.Enum):
    """Rounding mode specifier.

    Rounding is always applied to the exact value of the number being rendered, not
    to an intermediate decimal approximation.

    Attributes
    ----------
    ROUND_HALF_EVEN
        Round to nearest, ties to even.
    ROUND_HALF_UP
        Round to nearest, ties away from zero.
    ROUND_CEILING
        Round towards positive infinity.
    ROUND_FLOOR
        Round towards negative infinity.
    """

    ROUND_HALF_EVEN = enum.auto()
    ROUND_HALF_UP = enum.auto()
    ROUND_CEILING = enum.auto()
    ROUND_FLOOR = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


ROUND_HALF_EVEN: Final = RoundingMode.ROUND_HALF_EVEN
ROUND_HALF_UP: Final = RoundingMode.ROUND_HALF_UP
ROUND_CEILING: Final = RoundingMode.ROUND_CEILING
ROUND_FLOOR: Final = RoundingMode.ROUND_FLOOR


class Context:
    """Create a new context.

    Parameters
    ----------
    rounding : RoundingMode, default=ROUND_HALF_EVEN
        Rounding mode used by float presentation types.
    locale : LocaleService, optional
        Locale collaborator used by the ``"n"`` presentation type (the default is
        :class:`~minifmt.locale.CLocale`).

    Examples
    --------
    >>> ctx = Context(ROUND_CEILING)
    >>> ctx
    Context(rounding=<RoundingMode.ROUND_CEILING>, locale=CLocale())
    """

    __slots__ = ("_rounding", "_locale")
    _rounding: RoundingMode
    _locale: LocaleService

    def __init__(
        self,
        rounding: RoundingMode = ROUND_HALF_EVEN,
        locale: LocaleService | None = None,
    ):
        if not isinstance(rounding, RoundingMode):
            raise TypeError(f"expected RoundingMode, got {type(rounding).__name__}")

        if locale is None:
            locale = CLocale()
        elif not isinstance(locale, LocaleService):
            raise TypeError(f"{type(locale).__name__} is not a locale service")

        self._rounding = rounding
        self._locale = locale

    @property
    def rounding(self) -> RoundingMode:
        return self._rounding

    @property
    def locale(self) -> LocaleService:
        return self._locale

    def copy(self) -> Self:
        return self.__class__(self._rounding, self._locale)

    def replace(
        self,
        *,
        rounding: RoundingMode | None = None,
        locale: LocaleService | None = None,
    ) -> Self:
        """Create a new context, replacing the given settings."""
        if rounding is None:
            rounding = self._rounding

        if locale is None:
            locale = self._locale

        return self.__class__(rounding, locale)

    def __repr__(self):
        return (
            f"{type(self).__name__}(rounding={self._rounding!r}, "
            f"locale={self._locale!r})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("minifmt")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    if not isinstance(ctx, Context):
        raise TypeError

    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    rounding: RoundingMode | None = None,
    locale: LocaleService | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> from minifmt import format_value
    >>> with localcontext(rounding=ROUND_FLOOR):
    ...     format_value(".2f", 2.678)
    '2.67'
    """
    if ctx is None:
        ctx = getcontext()

    ctx = ctx.replace(rounding=rounding, locale=locale)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
