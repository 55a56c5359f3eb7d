"""
############################################
Locale collaborators (:mod:`minifmt.locale`)
############################################

.. currentmodule:: minifmt.locale

This module provides implementations of :class:`~minifmt.typing.LocaleService`,
which supply the symbols used by the ``"n"`` presentation type.

.. autosummary::
    :toctree: generated/

    CLocale
    StaticLocale
    SystemLocale

"""

import locale
import logging

from minifmt.typing import LocaleService

log = logging.getLogger(__name__)


class CLocale(LocaleService):
    """Symbols of the ``C`` locale: no grouping, and ``"."`` as decimal point."""

    __slots__ = ()

    def grouping_separator(self) -> str:
        return ""

    def decimal_point(self) -> str:
        return "."

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return True

    def __hash__(self):
        return hash(type(self))


class StaticLocale(LocaleService):
    """Fixed locale symbols.

    Parameters
    ----------
    decimal_point : str, default="."
    grouping_separator : str, default=","

    Examples
    --------
    >>> from minifmt import format_value, localcontext
    >>> with localcontext(locale=StaticLocale(",", ".")):
    ...     format_value("n", 1234567)
    '1.234.567'
    """

    __slots__ = ("_decimal_point", "_grouping_separator")
    _decimal_point: str
    _grouping_separator: str

    def __init__(self, decimal_point: str = ".", grouping_separator: str = ","):
        if not decimal_point:
            raise ValueError("decimal point must not be empty")

        self._decimal_point = decimal_point
        self._grouping_separator = grouping_separator

    def grouping_separator(self) -> str:
        return self._grouping_separator

    def decimal_point(self) -> str:
        return self._decimal_point

    def __repr__(self):
        return (
            f"{type(self).__name__}({self._decimal_point!r}, "
            f"{self._grouping_separator!r})"
        )

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return (
            other._decimal_point == self._decimal_point
            and other._grouping_separator == self._grouping_separator
        )

    def __hash__(self):
        return hash((self._decimal_point, self._grouping_separator))


class SystemLocale(LocaleService):
    """Symbols of the process-wide ``LC_NUMERIC`` locale.

    The symbols are read from :func:`locale.localeconv` on every call, so changes made
    with :func:`locale.setlocale` take effect immediately.
    """

    __slots__ = ()

    def grouping_separator(self) -> str:
        sep = locale.localeconv()["thousands_sep"]
        log.debug("system locale grouping separator %r", sep)
        return sep  # type: ignore

    def decimal_point(self) -> str:
        point = locale.localeconv()["decimal_point"]
        log.debug("system locale decimal point %r", point)
        return point  # type: ignore

    def __repr__(self):
        return f"{type(self).__name__}()"
