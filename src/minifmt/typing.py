"""
##############################
Typing (:mod:`minifmt.typing`)
##############################

This module provides the capability sets that collaborators of the renderer must
implement.

.. autoclass:: Displayable
    :show-inheritance:
    :no-members:

.. autoclass:: SelfFormatting
    :show-inheritance:
    :no-members:

.. autoclass:: LocaleService
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class Displayable(Protocol):
    """Protocol for non-primitive values that take part in rendering.

    Objects implementing this protocol provide a display string, used when no
    conversion flag or ``!s`` is given, and a debug string, used for ``!r`` and
    ``!a``.
    """

    __slots__ = ()

    @abstractmethod
    def to_display_string(self) -> str: ...

    @abstractmethod
    def to_debug_string(self) -> str: ...


@runtime_checkable
class SelfFormatting(Displayable, Protocol):
    """Protocol for :class:`Displayable` objects that format themselves.

    When a value implements :meth:`format_with`, the renderer passes the specifier
    text through verbatim and returns the result unchanged.
    """

    __slots__ = ()

    @abstractmethod
    def format_with(self, spec_text: str) -> str: ...


@runtime_checkable
class LocaleService(Protocol):
    """Protocol for the locale collaborator used by the ``"n"`` presentation type."""

    __slots__ = ()

    @abstractmethod
    def grouping_separator(self) -> str: ...

    @abstractmethod
    def decimal_point(self) -> str: ...
