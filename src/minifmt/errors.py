"""
##############################
Errors (:mod:`minifmt.errors`)
##############################

.. currentmodule:: minifmt.errors

.. autosummary::
    :toctree: generated/

    FormatError
    MalformedSpec
    TypeMismatch
    DomainError

"""


class FormatError(ValueError):
    """Base class of errors raised by :mod:`minifmt`."""


class MalformedSpec(FormatError):
    """Error raised when a format specifier violates the grammar.

    Parameters
    ----------
    reason : str
        Human-readable description of the violation.
    position : int
        Index of the offending character in `text`.
    text : str, default=""
        The specifier being parsed.

    Attributes
    ----------
    reason : str
    position : int
    text : str
    """

    def __init__(self, reason: str, position: int, text: str = ""):
        self.reason = reason
        self.position = position
        self.text = text
        super().__init__(f"{reason} at position {position} in format spec {text!r}")

    def __reduce__(self):
        return (self.__class__, (self.reason, self.position, self.text))


class TypeMismatch(FormatError, TypeError):
    """Error raised when a presentation type or option does not apply to the kind of
    the value being rendered."""


class DomainError(FormatError):
    """Error raised when a value lies outside the domain a presentation type
    requires, e.g., a negative code point for ``"c"``."""
