"""
#######################################
Format specifiers (:mod:`minifmt.spec`)
#######################################

.. currentmodule:: minifmt.spec

This module provides the parser of the format-specifier mini-language and the
value it produces.

Parsing
=======

.. autosummary::
    :toctree: generated/

    parse
    FormatSpecParser

Format specification
====================

.. autosummary::
    :toctree: generated/

    FormatSpec
    Align
    Conversion
    Grouping
    PresentationType
    Sign

"""

from .formatspec import (
    Align,
    Conversion,
    FormatSpec,
    Grouping,
    PresentationType,
    Sign,
)
from .parser import FormatSpecParser, parse

__all__ = [
    "Align",
    "Conversion",
    "FormatSpec",
    "FormatSpecParser",
    "Grouping",
    "PresentationType",
    "Sign",
    "parse",
]
