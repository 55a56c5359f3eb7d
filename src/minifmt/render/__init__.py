"""
#################################
Rendering (:mod:`minifmt.render`)
#################################

.. currentmodule:: minifmt.render

This module provides the renderer, which applies a format specification to a value.

Rendering
=========

.. autosummary::
    :toctree: generated/

    render
    format_value
    FormatRenderer

Values
======

.. autosummary::
    :toctree: generated/

    coerce
    Integer
    Float
    Text
    Object
    ValueKind

"""

from .renderer import FormatRenderer, format_value, render
from .value import Float, Integer, Object, Text, Value, ValueKind, coerce

__all__ = [
    "FormatRenderer",
    "format_value",
    "render",
    "Float",
    "Integer",
    "Object",
    "Text",
    "Value",
    "ValueKind",
    "coerce",
]
