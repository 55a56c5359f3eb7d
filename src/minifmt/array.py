"""
######################################
Array rendering (:mod:`minifmt.array`)
######################################

.. currentmodule:: minifmt.array

This module renders NumPy arrays element-wise.

.. autosummary::
    :toctree: generated/

    format_array

"""

import itertools

import numpy as np
import numpy.typing as npt

from minifmt.render.renderer import FormatRenderer
from minifmt.spec.formatspec import Align, FormatSpec, PresentationType
from minifmt.spec.parser import parse


def format_array(
    spec: FormatSpec | str,
    array: npt.ArrayLike,
    *,
    align_columns: bool = False,
    renderer: FormatRenderer | None = None,
) -> npt.NDArray[np.object_]:
    """Render every element of an array under the same format specification.

    Elements are passed to the renderer as they are stored, so NumPy scalars keep
    their own precision (e.g., ``float32`` values render with their shortest
    ``float32`` digits).

    Parameters
    ----------
    spec : FormatSpec | str
    array : ArrayLike
    align_columns : bool, default=False
        If ``True``, pad the cells of each column (or of the whole array if it is
        one-dimensional) to a common width. Strings are left-aligned and numbers are
        right-aligned unless `spec` gives an alignment. Zero-padded and ``"="``-aligned
        numbers are rendered again at the common width, so the padding stays between
        the sign and the digits.
    renderer : FormatRenderer, optional

    Returns
    -------
    ndarray
        Object array of the same shape as `array`, containing :class:`str`.

    Examples
    --------
    >>> format_array(".1f", [[1.0, -2.25], [10.5, 3.0]], align_columns=True)
    array([[' 1.0', '-2.2'],
           ['10.5', ' 3.0']], dtype=object)
    """
    if isinstance(spec, str):
        spec = parse(spec)

    if renderer is None:
        renderer = FormatRenderer()

    tmp = np.asarray(array)
    result = np.empty(tmp.shape, np.object_)

    for key in itertools.product(*(range(n) for n in tmp.shape)):
        result[key] = renderer.render(spec, tmp[key])

    if not align_columns or result.size == 0:
        return result

    match result.ndim:
        case 1:
            columns = [(slice(None),)]

        case 2:
            columns = [(slice(None), j) for j in range(result.shape[1])]

        case _:
            raise ValueError("align_columns requires a 1D or 2D array")

    textual = tmp.dtype.kind in "US" or spec.type is PresentationType.STRING
    sign_aware = spec.align is Align.SIGN_AWARE or (
        spec.align is None and spec.zfill and not textual
    )

    for key in columns:
        # Views into result and tmp.
        cells = result[key]
        values = tmp[key]
        width = max(len(x) for x in cells)

        if sign_aware:
            _rerender(cells, values, width, spec, renderer)
            continue

        for i in range(cells.shape[0]):
            cells[i] = _justify(cells[i], width, spec, textual)

    return result


def _rerender(
    cells: np.ndarray,
    values: np.ndarray,
    width: int,
    spec: FormatSpec,
    renderer: FormatRenderer,
) -> None:
    # Grouped zero padding may exceed the requested width by a separator.
    while True:
        for i in range(cells.shape[0]):
            cells[i] = renderer.render(spec.replace(width=width), values[i])

        if (n := max(len(x) for x in cells)) == width:
            return

        width = n


def _justify(cell: str, width: int, spec: FormatSpec, textual: bool) -> str:
    align = spec.align
    fill = spec.fillchar

    if align is None:
        align = Align.LEFT if textual else Align.RIGHT

    n = width - len(cell)

    match align:
        case Align.LEFT:
            return cell + fill * n

        case Align.CENTER:
            return fill * (n // 2) + cell + fill * (n - n // 2)

    return fill * n + cell
