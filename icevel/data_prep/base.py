# -*- coding: utf-8 -*-
"""
Data Preparation Base - Pixel window type and shared validation helpers.

Defines ``PixelWindow``, the half-open row/column bounds used by every
windowed read, and ``GridBase``, which holds grid dimensions for the
window planners in this package.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-09

Modified
--------
2026-10-15
"""

# Standard library
from abc import ABC
from typing import NamedTuple, Tuple, Union

# ICEVEL internal
from icevel.exceptions import ValidationError


class PixelWindow(NamedTuple):
    """Rectangular window within a mosaic grid.

    Indices are in the grid's stored order and always within bounds.
    Use directly for numpy slicing::

        block = grid[window.rows, window.cols]

    Attributes
    ----------
    row_start : int
        First row (inclusive). Always ``>= 0``.
    col_start : int
        First column (inclusive). Always ``>= 0``.
    row_end : int
        Last row (exclusive). Always ``<= nrows``.
    col_end : int
        Last column (exclusive). Always ``<= ncols``.
    """

    row_start: int
    col_start: int
    row_end: int
    col_end: int

    @property
    def rows(self) -> slice:
        """Row slice ``row_start:row_end``."""
        return slice(self.row_start, self.row_end)

    @property
    def cols(self) -> slice:
        """Column slice ``col_start:col_end``."""
        return slice(self.col_start, self.col_end)

    @property
    def shape(self) -> Tuple[int, int]:
        """Window dimensions as ``(rows, cols)``."""
        return (self.row_end - self.row_start, self.col_end - self.col_start)

    @property
    def size(self) -> int:
        """Number of grid cells in the window."""
        r, c = self.shape
        return r * c


class GridBase(ABC):
    """Base class for window planners over a fixed grid.

    Parameters
    ----------
    nrows : int
        Number of grid rows (length of y).
    ncols : int
        Number of grid columns (length of x).

    Raises
    ------
    TypeError
        If ``nrows`` or ``ncols`` is not ``int``.
    ValidationError
        If ``nrows`` or ``ncols`` is not positive.
    """

    def __init__(self, nrows: int, ncols: int) -> None:
        if not isinstance(nrows, int) or not isinstance(ncols, int):
            raise TypeError(
                f"nrows and ncols must be int, got "
                f"nrows={type(nrows).__name__}, ncols={type(ncols).__name__}"
            )
        if nrows <= 0 or ncols <= 0:
            raise ValidationError(
                f"nrows and ncols must be positive, got "
                f"nrows={nrows}, ncols={ncols}"
            )
        self._nrows = nrows
        self._ncols = ncols

    @property
    def nrows(self) -> int:
        """Number of grid rows."""
        return self._nrows

    @property
    def ncols(self) -> int:
        """Number of grid columns."""
        return self._ncols

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as ``(nrows, ncols)``.

        Returns
        -------
        Tuple[int, int]
        """
        return (self._nrows, self._ncols)

    def _clip_window(
        self,
        row_start: int,
        col_start: int,
        row_end: int,
        col_end: int,
    ) -> PixelWindow:
        """Clip requested bounds to ``[0, nrows]`` x ``[0, ncols]``."""
        return PixelWindow(
            max(0, row_start),
            max(0, col_start),
            min(self._nrows, row_end),
            min(self._ncols, col_end),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nrows={self._nrows}, ncols={self._ncols})"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _normalize_pair(
    value: Union[int, Tuple[int, int]], name: str
) -> Tuple[int, int]:
    """Convert an int or (int, int) tuple to a validated (int, int) pair.

    Parameters
    ----------
    value : int or Tuple[int, int]
        Scalar or pair value. If scalar, both elements are set equal.
    name : str
        Parameter name for error messages.

    Returns
    -------
    Tuple[int, int]
        Validated (rows, cols) pair.

    Raises
    ------
    TypeError
        If value is not int or tuple of two ints.
    ValidationError
        If any element is not positive.
    """
    if isinstance(value, int):
        if value <= 0:
            raise ValidationError(f"{name} must be positive, got {value}")
        return (value, value)
    if isinstance(value, tuple) and len(value) == 2:
        r, c = value
        if not isinstance(r, int) or not isinstance(c, int):
            raise TypeError(f"{name} tuple elements must be int")
        if r <= 0 or c <= 0:
            raise ValidationError(
                f"{name} elements must be positive, got ({r}, {c})"
            )
        return (r, c)
    raise TypeError(
        f"{name} must be int or Tuple[int, int], got {type(value).__name__}"
    )
