# -*- coding: utf-8 -*-
"""
Tiler - Partition a mosaic grid into tile windows.

Plans a row-major grid of ``PixelWindow`` tiles covering a mosaic so that
whole-mosaic reductions can read, process and write one tile at a time.
Edge tiles are clipped to the grid rather than padded, because they map
directly onto windowed file reads.

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
2026-10-10

Modified
--------
2026-10-15
"""

# Standard library
from typing import Iterator, List, Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.data_prep.base import GridBase, PixelWindow, _normalize_pair
from icevel.exceptions import ValidationError


class Tiler(GridBase):
    """Split a grid into tiles with configurable stride.

    Parameters
    ----------
    nrows : int
        Number of grid rows.
    ncols : int
        Number of grid columns.
    tile_size : int or Tuple[int, int]
        (tile_rows, tile_cols). If int, square tiles.
    stride : int or Tuple[int, int], optional
        (stride_rows, stride_cols). Defaults to tile_size (no overlap).

    Raises
    ------
    TypeError
        If a size is not int or Tuple[int, int].
    ValidationError
        If a size has non-positive elements, or if stride exceeds
        tile_size in any dimension.

    Examples
    --------
    >>> tiler = Tiler(nrows=2500, ncols=1200, tile_size=1000)
    >>> len(tiler)
    6
    >>> tiler.tile_positions()[-1]
    PixelWindow(row_start=2000, col_start=1000, row_end=2500, col_end=1200)
    """

    def __init__(
        self,
        nrows: int,
        ncols: int,
        tile_size: Union[int, Tuple[int, int]] = 1000,
        stride: Optional[Union[int, Tuple[int, int]]] = None,
    ) -> None:
        super().__init__(nrows, ncols)
        self._tile_size = _normalize_pair(tile_size, 'tile_size')
        if stride is None:
            self._stride = self._tile_size
        else:
            self._stride = _normalize_pair(stride, 'stride')
        if self._stride[0] > self._tile_size[0] or \
                self._stride[1] > self._tile_size[1]:
            raise ValidationError(
                f"stride {self._stride} must not exceed "
                f"tile_size {self._tile_size}"
            )

    @property
    def tile_size(self) -> Tuple[int, int]:
        """The (tile_rows, tile_cols) dimensions."""
        return self._tile_size

    @property
    def stride(self) -> Tuple[int, int]:
        """The (stride_rows, stride_cols) step sizes."""
        return self._stride

    def _compute_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Row and column starting positions of the tile grid."""
        tr, tc = self._tile_size
        sr, sc = self._stride

        # At least 1 tile, then one more per stride step beyond the first
        if self._nrows <= tr:
            n_row_tiles = 1
        else:
            n_row_tiles = 1 + int(np.ceil((self._nrows - tr) / sr))

        if self._ncols <= tc:
            n_col_tiles = 1
        else:
            n_col_tiles = 1 + int(np.ceil((self._ncols - tc) / sc))

        return np.arange(n_row_tiles) * sr, np.arange(n_col_tiles) * sc

    def tile_positions(self) -> List[PixelWindow]:
        """Tile windows ordered row-major, clipped to the grid.

        Returns
        -------
        List[PixelWindow]
        """
        tr, tc = self._tile_size
        row_starts, col_starts = self._compute_grid()
        return [
            self._clip_window(int(rs), int(cs), int(rs) + tr, int(cs) + tc)
            for rs in row_starts
            for cs in col_starts
        ]

    def __iter__(self) -> Iterator[PixelWindow]:
        return iter(self.tile_positions())

    def __len__(self) -> int:
        row_starts, col_starts = self._compute_grid()
        return len(row_starts) * len(col_starts)

    def __repr__(self) -> str:
        return (
            f"Tiler(nrows={self._nrows}, ncols={self._ncols}, "
            f"tile_size={self._tile_size}, stride={self._stride})"
        )
