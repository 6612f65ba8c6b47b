# -*- coding: utf-8 -*-
"""
Data Preparation Module - Pixel window computation for mosaic reads.

Plans which rows and columns of a mosaic to read. Window planners return
index bounds (``PixelWindow`` named tuples), not pixel data.

Key Classes
-----------
- PixelWindow: Named tuple for half-open grid window bounds
- GridBase: ABC for grid dimension management and clipping
- Tiler: Stride-based tile window computation

Usage
-----
Window around a selector extent:

    >>> from icevel.data_prep import resolve_window
    >>> window = resolve_window(x, y, xlim=[-3.3e6, -3.2e6],
    ...                         ylim=[2.5e5, 3.5e5], buffer_km=5)
    >>> block = grid[window.rows, window.cols]

Tile a full mosaic:

    >>> from icevel.data_prep import Tiler
    >>> for window in Tiler(nrows=len(y), ncols=len(x), tile_size=1000):
    ...     process(window)

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

from icevel.data_prep.base import GridBase, PixelWindow
from icevel.data_prep.subset import normalize_buffer, resolve_window
from icevel.data_prep.tiler import Tiler

__all__ = [
    'GridBase',
    'PixelWindow',
    'Tiler',
    'normalize_buffer',
    'resolve_window',
]
