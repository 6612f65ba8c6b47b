# -*- coding: utf-8 -*-
"""
Interpolation - Grid sampling and path geometry helpers.

Provides the building blocks used by ``icevel.interp``:

- ``GridInterpolator`` / ``interp2`` - regular-grid sampling at scattered
  points (nearest, linear, cubic) with layered grids and boolean masks.
- ``path_distance`` / ``path_heading`` / ``project_along_across`` - flux
  gate geometry.
- ``season_interp`` - amplitude/phase interpolation through Cartesian
  components.

Dependencies
------------
scipy

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
2026-10-11

Modified
--------
2026-10-13
"""

from icevel.interpolation.flux import (
    path_distance,
    path_heading,
    project_along_across,
)
from icevel.interpolation.grid import GridInterpolator, interp2
from icevel.interpolation.seasonal import season_interp

__all__ = [
    'GridInterpolator',
    'interp2',
    'path_distance',
    'path_heading',
    'project_along_across',
    'season_interp',
]
