# -*- coding: utf-8 -*-
"""
Projection Backend Detection - Detect the coordinate transform library.

Probes for pyproj at import time. Provides a boolean flag and a helper
function that projection code uses to verify the package is installed
before constructing transformers.

Dependencies
------------
pyproj

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
2026-10-06

Modified
--------
2026-10-06
"""

# ICEVEL internal
from icevel.exceptions import DependencyError

_HAS_PYPROJ = False

try:
    import pyproj  # noqa: F401
    _HAS_PYPROJ = True
except ImportError:
    pass


def require_pyproj() -> None:
    """Verify that pyproj is installed.

    Raises
    ------
    DependencyError
        If pyproj is not installed. The message carries the
        installation instruction.
    """
    if not _HAS_PYPROJ:
        raise DependencyError(
            "Coordinate transforms require pyproj. "
            "Install with: pip install pyproj"
        )
