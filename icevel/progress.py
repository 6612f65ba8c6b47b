# -*- coding: utf-8 -*-
"""
Progress Reporting - Optional progress callbacks for long operations.

Long-running operations (geographic grid conversion, multi-seed flowline
tracing, tiled reductions) accept a ``progress_callback`` keyword. The
callback receives the completed fraction in [0.0, 1.0] and may raise any
exception to abort the operation; the exception propagates unchanged.

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
2026-10-11
"""

from typing import Callable, Optional

ProgressCallback = Optional[Callable[[float], None]]


def report_progress(callback: ProgressCallback, fraction: float) -> None:
    """Report progress to an optional callback.

    Parameters
    ----------
    callback : callable or None
        Called with the current fraction. No-op when None.
    fraction : float
        Progress fraction in [0.0, 1.0].
    """
    if callback is not None:
        callback(float(min(max(fraction, 0.0), 1.0)))
