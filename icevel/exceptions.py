# -*- coding: utf-8 -*-
"""
ICEVEL Exception Hierarchy - Domain-specific exceptions and warnings.

Provides a small exception hierarchy that lets callers catch ICEVEL errors
distinctly from Python built-in exceptions. All ICEVEL exceptions subclass
both ``IcevelError`` and the appropriate built-in exception, so code that
already catches ``ValueError`` or ``FileNotFoundError`` keeps working.

Non-fatal conditions (degenerate geometry, expensive conversions, long
integrations) are reported through ``warnings.warn`` with the warning
categories defined at the bottom of this module.

Author
------
Steven Siebert

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
2026-10-17
"""

from typing import Iterable, Optional


class IcevelError(Exception):
    """Base exception for all ICEVEL errors."""


class ValidationError(IcevelError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for unknown region codes, malformed spatial selectors,
    shape mismatches, and other input validation failures. The message
    names the offending parameter.
    """


class OutOfRangeError(ValidationError):
    """Implausible numeric input, rejected before any I/O.

    Raised for latitudes outside +/-90 degrees, longitudes outside
    [-180, 360], and displacement requests beyond the sanity bound.
    """


class MosaicNotFoundError(IcevelError, FileNotFoundError):
    """A mosaic file for the requested region and year does not exist.

    Parameters
    ----------
    message : str
        Human readable description naming the missing file.
    available : Iterable[str], optional
        Mosaic file names that do exist for the region.
    """

    def __init__(
        self,
        message: str,
        available: Optional[Iterable[str]] = None,
    ) -> None:
        self.available = sorted(available) if available else []
        if self.available:
            message = (
                f"{message} Available mosaics for this region: "
                f"{self.available}"
            )
        else:
            message = f"{message} No mosaics for this region were found."
        super().__init__(message)


class VariableNotFoundError(IcevelError, LookupError):
    """A variable name is not part of a mosaic's variable catalog.

    The full catalog is attached as ``available`` and repeated in the
    message to support interactive discovery.

    Parameters
    ----------
    variable : str
        The requested variable name.
    available : Iterable[str]
        Variable names present in the mosaic.
    source : str, optional
        File the catalog was read from.
    """

    def __init__(
        self,
        variable: str,
        available: Iterable[str],
        source: Optional[str] = None,
    ) -> None:
        self.variable = variable
        self.available = sorted(available)
        where = f" in {source}" if source else ""
        super().__init__(
            f"Cannot find variable '{variable}'{where}. "
            f"It should be one of: {self.available}"
        )

    def __str__(self) -> str:
        # LookupError would otherwise quote the whole message like KeyError
        return self.args[0]


class NoDataError(IcevelError, ValueError):
    """The requested spatial extent contains no grid samples."""


class DependencyError(IcevelError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a reader or transform requires a package (h5py,
    rasterio, pyproj) that is not installed.
    """


class ProcessingError(IcevelError, RuntimeError):
    """Algorithm failure during integration or tiling.

    Raised when an iterative computation cannot complete, such as the
    displacement integrator exceeding its iteration cap.
    """


class DegenerateGeometryWarning(UserWarning):
    """A spatial selector was widened to keep a window non-empty."""


class LargeGridWarning(UserWarning):
    """A requested grid conversion is large enough to be slow."""


class LongIntegrationWarning(UserWarning):
    """A displacement spans more time than the static field represents."""
