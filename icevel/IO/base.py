# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interface for velocity mosaic readers.

Defines the abstract base class for reading one ITS_LIVE mosaic file (one
region, one year slot). Concrete implementations handle the NetCDF4 and
GeoTIFF distributions. Readers expose the file's own variable catalog,
the coordinate axes, per-variable encoding attributes, and windowed reads
that never load more than the requested rows and columns.

All readers return windows in ``(y, x)`` layout with rows in the file's
native y order. Fill-value masking, scaling and north-up orientation are
applied by the loader, not here.

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
2026-10-07

Modified
--------
2026-10-19
"""

# Standard library
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Set, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import AXIS_VARIABLES, BOOLEAN_VARIABLES
from icevel.exceptions import ValidationError, VariableNotFoundError
from icevel.vocabulary import VariableKind

# Attributes that mark a variable as a flag/mask field
_FLAG_ATTRIBUTES = ('flag_values', 'flag_meanings', 'flag_masks')


def _decode_attr(val: Any) -> Any:
    """Convert an attribute value read from a file into a plain Python value."""
    if isinstance(val, bytes):
        return val.decode("utf-8", errors="replace")
    if isinstance(val, np.ndarray):
        if val.size == 1:
            return _decode_attr(val.reshape(-1)[0])
        return val.tolist()
    if isinstance(val, (np.integer, np.floating, np.bool_)):
        return val.item()
    return val


class MosaicReader(ABC):
    """
    Abstract base class for all velocity mosaic readers.

    Attributes
    ----------
    filepath : Path
        Path to the mosaic file.
    metadata : Dict[str, Any]
        File-level metadata extracted at open time. Always contains
        ``'format'``, ``'rows'``, ``'cols'`` and ``'variables'``.

    Notes
    -----
    Readers are lazy: only metadata is read at construction. Axis arrays
    are read on first use and cached on the instance. Reads are serialized
    through a per-reader lock so one reader may be shared between threads.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the mosaic reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the mosaic file.

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist.
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self.metadata: Dict[str, Any] = {}
        self._axes: Dict[str, np.ndarray] = {}
        self._read_variables: Set[str] = set()
        self._io_lock = threading.Lock()
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """
        Open the file and populate ``self.metadata``.

        Implementations must set ``'rows'`` (length of y), ``'cols'``
        (length of x) and ``'variables'`` (sorted list of names).
        """
        pass

    @abstractmethod
    def list_variables(self) -> Set[str]:
        """
        Names of every variable in the file, axes included.

        Returns
        -------
        Set[str]
        """
        pass

    @abstractmethod
    def _read_axis(self, axis: str) -> np.ndarray:
        """
        Read a full coordinate axis from the file.

        Parameters
        ----------
        axis : str
            ``'x'`` or ``'y'``.

        Returns
        -------
        np.ndarray
            1D float64 array of pixel-center coordinates in meters.
        """
        pass

    @abstractmethod
    def _read_window(
        self,
        variable: str,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        """Format-specific windowed read. Bounds are already validated."""
        pass

    @abstractmethod
    def get_attributes(self, variable: str) -> Dict[str, Any]:
        """
        Encoding and descriptive attributes of a variable.

        Fill sentinels are reported as ``'_FillValue'`` and packing as
        ``'scale_factor'`` / ``'add_offset'``, whatever the file format.

        Parameters
        ----------
        variable : str
            Variable name.

        Returns
        -------
        Dict[str, Any]
        """
        pass

    @abstractmethod
    def get_dtype(self, variable: str) -> np.dtype:
        """
        Storage data type of a variable.

        Returns
        -------
        np.dtype
        """
        pass

    def check_variable(self, variable: str) -> None:
        """
        Verify that a variable exists in this mosaic.

        Raises
        ------
        VariableNotFoundError
            Listing every valid variable name.
        """
        names = self.list_variables()
        if variable not in names:
            raise VariableNotFoundError(
                variable, names, source=self.filepath.name
            )

    def read_axis(self, axis: str) -> np.ndarray:
        """
        Read the full ``'x'`` or ``'y'`` coordinate axis.

        The x axis is ascending. The y axis is returned in the order it
        is stored, which may be ascending or descending.

        Parameters
        ----------
        axis : str
            ``'x'`` or ``'y'``.

        Returns
        -------
        np.ndarray
            Read-only 1D float64 array.

        Raises
        ------
        ValidationError
            If ``axis`` is not ``'x'`` or ``'y'``.
        """
        if axis not in AXIS_VARIABLES:
            raise ValidationError(
                f"axis must be one of {AXIS_VARIABLES}, got {axis!r}"
            )
        if axis not in self._axes:
            with self._io_lock:
                values = np.asarray(self._read_axis(axis), dtype=np.float64)
            values.setflags(write=False)
            self._axes[axis] = values
        return self._axes[axis]

    def read_window(
        self,
        variable: str,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        """
        Read a rectangular window of a gridded variable.

        Parameters
        ----------
        variable : str
            Variable name.
        row_start : int
            Starting row (y index) inclusive.
        row_end : int
            Ending row (y index) exclusive.
        col_start : int
            Starting column (x index) inclusive.
        col_end : int
            Ending column (x index) exclusive.

        Returns
        -------
        np.ndarray
            Raw stored values with shape ``(row_end - row_start,
            col_end - col_start)``.

        Raises
        ------
        VariableNotFoundError
            If the variable does not exist.
        ValidationError
            If the variable is an axis or the indices are out of bounds.
        """
        self.check_variable(variable)
        if variable in AXIS_VARIABLES:
            raise ValidationError(
                f"'{variable}' is a coordinate axis; use read_axis()"
            )
        if row_start < 0 or col_start < 0:
            raise ValidationError("Start indices must be non-negative")
        if row_end > self.metadata['rows'] or col_end > self.metadata['cols']:
            raise ValidationError("End indices exceed mosaic dimensions")
        if row_end <= row_start or col_end <= col_start:
            raise ValidationError(
                f"Empty window rows [{row_start}, {row_end}) "
                f"cols [{col_start}, {col_end})"
            )
        with self._io_lock:
            self._read_variables.add(variable)
            return self._read_window(
                variable, row_start, row_end, col_start, col_end
            )

    def get_shape(self) -> Tuple[int, int]:
        """
        Grid shape as ``(rows, cols)`` = ``(len(y), len(x))``.

        Returns
        -------
        Tuple[int, int]
        """
        return (self.metadata['rows'], self.metadata['cols'])

    def get_fill_value(self, variable: str) -> Optional[float]:
        """
        Fill sentinel of a variable, if it declares one.

        Returns
        -------
        Optional[float]
            ``_FillValue``, else ``missing_value``, else None.
        """
        attrs = self.get_attributes(variable)
        for key in ('_FillValue', 'missing_value'):
            if attrs.get(key) is not None:
                return attrs[key]
        return None

    def get_scale_offset(self, variable: str) -> Tuple[float, float]:
        """
        CF packing parameters of a variable.

        Returns
        -------
        Tuple[float, float]
            ``(scale_factor, add_offset)``; ``(1.0, 0.0)`` when unpacked.
        """
        attrs = self.get_attributes(variable)
        scale = attrs.get('scale_factor')
        offset = attrs.get('add_offset')
        return (
            1.0 if scale is None else float(scale),
            0.0 if offset is None else float(offset),
        )

    def get_variable_kind(self, variable: str) -> VariableKind:
        """
        Decide whether a variable is a boolean mask or a continuous field.

        File metadata wins: flag attributes or a boolean storage type mark
        a mask. The static list of mask names is consulted only when the
        file says nothing.

        Returns
        -------
        VariableKind
        """
        self.check_variable(variable)
        attrs = self.get_attributes(variable)
        if any(key in attrs for key in _FLAG_ATTRIBUTES):
            return VariableKind.BOOLEAN
        if self.get_dtype(variable) == np.bool_:
            return VariableKind.BOOLEAN
        if variable.lower() in BOOLEAN_VARIABLES:
            return VariableKind.BOOLEAN
        return VariableKind.CONTINUOUS

    def _handle_nbytes(self) -> int:
        """
        Estimate of the read cache held by the open file handle.

        Default is 0. Override where the backend keeps decoded blocks
        or chunks between reads.
        """
        return 0

    @property
    def nbytes(self) -> int:
        """
        Approximate memory held by this reader.

        Cached coordinate axes plus the backend's estimate of its handle
        read cache. Arrays already returned to callers are not counted.
        """
        axes = sum(a.nbytes for a in self._axes.values())
        return int(axes + self._handle_nbytes())

    def close(self) -> None:
        """
        Close the reader and release resources.

        Default implementation does nothing. Override if the reader
        maintains open file handles.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.filepath)!r})"
