# -*- coding: utf-8 -*-
"""
NetCDF Mosaic Reader - Read ITS_LIVE NetCDF4 velocity mosaics.

NetCDF4 files are HDF5 containers, so the reader opens them with h5py and
uses hyperslab selection for windowed reads. Every root-level dataset is a
variable; ``x`` and ``y`` are the pixel-center coordinate axes. Gridded
variables may be stored ``(y, x)`` or ``(x, y)``; windows are always
returned ``(y, x)``.

Dependencies
------------
h5py

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
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import NETCDF_CHUNK_CACHE_BYTES
from icevel.exceptions import ValidationError
from icevel.IO._backend import require_h5py
from icevel.IO.base import MosaicReader, _decode_attr
from icevel.vocabulary import MosaicFormat

# HDF5 bookkeeping attributes written by the netCDF library
_INTERNAL_ATTRIBUTES = frozenset({
    'CLASS',
    'NAME',
    'DIMENSION_LIST',
    'REFERENCE_LIST',
    '_Netcdf4Dimid',
    '_Netcdf4Coordinates',
    '_nc3_strict',
})

_PURE_DIMENSION = "This is a netCDF dimension but not a netCDF variable"


def _dimension_names(ds: Any) -> Optional[List[str]]:
    """Names of the dimension scales attached to a dataset, if any."""
    names = []
    for dim in ds.dims:
        if len(dim) == 0:
            return None
        names.append(dim[0].name.rsplit('/', 1)[-1])
    return names


class NetCDFMosaicReader(MosaicReader):
    """Read an ITS_LIVE NetCDF4 mosaic.

    Parameters
    ----------
    filepath : str or Path
        Path to the ``.nc`` file.

    Attributes
    ----------
    filepath : Path
        Path to the file.
    metadata : Dict[str, Any]
        ``format``, ``rows``, ``cols``, ``variables`` and the decoded
        global attributes under ``attrs``.

    Raises
    ------
    DependencyError
        If h5py is not installed.
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file cannot be opened or has no ``x``/``y`` axes.

    Examples
    --------
    >>> with NetCDFMosaicReader('ITS_LIVE_velocity_120m_RGI01A_0000_v02.nc') as r:
    ...     sorted(r.list_variables())[:3]
    ...     block = r.read_window('v', 0, 100, 0, 100)
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        require_h5py()
        self._file = None
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Open the file and index its root-level datasets."""
        import h5py

        try:
            self._file = h5py.File(
                str(self.filepath), "r", rdcc_nbytes=NETCDF_CHUNK_CACHE_BYTES
            )
        except OSError as e:
            raise ValidationError(
                f"Failed to open NetCDF file: {self.filepath}: {e}"
            ) from e

        names = []
        for name, obj in self._file.items():
            if not isinstance(obj, h5py.Dataset):
                continue
            label = _decode_attr(obj.attrs.get('NAME', b''))
            if isinstance(label, str) and label.startswith(_PURE_DIMENSION):
                continue
            names.append(name)
        self._variables = set(names)

        for axis in ('x', 'y'):
            if axis not in self._variables:
                self.close()
                raise ValidationError(
                    f"{self.filepath.name} has no '{axis}' coordinate axis."
                )

        attrs = {
            key: _decode_attr(val)
            for key, val in self._file.attrs.items()
            if key not in _INTERNAL_ATTRIBUTES
        }

        self.metadata = {
            'format': MosaicFormat.NETCDF,
            'rows': int(self._file['y'].shape[0]),
            'cols': int(self._file['x'].shape[0]),
            'variables': sorted(self._variables),
            'attrs': attrs,
        }

    def list_variables(self) -> Set[str]:
        """Every root-level variable, axes included."""
        return set(self._variables)

    def _read_axis(self, axis: str) -> np.ndarray:
        return self._file[axis][()]

    def _is_transposed(self, variable: str) -> bool:
        """True when a 2D variable is stored ``(x, y)``."""
        ds = self._file[variable]
        rows, cols = self.metadata['rows'], self.metadata['cols']
        if ds.ndim != 2:
            raise ValidationError(
                f"Variable '{variable}' has {ds.ndim} dimensions; only "
                "2D gridded variables can be windowed."
            )
        dims = _dimension_names(ds)
        if dims == ['x', 'y']:
            return True
        if dims == ['y', 'x']:
            return False
        if ds.shape == (rows, cols):
            return False
        if ds.shape == (cols, rows):
            return True
        raise ValidationError(
            f"Variable '{variable}' has shape {ds.shape}, which does not "
            f"match the ({rows}, {cols}) grid."
        )

    def _read_window(
        self,
        variable: str,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        ds = self._file[variable]
        if self._is_transposed(variable):
            return ds[col_start:col_end, row_start:row_end].T
        return ds[row_start:row_end, col_start:col_end]

    def get_attributes(self, variable: str) -> Dict[str, Any]:
        """Decoded attributes of a variable, HDF5 bookkeeping removed."""
        self.check_variable(variable)
        return {
            key: _decode_attr(val)
            for key, val in self._file[variable].attrs.items()
            if key not in _INTERNAL_ATTRIBUTES
        }

    def get_dtype(self, variable: str) -> np.dtype:
        self.check_variable(variable)
        return self._file[variable].dtype

    def _handle_nbytes(self) -> int:
        """One chunk cache per variable read so far."""
        return NETCDF_CHUNK_CACHE_BYTES * len(self._read_variables)

    def close(self) -> None:
        """Close the HDF5 file handle."""
        if self._file is not None:
            self._file.close()
            self._file = None
