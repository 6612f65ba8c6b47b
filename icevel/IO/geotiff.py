# -*- coding: utf-8 -*-
"""
GeoTIFF Mosaic Reader - Read multi-band GeoTIFF velocity mosaics.

Reads GeoTIFF renditions of the ITS_LIVE mosaics, one band per variable,
using rasterio windowed reads. Band descriptions carry the variable names.
The ``x`` and ``y`` axes are not stored as bands; they are derived from the
affine geotransform as pixel-center coordinates.

Dependencies
------------
rasterio

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
2026-10-08

Modified
--------
2026-10-19
"""

# Standard library
from pathlib import Path
from typing import Any, Dict, Set, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import AXIS_VARIABLES
from icevel.exceptions import ValidationError
from icevel.IO._backend import require_rasterio
from icevel.IO.base import MosaicReader
from icevel.vocabulary import MosaicFormat

_NUMERIC_TAGS = ('_FillValue', 'missing_value', 'scale_factor', 'add_offset')


class GeoTIFFMosaicReader(MosaicReader):
    """Read a multi-band GeoTIFF mosaic.

    Parameters
    ----------
    filepath : str or Path
        Path to the ``.tif`` file.

    Attributes
    ----------
    filepath : Path
        Path to the file.
    metadata : Dict[str, Any]
        ``format``, ``rows``, ``cols``, ``variables``, ``crs`` and
        ``transform``.
    dataset : rasterio.DatasetReader
        Rasterio dataset object for direct access.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file cannot be opened or its geotransform is rotated.

    Notes
    -----
    Bands without a description are named ``band_<n>`` (1-based).
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        require_rasterio()
        self.dataset = None
        super().__init__(filepath)

    def _load_metadata(self) -> None:
        """Load GeoTIFF metadata using rasterio."""
        import rasterio
        from rasterio.errors import RasterioIOError

        try:
            self.dataset = rasterio.open(str(self.filepath))
        except RasterioIOError as e:
            raise ValidationError(
                f"Failed to open GeoTIFF file: {self.filepath}: {e}"
            ) from e

        transform = self.dataset.transform
        if transform.b != 0 or transform.d != 0:
            self.close()
            raise ValidationError(
                f"{self.filepath.name} has a rotated geotransform; "
                "mosaic axes must be grid-aligned."
            )

        self._bands: Dict[str, int] = {}
        for i, desc in enumerate(self.dataset.descriptions):
            name = desc if desc else f"band_{i + 1}"
            self._bands[name] = i + 1

        self.metadata = {
            'format': MosaicFormat.GEOTIFF,
            'rows': self.dataset.height,
            'cols': self.dataset.width,
            'variables': sorted(set(self._bands) | set(AXIS_VARIABLES)),
            'crs': str(self.dataset.crs),
            'transform': transform,
        }

    def list_variables(self) -> Set[str]:
        """Band names plus the derived ``x`` and ``y`` axes."""
        return set(self._bands) | set(AXIS_VARIABLES)

    def _read_axis(self, axis: str) -> np.ndarray:
        t = self.dataset.transform
        if axis == 'x':
            return t.c + t.a * (np.arange(self.dataset.width) + 0.5)
        return t.f + t.e * (np.arange(self.dataset.height) + 0.5)

    def _read_window(
        self,
        variable: str,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        from rasterio.windows import Window

        window = Window(
            col_start, row_start,
            col_end - col_start, row_end - row_start,
        )
        return self.dataset.read(self._bands[variable], window=window)

    def get_attributes(self, variable: str) -> Dict[str, Any]:
        """Band tags, with nodata and packing mapped to CF names."""
        self.check_variable(variable)
        if variable in AXIS_VARIABLES:
            return {'units': 'meter'}
        idx = self._bands[variable] - 1
        attrs: Dict[str, Any] = dict(self.dataset.tags(idx + 1))
        # GDAL stores band tags as text
        for key in _NUMERIC_TAGS:
            if key in attrs:
                try:
                    attrs[key] = float(attrs[key])
                except ValueError:
                    raise ValidationError(
                        f"Band '{variable}' tag {key}={attrs[key]!r} in "
                        f"{self.filepath.name} is not a number"
                    ) from None
        nodata = self.dataset.nodatavals[idx]
        if nodata is not None:
            attrs['_FillValue'] = nodata
        scale = self.dataset.scales[idx]
        offset = self.dataset.offsets[idx]
        if scale not in (None, 1.0):
            attrs['scale_factor'] = scale
        if offset not in (None, 0.0):
            attrs['add_offset'] = offset
        return attrs

    def get_dtype(self, variable: str) -> np.dtype:
        self.check_variable(variable)
        if variable in AXIS_VARIABLES:
            return np.dtype(np.float64)
        return np.dtype(self.dataset.dtypes[self._bands[variable] - 1])

    def _handle_nbytes(self) -> int:
        """One decoded block per band read so far."""
        if self.dataset is None:
            return 0
        total = 0
        for variable in self._read_variables:
            idx = self._bands[variable] - 1
            block_rows, block_cols = self.dataset.block_shapes[idx]
            itemsize = np.dtype(self.dataset.dtypes[idx]).itemsize
            total += block_rows * block_cols * itemsize
        return total

    def close(self) -> None:
        """Close the rasterio dataset."""
        if self.dataset is not None:
            self.dataset.close()
            self.dataset = None
