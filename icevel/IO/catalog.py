# -*- coding: utf-8 -*-
"""
Mosaic Store - Locate, open and cache ITS_LIVE mosaic files.

``MosaicStore`` maps a ``(region, year)`` pair to a file in a data
directory, opens it with the appropriate reader, and keeps a bounded
least-recently-used set of open readers so that repeated windowed reads
(interpolation inside an integration loop, tiled reductions) do not reopen
files. The cache is bounded by both a handle count and an approximate byte
budget and is safe for concurrent use.

``default_store`` returns a process-wide store per data directory; every
public entry point uses it unless a store is passed explicitly.

Dependencies
------------
h5py
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
import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import (
    Dict, List, NamedTuple, Optional, Sequence, Set, Tuple, Union,
)

# Third-party
import numpy as np

# ICEVEL internal
from icevel.config import (
    CACHE_MAX_BYTES,
    CACHE_MAX_OPEN,
    MOSAIC_EXTENSIONS,
    get_data_dir,
)
from icevel.exceptions import MosaicNotFoundError, ValidationError
from icevel.IO.base import MosaicReader
from icevel.IO.geotiff import GeoTIFFMosaicReader
from icevel.IO.netcdf import NetCDFMosaicReader
from icevel.regions import Region, get_region
from icevel.vocabulary import VariableKind

logger = logging.getLogger(__name__)

RegionLike = Union[int, str, Region]


class VariableInfo(NamedTuple):
    """Kind and CF encoding of one mosaic variable."""

    name: str
    kind: VariableKind
    fill_value: Optional[float]
    scale_factor: float
    add_offset: float
    units: Optional[str]

_READERS = {
    '.nc': NetCDFMosaicReader,
    '.nc4': NetCDFMosaicReader,
    '.h5': NetCDFMosaicReader,
    '.tif': GeoTIFFMosaicReader,
    '.tiff': GeoTIFFMosaicReader,
}


def open_mosaic(filepath: Union[str, Path]) -> MosaicReader:
    """Open a mosaic file with the reader matching its extension.

    Parameters
    ----------
    filepath : str or Path
        Path to a ``.nc`` or ``.tif`` mosaic.

    Returns
    -------
    MosaicReader

    Raises
    ------
    ValidationError
        If the extension is not a supported mosaic format.
    FileNotFoundError
        If the file does not exist.

    Examples
    --------
    >>> from icevel.IO import open_mosaic
    >>> with open_mosaic('ITS_LIVE_velocity_120m_RGI05A_0000_v02.nc') as r:
    ...     x = r.read_axis('x')
    """
    filepath = Path(filepath)
    reader_cls = _READERS.get(filepath.suffix.lower())
    if reader_cls is None:
        raise ValidationError(
            f"Cannot determine mosaic format from extension "
            f"'{filepath.suffix}'. Supported extensions: {sorted(_READERS)}."
        )
    return reader_cls(filepath)


class MosaicStore:
    """File locator and bounded reader cache for one data directory.

    Parameters
    ----------
    data_dir : str or Path, optional
        Directory holding the mosaics. Defaults to ``$ICEVEL_DATA_DIR``
        or the current working directory.
    max_open : int
        Maximum number of readers kept open at once.
    max_bytes : int
        Approximate memory budget for cached readers. Each reader counts
        its cached axes plus an estimate of its handle read cache, one
        HDF5 chunk cache or GeoTIFF block per variable read. Arrays
        returned to callers are not counted.
    extensions : Sequence[str]
        File extensions tried, in order, when resolving a mosaic.

    Examples
    --------
    >>> store = MosaicStore('/data/itslive')
    >>> store.list_variables(1, 0)
    {'v', 'vx', 'vy', ...}
    >>> block = store.read_window(1, 0, 'v', (0, 100), (0, 100))
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        max_open: int = CACHE_MAX_OPEN,
        max_bytes: int = CACHE_MAX_BYTES,
        extensions: Sequence[str] = MOSAIC_EXTENSIONS,
    ) -> None:
        if max_open < 1:
            raise ValidationError(f"max_open must be >= 1, got {max_open}")
        self.data_dir = get_data_dir(data_dir)
        self.max_open = int(max_open)
        self.max_bytes = int(max_bytes)
        self.extensions = tuple(extensions)
        self._cache: "OrderedDict[Tuple[int, int], MosaicReader]" = OrderedDict()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def available(self, region: RegionLike) -> List[str]:
        """File names of every mosaic present for a region.

        Returns
        -------
        List[str]
            Sorted file names. Empty if the directory does not exist.
        """
        region = get_region(region)
        if not self.data_dir.is_dir():
            return []
        return sorted(p.name for p in self.data_dir.glob(region.filename_glob()))

    def resolve_path(self, region: RegionLike, year: int) -> Path:
        """Locate the mosaic file for a region and year slot.

        Parameters
        ----------
        region : int, str or Region
            Region identifier.
        year : int
            Calendar year, or 0 for the summary mosaic.

        Returns
        -------
        Path

        Raises
        ------
        MosaicNotFoundError
            Naming the expected file and listing the mosaics that do
            exist for the region.
        """
        region = get_region(region)
        for ext in self.extensions:
            path = self.data_dir / region.filename(year, ext)
            if path.is_file():
                return path
        expected = region.filename(year, self.extensions[0])
        raise MosaicNotFoundError(
            f"Cannot find {expected} in {self.data_dir}.",
            available=self.available(region),
        )

    # ------------------------------------------------------------------
    # Reader cache
    # ------------------------------------------------------------------

    def open(self, region: RegionLike, year: int) -> MosaicReader:
        """Return a cached reader for a mosaic, opening it if needed.

        Returned readers stay owned by the store; do not close them. A
        reader may be closed by eviction once the lock is released, so
        concurrent callers should go through the store's read methods.
        """
        region = get_region(region)
        key = (region.code, int(year))
        with self._lock:
            reader = self._cache.get(key)
            if reader is not None:
                self._cache.move_to_end(key)
                return reader
            path = self.resolve_path(region, year)
            logger.debug("Opening mosaic %s", path)
            reader = open_mosaic(path)
            self._cache[key] = reader
            self._evict()
            return reader

    def _evict(self) -> None:
        """Close least-recently-used readers until within both limits."""
        while len(self._cache) > 1 and (
            len(self._cache) > self.max_open
            or self.cached_bytes > self.max_bytes
        ):
            key, reader = self._cache.popitem(last=False)
            logger.debug("Evicting mosaic %s", reader.filepath.name)
            reader.close()

    @property
    def cached_bytes(self) -> int:
        """Approximate memory held by the open readers."""
        with self._lock:
            return sum(r.nbytes for r in self._cache.values())

    def clear(self) -> None:
        """Close every cached reader."""
        with self._lock:
            while self._cache:
                _, reader = self._cache.popitem(last=False)
                reader.close()

    close = clear

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: Tuple[int, int]) -> bool:
        region, year = key
        return (get_region(region).code, int(year)) in self._cache

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()
        return False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_variables(self, region: RegionLike, year: int) -> Set[str]:
        """Variable catalog of a mosaic, read from the file."""
        with self._lock:
            return self.open(region, year).list_variables()

    def variable_info(
        self, region: RegionLike, year: int, variable: str
    ) -> VariableInfo:
        """Kind and encoding of a variable in one mosaic.

        Raises
        ------
        VariableNotFoundError
            If the mosaic has no such variable.
        """
        with self._lock:
            reader = self.open(region, year)
            kind = reader.get_variable_kind(variable)
            scale, offset = reader.get_scale_offset(variable)
            return VariableInfo(
                name=variable,
                kind=kind,
                fill_value=reader.get_fill_value(variable),
                scale_factor=scale,
                add_offset=offset,
                units=reader.get_attributes(variable).get('units'),
            )

    def read_full_axis(
        self, region: RegionLike, year: int, axis: str
    ) -> np.ndarray:
        """Full ``'x'`` or ``'y'`` coordinate axis of a mosaic."""
        with self._lock:
            return self.open(region, year).read_axis(axis)

    def read_window(
        self,
        region: RegionLike,
        year: int,
        variable: str,
        row_range: Tuple[int, int],
        col_range: Tuple[int, int],
    ) -> np.ndarray:
        """Raw ``(y, x)`` window of a variable.

        Parameters
        ----------
        region : int, str or Region
            Region identifier.
        year : int
            Year slot.
        variable : str
            Variable name.
        row_range : Tuple[int, int]
            ``(start, end)`` rows, end exclusive, in native y order.
        col_range : Tuple[int, int]
            ``(start, end)`` columns, end exclusive.

        Returns
        -------
        np.ndarray
        """
        with self._lock:
            reader = self.open(region, year)
            return reader.read_window(
                variable, row_range[0], row_range[1],
                col_range[0], col_range[1],
            )

    def __repr__(self) -> str:
        return (
            f"MosaicStore(data_dir={str(self.data_dir)!r}, "
            f"open={len(self._cache)}/{self.max_open})"
        )


_DEFAULT_STORES: Dict[Path, MosaicStore] = {}
_DEFAULT_LOCK = threading.Lock()


def default_store(data_dir: Optional[Union[str, Path]] = None) -> MosaicStore:
    """Shared ``MosaicStore`` for a data directory.

    Parameters
    ----------
    data_dir : str or Path, optional
        Directory holding the mosaics. Resolved as in ``get_data_dir``.

    Returns
    -------
    MosaicStore
    """
    path = get_data_dir(data_dir).resolve()
    with _DEFAULT_LOCK:
        store = _DEFAULT_STORES.get(path)
        if store is None:
            store = MosaicStore(path)
            _DEFAULT_STORES[path] = store
        return store


def resolve_store(
    store: Optional[MosaicStore] = None,
    data_dir: Optional[Union[str, Path]] = None,
) -> MosaicStore:
    """Return ``store`` if given, else the default store for ``data_dir``."""
    if store is not None:
        return store
    return default_store(data_dir)
