# -*- coding: utf-8 -*-
"""
Data Models - Typed selectors and result containers.

``SpatialSelector`` gathers the spatial subsetting options accepted by the
loader and checks them for consistency before any file is opened.
``MosaicData`` carries a loaded grid together with its coordinates and
provenance.

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
2026-10-17
"""

# Standard library
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Tuple, Union

# Third-party
import numpy as np

# ICEVEL internal
from icevel.data_prep.base import PixelWindow
from icevel.data_prep.subset import BufferLike, normalize_buffer
from icevel.exceptions import ValidationError
from icevel.geolocation.projection import geo_to_native
from icevel.geolocation.utils import validate_latlon
from icevel.regions import Region
from icevel.vocabulary import VariableKind

# Samples per edge when tracing the outline of a lat/lon box
_BOX_EDGE_SAMPLES = 33


def _as_limits(value: Any, name: str) -> Optional[np.ndarray]:
    if value is None:
        return None
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError(
            f"{name} must be numeric, got {type(value).__name__}"
        ) from None
    if arr.size == 0:
        raise ValidationError(f"{name} must not be empty")
    return arr


def _box_outline(
    latlim: np.ndarray, lonlim: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Densified perimeter of the box spanned by two lat and two lon limits."""
    t = np.linspace(0.0, 1.0, _BOX_EDGE_SAMPLES)
    lat0, lat1 = latlim
    lon0, lon1 = lonlim
    lat_edge = lat0 + (lat1 - lat0) * t
    lon_edge = lon0 + (lon1 - lon0) * t
    lat = np.concatenate([
        lat_edge, np.full_like(t, lat1), lat_edge[::-1], np.full_like(t, lat0),
    ])
    lon = np.concatenate([
        np.full_like(t, lon0), lon_edge, np.full_like(t, lon1), lon_edge[::-1],
    ])
    return lat, lon


@dataclass
class SpatialSelector:
    """Spatial subset request for ``load_mosaic``.

    Either the native pair ``xlim``/``ylim`` or the geographic pair
    ``latlim``/``lonlim`` may be given, never both, and never one member of
    a pair alone. Limits may be two-element ranges or arrays of points;
    only their finite extent matters.

    Attributes
    ----------
    xlim, ylim : array_like, optional
        Native map coordinates in meters.
    latlim, lonlim : array_like, optional
        Geographic coordinates in degrees. Two two-element limits are
        treated as the corners of a lat/lon box whose whole outline is
        projected; any other shape is paired elementwise as points.
    buffer : float or Tuple[float, float]
        Extra margin in kilometers, scalar or ``(bx, by)``.
    """

    xlim: Optional[Any] = None
    ylim: Optional[Any] = None
    latlim: Optional[Any] = None
    lonlim: Optional[Any] = None
    buffer: BufferLike = 0.0

    def validate(self) -> 'SpatialSelector':
        """Check selector consistency and normalize the limit arrays.

        Returns
        -------
        SpatialSelector
            ``self``, with limits converted to float64 arrays and the
            buffer to a ``(bx, by)`` pair.

        Raises
        ------
        ValidationError
            If native and geographic limits are mixed, a pair is
            incomplete, or the buffer is malformed.
        OutOfRangeError
            If geographic limits are implausible.
        """
        self.xlim = _as_limits(self.xlim, 'xlim')
        self.ylim = _as_limits(self.ylim, 'ylim')
        self.latlim = _as_limits(self.latlim, 'latlim')
        self.lonlim = _as_limits(self.lonlim, 'lonlim')

        native = self.xlim is not None or self.ylim is not None
        geographic = self.latlim is not None or self.lonlim is not None
        if native and geographic:
            raise ValidationError(
                "Spatial limits can be declared as xlim/ylim or as "
                "latlim/lonlim, but not both."
            )
        if native and (self.xlim is None or self.ylim is None):
            raise ValidationError(
                "If xlim or ylim is declared, both must be declared."
            )
        if geographic:
            if self.latlim is None or self.lonlim is None:
                raise ValidationError(
                    "If latlim or lonlim is declared, both must be declared."
                )
            if not self._is_box() and self.latlim.shape != self.lonlim.shape:
                raise ValidationError(
                    f"latlim {self.latlim.shape} and lonlim "
                    f"{self.lonlim.shape} must have the same shape."
                )
            validate_latlon(self.latlim, self.lonlim)

        self.buffer = normalize_buffer(self.buffer)
        return self

    def _is_box(self) -> bool:
        return self.latlim.size == 2 and self.lonlim.size == 2

    @property
    def is_subset(self) -> bool:
        """True when any limits were given."""
        return any(
            v is not None
            for v in (self.xlim, self.ylim, self.latlim, self.lonlim)
        )

    @property
    def is_geographic(self) -> bool:
        """True when the limits are latitude/longitude."""
        return self.latlim is not None

    def native_limits(
        self, region: Union[int, str, Region]
    ) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        """Selector extent in the region's native coordinates.

        Parameters
        ----------
        region : int, str or Region
            Region whose projection converts geographic limits.

        Returns
        -------
        Tuple[Optional[np.ndarray], Optional[np.ndarray]]
            ``(xlim, ylim)``, both None when no limits were given.
        """
        if not self.is_geographic:
            return self.xlim, self.ylim

        if self._is_box():
            lat, lon = _box_outline(self.latlim.ravel(), self.lonlim.ravel())
        else:
            lat, lon = self.latlim, self.lonlim
        x, y = geo_to_native(region, lat, lon)
        return np.asarray(x), np.asarray(y)


@dataclass
class MosaicData:
    """A subset of one mosaic variable across one or more year slots.

    Unpacks like the result of a plain function, as ``values, x, y`` for
    native output or ``values, lat, lon`` for geographic output.

    Attributes
    ----------
    values : np.ndarray
        ``(rows, cols, n_years)`` grid. Row 0 is the northernmost row.
        float64 with NaN for missing data, or bool for mask variables.
    x : np.ndarray
        ``(cols,)`` pixel-center eastings in meters.
    y : np.ndarray
        ``(rows,)`` pixel-center northings in meters, descending.
    variable : str
        Variable name.
    kind : VariableKind
        Boolean mask or continuous field.
    region : Region
        Source region.
    years : Tuple[int, ...]
        Year slot of each trailing layer, 0 for the summary mosaic.
    window : PixelWindow
        Window read from the files, in stored row order.
    lat, lon : np.ndarray, optional
        ``(rows, cols)`` geographic grids when requested.
    units : str, optional
        Units attribute of the variable.
    """

    values: np.ndarray
    x: np.ndarray
    y: np.ndarray
    variable: str
    kind: VariableKind
    region: Region
    years: Tuple[int, ...]
    window: PixelWindow
    lat: Optional[np.ndarray] = None
    lon: Optional[np.ndarray] = None
    units: Optional[str] = field(default=None)

    @property
    def geographic(self) -> bool:
        """True when ``lat``/``lon`` grids are attached."""
        return self.lat is not None

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.values.shape

    def layer(self, year: int) -> np.ndarray:
        """2D grid of a single year slot.

        Raises
        ------
        ValidationError
            If the year was not loaded.
        """
        if year not in self.years:
            raise ValidationError(
                f"Year {year} was not loaded; loaded years are {self.years}"
            )
        return self.values[:, :, self.years.index(year)]

    def __iter__(self) -> Iterator[np.ndarray]:
        if self.geographic:
            return iter((self.values, self.lat, self.lon))
        return iter((self.values, self.x, self.y))
