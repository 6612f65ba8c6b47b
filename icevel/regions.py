# -*- coding: utf-8 -*-
"""
ITS_LIVE Regions - Static catalog of mosaic regions and their projections.

The ITS_LIVE v2 mosaics are split into regions that approximately match the
Randolph Glacier Inventory (RGI) first-order regions. Each region has its own
projected coordinate reference system and file naming. The catalog is built
once at import time and exposed as a read-only mapping.

Regions 13, 15 and 16 have no mosaic of their own; High Mountain Asia is
distributed as region 14.

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
2026-10-12
"""

# Standard library
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

# ICEVEL internal
from icevel.exceptions import ValidationError

_ITS_LIVE_TEMPLATE = "ITS_LIVE_velocity_120m_RGI{code:02d}A_{year:04d}_v02.{ext}"


@dataclass(frozen=True)
class Region:
    """One entry of the ITS_LIVE mosaic region catalog.

    Parameters
    ----------
    code : int
        RGI-style region number.
    name : str
        Descriptive region name.
    abbreviation : str
        Three-letter upper-case identifier.
    crs : str
        Authority-qualified CRS of the region's native coordinates.
    filename_template : str
        ``str.format`` template with ``code``, ``abbreviation``, ``year``
        and ``ext`` fields.
    """

    code: int
    name: str
    abbreviation: str
    crs: str
    filename_template: str = _ITS_LIVE_TEMPLATE

    def filename(self, year: int, ext: str = "nc") -> str:
        """Build the mosaic file name for a year slot.

        Parameters
        ----------
        year : int
            Calendar year, or 0 for the summary mosaic.
        ext : str
            File extension without the dot.

        Returns
        -------
        str
        """
        return self.filename_template.format(
            code=self.code,
            abbreviation=self.abbreviation,
            year=int(year),
            ext=ext,
        )

    def filename_glob(self) -> str:
        """Glob pattern matching every mosaic of this region."""
        return self.filename_template.format(
            code=self.code,
            abbreviation=self.abbreviation,
            year=0,
            ext="*",
        ).replace("0000", "????")


_REGION_TABLE = (
    Region(1, "Alaska", "ALA", "EPSG:3413"),
    Region(2, "Western Canada and USA", "WNA", "EPSG:32610"),
    Region(3, "Arctic Canada North", "ACN", "EPSG:3413"),
    Region(4, "Arctic Canada South", "ACS", "EPSG:3413"),
    Region(5, "Greenland", "GRE", "EPSG:3413"),
    Region(6, "Iceland", "ISL", "EPSG:3413"),
    Region(7, "Svalbard and Jan Mayen", "SJM", "EPSG:3413"),
    Region(8, "Scandinavia", "SCA", "EPSG:3413"),
    Region(9, "Russian Arctic", "RUA", "EPSG:3413"),
    Region(10, "North Asia", "ASN", "EPSG:32645"),
    Region(11, "Central Europe", "CEU", "EPSG:32632"),
    Region(12, "Caucasus and Middle East", "CAU", "EPSG:32638"),
    Region(14, "High Mountain Asia", "HMA", "ESRI:102027"),
    Region(17, "Southern Andes", "SAN", "EPSG:32718"),
    Region(18, "New Zealand", "NZL", "EPSG:32759"),
    Region(19, "Antarctica", "ANT", "EPSG:3031"),
)

REGIONS: Mapping[int, Region] = MappingProxyType(
    {r.code: r for r in _REGION_TABLE}
)

_BY_NAME: Mapping[str, Region] = MappingProxyType({
    **{r.abbreviation.lower(): r for r in _REGION_TABLE},
    **{r.name.lower(): r for r in _REGION_TABLE},
})


def get_region(region: Union[int, str, Region]) -> Region:
    """Look up a region by code, abbreviation or name.

    Parameters
    ----------
    region : int, str or Region
        Region number (``1``), abbreviation (``'ALA'``), name
        (``'Alaska'``), or a ``Region`` which is returned unchanged.

    Returns
    -------
    Region

    Raises
    ------
    ValidationError
        If the region is not in the catalog.

    Examples
    --------
    >>> get_region(19).crs
    'EPSG:3031'
    >>> get_region('hma').code
    14
    """
    if isinstance(region, Region):
        return region
    if isinstance(region, str):
        key = region.strip().lower()
        if key.isdigit():
            region = int(key)
        elif key in _BY_NAME:
            return _BY_NAME[key]
        else:
            raise ValidationError(
                f"Unknown region {region!r}. Valid abbreviations: "
                f"{[r.abbreviation for r in _REGION_TABLE]}"
            )
    try:
        code = int(region)
    except (TypeError, ValueError):
        raise ValidationError(
            f"region must be an int, str or Region, got "
            f"{type(region).__name__}"
        ) from None
    if code != region or code not in REGIONS:
        raise ValidationError(
            f"Unknown region code {region!r}. Valid codes: {list(REGIONS)}"
        )
    return REGIONS[code]
