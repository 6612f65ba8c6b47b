# -*- coding: utf-8 -*-
"""
ICEVEL Vocabulary - Enumerations shared across the library.

Centralizes the small closed vocabularies used by readers, the loader and
the interpolators so that kinds and methods are resolved once into enum
members instead of being re-matched as strings at every call site.

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

from enum import Enum
from typing import Union

from icevel.exceptions import ValidationError


class VariableKind(Enum):
    """How a gridded variable is stored, masked and interpolated.

    ``CONTINUOUS`` variables are floating point fields with a NaN fill
    that support linear interpolation. ``BOOLEAN`` variables are masks
    (land ice, floating ice, sensor flags) that only support nearest
    neighbor interpolation and fill with ``False``.
    """

    CONTINUOUS = "continuous"
    BOOLEAN = "boolean"


class InterpMethod(Enum):
    """Grid interpolation methods accepted by ``interp``."""

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"

    @classmethod
    def parse(cls, value: Union[str, 'InterpMethod']) -> 'InterpMethod':
        """Resolve a string or enum member into an ``InterpMethod``.

        Parameters
        ----------
        value : str or InterpMethod
            Method name, case-insensitive.

        Returns
        -------
        InterpMethod

        Raises
        ------
        ValidationError
            If the name is not a supported method.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(
                f"Unknown interpolation method {value!r}. "
                f"Supported methods: {[m.value for m in cls]}"
            ) from None


class FluxComponent(Enum):
    """Pseudo-variables that project velocity onto a query path."""

    ALONG = "along"
    ACROSS = "across"


class MosaicFormat(Enum):
    """Mosaic file formats, by file extension."""

    NETCDF = "nc"
    GEOTIFF = "tif"
