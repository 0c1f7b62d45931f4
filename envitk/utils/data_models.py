#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: ENVI ToolKit (ENVITK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Data Models for ENVI ToolKit.

This module defines strongly-typed data classes for representing ENVI header
metadata. Every header field is optional; `None` means the field was absent
from the header file (or has not been filled yet). Entries the codec does not
recognize are kept verbatim in the `other` bag so they survive a round trip.

Domain model classes:
    MapInfo: Represents the 'map info' block (reference pixel, pixel size, projection)
    GeoLocations: Represents derived per-column and per-row ground coordinates
    EnviHeader: Represents a complete ENVI header
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from envitk.utils.data_types import data_type_name, element_size, is_complex_code
from envitk.utils.envi_constants import REQUIRED_IO_FIELDS, UTM_PROJECTION, WKT_PROJECTION, ByteOrder, Interleave


@dataclass
class MapInfo:
    """
    Represents the ENVI 'map info' block.

    The first seven tokens of 'map info' are always present; the trailing
    tokens depend on the projection. UTM carries zone, hemisphere, datum and
    units; 'By WKT String' carries nothing more; any other projection carries
    datum and units.

    Attributes:
        projection_name: The coordinate space (e.g. 'UTM', 'Geographic Lat/Lon')
        x_reference_pixel: The x reference pixel location (1-based, pixel centre = n.5)
        y_reference_pixel: The y reference pixel location
        pixel_easting: The easting of the reference pixel
        pixel_northing: The northing of the reference pixel
        x_pixel_size: The x size of a pixel
        y_pixel_size: The y size of a pixel
        zone: The projection zone (UTM only)
        hemisphere: 'North' or 'South' (UTM only)
        datum: The reference datum
        units: The units of the coordinates (without the 'units=' prefix)
        extra: Trailing tokens beyond the projection-specific ones, kept verbatim

    Example:
        >>> info = MapInfo('UTM', 1.0, 1.0, 500000.0, 4500000.0, 30.0, 30.0,
        ...                zone=13, hemisphere='North', datum='WGS-84', units='Meters')
        >>> info.is_utm
        True
    """
    projection_name: str
    x_reference_pixel: float
    y_reference_pixel: float
    pixel_easting: float
    pixel_northing: float
    x_pixel_size: float
    y_pixel_size: float
    zone: Optional[int] = None
    hemisphere: Optional[str] = None
    datum: Optional[str] = None
    units: Optional[str] = None
    extra: List[str] = field(default_factory=list)

    @property
    def is_utm(self) -> bool:
        return self.projection_name.strip().lower() == UTM_PROJECTION.lower()

    @property
    def is_wkt(self) -> bool:
        return self.projection_name.strip().lower() == WKT_PROJECTION.lower()


@dataclass
class GeoLocations:
    """
    Ground coordinates of the centre of every column and row.

    Attributes:
        x_loc: Eastings, one per sample (column), west to east
        y_loc: Northings, one per line (row), in ascending-northing order
    """
    x_loc: np.ndarray
    y_loc: np.ndarray


@dataclass(eq=False)
class EnviHeader:
    """
    Represents an ENVI header.

    Known fields are typed and optional. Unrecognized entries are kept in
    `other` as (lowercase key, raw value) pairs in their original file order.
    `x_loc` and `y_loc` are derived from `map_info` and the dimensions; they
    are never written back to a header file.

    Attributes:
        samples: Image width (columns)
        lines: Image height (rows)
        bands: Image depth
        data_type: ENVI data type code
        interleave: Band interleave scheme
        byte_order: Byte order of multi-byte samples
        header_offset: Bytes to skip at the start of the pixel file
        file_type: Free-text file type label
        description: Free-text description
        band_names: One name per band
        bbl: Bad band list (1 = good, 0 = bad), one value per band
        fwhm: Full width at half maximum, one value per band
        wavelength: Band centre wavelengths, one value per band
        wavelength_units: Wavelength units
        geo_points: Geographic tie points (flattened)
        sensor_type: Sensor name
        dem_file: Path of the associated DEM
        dem_band: Band of the associated DEM
        x_start: Image x coordinate of the upper-left pixel
        y_start: Image y coordinate of the upper-left pixel
        coordinate_system_string: Opaque coordinate system definition
        map_info: Parsed 'map info' block
        other: Unrecognized (key, value) pairs
        x_loc: Derived column eastings
        y_loc: Derived row northings

    Example:
        >>> hdr = EnviHeader(samples=3, lines=2, bands=1, data_type=4)
        >>> hdr.data_type_name
        'float32'
        >>> hdr.missing_dimensions()
        []
    """
    samples: Optional[int] = None
    lines: Optional[int] = None
    bands: Optional[int] = None
    data_type: Optional[int] = None
    interleave: Optional[Interleave] = None
    byte_order: Optional[ByteOrder] = None
    header_offset: Optional[int] = None
    file_type: Optional[str] = None
    description: Optional[str] = None
    band_names: Optional[List[str]] = None
    bbl: Optional[List[float]] = None
    fwhm: Optional[List[float]] = None
    wavelength: Optional[List[float]] = None
    wavelength_units: Optional[List[str]] = None
    geo_points: Optional[List[float]] = None
    sensor_type: Optional[str] = None
    dem_file: Optional[str] = None
    dem_band: Optional[int] = None
    x_start: Optional[float] = None
    y_start: Optional[float] = None
    coordinate_system_string: Optional[str] = None
    map_info: Optional[MapInfo] = None
    other: List[Tuple[str, str]] = field(default_factory=list)
    x_loc: Optional[np.ndarray] = field(default=None, repr=False)
    y_loc: Optional[np.ndarray] = field(default=None, repr=False)

    @property
    def is_complex(self) -> bool:
        """True if the data type is one of the complex codes (6 or 9)."""
        return self.data_type is not None and is_complex_code(self.data_type)

    @property
    def data_type_name(self) -> Optional[str]:
        return data_type_name(self.data_type) if self.data_type is not None else None

    @property
    def element_size(self) -> Optional[int]:
        return element_size(self.data_type) if self.data_type is not None else None

    @property
    def dimensions(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        """(lines, samples, bands), matching the array axis order."""
        return self.lines, self.samples, self.bands

    def missing_dimensions(self) -> List[str]:
        """Names of the fields required for binary I/O that are absent."""
        return [name for name in REQUIRED_IO_FIELDS if getattr(self, name) is None]

    def has_geo_locations(self) -> bool:
        return self.x_loc is not None and self.y_loc is not None

    def get_other(self, key: str) -> Optional[str]:
        """Return the raw value of an unrecognized entry, if present."""
        key = key.strip().lower()
        for other_key, value in self.other:
            if other_key == key:
                return value
        return None

    def to_dict(self) -> Dict[str, object]:
        """
        Convert the header into a JSON-serializable dictionary.

        Absent fields are omitted. Derived locations are included as lists
        when they have been computed.
        """
        result: Dict[str, object] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if value is None or (name == 'other' and not value):
                continue
            if isinstance(value, (Interleave, ByteOrder)):
                value = value.value
            elif isinstance(value, MapInfo):
                value = {k: v for k, v in vars(value).items() if v is not None and v != []}
            elif isinstance(value, np.ndarray):
                value = value.tolist()
            elif name == 'other':
                value = [list(pair) for pair in value]
            result[name] = value
        return result

    def __eq__(self, other: object) -> bool:
        """Field-wise equality; derived locations are compared element-wise."""
        if not isinstance(other, EnviHeader):
            return NotImplemented
        for name in self.__dataclass_fields__:
            mine, theirs = getattr(self, name), getattr(other, name)
            if isinstance(mine, np.ndarray) or isinstance(theirs, np.ndarray):
                if mine is None or theirs is None or not np.array_equal(mine, theirs):
                    return False
            elif mine != theirs:
                return False
        return True
