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
Per-pixel map coordinates from the ENVI 'map info' block.

ENVI georeferences an image through a single reference pixel. This module
re-anchors that pixel to the upper-left corner and expands it into one
easting per column and one northing per row.
"""

import dataclasses
import logging

import numpy as np

from envitk.utils.data_models import EnviHeader, GeoLocations, MapInfo
from envitk.utils.envi_constants import CORNER_REFERENCE

logger = logging.getLogger(__name__)


def anchor_coordinates(map_info: MapInfo) -> tuple:
    """
    Ground coordinates of the upper-left corner anchor.

    Reference pixels beyond (1.5, 1.5) are shifted back to the corner. Rows
    grow downward while northing grows upward, so the y shift is added.

    Returns:
        Tuple of (easting, northing).
    """
    easting = map_info.pixel_easting
    northing = map_info.pixel_northing
    if map_info.y_reference_pixel > CORNER_REFERENCE:
        northing += (map_info.y_reference_pixel - 1) * map_info.y_pixel_size
    if map_info.x_reference_pixel > CORNER_REFERENCE:
        easting -= (map_info.x_reference_pixel - 1) * map_info.x_pixel_size
    return easting, northing


def compute_geo_locations(map_info: MapInfo, samples: int, lines: int) -> GeoLocations:
    """
    Compute the ground coordinate of every column and row.

    Args:
        map_info: Parsed 'map info' block.
        samples: Number of columns.
        lines: Number of rows.

    Returns:
        GeoLocations where `x_loc[i] = easting + i * x_size` and `y_loc` holds
        `northing - j * y_size` reversed, i.e. in ascending-northing order
        with the row nearest the anchor last.

    Example:
        >>> info = MapInfo('UTM', 1, 1, 500000, 4500000, 30, 30)
        >>> locs = compute_geo_locations(info, samples=3, lines=2)
        >>> locs.x_loc.tolist(), locs.y_loc.tolist()
        ([500000.0, 500030.0, 500060.0], [4499970.0, 4500000.0])
    """
    easting, northing = anchor_coordinates(map_info)
    x_loc = easting + np.arange(samples, dtype=np.float64) * map_info.x_pixel_size
    y_loc = (northing - np.arange(lines, dtype=np.float64) * map_info.y_pixel_size)[::-1]
    return GeoLocations(x_loc=x_loc, y_loc=np.ascontiguousarray(y_loc))


def apply_geo_transform(header: EnviHeader) -> EnviHeader:
    """
    Return the header with `x_loc` / `y_loc` recomputed.

    Locations are cleared when there is no map info or when samples or lines
    are unknown.
    """
    if header.map_info is None or header.samples is None or header.lines is None:
        if header.map_info is not None:
            logger.debug("Map info present but image dimensions are unknown; skipping geo locations")
        return dataclasses.replace(header, x_loc=None, y_loc=None)

    locations = compute_geo_locations(header.map_info, header.samples, header.lines)
    logger.debug(
        f"Geo locations: x {locations.x_loc[0]} .. {locations.x_loc[-1]}, "
        f"y {locations.y_loc[0]} .. {locations.y_loc[-1]}"
    )
    return dataclasses.replace(header, x_loc=locations.x_loc, y_loc=locations.y_loc)
