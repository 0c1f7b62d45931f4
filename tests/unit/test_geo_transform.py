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
Unit tests for the geo transform deriving per-pixel map coordinates.
"""

import dataclasses

import numpy as np
import pytest

from envitk.utils.data_models import EnviHeader, MapInfo
from envitk.utils.geo_transform import anchor_coordinates, apply_geo_transform, compute_geo_locations


@pytest.mark.unit
class TestAnchorCoordinates:
    """Test re-anchoring the reference pixel to the upper-left corner."""

    def test_corner_reference_is_unchanged(self, utm_map_info):
        assert anchor_coordinates(utm_map_info) == (500000.0, 4500000.0)

    def test_reference_at_threshold_is_unchanged(self, utm_map_info):
        info = dataclasses.replace(utm_map_info, x_reference_pixel=1.5, y_reference_pixel=1.5)
        assert anchor_coordinates(info) == (500000.0, 4500000.0)

    def test_interior_reference_is_shifted(self, utm_map_info):
        """Reference pixel (11, 21) moves the anchor 10 columns west and 20 rows north."""
        info = dataclasses.replace(utm_map_info, x_reference_pixel=11.0, y_reference_pixel=21.0)
        easting, northing = anchor_coordinates(info)
        assert easting == 500000.0 - 10 * 30.0
        assert northing == 4500000.0 + 20 * 30.0


@pytest.mark.unit
class TestComputeGeoLocations:
    """Test the x/y location vectors."""

    def test_utm_scenario(self, utm_map_info):
        """3 x 2 image anchored at (500000, 4500000) with 30 m pixels."""
        locations = compute_geo_locations(utm_map_info, samples=3, lines=2)
        np.testing.assert_array_equal(locations.x_loc, [500000.0, 500030.0, 500060.0])
        np.testing.assert_array_equal(locations.y_loc, [4499970.0, 4500000.0])

    def test_lengths_follow_dimensions(self, utm_map_info):
        locations = compute_geo_locations(utm_map_info, samples=7, lines=5)
        assert locations.x_loc.shape == (7,)
        assert locations.y_loc.shape == (5,)

    def test_y_locations_ascend_with_anchor_last(self, utm_map_info):
        locations = compute_geo_locations(utm_map_info, samples=1, lines=4)
        assert np.all(np.diff(locations.y_loc) > 0)
        assert locations.y_loc[-1] == 4500000.0

    def test_geographic_degrees(self):
        info = MapInfo('Geographic Lat/Lon', 1.0, 1.0, -105.0, 40.0, 0.5, 0.25, datum='WGS-84', units='Degrees')
        locations = compute_geo_locations(info, samples=2, lines=3)
        np.testing.assert_allclose(locations.x_loc, [-105.0, -104.5])
        np.testing.assert_allclose(locations.y_loc, [39.5, 39.75, 40.0])


@pytest.mark.unit
class TestApplyGeoTransform:
    """Test attaching locations to a header."""

    def test_locations_attached(self, utm_map_info):
        header = EnviHeader(samples=3, lines=2, map_info=utm_map_info)
        result = apply_geo_transform(header)
        assert result.has_geo_locations()
        np.testing.assert_array_equal(result.x_loc, [500000.0, 500030.0, 500060.0])
        assert not header.has_geo_locations()

    def test_no_map_info_leaves_locations_absent(self):
        result = apply_geo_transform(EnviHeader(samples=3, lines=2))
        assert result.x_loc is None
        assert result.y_loc is None

    def test_unknown_dimensions_leave_locations_absent(self, utm_map_info):
        result = apply_geo_transform(EnviHeader(samples=3, map_info=utm_map_info))
        assert not result.has_geo_locations()
