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
Pytest configuration and shared fixtures for ENVITK test suite.

This module provides:
- Pytest configuration (markers, options)
- Shared fixtures for common header text and mock images
- Test utility functions

Example:
    >>> def test_using_fixture(mock_envi_basic, tmp_path):
    ...     '''Test using the mock_envi_basic fixture.'''
    ...     image_path = mock_envi_basic.save_to_file(tmp_path / 'scene.img')
"""

import io
import warnings

import pytest

# pythonpath is configured in pyproject.toml to include project root
from envitk.utils.data_models import EnviHeader, MapInfo
from envitk.utils.envi_constants import ByteOrder, Interleave
from tests.fixtures.mock_envi_factory import MockEnviImage


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers and options.

    Markers are defined in pyproject.toml; nothing dynamic is needed here.
    """
    pass


# =============================================================================
# Module-scope Fixtures (Created once per test module)
# =============================================================================

UTM_MAP_INFO = 'UTM, 1.0, 1.0, 500000.0, 4500000.0, 30.0, 30.0, 13, North, WGS-84, units=Meters'


@pytest.fixture(scope="module")
def utm_map_info_text():
    """Raw 'map info' value for a 30 m UTM zone 13N grid anchored at the corner."""
    return UTM_MAP_INFO


@pytest.fixture(scope="module")
def sample_header_text():
    """
    A complete header exercising every kind of value.

    Returns:
        str: Header text with multi-line braces, map info and an unknown key
    """
    return (
        "ENVI\n"
        "description = {\n"
        "  Sample scene for tests }\n"
        "samples = 3\n"
        "lines = 2\n"
        "bands = 2\n"
        "header offset = 0\n"
        "file type = ENVI Standard\n"
        "data type = 12\n"
        "interleave = bil\n"
        "sensor type = Unknown\n"
        "byte order = 0\n"
        f"map info = {{{UTM_MAP_INFO}}}\n"
        "wavelength units = Nanometers\n"
        "band names = {\n"
        " red,\n"
        " nir}\n"
        "wavelength = {650.0, 860.5}\n"
        "acquisition time = 2020-06-01T17:30:00Z\n"
    )


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture
def header_stream(sample_header_text):
    """The sample header as an open text stream."""
    return io.StringIO(sample_header_text)


@pytest.fixture
def utm_map_info():
    """Parsed UTM map info matching `utm_map_info_text`."""
    return MapInfo(
        projection_name='UTM',
        x_reference_pixel=1.0,
        y_reference_pixel=1.0,
        pixel_easting=500000.0,
        pixel_northing=4500000.0,
        x_pixel_size=30.0,
        y_pixel_size=30.0,
        zone=13,
        hemisphere='North',
        datum='WGS-84',
        units='Meters',
    )


@pytest.fixture
def full_header(utm_map_info):
    """A header with every known field set, for a (2, 3, 2) uint16 image."""
    return EnviHeader(
        samples=3,
        lines=2,
        bands=2,
        data_type=12,
        interleave=Interleave.BIL,
        byte_order=ByteOrder.BIG_ENDIAN,
        header_offset=0,
        file_type='ENVI Standard',
        description='Full header',
        band_names=['red', 'nir'],
        bbl=[1.0, 0.0],
        fwhm=[10.5, 12.25],
        wavelength=[650.0, 860.5],
        wavelength_units=['Nanometers'],
        geo_points=[1.5, 1.5, 40.6, -105.1],
        sensor_type='Unknown',
        dem_file='dem.img',
        dem_band=1,
        x_start=1.0,
        y_start=1.0,
        coordinate_system_string='PROJCS["WGS_1984_UTM_Zone_13N"]',
        map_info=utm_map_info,
        other=[('acquisition time', '2020-06-01T17:30:00Z'), ('cloud cover', '0.1')],
    )


@pytest.fixture
def mock_envi_basic():
    """
    Create a basic mock ENVI image.

    Returns:
        MockEnviImage: 4 x 5 x 3 uint16 BSQ image
    """
    return MockEnviImage(lines=4, samples=5, bands=3, dtype='uint16', interleave='bsq')


@pytest.fixture
def mock_envi_georeferenced(utm_map_info_text):
    """
    Create a mock ENVI image with UTM map info and an unrecognized entry.

    Returns:
        MockEnviImage: 2 x 3 x 2 float32 BIP image
    """
    return MockEnviImage(
        lines=2, samples=3, bands=2, dtype='float32', interleave='bip',
        map_info=utm_map_info_text,
        extra_entries=['acquisition time = {2020-06-01T17:30:00Z}'],
    )


@pytest.fixture
def no_warnings():
    """Fail the test if any warning is issued inside it."""
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        yield

