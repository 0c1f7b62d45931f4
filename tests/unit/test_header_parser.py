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
Unit tests for header field classification.

Tests verify each kind of known field, the 'map info' block for every
projection branch, the handling of unknown keys, and the errors raised for
malformed values.
"""

import pytest

from envitk.utils.envi_constants import HEADER_KEY_ORDER, ByteOrder, Interleave
from envitk.utils.exceptions import MalformedHeaderValue, MalformedMapInfo, MalformedNumericList, UnknownDataType
from envitk.utils.header_parser import FIELD_PARSERS, classify_entries, parse_map_info


@pytest.mark.unit
class TestClassifyEntries:
    """Test classifying (key, value) pairs into a header."""

    def test_dispatch_table_covers_every_written_key(self):
        assert set(FIELD_PARSERS) == set(HEADER_KEY_ORDER)

    def test_dimensions_and_layout(self):
        header = classify_entries([
            ('samples', '3'), ('lines', '2'), ('bands', '4'), ('header offset', '128'),
            ('data type', '12'), ('interleave', 'BIL'), ('byte order', '1'),
        ])
        assert (header.samples, header.lines, header.bands) == (3, 2, 4)
        assert header.header_offset == 128
        assert header.data_type == 12
        assert header.interleave is Interleave.BIL
        assert header.byte_order is ByteOrder.BIG_ENDIAN

    def test_integral_real_accepted_for_int_field(self):
        assert classify_entries([('samples', '100.0')]).samples == 100

    @pytest.mark.parametrize("value", ['0', '2', 'big', ''])
    def test_byte_order_other_than_one_is_little(self, value):
        assert classify_entries([('byte order', value)]).byte_order is ByteOrder.LITTLE_ENDIAN

    def test_string_lists(self):
        header = classify_entries([('band names', 'red , green,nir'), ('wavelength units', 'Nanometers')])
        assert header.band_names == ['red', 'green', 'nir']
        assert header.wavelength_units == ['Nanometers']

    def test_numeric_lists(self):
        header = classify_entries([
            ('wavelength', '450.5, 550, 650'), ('fwhm', '10,10,10'),
            ('bbl', '1, 0, 1'), ('geo points', '1.5, 1.5, 40.0, -105.0'),
        ])
        assert header.wavelength == [450.5, 550.0, 650.0]
        assert header.fwhm == [10.0, 10.0, 10.0]
        assert header.bbl == [1.0, 0.0, 1.0]
        assert header.geo_points == [1.5, 1.5, 40.0, -105.0]

    def test_scalar_fields(self):
        header = classify_entries([
            ('description', 'A scene'), ('file type', 'ENVI Standard'), ('sensor type', 'AVIRIS'),
            ('dem file', 'dem.img'), ('dem band', '2'), ('x start', '10.5'), ('y start', '-3'),
            ('coordinate system string', 'PROJCS["x",GEOGCS["y"]]'),
        ])
        assert header.description == 'A scene'
        assert header.file_type == 'ENVI Standard'
        assert header.sensor_type == 'AVIRIS'
        assert header.dem_file == 'dem.img'
        assert header.dem_band == 2
        assert header.x_start == 10.5
        assert header.y_start == -3.0
        assert header.coordinate_system_string == 'PROJCS["x",GEOGCS["y"]]'

    def test_unknown_keys_kept_in_order(self):
        header = classify_entries([('zeta', '1'), ('samples', '3'), ('alpha', '{x}'), ('zeta', '2')])
        assert header.other == [('zeta', '1'), ('alpha', '{x}'), ('zeta', '2')]
        assert header.get_other('ALPHA') == '{x}'

    def test_repeated_known_key_keeps_last_value(self):
        assert classify_entries([('samples', '3'), ('samples', '5')]).samples == 5

    def test_absent_fields_are_none(self):
        header = classify_entries([])
        assert header.samples is None
        assert header.map_info is None
        assert header.other == []
        assert header.missing_dimensions() == ['samples', 'lines', 'bands', 'data_type']

    @pytest.mark.parametrize("key,value", [
        ('samples', 'wide'),
        ('samples', '0'),
        ('lines', '-2'),
        ('bands', '2.5'),
        ('header offset', '-1'),
        ('x start', 'left'),
        ('interleave', 'bsp'),
    ])
    def test_malformed_values_name_the_key(self, key, value):
        with pytest.raises(MalformedHeaderValue) as exc_info:
            classify_entries([(key, value)])
        assert exc_info.value.key == key

    def test_malformed_numeric_list(self):
        with pytest.raises(MalformedNumericList) as exc_info:
            classify_entries([('wavelength', '450, abc, 650')])
        assert exc_info.value.key == 'wavelength'

    def test_empty_numeric_list_is_malformed(self):
        with pytest.raises(MalformedNumericList):
            classify_entries([('fwhm', '')])

    @pytest.mark.parametrize("value", ['0', '7', '16'])
    def test_unknown_data_type(self, value):
        with pytest.raises(UnknownDataType):
            classify_entries([('data type', value)])


@pytest.mark.unit
class TestParseMapInfo:
    """Test the 'map info' projection branches."""

    def test_utm(self, utm_map_info_text, utm_map_info):
        info = parse_map_info('map info', utm_map_info_text)
        assert info == utm_map_info
        assert info.is_utm

    def test_utm_case_insensitive(self):
        info = parse_map_info('map info', 'utm, 1, 1, 0, 0, 1, 1, 10, South, NAD-83, Meters')
        assert info.zone == 10
        assert info.hemisphere == 'South'
        assert info.datum == 'NAD-83'
        assert info.units == 'Meters'

    def test_wkt_has_no_trailing_fields(self):
        info = parse_map_info('map info', 'By WKT String, 1, 1, 10.0, 20.0, 0.5, 0.5')
        assert info.is_wkt
        assert info.datum is None
        assert info.units is None
        assert info.extra == []

    def test_other_projection_has_datum_and_units(self):
        info = parse_map_info('map info', 'Geographic Lat/Lon, 1.0, 1.0, -105.0, 40.0, 0.001, 0.001, WGS-84, units=Degrees')
        assert info.projection_name == 'Geographic Lat/Lon'
        assert info.zone is None
        assert info.datum == 'WGS-84'
        assert info.units == 'Degrees'

    @pytest.mark.parametrize("value", [
        'Geographic Lat/Lon, 1.0, 1.0, -105.0, 40.0, 0.001, 0.001, , ',
        'Geographic Lat/Lon, 1.0, 1.0, -105.0, 40.0, 0.001, 0.001, , units=',
    ])
    def test_empty_trailing_tokens_are_none(self, value):
        info = parse_map_info('map info', value)
        assert info.datum is None
        assert info.units is None

    def test_empty_utm_hemisphere_is_none(self):
        info = parse_map_info('map info', 'UTM, 1, 1, 0, 0, 30, 30, 13, , WGS-84, units=Meters')
        assert info.zone == 13
        assert info.hemisphere is None
        assert info.datum == 'WGS-84'

    def test_extra_tokens_are_kept(self, utm_map_info_text):
        info = parse_map_info('map info', utm_map_info_text + ', rotation=15.0')
        assert info.extra == ['rotation=15.0']

    @pytest.mark.parametrize("value", [
        'UTM, 1, 1, 0, 0, 30',
        'UTM, 1, 1, east, 0, 30, 30, 13, North, WGS-84, Meters',
        'UTM, 1, 1, 0, 0, 30, 30, 13, North',
        'UTM, 1, 1, 0, 0, 30, 30, thirteen, North, WGS-84, Meters',
        'Albers, 1, 1, 0, 0, 30, 30, NAD-83',
    ])
    def test_malformed(self, value):
        with pytest.raises(MalformedMapInfo) as exc_info:
            parse_map_info('map info', value)
        assert exc_info.value.key == 'map info'

    def test_malformed_map_info_is_malformed_header_value(self):
        with pytest.raises(MalformedHeaderValue):
            classify_entries([('map info', 'UTM, 1')])
