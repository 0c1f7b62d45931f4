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
ENVI Header Field Classification.

Turns the (key, raw value) pairs produced by the header grammar into a typed
`EnviHeader`. Recognized keys are looked up in a static dispatch table that
maps each key to the header attribute it fills and the parser for its value.
Every other entry is kept, in order, in the header's `other` bag.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Tuple

from envitk.utils.data_models import EnviHeader, MapInfo
from envitk.utils.data_types import code_to_type
from envitk.utils.envi_constants import UNITS_PREFIX, byte_order_from_text, interleave_from_text
from envitk.utils.exceptions import MalformedHeaderValue, MalformedMapInfo, MalformedNumericList

logger = logging.getLogger(__name__)

ValueParser = Callable[[str, str], Any]

# Number of leading 'map info' tokens shared by every projection:
# name, x ref, y ref, easting, northing, x size, y size
MAP_INFO_CORE_TOKENS = 7


# --- Value Parsers ---

def split_comma_separated(value: str) -> List[str]:
    """Split a value on ',' and trim each token."""
    return [token.strip() for token in value.split(',')]


def parse_string(key: str, value: str) -> str:
    return value


def parse_string_list(key: str, value: str) -> List[str]:
    return split_comma_separated(value)


def parse_float(key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise MalformedHeaderValue(key, value, 'expected a number') from None


def parse_int(key: str, value: str) -> int:
    """Parse an integer, accepting integral reals such as '100.0'."""
    try:
        return int(value)
    except ValueError:
        number = parse_float(key, value)
        if not number.is_integer():
            raise MalformedHeaderValue(key, value, 'expected an integer') from None
        return int(number)


def parse_positive_int(key: str, value: str) -> int:
    number = parse_int(key, value)
    if number <= 0:
        raise MalformedHeaderValue(key, value, 'expected a positive integer')
    return number


def parse_non_negative_int(key: str, value: str) -> int:
    number = parse_int(key, value)
    if number < 0:
        raise MalformedHeaderValue(key, value, 'expected a non-negative integer')
    return number


def parse_numeric_list(key: str, value: str) -> List[float]:
    numbers: List[float] = []
    for token in split_comma_separated(value):
        try:
            numbers.append(float(token))
        except ValueError:
            raise MalformedNumericList(key, value, f"'{token}' is not numeric") from None
    return numbers


def parse_data_type(key: str, value: str) -> int:
    code = parse_int(key, value)
    code_to_type(code)
    return code


def parse_interleave(key: str, value: str):
    try:
        return interleave_from_text(value)
    except ValueError:
        raise MalformedHeaderValue(key, value, "expected 'bsq', 'bil' or 'bip'") from None


def parse_byte_order(key: str, value: str):
    return byte_order_from_text(value)


def parse_map_info(key: str, value: str) -> MapInfo:
    """
    Parse the 'map info' block.

    Token 0 is the projection name and tokens 1-6 are the reference pixel,
    its ground coordinates and the pixel size. UTM adds zone, hemisphere,
    datum and units; 'By WKT String' adds nothing; any other projection adds
    datum and units. Tokens beyond those are kept in `extra`.
    Empty hemisphere, datum and units tokens decode as None.
    """
    tokens = split_comma_separated(value)
    if len(tokens) < MAP_INFO_CORE_TOKENS:
        raise MalformedMapInfo(value, f"expected at least {MAP_INFO_CORE_TOKENS} tokens, got {len(tokens)}")

    try:
        core = [float(token) for token in tokens[1:MAP_INFO_CORE_TOKENS]]
    except ValueError:
        raise MalformedMapInfo(value, 'reference pixel and pixel size must be numeric') from None

    info = MapInfo(tokens[0], *core)
    trailing = tokens[MAP_INFO_CORE_TOKENS:]

    if info.is_utm:
        if len(trailing) < 4:
            raise MalformedMapInfo(value, 'UTM requires zone, hemisphere, datum and units')
        try:
            info.zone = parse_int(key, trailing[0])
        except MalformedHeaderValue:
            raise MalformedMapInfo(value, f"invalid UTM zone '{trailing[0]}'") from None
        info.hemisphere, info.datum, units = (token or None for token in trailing[1:4])
        extra = trailing[4:]
    elif info.is_wkt:
        units = None
        extra = trailing
    else:
        if len(trailing) < 2:
            raise MalformedMapInfo(value, f"projection '{info.projection_name}' requires datum and units")
        info.datum, units = (token or None for token in trailing[0:2])
        extra = trailing[2:]

    if units is not None and units.lower().startswith(UNITS_PREFIX):
        units = units[len(UNITS_PREFIX):].strip() or None
    info.units = units
    info.extra = list(extra)
    return info


# --- Dispatch Table ---

# header key -> (EnviHeader attribute, value parser)
FIELD_PARSERS: Dict[str, Tuple[str, ValueParser]] = {
    'band names': ('band_names', parse_string_list),
    'bands': ('bands', parse_positive_int),
    'bbl': ('bbl', parse_numeric_list),
    'byte order': ('byte_order', parse_byte_order),
    'coordinate system string': ('coordinate_system_string', parse_string),
    'data type': ('data_type', parse_data_type),
    'dem band': ('dem_band', parse_int),
    'dem file': ('dem_file', parse_string),
    'description': ('description', parse_string),
    'file type': ('file_type', parse_string),
    'fwhm': ('fwhm', parse_numeric_list),
    'geo points': ('geo_points', parse_numeric_list),
    'header offset': ('header_offset', parse_non_negative_int),
    'interleave': ('interleave', parse_interleave),
    'lines': ('lines', parse_positive_int),
    'map info': ('map_info', parse_map_info),
    'samples': ('samples', parse_positive_int),
    'sensor type': ('sensor_type', parse_string),
    'wavelength': ('wavelength', parse_numeric_list),
    'wavelength units': ('wavelength_units', parse_string_list),
    'x start': ('x_start', parse_float),
    'y start': ('y_start', parse_float),
}


def classify_entries(entries: Iterable[Tuple[str, str]]) -> EnviHeader:
    """
    Classify tokenized header entries into an `EnviHeader`.

    Each key is looked up once in `FIELD_PARSERS`. Known keys are parsed into
    their typed field; unknown keys are appended to `other` in the order they
    appear. A key repeated in the header keeps its last value.

    Args:
        entries: (key, raw value) pairs, keys already lowercased and trimmed.

    Returns:
        The populated header. Derived geo locations are not computed here.

    Raises:
        MalformedHeaderValue: (or a subclass) if a known value cannot be parsed.
        UnknownDataType: If 'data type' is not in the ENVI table.
    """
    header = EnviHeader()
    for key, value in entries:
        key = key.strip().lower()
        entry = FIELD_PARSERS.get(key)
        if entry is None:
            header.other.append((key, value))
            continue
        attribute, parser = entry
        setattr(header, attribute, parser(key, value))

    if header.other:
        logger.debug(f"Unrecognized header keys kept verbatim: {[key for key, _ in header.other]}")
    return header
