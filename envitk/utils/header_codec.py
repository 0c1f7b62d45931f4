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
ENVI Header Codec.

Decoding runs the header text through the grammar, the field classifier and
the geo transform. Encoding fills absent fields from the image being written,
checks that present fields agree with it, and serializes the header in a
fixed key order:

    ENVI
    band names = {...}
    bands = ...
    ...
    y start = ...
    <unrecognized keys> = {...}

Writing complex data types is rejected.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple, Union

import numpy as np

from envitk.utils.config_loader import config
from envitk.utils.data_models import EnviHeader, MapInfo
from envitk.utils.data_types import COMPLEX_CODES, type_to_code
from envitk.utils.envi_constants import (
    DEFAULT_BYTE_ORDER,
    DEFAULT_FILE_TYPE,
    DEFAULT_HEADER_OFFSET,
    DEFAULT_INTERLEAVE,
    ENVI_MARKER,
    HEADER_KEY_ORDER,
    UNITS_PREFIX,
)
from envitk.utils.exceptions import (
    HeaderFileNotFound,
    HeaderImageMismatch,
    MalformedHeaderValue,
    MalformedMapInfo,
    UnsupportedComplexWrite,
)
from envitk.utils.geo_transform import apply_geo_transform
from envitk.utils.header_grammar import tokenize_header
from envitk.utils.header_parser import classify_entries

logger = logging.getLogger(__name__)


# --- Decoding ---

def decode_header(stream: Optional[TextIO]) -> EnviHeader:
    """
    Decode an ENVI header from an open text stream.

    Args:
        stream: Readable text stream positioned at the start of the header.

    Returns:
        The decoded header, with `x_loc` / `y_loc` computed when map info and
        the image dimensions are present.

    Raises:
        HeaderFileNotFound: If no stream is supplied.
        MalformedHeaderValue: (or a subclass) for unparseable known values.
        UnknownDataType: If 'data type' is not in the ENVI table.
    """
    if stream is None:
        raise HeaderFileNotFound("Can't find the input header file: no header stream supplied")
    header = classify_entries(tokenize_header(stream))
    return apply_geo_transform(header)


def read_header(path: Union[str, Path]) -> EnviHeader:
    """Open and decode a header file; the file is closed on every exit path."""
    path = Path(path)
    try:
        stream = path.open('r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise HeaderFileNotFound(f"Can't find the input header file: {path} ({e})", str(path)) from e
    with stream:
        logger.debug(f"Decoding header: {path}")
        return decode_header(stream)


# --- Default filling and validation ---

def image_properties(shape: Sequence[int], dtype) -> Dict[str, int]:
    """
    Header fields implied by an image array.

    Args:
        shape: Array shape, (lines, samples) or (lines, samples, bands).
        dtype: Array element type.

    Returns:
        Dict with 'lines', 'samples', 'bands' and 'data_type'.
    """
    if len(shape) not in (2, 3):
        raise ValueError(f"Image should have 2 or 3 dimensions, got shape {tuple(shape)}")
    return {
        'lines': int(shape[0]),
        'samples': int(shape[1]),
        'bands': int(shape[2]) if len(shape) == 3 else 1,
        'data_type': type_to_code(dtype),
    }


def fill_header_defaults(header: EnviHeader, shape: Sequence[int], dtype) -> EnviHeader:
    """
    Fill absent required fields and check present ones against the image.

    Absent samples, lines, bands and data type are taken from the image;
    absent header offset, interleave, byte order and file type get the ENVI
    defaults (0, BSQ, little-endian, 'ENVI Standard'). The band count is
    compared with the number of bands in the image, not its dimensionality.

    Returns:
        A new header; the argument is not modified.

    Raises:
        HeaderImageMismatch: If a present field disagrees with the image.
        UnsupportedComplexWrite: If the header or the image data type is complex.
        UnsupportedElementKind: If the image dtype has no ENVI code.
    """
    if header.data_type in COMPLEX_CODES:
        raise UnsupportedComplexWrite(header.data_type)

    actual = image_properties(shape, dtype)
    updates: Dict[str, object] = {'other': list(header.other)}

    for field in ('samples', 'lines', 'bands', 'data_type'):
        value = getattr(header, field)
        if value is None:
            updates[field] = actual[field]
        elif value != actual[field]:
            raise HeaderImageMismatch(field, value, actual[field])

    defaults = {
        'header_offset': DEFAULT_HEADER_OFFSET,
        'interleave': DEFAULT_INTERLEAVE,
        'byte_order': DEFAULT_BYTE_ORDER,
        'file_type': config.get('header.file_type', DEFAULT_FILE_TYPE),
    }
    for field, default in defaults.items():
        if getattr(header, field) is None:
            updates[field] = default

    filled = dataclasses.replace(header, **updates)
    if filled.data_type in COMPLEX_CODES:
        raise UnsupportedComplexWrite(filled.data_type)
    return apply_geo_transform(filled)


# --- Serialization ---

def format_number(value: float) -> str:
    """Render a number so that decoding reproduces it exactly."""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return repr(float(value))


def _format_list(values: Sequence[object], formatter: Callable[[object], str] = str) -> str:
    return '{' + ', '.join(formatter(value) for value in values) + '}'


def _format_bbl(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else format_number(value)


def format_map_info(info: MapInfo) -> str:
    """
    Render a MapInfo back into the 'map info' token list.

    Raises:
        MalformedMapInfo: If a UTM map info has no zone.
    """
    if info.is_utm and info.zone is None:
        raise MalformedMapInfo(info.projection_name, "UTM map info requires a zone")
    tokens: List[str] = [info.projection_name]
    tokens.extend(format_number(v) for v in (
        info.x_reference_pixel, info.y_reference_pixel,
        info.pixel_easting, info.pixel_northing,
        info.x_pixel_size, info.y_pixel_size,
    ))
    units = f"{UNITS_PREFIX}{info.units}" if info.units is not None else ''
    if info.is_utm:
        tokens.extend([str(info.zone), info.hemisphere or '', info.datum or '', units])
    elif not info.is_wkt:
        tokens.extend([info.datum or '', units])
    tokens.extend(info.extra)
    return _format_list(tokens)


def _checked_braces(key: str, value: object, text: str) -> str:
    # Decoding reads a braced value up to the line where the braces balance
    if '{' in text and (not text.startswith('{') or text.count('{') > text.count('}')):
        raise MalformedHeaderValue(key, value, "unbalanced '{' cannot be written")
    return text


# header key -> (EnviHeader attribute, value formatter)
FIELD_FORMATTERS: Dict[str, Tuple[str, Callable[[object], str]]] = {
    'band names': ('band_names', _format_list),
    'bands': ('bands', str),
    'bbl': ('bbl', lambda v: _format_list(v, _format_bbl)),
    'byte order': ('byte_order', lambda v: str(v.value)),
    'coordinate system string': ('coordinate_system_string', lambda v: f"{{{v}}}"),
    'data type': ('data_type', str),
    'dem band': ('dem_band', str),
    'dem file': ('dem_file', lambda v: f"{{{v}}}"),
    'description': ('description', lambda v: f"{{{v}}}"),
    'file type': ('file_type', str),
    'fwhm': ('fwhm', lambda v: _format_list(v, format_number)),
    'geo points': ('geo_points', lambda v: _format_list(v, format_number)),
    'header offset': ('header_offset', str),
    'interleave': ('interleave', lambda v: v.value),
    'lines': ('lines', str),
    'map info': ('map_info', format_map_info),
    'samples': ('samples', str),
    'sensor type': ('sensor_type', lambda v: f"{{{v}}}"),
    'wavelength': ('wavelength', lambda v: _format_list(v, format_number)),
    'wavelength units': ('wavelength_units', _format_list),
    'x start': ('x_start', format_number),
    'y start': ('y_start', format_number),
}


def format_header(header: EnviHeader) -> str:
    """
    Serialize a header to ENVI text.

    Present fields are written in `HEADER_KEY_ORDER`; unrecognized entries
    follow as 'key = {value}' in their stored order. No defaults are filled.

    Raises:
        MalformedHeaderValue: If a value holds a '{' that would not be
            closed on decode.
    """
    lines = [ENVI_MARKER]
    for key in HEADER_KEY_ORDER:
        attribute, formatter = FIELD_FORMATTERS[key]
        value = getattr(header, attribute)
        if value is not None:
            lines.append(f"{key} = {_checked_braces(key, value, formatter(value))}")
    for key, value in header.other:
        text = _checked_braces(key, value, '{' + str(value) + '}')
        lines.append(f"{key} = {text}")
    return '\n'.join(lines) + '\n'


def encode_header(header: Optional[EnviHeader], shape: Sequence[int], dtype) -> Tuple[EnviHeader, str]:
    """
    Validate a header against an image and serialize it.

    Args:
        header: Header to encode, or None to build one from the image alone.
        shape: Shape of the image that will be written.
        dtype: Element type of the image that will be written.

    Returns:
        Tuple of (filled header, header text).
    """
    filled = fill_header_defaults(header or EnviHeader(), shape, dtype)
    return filled, format_header(filled)


def write_header(stream: TextIO, header: Optional[EnviHeader], shape: Sequence[int], dtype) -> EnviHeader:
    """Encode a header for an image and write it to an open text stream."""
    filled, text = encode_header(header, shape, dtype)
    stream.write(text)
    return filled
