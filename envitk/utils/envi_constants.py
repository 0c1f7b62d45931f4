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
Shared Constants and Enumerations for ENVI Headers.

This module centralizes the wire-level enumerations and fixed strings used
by the header codec and the binary I/O layer. It provides a single source of
truth for interleave names, byte order codes and the serialization key order.

Classes:
    Interleave: Enum for the band interleave schemes (BSQ, BIL, BIP).
    ByteOrder: Enum for the ENVI 'byte order' codes.
"""
from enum import Enum

# --- Helper Accessors ---

def interleave_from_text(value: str) -> 'Interleave':
    """Resolve an interleave name case-insensitively; raises ValueError if unknown."""
    return Interleave(value.strip().lower())

def byte_order_from_text(value: str) -> 'ByteOrder':
    """ENVI semantics: '1' is big-endian, anything else is little-endian."""
    try:
        is_big = float(value.strip()) == 1
    except ValueError:
        is_big = False
    return ByteOrder.BIG_ENDIAN if is_big else ByteOrder.LITTLE_ENDIAN


# --- Enumerations ---

class Interleave(Enum):
    """Enumeration of ENVI band interleave schemes."""
    BSQ = 'bsq'
    BIL = 'bil'
    BIP = 'bip'

class ByteOrder(Enum):
    """Enumeration of ENVI byte order codes."""
    LITTLE_ENDIAN = 0
    BIG_ENDIAN = 1

    @property
    def numpy_char(self) -> str:
        return '>' if self is ByteOrder.BIG_ENDIAN else '<'


# --- Default Values ---

ENVI_MARKER = 'ENVI'
COMMENT_PREFIX = ';'

DEFAULT_FILE_TYPE = 'ENVI Standard'
DEFAULT_HEADER_EXTENSION = '.hdr'
DEFAULT_INTERLEAVE = Interleave.BSQ
DEFAULT_BYTE_ORDER = ByteOrder.LITTLE_ENDIAN
DEFAULT_HEADER_OFFSET = 0

# Reference pixel coordinates above this value are re-anchored to the
# upper-left corner (1.5, 1.5 in 1-based pixel-centre indexing).
CORNER_REFERENCE = 1.5

UTM_PROJECTION = 'UTM'
WKT_PROJECTION = 'By WKT String'
UNITS_PREFIX = 'units='


# --- Serialization Order ---

# Fixed key order used when writing headers; unrecognized keys follow.
HEADER_KEY_ORDER = (
    'band names',
    'bands',
    'bbl',
    'byte order',
    'coordinate system string',
    'data type',
    'dem band',
    'dem file',
    'description',
    'file type',
    'fwhm',
    'geo points',
    'header offset',
    'interleave',
    'lines',
    'map info',
    'samples',
    'sensor type',
    'wavelength',
    'wavelength units',
    'x start',
    'y start',
)

# Fields that must be known before any binary I/O.
REQUIRED_IO_FIELDS = ('samples', 'lines', 'bands', 'data_type')
