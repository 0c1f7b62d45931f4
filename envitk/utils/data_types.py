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
ENVI Data Type Table.

Bidirectional mapping between the ENVI 'data type' codes and numpy element
types. Complex codes (6 and 9) share their component type with the real
float codes and are distinguished by a complex flag.

Reference: https://www.nv5geospatialsoftware.com/docs/ENVIHeaderFiles.html
"""

import operator
from typing import Any, Tuple

import numpy as np

from envitk.utils.envi_constants import ByteOrder
from envitk.utils.exceptions import UnknownDataType, UnsupportedElementKind

# --- Lookup Tables ---

# code -> (component dtype, is_complex)
ENVI_DATA_TYPES = {
    1: (np.dtype(np.uint8), False),
    2: (np.dtype(np.int16), False),
    3: (np.dtype(np.int32), False),
    4: (np.dtype(np.float32), False),
    5: (np.dtype(np.float64), False),
    6: (np.dtype(np.float32), True),
    9: (np.dtype(np.float64), True),
    12: (np.dtype(np.uint16), False),
    13: (np.dtype(np.uint32), False),
    14: (np.dtype(np.int64), False),
    15: (np.dtype(np.uint64), False),
}

# (component dtype name, is_complex) -> code
ENVI_TYPE_CODES = {(dtype.name, is_complex): code for code, (dtype, is_complex) in ENVI_DATA_TYPES.items()}

# numpy complex types expressed by their component type
COMPLEX_COMPONENTS = {
    'complex64': np.dtype(np.float32),
    'complex128': np.dtype(np.float64),
}

COMPLEX_CODES = frozenset(code for code, (_, is_complex) in ENVI_DATA_TYPES.items() if is_complex)


def code_to_type(code: Any) -> Tuple[np.dtype, bool]:
    """
    Resolve an ENVI data type code to its element type.

    Args:
        code: ENVI 'data type' code.

    Returns:
        Tuple of (component numpy dtype, is_complex).

    Raises:
        UnknownDataType: If the code is not in the ENVI table.

    Example:
        >>> code_to_type(6)
        (dtype('float32'), True)
    """
    try:
        return ENVI_DATA_TYPES[operator.index(code)]
    except (KeyError, TypeError, ValueError):
        raise UnknownDataType(code) from None


def type_to_code(element_kind: Any, is_complex: bool = False) -> int:
    """
    Resolve an element type to its ENVI data type code.

    Args:
        element_kind: Anything accepted by `numpy.dtype` (e.g. 'uint16', np.float32).
            numpy complex types map to the complex codes directly.
        is_complex: True when `element_kind` is the component type of complex samples.

    Returns:
        The ENVI data type code.

    Raises:
        UnsupportedElementKind: If the combination has no ENVI code (e.g. int8).

    Example:
        >>> type_to_code('float64', is_complex=True)
        9
    """
    try:
        dtype = np.dtype(element_kind)
    except TypeError:
        raise UnsupportedElementKind(element_kind, is_complex) from None

    if dtype.name in COMPLEX_COMPONENTS:
        dtype = COMPLEX_COMPONENTS[dtype.name]
        is_complex = True

    code = ENVI_TYPE_CODES.get((dtype.name, bool(is_complex)))
    if code is None:
        raise UnsupportedElementKind(dtype.name, is_complex)
    return code


def data_type_name(code: Any) -> str:
    """Readable name of a data type code, e.g. 'uint16' or 'complex64'."""
    return storage_dtype(code).name


def is_complex_code(code: Any) -> bool:
    return code_to_type(code)[1]


def storage_dtype(code: Any, byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN) -> np.dtype:
    """
    The numpy dtype used to move samples of a data type to and from disk.

    Complex codes map to numpy complex types (interleaved real/imaginary
    components). The byte order only affects multi-byte element encoding.
    """
    component, is_complex = code_to_type(code)
    dtype = np.dtype(f'complex{component.itemsize * 16}') if is_complex else component
    if dtype.itemsize == 1:
        return dtype
    return dtype.newbyteorder(byte_order.numpy_char)


def element_size(code: Any) -> int:
    """Bytes per sample: the component width, doubled for complex codes."""
    component, is_complex = code_to_type(code)
    return component.itemsize * (2 if is_complex else 1)
