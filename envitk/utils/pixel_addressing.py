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
Interleave-aware Binary Addressing for ENVI Pixel Files.

An ENVI pixel file is a headerless array of lines * samples * bands elements
laid out in one of three schemes (0-based row r, column c, band b):

- BSQ: ((b*L + r)*S + c) * W
- BIL: ((r*B + b)*S + c) * W
- BIP: ((r*S + c)*B + b) * W

where W is the element width in bytes. Each scheme is the C-order layout of a
numpy array with axes (B, L, S), (L, B, S) and (L, S, B) respectively, which is
how whole images are moved. Byte order only affects how each element is
encoded and is independent of the interleave.
"""

import logging
from typing import BinaryIO, Dict, Tuple

import numpy as np

from envitk.utils.data_models import EnviHeader
from envitk.utils.data_types import storage_dtype
from envitk.utils.envi_constants import DEFAULT_BYTE_ORDER, DEFAULT_HEADER_OFFSET, DEFAULT_INTERLEAVE, Interleave
from envitk.utils.exceptions import ImageDataTruncated, IncompleteHeader

logger = logging.getLogger(__name__)

# Storage axis order per interleave, in terms of the canonical (line, sample, band) axes.
STORAGE_AXES: Dict[Interleave, Tuple[int, int, int]] = {
    Interleave.BSQ: (2, 0, 1),
    Interleave.BIL: (0, 2, 1),
    Interleave.BIP: (0, 1, 2),
}

_READ_CHUNK_SIZE = 64 * 1024 * 1024


def sample_offset(row: int, col: int, band: int, lines: int, samples: int, bands: int,
                  interleave: Interleave, width: int) -> int:
    """
    Byte offset of one sample, relative to the start of the pixel data.

    Args:
        row, col, band: 0-based sample indices.
        lines, samples, bands: Image dimensions (L, S, B).
        interleave: Storage scheme.
        width: Element width in bytes (W).

    Raises:
        IndexError: If an index is outside the image.

    Example:
        >>> sample_offset(1, 2, 3, lines=2, samples=3, bands=4, interleave=Interleave.BIP, width=2)
        46
    """
    for name, index, size in (('row', row, lines), ('col', col, samples), ('band', band, bands)):
        if not 0 <= index < size:
            raise IndexError(f"{name} index {index} out of range [0, {size})")

    if interleave is Interleave.BSQ:
        element = (band * lines + row) * samples + col
    elif interleave is Interleave.BIL:
        element = (row * bands + band) * samples + col
    elif interleave is Interleave.BIP:
        element = (row * samples + col) * bands + band
    else:
        raise ValueError(f"Unsupported interleave: {interleave!r}")
    return element * width


def storage_shape(interleave: Interleave, lines: int, samples: int, bands: int) -> Tuple[int, int, int]:
    """Shape of the on-disk array for an interleave, e.g. (B, L, S) for BSQ."""
    dims = (lines, samples, bands)
    return tuple(dims[axis] for axis in STORAGE_AXES[interleave])


def to_storage_layout(cube: np.ndarray, interleave: Interleave) -> np.ndarray:
    """Reorder a (lines, samples, bands) cube into the storage axis order."""
    return np.transpose(cube, STORAGE_AXES[interleave])


def from_storage_layout(data: np.ndarray, interleave: Interleave) -> np.ndarray:
    """Reorder a storage-layout array back to (lines, samples, bands)."""
    return np.transpose(data, np.argsort(STORAGE_AXES[interleave]))


def _require_io_fields(header: EnviHeader) -> None:
    missing = header.missing_dimensions()
    if missing:
        raise IncompleteHeader(missing)


def image_byte_count(header: EnviHeader) -> int:
    """Number of pixel bytes described by a header (L * S * B * W)."""
    _require_io_fields(header)
    return header.lines * header.samples * header.bands * header.element_size


def read_samples(stream: BinaryIO, header: EnviHeader) -> np.ndarray:
    """
    Read the pixel data described by a header from a binary stream.

    The stream is positioned at the start of the pixel file; `header_offset`
    bytes are skipped first. Samples are returned in native byte order.

    Returns:
        Array of shape (lines, samples, bands).

    Raises:
        IncompleteHeader: If dimensions or data type are missing.
        ImageDataTruncated: If the stream ends before all samples are read.
    """
    _require_io_fields(header)
    interleave = header.interleave or DEFAULT_INTERLEAVE
    byte_order = header.byte_order or DEFAULT_BYTE_ORDER
    offset = header.header_offset or DEFAULT_HEADER_OFFSET
    dtype = storage_dtype(header.data_type, byte_order)
    expected = image_byte_count(header)

    skipped = len(stream.read(offset)) if offset else 0
    if skipped < offset:
        raise ImageDataTruncated(offset + expected, skipped)

    buffer = bytearray()
    while len(buffer) < expected:
        chunk = stream.read(min(_READ_CHUNK_SIZE, expected - len(buffer)))
        if not chunk:
            break
        buffer.extend(chunk)
    if len(buffer) < expected:
        raise ImageDataTruncated(expected, len(buffer))

    shape = storage_shape(interleave, header.lines, header.samples, header.bands)
    data = np.frombuffer(buffer, dtype=dtype).reshape(shape)
    logger.debug(f"Read {expected} bytes as {interleave.value} {dtype.str} {shape}")
    return from_storage_layout(data, interleave).astype(dtype.newbyteorder('='))


def write_samples(stream: BinaryIO, cube: np.ndarray, header: EnviHeader) -> int:
    """
    Write a (lines, samples, bands) cube to a binary stream.

    `header_offset` zero bytes are written before the samples. The cube must
    already have the header's element type; only byte order is converted.

    Returns:
        Total number of bytes written.
    """
    _require_io_fields(header)
    interleave = header.interleave or DEFAULT_INTERLEAVE
    byte_order = header.byte_order or DEFAULT_BYTE_ORDER
    offset = header.header_offset or DEFAULT_HEADER_OFFSET
    dtype = storage_dtype(header.data_type, byte_order)

    if cube.ndim == 2:
        cube = cube[:, :, np.newaxis]
    if cube.shape != header.dimensions:
        raise ValueError(f"Array shape {cube.shape} does not match header dimensions {header.dimensions}")

    if offset:
        stream.write(b'\x00' * offset)
    data = np.ascontiguousarray(to_storage_layout(cube, interleave), dtype=dtype)
    stream.write(data.tobytes())
    logger.debug(f"Wrote {data.nbytes} bytes as {interleave.value} {dtype.str} {data.shape}")
    return offset + data.nbytes
