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
Reading and Writing ENVI Images.

This module pairs the header codec with the pixel addressing layer at the
file level. An image is an array of shape (lines, samples, bands); a 2-D
array is written as a single band.

Functions:
    make_basic_header: Build a default header describing an array.
    read_envi: Read an image and its header from disk.
    write_envi: Write an image and its header to disk.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from envitk.utils.config_loader import config
from envitk.utils.data_models import EnviHeader
from envitk.utils.envi_constants import DEFAULT_BYTE_ORDER, DEFAULT_FILE_TYPE, DEFAULT_HEADER_OFFSET, DEFAULT_INTERLEAVE
from envitk.utils.exceptions import IncompleteHeader, UnsupportedComplexRead
from envitk.utils.header_codec import encode_header, image_properties, read_header
from envitk.utils.path_helpers import default_header_path, find_header_path, prepare_output_path
from envitk.utils.performance_tracker import PerformanceTracker
from envitk.utils.pixel_addressing import read_samples, write_samples

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def make_basic_header(array: np.ndarray) -> EnviHeader:
    """
    Build a basic header describing an array.

    Dimensions and data type come from the array; the remaining required
    fields get the ENVI defaults (BSQ, little-endian, no header offset,
    'ENVI Standard').

    Example:
        >>> hdr = make_basic_header(np.zeros((2, 3), dtype=np.uint16))
        >>> hdr.lines, hdr.samples, hdr.bands, hdr.data_type
        (2, 3, 1, 12)
    """
    array = np.asarray(array)
    properties = image_properties(array.shape, array.dtype)
    return EnviHeader(
        samples=properties['samples'],
        lines=properties['lines'],
        bands=properties['bands'],
        data_type=properties['data_type'],
        interleave=DEFAULT_INTERLEAVE,
        byte_order=DEFAULT_BYTE_ORDER,
        header_offset=DEFAULT_HEADER_OFFSET,
        file_type=config.get('header.file_type', DEFAULT_FILE_TYPE),
    )


def read_envi(image_path: PathLike, header_path: Optional[PathLike] = None,
              allow_complex: Optional[bool] = None) -> Tuple[np.ndarray, EnviHeader]:
    """
    Read an ENVI image and its header.

    Args:
        image_path: Path of the pixel file.
        header_path: Path of the header file. When omitted, '<image>.hdr' and
            then '<image without extension>.hdr' are tried.
        allow_complex: Read complex data types best-effort instead of raising.
            Defaults to the 'read.allow_complex' setting.

    Returns:
        Tuple of (array of shape (lines, samples, bands), decoded header).

    Raises:
        HeaderFileNotFound: If no header file can be found.
        IncompleteHeader: If the header lacks dimensions or data type.
        UnsupportedComplexRead: If the data type is complex and not allowed.
        ImageDataTruncated: If the pixel file is too short.
    """
    image_path = Path(image_path)
    header_path = Path(header_path) if header_path else find_header_path(image_path)
    if allow_complex is None:
        allow_complex = bool(config.get('read.allow_complex', False))

    tracker = PerformanceTracker()
    with tracker.track('Decode header'):
        header = read_header(header_path)

    missing = header.missing_dimensions()
    if missing:
        raise IncompleteHeader(missing)

    if header.is_complex:
        if not allow_complex:
            raise UnsupportedComplexRead(header.data_type)
        logger.warning(
            f"Complex data (data type {header.data_type}) is read best-effort as {header.data_type_name}"
        )

    logger.debug(
        f"Reading {image_path}: {header.lines} lines x {header.samples} samples x "
        f"{header.bands} bands, {header.data_type_name}, {(header.interleave or DEFAULT_INTERLEAVE).value}"
    )
    with tracker.track('Read pixels'):
        with open(image_path, 'rb') as stream:
            data = read_samples(stream, header)

    tracker.log_summary()
    return data, header


def write_envi(array: np.ndarray, image_path: PathLike, header: Optional[EnviHeader] = None,
               header_path: Optional[PathLike] = None) -> EnviHeader:
    """
    Write an array as an ENVI image plus header.

    The header is validated against the array before any file is created.
    If writing fails part way through, the files this call opened are
    removed and the error is re-raised; files it never opened are left alone.

    Args:
        array: Image of shape (lines, samples) or (lines, samples, bands).
        image_path: Path of the pixel file to create.
        header: Header to write; absent fields are filled from the array.
        header_path: Path of the header file; defaults to '<image>.hdr'.

    Returns:
        The header that was written.

    Raises:
        HeaderImageMismatch: If a header field disagrees with the array.
        UnsupportedComplexWrite: If the data type is complex.
        UnsupportedElementKind: If the array type has no ENVI code.
    """
    array = np.asarray(array)
    image_path = Path(image_path)
    header_path = Path(header_path) if header_path else default_header_path(image_path)

    tracker = PerformanceTracker()
    with tracker.track('Encode header'):
        filled, text = encode_header(header, array.shape, array.dtype)

    prepare_output_path(image_path)
    prepare_output_path(header_path)

    opened: List[Path] = []
    try:
        with tracker.track('Write header'):
            with open(header_path, 'w', encoding='utf-8', newline='\n') as stream:
                opened.append(header_path)
                stream.write(text)
        with tracker.track('Write pixels'):
            with open(image_path, 'wb') as stream:
                opened.append(image_path)
                written = write_samples(stream, array, filled)
    except BaseException:
        for path in opened:
            if path.exists():
                logger.debug(f"Removing partially written file: {path}")
                path.unlink()
        raise

    logger.debug(f"Wrote {written} bytes to {image_path} and header {header_path}")
    tracker.log_summary()
    return filled
