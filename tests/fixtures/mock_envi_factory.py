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
Mock ENVI Image Factory for Testing.

This module provides the MockEnviImage class, a factory for writing ENVI
header + raw pixel file pairs to disk for testing purposes. The files are
built directly with numpy and plain text, independently of the envitk codec,
so tests can check the codec against files it did not write itself.

Example:
    >>> mock = MockEnviImage(lines=2, samples=3, bands=4, interleave='bil')
    >>> image_path = mock.save_to_file(tmp_path / 'scene.img')
    >>> (tmp_path / 'scene.img.hdr').exists()
    True
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

# numpy dtype name -> ENVI data type code
DTYPE_CODES = {
    'uint8': 1,
    'int16': 2,
    'int32': 3,
    'float32': 4,
    'float64': 5,
    'complex64': 6,
    'complex128': 9,
    'uint16': 12,
    'uint32': 13,
    'int64': 14,
    'uint64': 15,
}

# interleave -> storage axis order of a (lines, samples, bands) array
STORAGE_AXES = {
    'bsq': (2, 0, 1),
    'bil': (0, 2, 1),
    'bip': (0, 1, 2),
}


class MockEnviImage:
    """
    Factory for creating ENVI image files for testing.

    Attributes:
        lines: Image height
        samples: Image width
        bands: Number of bands
        dtype: numpy element type
        interleave: 'bsq', 'bil' or 'bip'
        byte_order: 0 (little-endian) or 1 (big-endian)
        header_offset: Bytes of filler before the pixel data
        map_info: Raw 'map info' value (without braces), or None
        extra_entries: Additional raw header lines, written as-is
        pixel_data: Pixel values, shape (lines, samples, bands)
    """

    def __init__(
        self,
        lines: int = 4,
        samples: int = 5,
        bands: int = 3,
        dtype: Union[str, np.dtype] = 'uint16',
        interleave: str = 'bsq',
        byte_order: int = 0,
        header_offset: int = 0,
        map_info: Optional[str] = None,
        extra_entries: Sequence[str] = (),
        pixel_data: Optional[np.ndarray] = None,
    ):
        self.lines = lines
        self.samples = samples
        self.bands = bands
        self.dtype = np.dtype(dtype)
        self.interleave = interleave
        self.byte_order = byte_order
        self.header_offset = header_offset
        self.map_info = map_info
        self.extra_entries: List[str] = list(extra_entries)

        if pixel_data is not None:
            self.pixel_data = np.asarray(pixel_data, dtype=self.dtype)
            if self.pixel_data.ndim == 2:
                self.pixel_data = self.pixel_data[:, :, np.newaxis]
            self.lines, self.samples, self.bands = self.pixel_data.shape
        else:
            self.pixel_data = self._generate_pixel_data()

    def _generate_pixel_data(self) -> np.ndarray:
        """Distinct, position-encoding values: value = row*100 + col*10 + band."""
        rows, cols, bands = np.meshgrid(
            np.arange(self.lines), np.arange(self.samples), np.arange(self.bands), indexing='ij'
        )
        values = rows * 100 + cols * 10 + bands
        if self.dtype.kind == 'c':
            return (values + 1j * values).astype(self.dtype)
        return values.astype(self.dtype)

    @property
    def data_type(self) -> int:
        return DTYPE_CODES[self.dtype.name]

    def header_text(self) -> str:
        """The header file content."""
        lines = [
            'ENVI',
            'description = {Mock ENVI image}',
            f'samples = {self.samples}',
            f'lines   = {self.lines}',
            f'bands   = {self.bands}',
            f'header offset = {self.header_offset}',
            'file type = ENVI Standard',
            f'data type = {self.data_type}',
            f'interleave = {self.interleave}',
            f'byte order = {self.byte_order}',
        ]
        if self.map_info is not None:
            lines.append(f'map info = {{{self.map_info}}}')
        lines.extend(self.extra_entries)
        return '\n'.join(lines) + '\n'

    def pixel_bytes(self) -> bytes:
        """The pixel file content, including the header offset filler."""
        order = '>' if self.byte_order == 1 else '<'
        dtype = self.dtype if self.dtype.itemsize == 1 else self.dtype.newbyteorder(order)
        stored = np.ascontiguousarray(np.transpose(self.pixel_data, STORAGE_AXES[self.interleave]), dtype=dtype)
        return b'\xff' * self.header_offset + stored.tobytes()

    def save_to_file(self, image_path: Union[str, Path], header_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the pixel file and its header.

        Args:
            image_path: Path of the pixel file.
            header_path: Path of the header (default: '<image>.hdr').

        Returns:
            The image path.
        """
        image_path = Path(image_path)
        header_path = Path(header_path) if header_path else image_path.with_name(image_path.name + '.hdr')
        image_path.write_bytes(self.pixel_bytes())
        header_path.write_text(self.header_text(), encoding='utf-8')
        return image_path

    def expected_offset(self, row: int, col: int, band: int) -> int:
        """Byte offset of one sample in the pixel file, computed by numpy."""
        shape = tuple((self.lines, self.samples, self.bands)[axis] for axis in STORAGE_AXES[self.interleave])
        index = tuple((row, col, band)[axis] for axis in STORAGE_AXES[self.interleave])
        return int(np.ravel_multi_index(index, shape)) * self.dtype.itemsize

    def dimensions(self) -> Tuple[int, int, int]:
        return self.lines, self.samples, self.bands


def make_cube(lines: int, samples: int, bands: int, dtype='uint16') -> np.ndarray:
    """Position-encoding test cube, shape (lines, samples, bands): value = row*100 + col*10 + band."""
    return MockEnviImage(lines=lines, samples=samples, bands=bands, dtype=dtype).pixel_data
