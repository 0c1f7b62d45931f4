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
GDAL Interoperability Check.

Opens an ENVI image with GDAL's ENVI driver and compares what GDAL reports
(dimensions, data type, interleave and optionally the pixel values) with the
header decoded by envitk. GDAL is an optional dependency, installed with the
`gdal` extra; it is imported only when a check is run.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from envitk.utils.data_models import EnviHeader
from envitk.utils.envi_constants import DEFAULT_INTERLEAVE, Interleave
from envitk.utils.exceptions import GdalCheckError

logger = logging.getLogger(__name__)

# ENVI data type code -> GDAL data type name
GDAL_TYPE_NAMES: Dict[int, str] = {
    1: 'Byte',
    2: 'Int16',
    3: 'Int32',
    4: 'Float32',
    5: 'Float64',
    6: 'CFloat32',
    9: 'CFloat64',
    12: 'UInt16',
    13: 'UInt32',
    14: 'Int64',
    15: 'UInt64',
}

# GDAL IMAGE_STRUCTURE 'INTERLEAVE' item -> ENVI interleave
GDAL_INTERLEAVE: Dict[str, Interleave] = {
    'BAND': Interleave.BSQ,
    'LINE': Interleave.BIL,
    'PIXEL': Interleave.BIP,
}


@dataclass
class GdalCheckResult:
    """Outcome of comparing a decoded header (and pixels) with GDAL's view."""
    driver: str
    mismatches: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches


def _import_gdal():
    try:
        from osgeo import gdal
    except ImportError as e:
        raise GdalCheckError(
            "GDAL Python bindings are not installed; install envitk with the 'gdal' extra"
        ) from e
    gdal.UseExceptions()
    return gdal


def check_with_gdal(image_path: Union[str, Path], header: EnviHeader,
                    data: Optional[np.ndarray] = None) -> GdalCheckResult:
    """
    Compare a decoded header, and optionally its pixel data, with GDAL.

    Args:
        image_path: Path of the ENVI pixel file.
        header: Header decoded by envitk.
        data: Pixels read by envitk, shape (lines, samples, bands).

    Returns:
        GdalCheckResult listing every disagreement found.

    Raises:
        GdalCheckError: If GDAL is not installed or cannot open the image.
    """
    gdal = _import_gdal()
    try:
        ds = gdal.Open(str(image_path), gdal.GA_ReadOnly)
    except RuntimeError as e:
        raise GdalCheckError(f"GDAL could not open {image_path}: {e}") from e
    if ds is None:
        raise GdalCheckError(f"GDAL could not open {image_path}")

    try:
        result = GdalCheckResult(driver=ds.GetDriver().ShortName)
        comparisons = [
            ('samples', header.samples, ds.RasterXSize),
            ('lines', header.lines, ds.RasterYSize),
            ('bands', header.bands, ds.RasterCount),
        ]
        if header.data_type is not None and ds.RasterCount:
            gdal_type = gdal.GetDataTypeName(ds.GetRasterBand(1).DataType)
            comparisons.append(('data type', GDAL_TYPE_NAMES.get(header.data_type), gdal_type))
        gdal_interleave = ds.GetMetadataItem('INTERLEAVE', 'IMAGE_STRUCTURE')
        if gdal_interleave in GDAL_INTERLEAVE:
            comparisons.append(
                ('interleave', header.interleave or DEFAULT_INTERLEAVE, GDAL_INTERLEAVE[gdal_interleave])
            )

        for name, ours, theirs in comparisons:
            if ours != theirs:
                result.mismatches.append(f"{name}: envitk {ours!r}, GDAL {theirs!r}")

        if data is not None and not result.mismatches:
            gdal_data = ds.ReadAsArray()
            if gdal_data.ndim == 2:
                gdal_data = gdal_data[:, :, np.newaxis]
            else:
                gdal_data = np.transpose(gdal_data, (1, 2, 0))
            if not np.array_equal(gdal_data, data, equal_nan=data.dtype.kind in 'fc'):
                result.mismatches.append('pixel values differ')
    finally:
        ds = None

    level = logging.INFO if result.ok else logging.WARNING
    logger.log(level, f"GDAL {result.driver} check: {'OK' if result.ok else '; '.join(result.mismatches)}")
    return result
