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
ENVI Header Reading and Reporting Tool for ENVITK.

This module powers the 'info' command. It decodes the header belonging to an
ENVI image (or a header file given directly), and reports it as Markdown or
JSON, optionally with the derived map coordinates and a GDAL cross-check.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from envitk.utils.data_models import EnviHeader
from envitk.utils.envi_io import read_envi
from envitk.utils.gdal_check import check_with_gdal
from envitk.utils.header_codec import read_header
from envitk.utils.header_report import format_report
from envitk.utils.path_helpers import find_header_path, header_extension, prepare_output_path
from envitk.utils.script_arguments import InfoArguments

logger = logging.getLogger('read_header')


def resolve_paths(args: InfoArguments) -> Tuple[Optional[Path], Path]:
    """
    Work out the image and header paths for the 'info' command.

    A header file given as input is reported on its own; there is no image
    to check against GDAL in that case.
    """
    if args.header_path:
        return args.input_path, args.header_path
    if args.input_path.suffix.lower() == header_extension():
        return None, args.input_path
    return args.input_path, find_header_path(args.input_path)


def read_header_info(args: InfoArguments) -> str:
    """
    Decode a header and build its report.

    Args:
        args: Validated 'info' arguments.

    Returns:
        The report text. It is also written to `args.output_path` when given,
        otherwise printed.
    """
    logger.debug("=== read_header started ===")
    logger.debug(f"Arguments: {args}")

    image_path, header_path = resolve_paths(args)
    header: EnviHeader = read_header(header_path)
    logger.debug(f"Decoded header: {header_path}")

    if args.gdal_check:
        if image_path is None:
            logger.warning("GDAL check skipped: no image file was given")
        else:
            data, _ = read_envi(image_path, header_path)
            result = check_with_gdal(image_path, header, data)
            if not result.ok:
                logger.warning(f"GDAL disagrees with the decoded header: {result.mismatches}")

    report = format_report(
        header,
        report_format=args.report_format,
        title=f"ENVI Header: {header_path.name}",
        include_locations=args.geo,
    )

    if args.output_path:
        output_path = prepare_output_path(args.output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(report)
        logger.info(f"Report written successfully: {output_path}")
    else:
        print(report)
    return report
