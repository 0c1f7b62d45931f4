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
ENVI Image Layout Conversion Tool for ENVITK.

This module powers the 'convert' command. It reads an ENVI image and writes
it back with a different interleave and/or byte order. Every other header
field, including unrecognized entries, is carried over unchanged. Any header
offset in the source is dropped, since the new file has no embedded header.
"""

import dataclasses
import logging

from envitk.utils.data_models import EnviHeader
from envitk.utils.envi_constants import DEFAULT_HEADER_OFFSET
from envitk.utils.envi_io import read_envi, write_envi
from envitk.utils.script_arguments import ConvertArguments

logger = logging.getLogger('convert_image')


def convert_image(args: ConvertArguments) -> EnviHeader:
    """
    Rewrite an ENVI image with a new layout.

    Args:
        args: Validated 'convert' arguments.

    Returns:
        The header written alongside the output image.
    """
    logger.debug("=== convert_image started ===")
    logger.debug(f"Arguments: {args}")

    data, header = read_envi(args.input_path, args.header_path)

    changes = {'header_offset': DEFAULT_HEADER_OFFSET}
    if args.interleave is not None:
        changes['interleave'] = args.interleave
    if args.byte_order is not None:
        changes['byte_order'] = args.byte_order
    output_header = dataclasses.replace(header, **changes)

    written = write_envi(data, args.output_path, output_header, args.output_header_path)
    logger.info(
        f"Converted {args.input_path} -> {args.output_path} "
        f"({written.interleave.value}, byte order {written.byte_order.value})"
    )
    return written
