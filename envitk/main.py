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
Command-line interface for the ENVI ToolKit (ENVITK).

This script provides the main entry point for the `envitk` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from envitk.utils.config_loader import config
from envitk.utils.exceptions import EnviError
from envitk.utils.log_helpers import setup_logger, shutdown_logger
from envitk.utils.script_arguments import ConvertArguments, InfoArguments


def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def byte_order_arg(value: str) -> int:
    """Validate that the byte order is 0 (little-endian) or 1 (big-endian)."""
    if value not in ('0', '1'):
        raise argparse.ArgumentTypeError(f"Byte order must be 0 or 1, got '{value}'")
    return int(value)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='envitk',
        description='ENVITK',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Header Info Tool ---
    info_parser = subparsers.add_parser(
        'info',
        help='Decode and report the header of an ENVI image.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    info_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='ENVI image file, or its header file.')
    info_parser.add_argument('--header', type=Path, dest='header_path', help='Header file, if it cannot be found next to the image.')
    info_parser.add_argument('-f', '--report-format', type=str.lower, default='md', choices=['md', 'json'], dest='report_format', help='Output format for the report.')
    info_parser.add_argument('-o', '--output', type=Path, dest='output_path', help='Write the report to this file instead of stdout.')
    info_parser.add_argument('--geo', type=str2bool, nargs='?', const=True, default=False, dest='geo', help='Include the map coordinates derived from map info.')
    info_parser.add_argument('--gdal-check', type=str2bool, nargs='?', const=True, default=False, dest='gdal_check', help='Cross-check the header and pixels with GDAL.')
    info_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    info_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    # --- Convert Tool ---
    convert_parser = subparsers.add_parser(
        'convert',
        help='Rewrite an ENVI image with a different interleave or byte order.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    convert_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Input ENVI image file.')
    convert_parser.add_argument('-o', '--output', required=True, type=Path, dest='output_path', help='Output ENVI image file.')
    convert_parser.add_argument('--interleave', type=str.lower, choices=['bsq', 'bil', 'bip'], dest='interleave', help='Output interleave. Default: same as input.')
    convert_parser.add_argument('--byte-order', type=byte_order_arg, dest='byte_order', help='Output byte order (0 little-endian, 1 big-endian). Default: same as input.')
    convert_parser.add_argument('--header', type=Path, dest='header_path', help='Input header file, if it cannot be found next to the image.')
    convert_parser.add_argument('--output-header', type=Path, dest='output_header_path', help='Output header file. Default: <output>.hdr.')
    convert_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    convert_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    return parser

def main(argv: Optional[List[str]] = None):
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else config.get('logging.level', 'INFO')
    log_file = args.log_file or config.get('logging.file') or None
    logger = setup_logger(log_file=str(log_file) if log_file else None, level=log_level)

    exit_code = 0
    try:
        if tool == 'info':
            from envitk.tools.read_header import read_header_info
            script_args = InfoArguments(**args_dict)
            read_header_info(script_args)
        elif tool == 'convert':
            from envitk.tools.convert_image import convert_image
            script_args = ConvertArguments(**args_dict)
            convert_image(script_args)
    except (EnviError, ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        exit_code = 1
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        exit_code = 1
    finally:
        shutdown_logger(logger)

    if exit_code:
        sys.exit(exit_code)

if __name__ == "__main__":
    main()
