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
File and Directory Path Utilities for ENVITK.

This module provides helper functions for locating the header file that
belongs to an ENVI pixel file, building default header paths for new images,
and preparing output directories.
"""
import logging
from pathlib import Path
from typing import List, Union

from envitk.utils.config_loader import config
from envitk.utils.envi_constants import DEFAULT_HEADER_EXTENSION
from envitk.utils.exceptions import HeaderFileNotFound

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def header_extension() -> str:
    """The configured header extension, always starting with '.'."""
    extension = str(config.get("header.extension", DEFAULT_HEADER_EXTENSION)) or DEFAULT_HEADER_EXTENSION
    return extension if extension.startswith('.') else f".{extension}"


def default_header_path(image_path: PathLike) -> Path:
    """
    Header path used when writing a new image: the full image name plus '.hdr'.

    Example:
        >>> default_header_path('scene.img')
        PosixPath('scene.img.hdr')
    """
    image_path = Path(image_path)
    return image_path.with_name(image_path.name + header_extension())


def candidate_header_paths(image_path: PathLike) -> List[Path]:
    """
    Header paths to try for an image, in search order.

    Search order:
    1. The full image name plus '.hdr' (e.g. scene.img.hdr)
    2. The image name with its extension replaced by '.hdr' (e.g. scene.hdr)
    """
    image_path = Path(image_path)
    candidates = [default_header_path(image_path)]
    if image_path.suffix:
        candidates.append(image_path.with_suffix(header_extension()))
    return candidates


def find_header_path(image_path: PathLike) -> Path:
    """
    Find the header file that belongs to an image.

    Args:
        image_path: Path of the ENVI pixel file.

    Returns:
        The first existing candidate header path.

    Raises:
        HeaderFileNotFound: If no candidate exists.
    """
    candidates = candidate_header_paths(image_path)
    for candidate in candidates:
        if candidate.is_file():
            logger.debug(f"Using header file: {candidate}")
            return candidate
    tried = ', '.join(str(c) for c in candidates)
    raise HeaderFileNotFound(f"Can't find the input header file (tried {tried})", str(candidates[0]))


def prepare_output_path(output_path: PathLike) -> Path:
    """Create the parent directory of an output file if needed and return the path."""
    output_path = Path(output_path)
    if output_path.parent and not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path
