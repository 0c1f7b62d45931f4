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
Dataclass-based Argument Models for ENVITK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool (`info`, `convert`). It uses
`__post_init__` for validation and resolving defaults, ensuring that the core
logic receives clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    InfoArguments: Arguments for the read_header tool.
    ConvertArguments: Arguments for the convert_image tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from envitk.utils.envi_constants import ByteOrder, Interleave, interleave_from_text
from envitk.utils.header_report import REPORT_FORMATS

logger = logging.getLogger(__name__)


@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    header_path: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        for name in ('input_path', 'output_path', 'header_path', 'log_file'):
            value = getattr(self, name)
            if value and isinstance(value, str):
                setattr(self, name, Path(value))

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

    def _validate_input(self):
        if self.input_path is None:
            raise ValueError("The 'input_path' argument is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        if self.header_path is not None and not self.header_path.is_file():
            raise ValueError(f"Header file not found: {self.header_path}")


@dataclass
class InfoArguments(BaseArguments):
    """Arguments for the read_header tool."""
    report_format: str = 'md'
    geo: bool = False
    gdal_check: bool = False

    def __post_init__(self):
        """Validation for info arguments."""
        super().__post_init__()
        try:
            self._validate_input()
            if self.report_format not in REPORT_FORMATS:
                raise ValueError(f"Report format must be one of {REPORT_FORMATS}, got '{self.report_format}'")
        except ValueError as e:
            self.handle_error(str(e))


@dataclass
class ConvertArguments(BaseArguments):
    """Arguments for the convert_image tool."""
    interleave: Optional[Union[str, Interleave]] = None
    byte_order: Optional[Union[int, ByteOrder]] = None
    output_header_path: Optional[Path] = None

    def __post_init__(self):
        """Validation and default resolution for convert arguments."""
        super().__post_init__()
        if self.output_header_path and isinstance(self.output_header_path, str):
            self.output_header_path = Path(self.output_header_path)
        try:
            self._validate_input()
            self._validate_convert()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_convert(self):
        """Resolve layout options and check that input and output differ."""
        if self.output_path is None:
            raise ValueError("The 'output_path' argument is required.")
        if self.output_path.resolve() == self.input_path.resolve():
            raise ValueError("Output file must differ from the input file.")

        if isinstance(self.interleave, str):
            try:
                self.interleave = interleave_from_text(self.interleave)
            except ValueError:
                raise ValueError(f"Interleave must be 'bsq', 'bil' or 'bip', got '{self.interleave}'") from None

        if self.byte_order is not None and not isinstance(self.byte_order, ByteOrder):
            try:
                self.byte_order = ByteOrder(int(self.byte_order))
            except ValueError:
                raise ValueError(f"Byte order must be 0 or 1, got '{self.byte_order}'") from None
