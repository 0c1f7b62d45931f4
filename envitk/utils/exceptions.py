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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the ENVI ToolKit.
Every fatal error derives from `EnviError`; the missing 'ENVI' marker is a
warning category, not an error.
"""
from typing import Any, Iterable, Optional


class EnviError(Exception):
    """Base exception for all ENVI header and image errors."""
    pass


class HeaderFileNotFound(EnviError, FileNotFoundError):
    """No readable header stream or file could be found."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MalformedHeaderValue(EnviError, ValueError):
    """A known header key holds a value that cannot be parsed to its expected shape."""

    def __init__(self, key: str, value: Any = None, reason: Optional[str] = None):
        self.key = key
        self.value = value
        message = f"Malformed value for header key '{key}'"
        if value is not None:
            message += f": {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MalformedNumericList(MalformedHeaderValue):
    """A comma-separated numeric list contains a non-numeric token."""
    pass


class MalformedMapInfo(MalformedHeaderValue):
    """The 'map info' value is missing tokens or has non-numeric core fields."""

    def __init__(self, value: Any = None, reason: Optional[str] = None):
        super().__init__('map info', value, reason)


class UnknownDataType(EnviError, ValueError):
    """An ENVI data type code has no entry in the data type table."""

    def __init__(self, code: Any):
        self.code = code
        super().__init__(f"Unknown ENVI data type code: {code!r}")


class UnsupportedElementKind(EnviError, TypeError):
    """An array element type has no ENVI data type code."""

    def __init__(self, element_kind: Any, is_complex: bool = False):
        self.element_kind = element_kind
        self.is_complex = is_complex
        kind = f"complex {element_kind}" if is_complex else str(element_kind)
        super().__init__(f"{kind} is not a valid ENVI data type")


class IncompleteHeader(EnviError):
    """Binary I/O was requested with a header that lacks required fields."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Header is missing required field(s) for binary I/O: {', '.join(self.missing)}"
        )


class HeaderImageMismatch(EnviError, ValueError):
    """A header field conflicts with the shape or type of the image being written."""

    def __init__(self, field: str, header_value: Any, image_value: Any):
        self.field = field
        self.header_value = header_value
        self.image_value = image_value
        super().__init__(
            f"Mismatch between the header and the image for '{field}': "
            f"header has {header_value!r}, image has {image_value!r}"
        )


class UnsupportedComplexWrite(EnviError, NotImplementedError):
    """Writing complex samples (data types 6 and 9) is not supported."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Writing complex data (data type {code}) is not currently supported")


class UnsupportedComplexRead(EnviError, NotImplementedError):
    """Reading complex samples was requested without opting in to best-effort reads."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(
            f"Complex data (data type {code}) is only read best-effort; "
            f"pass allow_complex=True to read it anyway"
        )


class ImageDataTruncated(EnviError):
    """The pixel file holds fewer bytes than the header dimensions require."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Image data truncated: expected {expected} bytes, got {actual}")


class GdalCheckError(EnviError, RuntimeError):
    """GDAL is unavailable or could not open the image for the interoperability check."""
    pass


class MissingEnviMarker(UserWarning):
    """Warning issued when the first header line is not the 'ENVI' marker."""
    pass
