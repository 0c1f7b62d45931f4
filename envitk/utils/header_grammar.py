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
ENVI Header Grammar.

Tokenizes the text of an ENVI header into an ordered list of
(key, raw value) pairs:

- The first line is expected to be the literal 'ENVI' marker
- Each entry is 'key = value'; keys are case-insensitive
- Values wrapped in braces may contain commas and span several lines
- Brace groups are matched by counting, so '{a},{b}' is read as one value

The grammar does not interpret values; classification into typed fields is
done by the header parser.
"""

import logging
import warnings
from typing import Iterable, Iterator, List, Tuple

from envitk.utils.envi_constants import COMMENT_PREFIX, ENVI_MARKER
from envitk.utils.exceptions import MalformedHeaderValue, MissingEnviMarker

logger = logging.getLogger(__name__)

HeaderEntry = Tuple[str, str]


def split_key_value(line: str) -> Tuple[str, str]:
    """
    Split a header line on its first '='.

    A line without '=' yields the whole line as the key and an empty value.
    The key is lowercased and trimmed.
    """
    key, sep, value = line.partition('=')
    if not sep:
        return line.strip().lower(), ''
    return key.strip().lower(), value.strip()


def _read_bracketed(key: str, first: str, lines: Iterator[str]) -> str:
    """
    Collect a brace-delimited value starting on the current line.

    Open and close braces are counted cumulatively across the current and
    following lines until they balance. The value is the text after the first
    '{' up to, but not including, the final '}'.
    """
    n_open = first.count('{')
    chunk = first[first.index('{') + 1:]
    n_close = 0
    pieces: List[str] = []

    while True:
        n_close += chunk.count('}')
        if n_close >= n_open:
            pieces.append(chunk[:chunk.rindex('}')].strip())
            break
        pieces.append(chunk.strip())
        try:
            chunk = next(lines).rstrip('\r\n')
        except StopIteration:
            raise MalformedHeaderValue(key, reason='unterminated brace') from None
        n_open += chunk.count('{')

    return ' '.join(piece for piece in pieces if piece).strip()


def tokenize_header(lines: Iterable[str]) -> List[HeaderEntry]:
    """
    Tokenize ENVI header text into (key, value) pairs in file order.

    Args:
        lines: The header text, one physical line per item (e.g. an open file).

    Returns:
        List of (lowercase key, raw value) tuples.

    Raises:
        MalformedHeaderValue: If a brace-delimited value is never closed.

    Warns:
        MissingEnviMarker: If the first line is not 'ENVI'. The line is then
            tokenized like any other entry.

    Example:
        >>> tokenize_header(['ENVI', 'samples = 4', 'band names = {red,', ' nir}'])
        [('samples', '4'), ('band names', 'red, nir')]
    """
    line_iter = iter(lines)
    entries: List[HeaderEntry] = []

    try:
        first = next(line_iter).rstrip('\r\n')
    except StopIteration:
        warnings.warn("Empty header: this file may not be an ENVI header file", MissingEnviMarker, stacklevel=2)
        return entries

    pending: List[str] = []
    if first.strip() != ENVI_MARKER:
        warnings.warn("This file may not be an ENVI header file", MissingEnviMarker, stacklevel=2)
        pending.append(first)

    def _physical_lines() -> Iterator[str]:
        yield from pending
        for raw in line_iter:
            yield raw.rstrip('\r\n')

    physical = _physical_lines()
    for line in physical:
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        key, value = split_key_value(line)
        if '{' in value:
            value = _read_bracketed(key, value, physical)
        entries.append((key, value))

    logger.debug(f"Tokenized {len(entries)} header entries")
    return entries
