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
Header Report Formatting.

Renders a decoded `EnviHeader` as a Markdown report or as JSON. The Markdown
report always has the image layout section; map info, the coordinate system
string and unrecognized entries get their own sections when present.
"""
import json
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from envitk.utils.data_models import EnviHeader
from envitk.utils.envi_constants import DEFAULT_BYTE_ORDER, DEFAULT_HEADER_OFFSET, DEFAULT_INTERLEAVE

REPORT_FORMATS = ('md', 'json')

# Long lists (wavelengths, band names) are shortened in tables
_MAX_LIST_ITEMS = 8


def _escape(value: Any) -> str:
    return str(value).replace('|', '\\|').replace('\n', ' ')


def _summarize_list(values: Sequence[Any]) -> str:
    if len(values) <= _MAX_LIST_ITEMS:
        return ', '.join(str(v) for v in values)
    head = ', '.join(str(v) for v in values[:_MAX_LIST_ITEMS])
    return f"{head}, ... ({len(values)} values)"


def _table(rows: List[List[str]], headers: Sequence[str] = ('Field', 'Value')) -> str:
    lines = ['| ' + ' | '.join(headers) + ' |', '|' + '|'.join('---' for _ in headers) + '|']
    lines.extend('| ' + ' | '.join(_escape(cell) for cell in row) + ' |' for row in rows)
    return '\n'.join(lines)


def layout_rows(header: EnviHeader) -> List[List[str]]:
    """Rows describing the pixel layout; defaults are marked as such."""
    interleave = header.interleave or DEFAULT_INTERLEAVE
    byte_order = header.byte_order or DEFAULT_BYTE_ORDER
    offset = header.header_offset if header.header_offset is not None else DEFAULT_HEADER_OFFSET
    rows = [
        ['Samples', str(header.samples) if header.samples is not None else 'missing'],
        ['Lines', str(header.lines) if header.lines is not None else 'missing'],
        ['Bands', str(header.bands) if header.bands is not None else 'missing'],
        ['Data Type', f"{header.data_type} ({header.data_type_name})" if header.data_type is not None else 'missing'],
        ['Interleave', interleave.value.upper() + ('' if header.interleave else ' (default)')],
        ['Byte Order', f"{byte_order.value} ({byte_order.name.replace('_', '-').lower()})"
                       + ('' if header.byte_order else ' (default)')],
        ['Header Offset', str(offset)],
    ]
    if header.is_complex:
        rows.append(['Complex', 'yes'])
    for label, value in (
        ('File Type', header.file_type),
        ('Description', header.description),
        ('Sensor Type', header.sensor_type),
    ):
        if value is not None:
            rows.append([label, value])
    for label, values in (
        ('Band Names', header.band_names),
        ('Wavelength', header.wavelength),
        ('Wavelength Units', header.wavelength_units),
        ('FWHM', header.fwhm),
        ('Bad Band List', header.bbl),
    ):
        if values is not None:
            rows.append([label, _summarize_list(values)])
    return rows


def map_info_rows(header: EnviHeader, include_locations: bool = False) -> List[List[str]]:
    """Rows describing the map info block, optionally with location extents."""
    info = header.map_info
    if info is None:
        return []
    rows = [
        ['Projection', info.projection_name],
        ['Reference Pixel', f"({info.x_reference_pixel}, {info.y_reference_pixel})"],
        ['Reference Coordinate', f"({info.pixel_easting}, {info.pixel_northing})"],
        ['Pixel Size', f"({info.x_pixel_size}, {info.y_pixel_size})"],
    ]
    if info.zone is not None:
        rows.append(['Zone', f"{info.zone} {info.hemisphere or ''}".strip()])
    if info.datum:
        rows.append(['Datum', info.datum])
    if info.units:
        rows.append(['Units', info.units])
    if info.extra:
        rows.append(['Extra', ', '.join(info.extra)])
    if include_locations and header.has_geo_locations():
        rows.append(['Easting Range', f"{header.x_loc[0]} .. {header.x_loc[-1]}"])
        rows.append(['Northing Range', f"{header.y_loc[0]} .. {header.y_loc[-1]}"])
    return rows


def format_markdown(header: EnviHeader, title: str = 'ENVI Header', include_locations: bool = False) -> str:
    """Render a header as a Markdown report."""
    sections = [f"# {title}", '## Image Layout', _table(layout_rows(header))]
    rows = map_info_rows(header, include_locations)
    if rows:
        sections.extend(['## Map Info', _table(rows)])
    if header.coordinate_system_string:
        sections.extend(['## Coordinate System String', f"```\n{header.coordinate_system_string}\n```"])
    if header.other:
        sections.extend(['## Other Entries', _table([[k, v] for k, v in header.other], ('Key', 'Value'))])
    return '\n\n'.join(sections) + '\n'


def _json_default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json(header: EnviHeader, include_locations: bool = False) -> str:
    """Render a header as JSON; derived locations are included only on request."""
    data: Dict[str, Any] = header.to_dict()
    if not include_locations:
        data.pop('x_loc', None)
        data.pop('y_loc', None)
    return json.dumps(data, indent=2, default=_json_default)


def format_report(header: EnviHeader, report_format: str = 'md', title: Optional[str] = None,
                  include_locations: bool = False) -> str:
    """
    Render a header report in the requested format.

    Args:
        header: The decoded header.
        report_format: 'md' or 'json'.
        title: Markdown title; ignored for JSON.
        include_locations: Include the derived column/row coordinates.
    """
    if report_format == 'json':
        return format_json(header, include_locations)
    if report_format == 'md':
        return format_markdown(header, title or 'ENVI Header', include_locations)
    raise ValueError(f"Unsupported report format: {report_format!r} (expected one of {REPORT_FORMATS})")
