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
Test fixtures and mock data factories for ENVITK tests.

This package contains:
- MockEnviImage: Factory for writing test ENVI header + pixel file pairs
- make_cube: Position-encoding test arrays
"""

from tests.fixtures.mock_envi_factory import MockEnviImage, make_cube

__all__ = ['MockEnviImage', 'make_cube']
