#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: ENVI ToolKit (ENVITK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""ENVI ToolKit: read and write ENVI header + raw raster image pairs."""

__version__ = '1.0.0'
