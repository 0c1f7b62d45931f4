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
ENVI ToolKit Test Suite.

This package contains tests for ENVITK components including:
- Unit tests for individual functions and classes
- Integration tests reading and writing image files
- End-to-end tests for CLI commands
"""
