#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: ENVI ToolKit (ENVITK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

from envitk.main import main

main()
