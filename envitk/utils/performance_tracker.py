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
Performance Tracker for Timing I/O Steps.

This module provides the `PerformanceTracker` class, a tool to start and stop
named timers around the header decode, pixel read and pixel write steps. The
summary is reported through logging at DEBUG level.

Classes:
    PerformanceTracker: A class to manage named timers for performance analysis.
"""
import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


class PerformanceTracker:
    """A class to track the duration of various processing steps."""

    def __init__(self):
        self.timings: Dict[str, float] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, step_name: str):
        """Starts the timer for a given step."""
        self._start_times[step_name] = time.perf_counter()

    def stop(self, step_name: str):
        """Stops the timer for a given step and records the duration."""
        if step_name in self._start_times:
            duration = time.perf_counter() - self._start_times[step_name]
            self.timings[step_name] = duration
            del self._start_times[step_name]

    @contextmanager
    def track(self, step_name: str) -> Iterator[None]:
        """Time the enclosed block; the timer is stopped even if it raises."""
        self.start(step_name)
        try:
            yield
        finally:
            self.stop(step_name)

    def get_timings(self) -> Dict[str, float]:
        """Returns all recorded timings."""
        return self.timings

    def log_summary(self, level: int = logging.DEBUG):
        """Logs a summary of the recorded timings."""
        if not logger.isEnabledFor(level):
            return
        logger.log(level, "--- Performance Summary ---")
        for step, duration in self.timings.items():
            logger.log(level, f"- {step}: {self.format_time(duration)}")

    def get_total_time(self) -> float:
        """Returns the total time for all recorded steps."""
        return sum(self.timings.values())

    def format_time(self, seconds: float) -> str:
        """Formats seconds into a human-readable string."""
        if seconds < 60:
            return f"{seconds:.4f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            remaining_seconds = seconds % 60
            return f"{minutes}m {remaining_seconds:.1f}s"
        else:
            hours = int(seconds // 3600)
            minutes = int((seconds % 3600) // 60)
            remaining_seconds = seconds % 60
            return f"{hours}h {minutes}m {remaining_seconds:.0f}s"
