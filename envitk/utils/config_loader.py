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
Configuration Management for the ENVI ToolKit.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from a central `config.toml` file.
The path can be overridden with the `ENVITK_CONFIG` environment variable.
Configuration values are loaded only once and are available throughout the
application.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict


if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        # Fallback if tomli is not installed
        tomllib = None

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "header": {
        "file_type": "ENVI Standard",
        "extension": ".hdr",
    },
    "read": {
        "allow_complex": False,
    },
    "logging": {
        "level": "INFO",
        "file": "",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    @staticmethod
    def config_path() -> Path:
        """Location of config.toml: $ENVITK_CONFIG, else the project root."""
        override = os.environ.get("ENVITK_CONFIG")
        if override:
            return Path(override)
        return Path(__file__).parent.parent.parent / "config.toml"

    def _load_config(self):
        """Load configuration from config.toml"""
        config_path = self.config_path()
        if config_path.exists() and tomllib is not None:
            try:
                with open(config_path, "rb") as f:
                    self._config = _merge(DEFAULT_CONFIG, tomllib.load(f))
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Could not load {config_path}: {e}")
                self._config = self._default_config()
        else:
            # Fallback to defaults if config.toml doesn't exist or tomllib not available
            self._config = self._default_config()

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "header.file_type")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("header.file_type")
            'ENVI Standard'
            >>> config.get("read.allow_complex")
            False
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section

        Args:
            section: Section name (e.g., "header", "read", "logging")

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation

        Args:
            key: Configuration key in dot notation
            value: Value to set

        Note:
            This only modifies the in-memory configuration.
            Changes are not persisted to config.toml.
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def reload(self):
        """Reload configuration from config.toml"""
        self._load_config()

# Singleton instance
config = Config()
