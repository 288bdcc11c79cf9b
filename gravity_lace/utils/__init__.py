"""Utility functions for configuration."""

from gravity_lace.utils.config import Config, load_config, save_config

__all__ = ["Config", "load_config", "save_config"]
