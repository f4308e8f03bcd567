"""Configuration loading."""

from festmap.config.loader import load_config

__all__ = ["load_config"]
