"""Configuration management."""

from revue.config.loader import load_config, parse_config
from revue.config.settings import Settings

__all__ = ["Settings", "load_config", "parse_config"]
