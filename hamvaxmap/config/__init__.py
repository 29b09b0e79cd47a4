"""Application configuration."""

from hamvaxmap.config.settings import Settings, get_settings, load_source_config

__all__ = ["Settings", "get_settings", "load_source_config"]
