"""Configuration adapters."""

from concall_viewer.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
