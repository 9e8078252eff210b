"""Formatters for web adapter."""

from concall_viewer.adapters.web.formatters.concall_formatter import ConcallFormatter

__all__ = ["ConcallFormatter"]
