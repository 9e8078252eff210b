"""Web adapters for displaying concalls."""

from concall_viewer.adapters.web.pyview_app import PyViewWebAdapter

__all__ = ["PyViewWebAdapter"]
