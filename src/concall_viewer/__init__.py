"""Live concall summaries viewer with a streaming analytics panel."""

__version__ = "0.1.0"
