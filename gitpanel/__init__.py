"""GitPanel - a small terminal panel for everyday git operations."""

__version__ = "0.3.0"
