"""Terminal display helpers."""

from .error_display import display_resolution_error

__all__ = ["display_resolution_error"]
