"""CLI command groups for mpkg."""

__all__ = [
    "deps",
    "init",
    "resolve",
    "run",
]
