"""mpkg - manifest-driven package resolution for project-local packages."""

__version__ = "0.1.0"
