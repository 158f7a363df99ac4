"""Errors raised while resolving manifest-declared packages."""

from pathlib import Path


class ResolutionError(Exception):
    """Base class for module resolution failures."""


class ParseError(ResolutionError):
    """Raised when a manifest or package descriptor cannot be parsed.

    Attributes:
        text: The text handed to the JSON parser (comments already stripped)
        position: Character offset of the failure within ``text``, if known
        lineno: 1-based line of the failure, if known
        colno: 1-based column of the failure, if known
        source: File the text was read from, if any
    """

    def __init__(
        self,
        message: str,
        *,
        text: str = "",
        position: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
        source: Path | None = None,
    ):
        self.message = message
        self.text = text
        self.position = position
        self.lineno = lineno
        self.colno = colno
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        where = f"{self.source}: " if self.source else ""
        if self.lineno is not None:
            return f"{where}{self.message} (line {self.lineno}, column {self.colno}, char {self.position})"
        return f"{where}{self.message}"

    def with_source(self, source: Path) -> "ParseError":
        """Return a copy of this error attributed to ``source``."""
        return ParseError(
            self.message,
            text=self.text,
            position=self.position,
            lineno=self.lineno,
            colno=self.colno,
            source=source,
        )


class PackageNotFoundError(ResolutionError):
    """Raised when a declared dependency has no directory under the package root."""

    def __init__(self, specifier: str, candidates: list[Path] | None = None):
        self.specifier = specifier
        self.candidates = candidates or []
        tried = ", ".join(str(c) for c in self.candidates)
        message = f'Package "{specifier}" not found'
        if tried:
            message += f" (looked in: {tried})"
        super().__init__(message)


class EntryNotFoundError(ResolutionError):
    """Raised when a package directory has no usable entry file."""

    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(f"Cannot resolve entry for package at {directory}")
