"""Filesystem capability used by resolution.

Resolution only ever asks two questions of the disk: does a path exist, and
what text does a file hold. Keeping those behind a small protocol lets the
resolver run against an in-memory tree in tests.
"""

from pathlib import Path
from pathlib import PurePath
from typing import Protocol

from .errors import ParseError


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


def read_source(fs: FileSystem, path: Path) -> str:
    """Read a manifest or descriptor, reporting undecodable bytes as a ParseError."""
    try:
        return fs.read_text(path)
    except UnicodeDecodeError as e:
        raise ParseError(f"File is not valid UTF-8: {e.reason}", position=e.start, source=path) from e


class LocalFileSystem:
    """Reads the real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return "LocalFileSystem()"


class InMemoryFileSystem:
    """Dict-backed filesystem.

    Files are stored by absolute path. Every ancestor of a stored file counts
    as an existing directory. Call counters record how often the resolver
    touched the filesystem.
    """

    def __init__(self, files: dict[str | PurePath, str] | None = None):
        self._files: dict[str, str] = {}
        self._dirs: set[str] = set()
        self.exists_calls = 0
        self.read_calls = 0
        for path, content in (files or {}).items():
            self.write_text(Path(path), content)

    def write_text(self, path: Path, content: str) -> None:
        key = str(PurePath(path))
        self._files[key] = content
        for parent in PurePath(key).parents:
            self._dirs.add(str(parent))

    def mkdir(self, path: Path) -> None:
        self._dirs.add(str(PurePath(path)))
        for parent in PurePath(path).parents:
            self._dirs.add(str(parent))

    def exists(self, path: Path) -> bool:
        self.exists_calls += 1
        key = str(PurePath(path))
        return key in self._files or key in self._dirs

    def read_text(self, path: Path) -> str:
        self.read_calls += 1
        try:
            return self._files[str(PurePath(path))]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def reset_counters(self) -> None:
        self.exists_calls = 0
        self.read_calls = 0

    def __repr__(self) -> str:
        return f"InMemoryFileSystem({len(self._files)} files)"
