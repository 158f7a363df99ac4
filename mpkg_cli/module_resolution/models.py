"""Value types passed through the resolve hook."""

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname


@dataclass(frozen=True)
class ResolutionContext:
    """Identity of the importing module.

    Attributes:
        parent_url: Absolute location of the importer, None for the program entry point
    """

    parent_url: str | None = None


@dataclass(frozen=True)
class ResolvedLocation:
    """Outcome of a successful resolution.

    Attributes:
        url: Absolute ``file://`` URL of the entry file
        short_circuit: True when no further resolver in the host chain should run
    """

    url: str
    short_circuit: bool = True

    @classmethod
    def for_path(cls, path: Path) -> "ResolvedLocation":
        return cls(url=Path(path).absolute().as_uri(), short_circuit=True)

    @property
    def path(self) -> Path:
        """Filesystem path the URL points at."""
        return Path(url2pathname(urlparse(self.url).path))
