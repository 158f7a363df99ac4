"""Project manifest (``pkg.jsonc``) loading and editing."""

import json
import logging
import threading
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError
from pydantic import field_validator

from .errors import ParseError
from .filesystem import FileSystem
from .filesystem import LocalFileSystem
from .filesystem import read_source
from .jsonc import parse_jsonc

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "pkg.jsonc"


class Manifest(BaseModel):
    """A project's manifest.

    Only the key set of ``dependencies`` drives resolution. ``name`` and
    ``version`` are whatever the file says, and None when it says nothing.
    Unknown fields are kept but ignored.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str | None = None
    version: str | None = None
    dependencies: dict[str, Any] = {}

    @field_validator("dependencies", mode="before")
    @classmethod
    def _null_dependencies(cls, value: Any) -> Any:
        return {} if value is None else value

    def declares(self, specifier: str) -> bool:
        return specifier in self.dependencies


DEFAULT_MANIFEST = Manifest(name="Anon", version="0.0.0", dependencies={})


def _new_project_manifest() -> dict[str, Any]:
    """Starting point when `mpkg deps add` runs in a project with no manifest yet."""
    return {"name": "my_project", "version": "0.1.0", "dependencies": {}}


def load_manifest(
    project_root: Path,
    fs: FileSystem | None = None,
    filename: str = MANIFEST_FILENAME,
) -> Manifest:
    """Load the manifest for a project.

    Args:
        project_root: Directory holding the manifest
        fs: Filesystem to read through (default: local disk)
        filename: Manifest file name

    Returns:
        Parsed Manifest, or DEFAULT_MANIFEST if the file does not exist

    Raises:
        ParseError: The file exists but is not a valid manifest
    """
    fs = fs or LocalFileSystem()
    path = Path(project_root) / filename

    if not fs.exists(path):
        logger.debug(f"No manifest at {path}, using default")
        return DEFAULT_MANIFEST

    try:
        data = parse_jsonc(read_source(fs, path))
    except ParseError as e:
        raise e.with_source(path) from e

    if not isinstance(data, dict):
        raise ParseError(f"Manifest must be a JSON object, got {type(data).__name__}", source=path)

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid manifest: {e.errors()[0]['msg']}", source=path) from e

    logger.debug(f"Loaded manifest {path} ({len(manifest.dependencies)} dependencies)")
    return manifest


class ManifestLoader:
    """Loads a project's manifest once and hands out the same instance after."""

    def __init__(
        self,
        project_root: Path,
        fs: FileSystem | None = None,
        filename: str = MANIFEST_FILENAME,
    ):
        self.project_root = Path(project_root)
        self.fs = fs or LocalFileSystem()
        self.filename = filename
        self._manifest: Manifest | None = None
        self._lock = threading.Lock()

    def get(self) -> Manifest:
        if self._manifest is None:
            with self._lock:
                if self._manifest is None:
                    self._manifest = load_manifest(self.project_root, self.fs, self.filename)
        return self._manifest

    @property
    def loaded(self) -> bool:
        return self._manifest is not None


# ===== EDITING =====


def _read_document(path: Path) -> dict[str, Any]:
    try:
        data = parse_jsonc(read_source(LocalFileSystem(), path))
    except ParseError as e:
        raise e.with_source(path) from e
    if not isinstance(data, dict):
        raise ParseError(f"Manifest must be a JSON object, got {type(data).__name__}", source=path)
    return data


def _write_document(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def create_manifest(project_root: Path, name: str, filename: str = MANIFEST_FILENAME) -> bool:
    """Write a fresh manifest for ``name``.

    Returns:
        True if the file was created, False if one already existed
    """
    path = Path(project_root) / filename
    if path.exists():
        return False
    _write_document(path, {"name": name, "version": "0.1.0", "dependencies": {}})
    logger.info(f"Created manifest {path}")
    return True


def add_dependency(
    project_root: Path,
    name: str,
    constraint: str = "latest",
    filename: str = MANIFEST_FILENAME,
) -> Path:
    """Declare ``name`` as a dependency, creating the manifest if needed.

    The document is rewritten as plain JSON, so comments in it are lost.

    Returns:
        Path of the manifest that was written
    """
    path = Path(project_root) / filename
    data = _read_document(path) if path.exists() else _new_project_manifest()

    deps = data.get("dependencies")
    if not isinstance(deps, dict):
        deps = {}
    deps[name] = constraint
    data["dependencies"] = deps

    _write_document(path, data)
    logger.info(f"Added dependency {name}={constraint} to {path}")
    return path


def remove_dependency(project_root: Path, name: str, filename: str = MANIFEST_FILENAME) -> bool:
    """Drop ``name`` from the manifest's dependencies.

    Returns:
        True if the dependency was declared and has been removed
    """
    path = Path(project_root) / filename
    if not path.exists():
        return False

    data = _read_document(path)
    deps = data.get("dependencies")
    if not isinstance(deps, dict) or name not in deps:
        return False

    del deps[name]
    _write_document(path, data)
    logger.info(f"Removed dependency {name} from {path}")
    return True
