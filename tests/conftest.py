"""Shared fixtures for mpkg tests."""

import json
import logging
import sys
from pathlib import Path

import pytest

from mpkg_cli.module_resolution import InMemoryFileSystem
from mpkg_cli.module_resolution import uninstall_import_hook

PROJECT = Path("/proj")
PACKAGES = PROJECT / "packages"


@pytest.fixture
def memfs():
    """In-memory filesystem with an empty project at /proj."""
    fs = InMemoryFileSystem()
    fs.mkdir(PACKAGES)
    return fs


@pytest.fixture
def project(tmp_path: Path, monkeypatch):
    """Real project directory on disk, used as cwd.

    Settings files and environment overrides from the developer machine are
    isolated away.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in ("MPKG_PACKAGES_DIR", "MPKG_FALLBACK_NAMESPACE", "MPKG_MANIFEST", "MPKG_DESCRIPTOR", "MPKG_DEFAULT_ENTRY"):
        monkeypatch.delenv(var, raising=False)
    (tmp_path / "packages").mkdir()
    return tmp_path


@pytest.fixture
def write_manifest():
    """Return a helper that writes pkg.jsonc with the given dependencies."""

    def _write(root: Path, dependencies: dict[str, str], name: str = "demo") -> Path:
        path = root / "pkg.jsonc"
        path.write_text(json.dumps({"name": name, "version": "1.0.0", "dependencies": dependencies}))
        return path

    return _write


@pytest.fixture(autouse=True)
def _clean_import_state():
    """Remove finders and modules tests may have installed."""
    before = set(sys.modules)
    yield
    uninstall_import_hook()
    for name in set(sys.modules) - before:
        if name.startswith("mpkgtest_"):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI invocations configure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
