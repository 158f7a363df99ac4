"""Manifest-driven module resolution.

Bare package names declared in a project's ``pkg.jsonc`` resolve to entry
files under the project's ``packages/`` tree instead of the host's usual
lookup.
"""

from .cache import ResolutionCache
from .cache import make_cache_key
from .entry import resolve_package_entry
from .errors import EntryNotFoundError
from .errors import PackageNotFoundError
from .errors import ParseError
from .errors import ResolutionError
from .filesystem import FileSystem
from .filesystem import InMemoryFileSystem
from .filesystem import LocalFileSystem
from .import_hook import ManifestFinder
from .import_hook import install_import_hook
from .import_hook import uninstall_import_hook
from .jsonc import parse_jsonc
from .jsonc import strip_comments
from .manifest import DEFAULT_MANIFEST
from .manifest import Manifest
from .manifest import ManifestLoader
from .manifest import load_manifest
from .models import ResolutionContext
from .models import ResolvedLocation
from .resolvers import ManifestModuleResolver

__all__ = [
    "DEFAULT_MANIFEST",
    "EntryNotFoundError",
    "FileSystem",
    "InMemoryFileSystem",
    "LocalFileSystem",
    "Manifest",
    "ManifestFinder",
    "ManifestLoader",
    "ManifestModuleResolver",
    "PackageNotFoundError",
    "ParseError",
    "ResolutionCache",
    "ResolutionContext",
    "ResolutionError",
    "ResolvedLocation",
    "install_import_hook",
    "load_manifest",
    "make_cache_key",
    "parse_jsonc",
    "resolve_package_entry",
    "strip_comments",
    "uninstall_import_hook",
]
