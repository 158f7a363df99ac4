"""Adapter that plugs the resolve hook into Python's import system.

The finder goes at the front of ``sys.meta_path``. For top-level imports it
asks the resolver; anything the resolver does not own falls through to the
remaining finders.
"""

import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys

from .models import ResolutionContext
from .models import ResolvedLocation
from .resolvers import ManifestModuleResolver

logger = logging.getLogger(__name__)

PYTHON_ENTRY = "__init__.py"


def _decline(specifier: str, context: ResolutionContext) -> None:
    # None tells the import system to try the next finder
    return None


class ManifestFinder(importlib.abc.MetaPathFinder):
    """Meta path finder backed by a ManifestModuleResolver.

    Submodules are found through the parent package's ``__path__`` by the
    regular path finder, so only top-level names reach the resolver. The
    finder protocol does not report which module is importing, so every
    lookup uses the entry-point context.
    """

    def __init__(self, resolver: ManifestModuleResolver):
        self.resolver = resolver

    def find_spec(self, fullname, path, target=None) -> importlib.machinery.ModuleSpec | None:
        if path is not None or "." in fullname:
            return None

        result = self.resolver.resolve(fullname, ResolutionContext(), _decline)
        if not isinstance(result, ResolvedLocation):
            return None

        entry = result.path
        if entry.name == PYTHON_ENTRY:
            spec = importlib.util.spec_from_file_location(
                fullname, entry, submodule_search_locations=[str(entry.parent)]
            )
        else:
            spec = importlib.util.spec_from_file_location(fullname, entry)

        if spec is None:
            logger.warning(f"Resolved {fullname} to {entry}, which Python cannot load")
        return spec

    def __repr__(self) -> str:
        return f"ManifestFinder({self.resolver!r})"


def install_import_hook(resolver: ManifestModuleResolver) -> ManifestFinder:
    """Put a finder for ``resolver`` at the front of ``sys.meta_path``.

    Any finder installed earlier is replaced.
    """
    uninstall_import_hook()
    finder = ManifestFinder(resolver)
    sys.meta_path.insert(0, finder)
    logger.debug(f"Installed {finder!r}")
    return finder


def uninstall_import_hook() -> bool:
    """Remove installed finders. Returns True if any were present."""
    before = len(sys.meta_path)
    sys.meta_path[:] = [f for f in sys.meta_path if not isinstance(f, ManifestFinder)]
    return len(sys.meta_path) != before
