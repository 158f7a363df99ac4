"""Manifest-driven resolve hook.

Bare specifiers declared in the project manifest are redirected into the
project's packages tree. Everything else is handed to the host's own
resolution untouched.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .cache import ResolutionCache
from .cache import make_cache_key
from .entry import DEFAULT_ENTRY
from .entry import DESCRIPTOR_FILENAME
from .entry import resolve_package_entry
from .errors import PackageNotFoundError
from .filesystem import FileSystem
from .filesystem import LocalFileSystem
from .manifest import ManifestLoader
from .models import ResolutionContext
from .models import ResolvedLocation

logger = logging.getLogger(__name__)

FALLBACK_NAMESPACE = "node_modules"

DefaultResolve = Callable[[str, ResolutionContext], Any]


class ManifestModuleResolver:
    """Resolve hook for manifest-declared packages.

    Resolution order (first match wins):
    1. Cached result for the (parent, specifier) edge
    2. Host default, when the specifier is not a declared dependency
    3. <packages_root>/<specifier>/
    4. <packages_root>/<fallback_namespace>/<specifier>/

    The package directory found in 3 or 4 is turned into an entry file by
    resolve_package_entry and the result is cached.
    """

    def __init__(
        self,
        packages_root: Path,
        manifest_loader: ManifestLoader,
        cache: ResolutionCache | None = None,
        fs: FileSystem | None = None,
        *,
        fallback_namespace: str = FALLBACK_NAMESPACE,
        descriptor_filename: str = DESCRIPTOR_FILENAME,
        default_entry: str = DEFAULT_ENTRY,
    ):
        self.packages_root = Path(packages_root).absolute()
        self.manifest_loader = manifest_loader
        self.cache = cache if cache is not None else ResolutionCache()
        self.fs = fs or LocalFileSystem()
        self.fallback_namespace = fallback_namespace
        self.descriptor_filename = descriptor_filename
        self.default_entry = default_entry

    def resolve(
        self,
        specifier: str,
        context: ResolutionContext | None,
        default_resolve: DefaultResolve,
    ) -> Any:
        """Resolve ``specifier`` imported from ``context``.

        Returns:
            ResolvedLocation for declared dependencies, otherwise whatever
            ``default_resolve(specifier, context)`` returns

        Raises:
            PackageNotFoundError: Declared dependency has no package directory
            EntryNotFoundError: Package directory has no entry file
            ParseError: Manifest or package descriptor is invalid
        """
        result, _source = self.resolve_with_source(specifier, context, default_resolve)
        return result

    def resolve_with_source(
        self,
        specifier: str,
        context: ResolutionContext | None,
        default_resolve: DefaultResolve,
    ) -> tuple[Any, str]:
        """Resolve and report which step produced the result.

        Returns:
            Tuple of (result, source)
            source is one of: cache, packages, namespace, fallback
        """
        context = context or ResolutionContext()
        key = make_cache_key(context.parent_url, specifier)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[module:resolve] {specifier} -> cache")
            return (cached, "cache")

        if not self.manifest_loader.get().declares(specifier):
            logger.debug(f"[module:resolve] {specifier} -> host default")
            return (default_resolve(specifier, context), "fallback")

        # Stays "cache" if another thread finished the computation first
        source = "cache"

        def compute() -> ResolvedLocation:
            nonlocal source
            package_dir, source = self._find_package_dir(specifier)
            entry = resolve_package_entry(
                package_dir,
                self.fs,
                descriptor_filename=self.descriptor_filename,
                default_entry=self.default_entry,
            )
            logger.debug(f"[module:resolve] {specifier} -> {source} ({entry})")
            return ResolvedLocation.for_path(entry)

        return (self.cache.get_or_compute(key, compute), source)

    def _find_package_dir(self, specifier: str) -> tuple[Path, str]:
        primary = self.packages_root / specifier
        if self.fs.exists(primary):
            return (primary, "packages")

        secondary = self.packages_root / self.fallback_namespace / specifier
        if self.fs.exists(secondary):
            return (secondary, "namespace")

        raise PackageNotFoundError(specifier, [primary, secondary])

    def declared(self) -> list[str]:
        """Names of the dependencies declared in the manifest."""
        return sorted(self.manifest_loader.get().dependencies)

    def __repr__(self) -> str:
        return f"ManifestModuleResolver({self.packages_root})"
