"""CLI path policy and dependency injection helpers.

Libraries in ``module_resolution`` receive paths and collaborators via
injection; this module makes the CLI's choices.
"""

import logging
from pathlib import Path

from .module_resolution import LocalFileSystem
from .module_resolution import ManifestLoader
from .module_resolution import ManifestModuleResolver
from .module_resolution import ResolutionCache
from .module_resolution.filesystem import FileSystem
from .settings import ResolverSettings
from .settings import SettingsManager

logger = logging.getLogger(__name__)


def get_project_root(project_root: Path | None = None) -> Path:
    """Project root: the given directory, else the current directory."""
    return Path(project_root).absolute() if project_root else Path.cwd()


def get_resolver_settings(project_root: Path | None = None) -> ResolverSettings:
    root = get_project_root(project_root)
    return SettingsManager(mpkg_dir=root / ".mpkg").get_resolver_settings()


def create_resolver(
    project_root: Path | None = None,
    *,
    settings: ResolverSettings | None = None,
    fs: FileSystem | None = None,
    cache: ResolutionCache | None = None,
) -> ManifestModuleResolver:
    """Create a resolver wired with CLI conventions.

    Args:
        project_root: Project directory (default: cwd)
        settings: Layout settings (default: read from settings files and env)
        fs: Filesystem (default: local disk)
        cache: Resolution cache (default: a fresh one)

    Returns:
        ManifestModuleResolver for the project
    """
    root = get_project_root(project_root)
    settings = settings or get_resolver_settings(root)
    fs = fs or LocalFileSystem()

    loader = ManifestLoader(root, fs, filename=settings.manifest_filename)
    resolver = ManifestModuleResolver(
        root / settings.packages_dir,
        loader,
        cache,
        fs,
        fallback_namespace=settings.fallback_namespace,
        descriptor_filename=settings.descriptor_filename,
        default_entry=settings.default_entry,
    )
    logger.debug(f"Created {resolver!r} with {settings!r}")
    return resolver
