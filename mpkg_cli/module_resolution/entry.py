"""Package entry-file resolution."""

import logging
import os
from pathlib import Path

from .errors import EntryNotFoundError
from .errors import ParseError
from .filesystem import FileSystem
from .filesystem import LocalFileSystem
from .filesystem import read_source
from .jsonc import parse_json

logger = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "package.json"
DEFAULT_ENTRY = "index.js"


def resolve_package_entry(
    package_dir: Path,
    fs: FileSystem | None = None,
    descriptor_filename: str = DESCRIPTOR_FILENAME,
    default_entry: str = DEFAULT_ENTRY,
) -> Path:
    """Find the importable entry file of a package directory.

    Resolution order (first match wins):
    1. ``main`` from the package descriptor, if set and the file exists
    2. The conventional default entry file in the directory itself

    Args:
        package_dir: Absolute package directory
        fs: Filesystem to read through (default: local disk)
        descriptor_filename: Per-package descriptor name
        default_entry: Conventional entry file name

    Returns:
        Absolute path of the entry file

    Raises:
        ParseError: The descriptor exists but is not valid JSON
        EntryNotFoundError: Neither form yields an existing file
    """
    fs = fs or LocalFileSystem()
    package_dir = Path(package_dir)

    descriptor = package_dir / descriptor_filename
    if fs.exists(descriptor):
        try:
            data = parse_json(read_source(fs, descriptor))
        except ParseError as e:
            raise e.with_source(descriptor) from e

        main = data.get("main") if isinstance(data, dict) else None
        if isinstance(main, str) and main:
            # A leading separator in main still means relative to the package
            main_path = Path(os.path.normpath(package_dir / main.lstrip("/\\")))
            if fs.exists(main_path):
                logger.debug(f"[module:resolve] {package_dir.name} -> main ({main})")
                return main_path
            logger.debug(f"[module:resolve] {package_dir.name}: main {main!r} does not exist")

    index = package_dir / default_entry
    if fs.exists(index):
        logger.debug(f"[module:resolve] {package_dir.name} -> {default_entry}")
        return index

    raise EntryNotFoundError(package_dir)
