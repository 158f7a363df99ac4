"""Run command: execute a Python program with the manifest import hook installed."""

import logging
import runpy
import sys
from pathlib import Path

import click

from ..console import console
from ..module_resolution import ResolutionError
from ..module_resolution import install_import_hook
from ..module_resolution import uninstall_import_hook
from ..module_resolution.import_hook import PYTHON_ENTRY
from ..paths import create_resolver
from ..paths import get_resolver_settings
from ..ui import display_resolution_error

logger = logging.getLogger(__name__)


@click.command(name="run", context_settings={"ignore_unknown_options": True})
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--entry",
    default=None,
    help=f"Default entry file name for packages (default: resolver.default_entry if configured, else {PYTHON_ENTRY})",
)
def run_cmd(file: str, args: tuple[str, ...], entry: str | None):
    """Run FILE with declared dependencies importable from the packages directory."""
    settings = get_resolver_settings()
    if entry is None and "default_entry" not in settings.model_fields_set:
        entry = PYTHON_ENTRY
    if entry is not None:
        settings = settings.model_copy(update={"default_entry": entry})
    resolver = create_resolver(settings=settings)

    script = Path(file).absolute()
    saved_argv = sys.argv
    saved_path = list(sys.path)

    install_import_hook(resolver)
    sys.argv = [str(script), *args]
    sys.path.insert(0, str(script.parent))
    logger.debug(f"Running {script} with {resolver!r}")
    try:
        runpy.run_path(str(script), run_name="__main__")
    except ResolutionError as e:
        display_resolution_error(console, e)
        sys.exit(1)
    finally:
        sys.argv = saved_argv
        sys.path[:] = saved_path
        uninstall_import_hook()
