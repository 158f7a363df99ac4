"""Project initialization command."""

import logging
from pathlib import Path

import click

from ..console import console
from ..module_resolution.manifest import create_manifest
from ..paths import get_resolver_settings

logger = logging.getLogger(__name__)

GITIGNORE_CONTENT = "/packages\n"


def write_gitignore(project_root: Path) -> bool:
    """Create a .gitignore that keeps the packages tree out of version control.

    Returns:
        True if created, False if a .gitignore already existed
    """
    path = project_root / ".gitignore"
    if path.exists():
        return False
    path.write_text(GITIGNORE_CONTENT, encoding="utf-8")
    return True


@click.command(name="init")
@click.argument("name")
def init_cmd(name: str):
    """Initialize a project manifest in the current directory."""
    project_root = Path.cwd()
    settings = get_resolver_settings(project_root)

    if write_gitignore(project_root):
        console.print("Created .gitignore")
    else:
        console.print(".gitignore already exists, skipping creation...")

    if create_manifest(project_root, name, filename=settings.manifest_filename):
        console.print(f"Created {settings.manifest_filename}")
    else:
        console.print(f"{settings.manifest_filename} already exists, skipping creation...")

    (project_root / settings.packages_dir).mkdir(exist_ok=True)
    logger.info(f"Initialized project {name} in {project_root}")
    console.print(f"[green]✓ Initialized project: {name}[/green]")
