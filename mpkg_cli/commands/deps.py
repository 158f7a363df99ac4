"""Dependency declaration commands."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.table import Table

from ..console import console
from ..module_resolution import ResolutionContext
from ..module_resolution import ResolutionError
from ..module_resolution.manifest import add_dependency
from ..module_resolution.manifest import remove_dependency
from ..paths import create_resolver
from ..paths import get_resolver_settings
from ..ui import display_resolution_error
from ..utils.error_format import escape_markup


def _not_declared(specifier: str, context: ResolutionContext):
    raise click.ClickException(f"{specifier} is not declared")


@click.group(invoke_without_command=True)
@click.pass_context
def deps(ctx: click.Context):
    """Manage the dependencies declared in the project manifest.

    Without a subcommand, lists declared dependencies and where they resolve.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_deps)


@deps.command(name="list")
def list_deps():
    """List declared dependencies and their entry files."""
    resolver = create_resolver()
    try:
        manifest = resolver.manifest_loader.get()
    except ResolutionError as e:
        display_resolution_error(console, e)
        sys.exit(1)

    if not manifest.dependencies:
        console.print("[dim]No dependencies declared.[/dim]")
        return

    table = Table(title=f"Dependencies of {escape_markup(manifest.name or '(unnamed)')}")
    table.add_column("Name", style="cyan")
    table.add_column("Constraint")
    table.add_column("Entry")

    failed = False
    for name in resolver.declared():
        constraint = str(manifest.dependencies[name])
        try:
            location = resolver.resolve(name, ResolutionContext(), _not_declared)
            entry = f"[green]{escape_markup(location.path)}[/green]"
        except ResolutionError as e:
            failed = True
            entry = f"[red]{escape_markup(e)}[/red]"
        table.add_row(escape_markup(name), escape_markup(constraint), entry)

    console.print(table)
    if failed:
        sys.exit(1)


@deps.command(name="add")
@click.argument("name")
@click.option("--constraint", "-c", default="latest", show_default=True, help="Version constraint to record")
def add_dep(name: str, constraint: str):
    """Declare a dependency in the manifest."""
    settings = get_resolver_settings()
    try:
        path = add_dependency(Path.cwd(), name, constraint, filename=settings.manifest_filename)
    except ResolutionError as e:
        display_resolution_error(console, e)
        sys.exit(1)
    console.print(f"[green]✓ Added {escape_markup(name)}[/green] [dim]({path.name})[/dim]")


@deps.command(name="remove")
@click.argument("name")
def remove_dep(name: str):
    """Remove a dependency from the manifest."""
    settings = get_resolver_settings()
    try:
        removed = remove_dependency(Path.cwd(), name, filename=settings.manifest_filename)
    except ResolutionError as e:
        display_resolution_error(console, e)
        sys.exit(1)

    if removed:
        console.print(f"[green]✓ Removed {escape_markup(name)}[/green]")
    else:
        console.print(f"[yellow]{escape_markup(name)} is not declared[/yellow]")
