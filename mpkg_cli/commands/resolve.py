"""Resolve command: show where a specifier resolves for this project."""

import sys

import click

from ..console import console
from ..module_resolution import ResolutionContext
from ..module_resolution import ResolutionError
from ..module_resolution import ResolvedLocation
from ..paths import create_resolver
from ..paths import get_resolver_settings
from ..ui import display_resolution_error
from ..utils.error_format import escape_markup

SOURCE_LABELS = {
    "packages": "packages directory",
    "namespace": "fallback namespace",
    "cache": "cache",
}


def _host_default(specifier: str, context: ResolutionContext) -> None:
    return None


@click.command(name="resolve")
@click.argument("specifier")
@click.option("--parent", "parent_url", default=None, help="URL of the importing module")
@click.option("--entry", default=None, help="Default entry file name (overrides settings)")
def resolve_cmd(specifier: str, parent_url: str | None, entry: str | None):
    """Show the entry file SPECIFIER resolves to."""
    settings = get_resolver_settings()
    if entry:
        settings = settings.model_copy(update={"default_entry": entry})

    resolver = create_resolver(settings=settings)
    context = ResolutionContext(parent_url=parent_url)

    try:
        result, source = resolver.resolve_with_source(specifier, context, _host_default)
    except ResolutionError as e:
        display_resolution_error(console, e)
        sys.exit(1)

    if not isinstance(result, ResolvedLocation):
        console.print(f"[yellow]{escape_markup(specifier)}[/yellow] is not declared; host default resolution applies")
        return

    console.print(result.url, soft_wrap=True)
    console.print(f"[dim]via {SOURCE_LABELS.get(source, source)}[/dim]")
