"""Clean error display for resolution failures."""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..module_resolution import EntryNotFoundError
from ..module_resolution import PackageNotFoundError
from ..module_resolution import ParseError


def _error_line(error: ParseError) -> str | None:
    """Line of the stripped text where parsing failed."""
    if error.lineno is None or not error.text:
        return None
    lines = error.text.splitlines()
    if 0 < error.lineno <= len(lines):
        return lines[error.lineno - 1]
    return None


def display_resolution_error(console: Console, error: Exception) -> None:
    """Render a resolution error as a panel with a hint on how to fix it."""
    body = Text()

    if isinstance(error, ParseError):
        title = "Invalid configuration"
        if error.source:
            body.append(f"{error.source}\n", style="bold")
        body.append(error.message)
        if error.lineno is not None:
            body.append(f"\nline {error.lineno}, column {error.colno}", style="dim")
        if (line := _error_line(error)) is not None:
            body.append(f"\n\n  {line}\n  {' ' * ((error.colno or 1) - 1)}^", style="yellow")
    elif isinstance(error, PackageNotFoundError):
        title = "Package not found"
        body.append(f'"{error.specifier}" is declared in the manifest but is not on disk.\n')
        for candidate in error.candidates:
            body.append(f"\n  ✗ {candidate}", style="dim")
        body.append(f"\n\nMaterialize it under the packages directory or remove it with: mpkg deps remove {error.specifier}")
    elif isinstance(error, EntryNotFoundError):
        title = "No entry file"
        body.append(f"{error.directory}\n", style="bold")
        body.append("Neither the descriptor's main field nor the default entry file points at an existing file.")
    else:
        title = "Error"
        body.append(f"{type(error).__name__}: {error}")

    console.print(Panel(body, title=f"[red]{title}[/red]", border_style="red", expand=False))
