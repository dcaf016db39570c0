"""
Launcher diagnostics CLI.

Shows which platforms have a prebuilt binary and which file the
``databricks-mcp-server`` launcher would run on this host.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .launcher import LauncherError, resolve_binary_path
from .platforms import BINARY_MAP, detect_platform, lookup

app = typer.Typer(
    name="databricks-mcp-server-launcher",
    help="Inspect how databricks-mcp-server picks its prebuilt binary",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.command()
def platforms():
    """List supported platforms and the package each one needs."""
    host = detect_platform()

    table = Table(title="Supported Platforms")
    table.add_column("OS")
    table.add_column("Arch")
    table.add_column("Package")
    table.add_column("Suffix")

    for key, descriptor in BINARY_MAP.items():
        style = "bold green" if key == host else None
        table.add_row(key.os, key.arch, descriptor.name, descriptor.suffix or "-", style=style)

    console.print(table)

    if lookup(host) is None:
        console.print(f"[yellow]⚠ This host ({host}) has no prebuilt binary[/yellow]")
    else:
        console.print(f"[dim]This host: {host}[/dim]")


@app.command()
def which():
    """Print the absolute path of the binary the launcher would run."""
    try:
        path = resolve_binary_path()
    except LauncherError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(e.exit_code)

    console.print(str(path), soft_wrap=True, markup=False, highlight=False)


@app.command()
def version():
    """Show the launcher version."""
    console.print(f"databricks-mcp-server launcher {__version__}", highlight=False)


def main():
    """Entry point for the diagnostics CLI."""
    app()


if __name__ == "__main__":
    main()
