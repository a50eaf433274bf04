"""
Top-level CLI: packs a param.sfo, an eboot.bin and extra files into a VPK.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vpkpack import __version__
from vpkpack.cli.validators import check_add, check_file
from vpkpack.core.config import settings
from vpkpack.core.errors import VpkError
from vpkpack.pipelines.pack_pipeline import pack_vpk

main_app = typer.Typer(
    help="Build a VPK package from a param.sfo, an eboot.bin and any extra files.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool):
    if value:
        typer.echo(f"vpkpack {__version__}")
        raise typer.Exit()


@main_app.command()
def pack(
    sfo: Path = typer.Option(
        ..., "--sfo", "-s", metavar="param.sfo",
        help="Sets the param.sfo file", callback=check_file
    ),
    eboot: Path = typer.Option(
        ..., "--eboot", "-b", metavar="eboot.bin",
        help="Sets the eboot.bin file", callback=check_file
    ),
    add: Optional[List[str]] = typer.Option(
        None, "--add", "-a", metavar="src=dst",
        help="Adds the file or directory src to the vpk as dst", callback=check_add
    ),
    vpk: Optional[Path] = typer.Argument(
        None, help="Name and path to the new .vpk file",
        show_default=settings.default_output_file
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every entry as it is packed"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit"
    ),
):
    """
    Pack the given files into a new VPK archive.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format=settings.log_format
    )

    try:
        report = pack_vpk(sfo, eboot, add, vpk)
    except VpkError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code)

    table = Table(title=f"Packed {escape(str(report.output_path))}")
    table.add_column("#", style="cyan")
    table.add_column("Archive path")
    for i, name in enumerate(report.entries, start=1):
        table.add_row(str(i), escape(name))
    console.print(table)

    for failure in report.failures:
        err_console.print(
            f"[yellow]Warning:[/yellow] {escape(failure.destination)} was not written: "
            f"{escape(failure.reason)}"
        )

    console.print(f"[bold]Entries written:[/bold] {report.entry_count}")


def main():
    main_app()

if __name__ == "__main__":
    main()
