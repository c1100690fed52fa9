"""Command-line interface for Pinniped."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table as RichTable

from pinniped import __version__
from pinniped.config import get_settings
from pinniped.core.converter import OUTPUT_SUFFIX, DocumentConverter
from pinniped.core.navigation import (
    Direction,
    TableLookupError,
    get_cell,
    navigate,
    table_at,
)
from pinniped.bridge import describe_block
from pinniped.formats import SUPPORTED_EXTENSIONS, get_handler

app = typer.Typer(
    name="pinniped",
    help="Parse Markdown into a document tree and render it back.",
    add_completion=False,
)
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich at the configured level."""
    level = "DEBUG" if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Pinniped v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Parse Markdown into a document tree and render it back."""
    configure_logging(verbose=False)


def convert_file(
    converter: DocumentConverter,
    input_path: Path,
    output_path: Optional[Path],
    verbose: bool,
) -> bool:
    """Convert a single file. Returns True on success."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] File not found: {input_path}")
        return False

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        console.print(
            f"[yellow]Skipping:[/yellow] {input_path.name} "
            f"(unsupported format: {ext})"
        )
        return False

    if output_path is None:
        output_path = converter.output_path_for(input_path)

    if verbose:
        console.print(f"[blue]Converting:[/blue] {input_path}")
        console.print(f"[blue]Output:[/blue] {output_path}")

    try:
        document = converter.convert_file(input_path, output_path)
        console.print(
            f"[green]Success:[/green] {output_path} "
            f"({len(document.blocks)} blocks)"
        )
        return True
    except Exception as e:
        console.print(f"[red]Error converting {input_path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        return False


def convert_folder(
    converter: DocumentConverter,
    folder_path: Path,
    verbose: bool,
    recursive: bool = True,
) -> tuple[int, int]:
    """Convert all supported files in a folder. Returns (success_count, fail_count)."""
    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {folder_path}")
        return 0, 0

    files: list[Path] = []
    for ext in SUPPORTED_EXTENSIONS:
        if recursive:
            files.extend(folder_path.rglob(f"*{ext}"))
        else:
            files.extend(folder_path.glob(f"*{ext}"))

    # Only convert files not already in the output format
    output_handler = get_handler(converter.output_extension)
    files = sorted(
        f for f in files
        if not f.stem.endswith(OUTPUT_SUFFIX)
        and get_handler(f.suffix) is not output_handler
    )

    if not files:
        console.print(
            f"[yellow]No supported files found in {folder_path}[/yellow]\n"
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
        return 0, 0

    console.print(f"[blue]Found {len(files)} file(s) to convert[/blue]")

    success_count = 0
    fail_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Converting files...", total=len(files))

        for file_path in files:
            progress.update(task, description=f"Converting {file_path.name}...")
            if convert_file(converter, file_path, None, verbose):
                success_count += 1
            else:
                fail_count += 1
            progress.advance(task)

    return success_count, fail_count


@app.command()
def convert(
    path: Path = typer.Argument(
        ...,
        help="File or folder to convert",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (for single file only)",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json or md (default: PINNIPED_OUTPUT_FORMAT or json)",
    ),
    recursive: bool = typer.Option(
        True,
        "--recursive/--no-recursive",
        "-r/-R",
        help="Descend into subfolders in folder mode",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Convert Markdown files to JSON documents, or JSON documents to Markdown.

    Examples:

        pinniped convert notes.md

        pinniped convert notes.json --format md

        pinniped convert /path/to/folder --no-recursive
    """
    if verbose:
        configure_logging(verbose)

    if output is not None and output_format is None:
        suffix = output.suffix.lower().lstrip(".")
        output_format = "md" if suffix in ("md", "markdown", "txt") else suffix or None

    try:
        converter = DocumentConverter(output_format=output_format)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if path.is_file():
        success = convert_file(converter, path, output, verbose)
        raise typer.Exit(0 if success else 1)

    if output is not None:
        console.print(
            "[yellow]Warning:[/yellow] --output is ignored in folder mode. "
            "Files will be saved alongside originals."
        )

    success, fail = convert_folder(converter, path, verbose, recursive)
    console.print(f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed")
    raise typer.Exit(0 if fail == 0 else 1)


@app.command()
def check(
    path: Path = typer.Argument(
        ...,
        help="Markdown file to check",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Check whether a Markdown file survives parse and render unchanged."""
    converter = DocumentConverter(output_format="md")
    text = get_handler(".md")().read_text(path)
    report = converter.roundtrip(text)

    if report.identical:
        console.print(
            f"[green]Round trip OK:[/green] {path.name} "
            f"({report.block_count} blocks)"
        )
        raise typer.Exit(0)

    console.print(f"[yellow]Round trip changed:[/yellow] {path.name}")
    console.print(report.rendered, markup=False, highlight=False)
    raise typer.Exit(1)


def _load_document(path: Path):
    try:
        return get_handler(path.suffix)().read(path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def cell(
    path: Path = typer.Argument(..., help="Markdown or JSON document", exists=True, dir_okay=False),
    block: int = typer.Argument(..., help="Index of the table block"),
    row: int = typer.Argument(..., help="Logical row (0 is the header, if any)"),
    col: int = typer.Argument(..., help="Column"),
    move: Optional[str] = typer.Option(
        None,
        "--move",
        "-m",
        help="Move up, down, left or right before reading",
    ),
) -> None:
    """Print the content of a table cell."""
    document = _load_document(path)

    try:
        table = table_at(document, block)
        if move is not None:
            position = navigate(table, row, col, Direction.parse(move))
            if not position.valid:
                console.print(f"[yellow]Cannot move {escape(move)} from ({row}, {col})[/yellow]")
            row, col = position.row, position.col
        content = get_cell(table, row, col)
    except (TableLookupError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[blue]({row}, {col}):[/blue] {escape(content)}")


@app.command()
def info(
    path: Path = typer.Argument(..., help="Markdown or JSON document", exists=True, dir_okay=False),
) -> None:
    """Summarize the blocks of a document."""
    document = _load_document(path)

    table = RichTable(title=f"{escape(path.name)}: {len(document.blocks)} blocks")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Details")

    for index, block in enumerate(document.blocks):
        summary = describe_block(index, block)
        details = ", ".join(
            f"{key}={value}"
            for key, value in summary.items()
            if key not in ("index", "type")
        )
        table.add_row(str(index), summary["type"], escape(details))

    console.print(table)


if __name__ == "__main__":
    app()
