"""
Command-line interface for pdfweave.
"""

import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdfweave import __version__
from pdfweave.config import get_settings
from pdfweave.core.utils import configure_logging
from pdfweave.exceptions import PdfWeaveError
from pdfweave.pages.utils import parse_page_spec
from pdfweave.system import open_pdf_external, print_pdf
from pdfweave.tools import ToolContext, load_builtin_plugins, registry

console = Console()


def _fail(exc):
    console.print(f"\n[bold red]✗ Error:[/bold red] {exc}")
    sys.exit(1)


def _run_tool(name, **context):
    try:
        return registry.run(name, ToolContext(**context))
    except PdfWeaveError as e:
        _fail(e)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    pdfweave - Merge, clean and edit PDF documents.
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)
    load_builtin_plugins()


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def info(input_pdf):
    """
    Display page count, title and author of a PDF.

    Example:

        pdfweave info document.pdf
    """
    details = _run_tool("inspect", input_path=input_pdf)

    table = Table(title="PDF Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("File", os.path.basename(details.path))
    table.add_row("Pages", str(details.pages))
    table.add_row("Title", details.title or "-")
    table.add_row("Author", details.author or "-")
    console.print(table)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Path of the merged PDF',
    type=click.Path(dir_okay=False)
)
@click.option('--title', default=None, help='Title to store in the merged document')
@click.option('--author', default=None, help='Author to store in the merged document')
def merge(input_pdfs, output, title, author):
    """
    Merge PDFs into one document, in the order given.

    Examples:

        pdfweave merge a.pdf b.pdf -o merged.pdf

        pdfweave merge a.pdf b.pdf c.pdf -o merged.pdf --title "Report"
    """
    document_info = {k: v for k, v in {"title": title, "author": author}.items() if v}
    result = _run_tool(
        "merge",
        output_path=output,
        config={"inputs": list(input_pdfs), "document_info": document_info},
    )

    console.print(f"\n[bold green]✓ Merged {len(input_pdfs)} file(s)[/bold green]")
    console.print(f"[dim]Output: {result}[/dim]")


@cli.command(name="remove-watermark")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Path of the cleaned PDF',
    type=click.Path(dir_okay=False)
)
def remove_watermark(input_pdf, output):
    """
    Remove overlay watermarks that are stored as separate objects.

    Example:

        pdfweave remove-watermark draft.pdf -o clean.pdf
    """
    result = _run_tool("remove_watermarks", input_path=input_pdf, output_path=output)

    style = "bold green" if result.success else "bold yellow"
    console.print(f"\n[{style}]{result.message}[/{style}]")
    console.print(f"[dim]Output: {os.path.abspath(output)}[/dim]")


@cli.command(name="delete-pages")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--pages', '-p',
    required=True,
    help='Pages to delete, e.g. "2" or "1,3,5-7" (1-indexed)',
    type=str
)
@click.option(
    '--output', '-o',
    required=True,
    help='Path of the resulting PDF',
    type=click.Path(dir_okay=False)
)
def delete_pages(input_pdf, pages, output):
    """
    Delete pages from a PDF.

    Examples:

        pdfweave delete-pages input.pdf -p 2 -o output.pdf

        pdfweave delete-pages input.pdf -p "1,4-6" -o output.pdf
    """
    try:
        numbers = parse_page_spec(pages)
    except PdfWeaveError as e:
        _fail(e)
    result = _run_tool("delete_pages", input_path=input_pdf, output_path=output, config={"pages": numbers})

    console.print(f"\n[bold green]✓ Deleted {len(numbers)} page(s)[/bold green]")
    console.print(f"[dim]Output: {result}[/dim]")


@cli.command(name="images-to-pdf")
@click.argument('images', nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Path of the composed PDF',
    type=click.Path(dir_okay=False)
)
def images_to_pdf_command(images, output):
    """
    Create a PDF with one page per image.

    Example:

        pdfweave images-to-pdf scan1.png scan2.jpg -o scans.pdf
    """
    result = _run_tool("images_to_pdf", output_path=output, config={"images": list(images)})

    console.print(f"\n[bold green]✓ Created PDF from {len(images)} image(s)[/bold green]")
    console.print(f"[dim]Output: {result}[/dim]")


@cli.command(name="print")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def print_command(input_pdf):
    """
    Send a PDF to the default printer.
    """
    try:
        code = print_pdf(input_pdf)
    except PdfWeaveError as e:
        _fail(e)
    if code != 0:
        _fail(f"Print command exited with code {code}")
    console.print("[bold green]✓ Sent to printer[/bold green]")


@cli.command(name="open")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def open_command(input_pdf):
    """
    Open a PDF with the system's default viewer.
    """
    try:
        code = open_pdf_external(input_pdf)
    except PdfWeaveError as e:
        _fail(e)
    if code != 0:
        _fail(f"Open command exited with code {code}")


if __name__ == '__main__':
    cli()
