"""
Command-line interface for PDF combiner.
"""

import logging
import os
import sys
import time

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pdf_combiner import __version__
from pdf_combiner.backends.pypdf_backend import PypdfBackend
from pdf_combiner.combiner import AssemblyItem, PDFCombiner
from pdf_combiner.exceptions import EmptyInputError
from pdf_combiner.utils import (
    build_combine_plan,
    check_format,
    default_output_path,
    format_file_size,
    get_document_info,
    get_logger,
)

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    PDF Combiner CLI - Combine PDF files, keeping bookmarks, named destinations and layers.
    """
    pass


@cli.command(name="combine")
@click.argument('sources', nargs=-1, required=True)
@click.option(
    '--output', '-o',
    help='Output file (overrides any <file>/o argument)',
    type=click.Path()
)
@click.option(
    '--deep-copy',
    is_flag=True,
    help='Let the PDF library copy pages together with their bookmarks'
)
@click.option(
    '--no-destinations',
    is_flag=True,
    help='Do not copy named destinations'
)
@click.option(
    '--no-layers',
    is_flag=True,
    help='Do not copy layers (optional content)'
)
@click.option(
    '--seed',
    type=int,
    help='Seed for the suffixes given to clashing destination names'
)
@click.option(
    '--password',
    help='Password for encrypted sources',
    type=str
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Log every dropped or renamed entry'
)
def combine(sources, output, deep_copy, no_destinations, no_layers, seed, password, verbose):
    """
    Combine SOURCES into a single PDF.

    A source is a file optionally followed by page ranges, e.g. 'a.pdf/1-3;7;9-'.
    'file.pdf/o' names the output file. A .txt source lists one file per line;
    the argument after it names the output.

    Examples:

        pdf-combiner combine a.pdf b.pdf

        pdf-combiner combine 'a.pdf/1-3;9-' b.pdf/2 book.pdf/o

        pdf-combiner combine chapters.txt book.pdf
    """
    if verbose:
        get_logger("pdf_combiner", logging.DEBUG)

    try:
        plan = build_combine_plan(sources)
        for ignored in plan.ignored:
            console.print(f"[yellow]Skipping '{ignored}': not a document[/yellow]")

        if not plan.inputs:
            raise EmptyInputError(
                "The input file list is empty. The files may be missing from the list file."
            )

        for item in plan.inputs:
            check_format(item.path)
            item.password = password

        output_path = output or plan.output
        if output_path is None:
            output_path = str(default_output_path(os.path.splitext(plan.inputs[0].path)[1].lower()))
        check_format(output_path)

        combiner = PDFCombiner(
            backend=PypdfBackend(),
            deep_copy=deep_copy,
            named_destinations=not no_destinations,
            layers=not no_layers,
            seed=seed,
        )

        console.print(f"\n[bold cyan]Combining {len(plan.inputs)} file(s)...[/bold cyan]")

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            started = time.perf_counter()
            task = progress.add_task("Processing", total=len(plan.inputs))

            def items():
                for item in plan.inputs:
                    progress.update(task, description=f"Processing '{os.path.basename(item.path)}'")
                    document = combiner.backend.load(item.path, password=item.password)
                    yield AssemblyItem(document, item.ranges, item.destination_range)
                    progress.advance(task)

            document = combiner.assemble(items())

        combiner.write(document, output_path)
        elapsed = time.perf_counter() - started

        # Display results
        content = document.optional_content
        table = Table(title="Combined Document", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Output", output_path)
        table.add_row("Documents", str(len(plan.inputs)))
        table.add_row("Pages", str(document.num_pages))
        table.add_row("Bookmarks", str(document.get_outline().count(recurse=True)))
        table.add_row("Named destinations", str(len(document.named_destinations)))
        table.add_row("Layers", str(len(content.groups) if content else 0))
        table.add_row("Elapsed", f"{elapsed:.2f} seconds")

        console.print()
        console.print(table)
        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {output_path}")
        console.print()

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option(
    '--password',
    help='Password for an encrypted file',
    type=str
)
def show_info(input_pdf, password):
    """
    Display navigation information about a PDF file.

    Example:

        pdf-combiner info input.pdf
    """
    try:
        info = get_document_info(input_pdf, password=password)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Path", os.path.abspath(input_pdf))
        table.add_row("File Size", format_file_size(info.file_size))
        table.add_row("Number of Pages", str(info.num_pages))
        table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
        table.add_row("Bookmarks", str(info.bookmarks))
        table.add_row("Named Destinations", str(info.named_destinations))
        table.add_row("Layers", str(info.layers))

        console.print()
        console.print(table)
        console.print()

    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
