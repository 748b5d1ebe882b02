"""Command-line interface for statement import."""
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import get_category_vocabulary
from .config.settings import (
    ANTHROPIC_API_KEY,
    MAX_TRANSACTIONS_PER_SEGMENT,
    MAX_CONCURRENT_EXTRACTIONS,
)
from .utils.currency_parser import format_currency
from .utils.logger import setup_logger

console = Console()
logger = setup_logger()


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Statement Import - Turn bank statements into reviewed transactions."""
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--existing', '-e', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with existing expenses/incomes for duplicate checks')
@click.option('--max-per-segment', '-m', type=click.IntRange(min=1),
              default=MAX_TRANSACTIONS_PER_SEGMENT, show_default=True,
              help='Maximum transaction lines per extraction call')
@click.option('--concurrency', '-c', type=click.IntRange(min=1),
              default=MAX_CONCURRENT_EXTRACTIONS, show_default=True,
              help='Parallel extraction calls (1 = sequential)')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False), help='Optional path to write result JSON')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Optional path to write an Excel review')
@click.option('--excel', '-x', is_flag=True, help='Write an Excel review to the output directory')
def analyze(file_path, existing, max_per_segment, concurrency, json_path, output, excel):
    """
    Extract and review transactions from a bank statement.

    FILE_PATH: Path to the statement (PDF, CSV or TXT)
    """
    console.print(f"\n[bold blue]Statement Import[/bold blue]\n")

    file_path = Path(file_path)
    console.print(f"[cyan]Processing:[/cyan] {file_path.name}")

    from .dedup import load_existing_records
    from .extractors import AnthropicTransactionExtractor
    from .pipeline import StatementImportPipeline

    existing_expenses, existing_incomes = [], []
    if existing:
        try:
            existing_expenses, existing_incomes = load_existing_records(Path(existing))
        except (OSError, ValueError) as e:
            console.print(f"[red]Error: Could not load existing records: {e}[/red]")
            sys.exit(1)
        console.print(
            f"[cyan]Existing records:[/cyan] {len(existing_expenses)} expenses, "
            f"{len(existing_incomes)} incomes"
        )

    try:
        extractor = AnthropicTransactionExtractor()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    pipeline = StatementImportPipeline(
        extractor,
        max_transactions_per_segment=max_per_segment,
        max_concurrency=concurrency,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        progress.add_task("Analyzing statement...", total=None)
        result = pipeline.process_file(
            file_path,
            existing_expenses=existing_expenses,
            existing_incomes=existing_incomes,
        )

    if json_path:
        try:
            Path(json_path).write_text(json.dumps(result.to_dict(), indent=2), encoding='utf-8')
            console.print(f"[green]JSON result saved to {json_path}[/green]")
        except OSError as json_exc:
            console.print(f"[yellow]![/yellow] Failed to write JSON: {json_exc}")

    if not result.success:
        console.print(f"\n[red]✗ Analysis failed[/red]")
        console.print(f"  Error: {result.error_message}")
        sys.exit(1)

    _print_review_table(result)

    summary = result.summary
    batch_message = (
        f" (processed in {result.segments_processed} batches)"
        if result.segments_processed > 1 else ""
    )
    console.print(f"\n[green]✓ Found {result.transaction_count} transactions to import{batch_message}[/green]")
    console.print(f"  Period: {summary.date_range.start} to {summary.date_range.end}")
    console.print(f"  Income: {format_currency(summary.total_income)}")
    console.print(f"  Expenses: {format_currency(summary.total_expenses)}")
    console.print(f"  Possible duplicates: {result.duplicate_count}")
    console.print(f"  Time: {result.processing_time:.2f}s")

    if result.warnings:
        console.print(f"\n[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  ⚠ {warning}")

    if output or excel:
        from .exporters import ExcelExporter, generate_output_filename

        if not output:
            output = generate_output_filename(file_path.stem)

        try:
            ExcelExporter().export(result, Path(output))
            console.print(f"[green]Excel review saved to {output}[/green]")
        except OSError as e:
            console.print(f"[red]Error: Failed to write Excel review: {e}[/red]")
            sys.exit(1)


def _print_review_table(result) -> None:
    """Print the annotated transactions as a table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Description")
    table.add_column("Type")
    table.add_column("Category", style="green")
    table.add_column("Amount", justify="right")
    table.add_column("Action")

    for item in result.transactions:
        txn = item.transaction
        action = "[red]skip (duplicate)[/red]" if item.is_duplicate else "import"
        table.add_row(
            txn.date.isoformat(),
            txn.description,
            txn.type.value,
            txn.category,
            format_currency(txn.amount),
            action,
        )

    console.print(table)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--max-per-segment', '-m', type=click.IntRange(min=1),
              default=MAX_TRANSACTIONS_PER_SEGMENT, show_default=True,
              help='Maximum transaction lines per segment')
def segment(file_path, max_per_segment):
    """
    Preview how a statement would be split, without calling the extractor.

    FILE_PATH: Path to the statement (PDF, CSV or TXT)
    """
    from .extractors import ExtractionError, load_statement_text
    from .segmentation import LineClassifier, StatementSegmenter, estimate_transaction_count

    try:
        text = load_statement_text(Path(file_path))
    except (ExtractionError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    classifier = LineClassifier()
    segments = StatementSegmenter(max_per_segment, classifier=classifier).split(text)

    if not segments:
        console.print("[yellow]No text found in statement[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Segment", style="cyan", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Transaction Lines", justify="right", style="green")
    table.add_column("First Line")

    for index, segment_text in enumerate(segments, start=1):
        lines = segment_text.split('\n')
        txn_lines = sum(1 for line in lines if classifier.is_transaction_line(line))
        table.add_row(str(index), str(len(lines)), str(txn_lines), lines[0][:60])

    console.print(table)
    console.print(f"\n[cyan]Segments:[/cyan] {len(segments)}")
    console.print(f"[cyan]Estimated transactions:[/cyan] {estimate_transaction_count(text)}")


@cli.command()
def categories():
    """List the category vocabulary."""
    console.print("\n[bold blue]Transaction Categories[/bold blue]\n")

    vocabulary = get_category_vocabulary()

    if not vocabulary.transaction_types:
        console.print("[yellow]No category vocabulary found[/yellow]")
        console.print(f"[yellow]Expected: {vocabulary.config_file}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Categories", style="green")
    table.add_column("Aliases")

    for transaction_type in vocabulary.transaction_types:
        category_set = vocabulary.get(transaction_type)
        aliases = ", ".join(f"{k}→{v}" for k, v in category_set.aliases.items())
        table.add_row(transaction_type.upper(), ", ".join(category_set.categories), aliases or "-")

    console.print(table)


@cli.command()
def test():
    """Run system checks to verify installation."""
    console.print("\n[bold blue]System Test[/bold blue]\n")

    console.print("[cyan]Checking Python version...[/cyan]")
    version = sys.version_info
    if version >= (3, 10):
        console.print(f"  [green]✓[/green] Python {version.major}.{version.minor}.{version.micro}")
    else:
        console.print(f"  [red]✗[/red] Python {version.major}.{version.minor} (3.10+ required)")

    console.print("[cyan]Checking dependencies...[/cyan]")

    deps = [
        ("anthropic", "anthropic"),
        ("pdfplumber", "pdfplumber"),
        ("openpyxl", "openpyxl"),
        ("python-dateutil", "dateutil"),
        ("PyYAML", "yaml"),
    ]

    for name, import_name in deps:
        try:
            __import__(import_name)
            console.print(f"  [green]✓[/green] {name}")
        except ImportError:
            console.print(f"  [red]✗[/red] {name} (not installed)")

    console.print("[cyan]Checking API key...[/cyan]")
    if ANTHROPIC_API_KEY:
        console.print(f"  [green]✓[/green] ANTHROPIC_API_KEY is set")
    else:
        console.print(f"  [yellow]![/yellow] ANTHROPIC_API_KEY not set (required for analyze)")

    console.print("[cyan]Checking category vocabulary...[/cyan]")
    vocabulary = get_category_vocabulary()
    if vocabulary.transaction_types:
        console.print(f"  [green]✓[/green] {len(vocabulary.transaction_types)} transaction types loaded")
    else:
        console.print(f"  [yellow]![/yellow] No category vocabulary found")

    console.print("\n[green]System test complete[/green]\n")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        logger.exception("Unhandled exception")
        sys.exit(1)


if __name__ == '__main__':
    main()
