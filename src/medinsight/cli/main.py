"""CLI for medinsight: classify / suggest / batch / categories / insights commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from medinsight.analytics import AnalyticsDataset, AnalyticsEngine
from medinsight.classification import (
    MedicalRecordClassifier,
    batch_classify,
    get_all_categories,
    suggest_categories,
)
from medinsight.classification.models import ClassificationInput
from medinsight.classification.taxonomy import map_category_to_record_type
from medinsight.core.config import AppSettings
from medinsight.exceptions import MedInsightError

app = typer.Typer(name="medinsight", help="Medical record classification and platform analytics")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON in {path}: {e}") from e


def _load_records(path: Path) -> list[dict[str, Any]]:
    """Load a JSON array of record objects."""
    raw = _load_json(path)
    if isinstance(raw, list) and all(isinstance(item, dict) for item in raw):
        return raw
    raise typer.BadParameter(f"Expected JSON array of objects in {path}")


def _emit_json(payload: Any, output: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Saved to {output}[/green]")
    else:
        typer.echo(text)


@app.command()
def classify(
    file_name: str = typer.Option("", "--file-name", "-f", help="Uploaded file name"),
    title: str = typer.Option("", "--title", "-t", help="Record title"),
    description: str = typer.Option("", "--description", "-d", help="Free-text description"),
    file_type: str = typer.Option("", "--file-type", help="MIME type, e.g. image/jpeg"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Classify a single document from its metadata."""
    _configure_logging(verbose)
    classifier = MedicalRecordClassifier(AppSettings().classifier)
    result = classifier.classify(
        ClassificationInput(file_name=file_name, title=title, description=description, file_type=file_type)
    )

    if as_json:
        _emit_json(result.to_json_dict(), None)
        return

    style = "green" if result.is_high_confidence else "yellow"
    console.print(f"[bold]Category:[/bold] [{style}]{result.category}[/{style}]")
    console.print(f"[bold]Confidence:[/bold] {result.confidence:.2f}")
    console.print(f"[bold]Record type:[/bold] {map_category_to_record_type(result.category)}")
    if result.detected_keywords:
        console.print(f"[bold]Keywords:[/bold] {', '.join(result.detected_keywords)}")


@app.command()
def suggest(
    text: str = typer.Argument(..., help="Free text to categorize"),
    as_json: bool = typer.Option(False, "--json", help="Print suggestions as JSON"),
) -> None:
    """Suggest the most likely categories for free text."""
    classifier = MedicalRecordClassifier(AppSettings().classifier)
    try:
        suggestions = suggest_categories(text, classifier)
    except MedInsightError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    if as_json:
        _emit_json([s.to_json_dict() for s in suggestions], None)
        return

    if not suggestions:
        console.print("[yellow]No matching categories[/yellow]")
        return

    table = Table(title="Suggested Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Confidence", justify="right")
    for s in suggestions:
        table.add_row(s.category, f"{s.confidence:.2f}")
    console.print(table)


@app.command()
def batch(
    records_file: Path = typer.Argument(..., help="JSON array of records"),
    output: Optional[Path] = typer.Option(None, help="Output path for results JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Classify every record in a JSON file, preserving order."""
    _configure_logging(verbose)
    records = _load_records(records_file)
    classifier = MedicalRecordClassifier(AppSettings().classifier)
    results = batch_classify(records, classifier)

    if output:
        _emit_json([r.to_json_dict() for r in results], output)
        return

    table = Table(title=f"Classified {len(results)} records")
    table.add_column("Record", style="cyan")
    table.add_column("Category", style="green")
    table.add_column("Confidence", justify="right")
    table.add_column("Keywords", max_width=50)
    for i, r in enumerate(results):
        table.add_row(r.record_id or str(i), r.category, f"{r.confidence:.2f}", ", ".join(r.detected_keywords))
    console.print(table)


@app.command()
def categories() -> None:
    """List taxonomy categories with their legacy record types."""
    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Record type")
    for name in get_all_categories():
        table.add_row(name, map_category_to_record_type(name))
    console.print(table)


@app.command()
def insights(
    dataset_file: Path = typer.Argument(..., help="JSON object with orders, appointments, patients, ..."),
    output: Optional[Path] = typer.Option(None, help="Output path for the full report JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print the full report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run every analytics aggregator and print prioritized recommendations."""
    _configure_logging(verbose)
    raw = _load_json(dataset_file)
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected JSON object in {dataset_file}")

    engine = AnalyticsEngine(AppSettings().analytics)
    report = engine.run_insights(AnalyticsDataset.model_validate(raw))

    if output or as_json:
        _emit_json(report.to_json_dict(), output)
        return

    for section in (report.products, report.doctors, report.patients, report.business, report.scalability):
        for line in section.insights:
            console.print(f"- {line}")

    table = Table(title="Recommendations")
    table.add_column("Priority", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Action", max_width=50)
    for rec in report.recommendations:
        table.add_row(rec.priority.value, rec.category, rec.title, rec.action)
    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    api = AppSettings().api
    uvicorn.run("medinsight.api.app:app", host=host or api.host, port=port or api.port)


if __name__ == "__main__":
    app()
