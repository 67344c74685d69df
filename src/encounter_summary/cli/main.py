"""CLI for encounter-summary: summarize / facts / serve commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from encounter_summary.core.config import AppSettings, LLMConfig, ObservabilityConfig
from encounter_summary.core.logging_config import setup_logging
from encounter_summary.exceptions import EncounterSummaryError, PatientNotFoundError
from encounter_summary.formatters import get_formatter
from encounter_summary.orchestrator import SummarizationOrchestrator
from encounter_summary.store import JsonFileRecordStore

app = typer.Typer(name="encounter-summary", help="Clinical encounter summaries with local fallback")
console = Console()
err_console = Console(stderr=True)


def _build_settings(api_key: Optional[str], provider: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    overrides: dict = {}
    if api_key:
        overrides["api_key"] = api_key
    if provider:
        overrides["provider"] = provider
    settings = AppSettings()
    if overrides:
        settings = settings.model_copy(update={"llm": LLMConfig(**overrides)})
    return settings


def _build_orchestrator(records: Optional[Path], settings: AppSettings) -> SummarizationOrchestrator:
    path = records or settings.store.path
    try:
        store = JsonFileRecordStore(path)
    except EncounterSummaryError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    return SummarizationOrchestrator(store, settings)


def _configure_logging(verbose: bool) -> None:
    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))


@app.command()
def summarize(
    patient_id: str = typer.Argument(..., help="Patient identifier"),
    records: Optional[Path] = typer.Option(None, "--records", "-r", help="Record export JSON file"),
    output_format: str = typer.Option("text", "--format", "-f", help="text, json or pdf"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="OpenAI or Anthropic API key"),
    provider: Optional[str] = typer.Option(None, "--provider", help="auto, openai, anthropic or none"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Summarize a patient's clinical history."""
    _configure_logging(verbose)
    if output_format not in ("text", "json", "pdf"):
        raise typer.BadParameter(f"Unsupported format: {output_format}", param_hint="--format")
    if provider and provider not in ("auto", "openai", "anthropic", "none"):
        raise typer.BadParameter(f"Unknown provider: {provider}", param_hint="--provider")

    settings = _build_settings(api_key, provider)
    orchestrator = _build_orchestrator(records, settings)

    try:
        patient, result = asyncio.run(orchestrator.summarize_with_patient(patient_id))
    except PatientNotFoundError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    except EncounterSummaryError as exc:
        err_console.print(f"[red]Summary failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output_format == "pdf":
        from encounter_summary.formatters.pdf_formatter import pdf_filename

        formatter = get_formatter("pdf", config=settings.pdf)
        target = output or Path(pdf_filename(patient.full_name or patient.id, result.generated_at))
        formatter.format_to_file(result, target, patient_name=patient.full_name)
        console.print(f"[green]PDF saved to {target}[/green]")
        return

    formatter = get_formatter(output_format)
    if output:
        formatter.format_to_file(result, output)
        console.print(f"[green]Summary saved to {output}[/green]")
        return

    typer.echo(formatter.format(result).decode("utf-8"))
    if verbose:
        err_console.print(f"[dim]source: {result.source}[/dim]")


@app.command()
def facts(
    patient_id: str = typer.Argument(..., help="Patient identifier"),
    records: Optional[Path] = typer.Option(None, "--records", "-r", help="Record export JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show the structured facts extracted for a patient."""
    _configure_logging(verbose)
    settings = AppSettings()
    orchestrator = _build_orchestrator(records, settings)

    try:
        snapshot, extracted = asyncio.run(orchestrator.facts_for(patient_id))
    except EncounterSummaryError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    patient = snapshot.patient
    console.print(f"[bold]{patient.full_name or patient.id}[/bold] ({patient.hospital_number or 'no hospital number'})")

    table = Table(title="Extracted Facts")
    table.add_column("Fact", style="cyan")
    table.add_column("Values", style="green")

    rows = [
        ("All diagnoses", extracted.all_diagnoses),
        ("Active diagnoses", extracted.active_diagnoses),
        ("Current medications", extracted.current_medications),
        ("Pending investigations", extracted.pending_investigations),
        ("Abnormal results", extracted.abnormal_results),
        ("Key findings", extracted.key_findings),
        ("Recommendations", extracted.recommendations),
    ]
    for label, values in rows:
        table.add_row(label, "\n".join(values) or "-")
    table.add_row("Latest vitals", extracted.latest_vitals or "-")
    table.add_row("Treatment progress", extracted.treatment_progress)

    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: ENCSUM_API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: ENCSUM_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = AppSettings()
    bind_host = host or settings.api.host
    bind_port = port or settings.api.port
    console.print(f"[green]Serving encounter-summary API on {bind_host}:{bind_port}[/green]")
    uvicorn.run(
        "encounter_summary.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.observability.log_level.lower(),
    )


if __name__ == "__main__":
    app()
