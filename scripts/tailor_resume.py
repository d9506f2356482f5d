#!/usr/bin/env python3
"""
Tailor a résumé to a job description from the command line.

Usage:
    python scripts/tailor_resume.py parse resume.txt -o resume.yaml
    python scripts/tailor_resume.py analyze job.txt
    python scripts/tailor_resume.py format resume.yaml
    python scripts/tailor_resume.py transform resume.txt job.txt -o tailored.txt
    python scripts/tailor_resume.py transform-structured resume.yaml job.txt --json
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from tailor.contexts.intake import analyze_job_description
from tailor.contexts.intake.logger import setup_intake_logger
from tailor.contexts.rendering import format_resume
from tailor.contexts.rendering.logger import log_render_summary, setup_rendering_logger
from tailor.contexts.targeting.logger import setup_targeting_logger
from tailor.contexts.templating import InvalidResumeStructureError, StructuredResume, parse_resume
from tailor.contexts.templating.logger import setup_templating_logger
from tailor.pipeline import tailor_resume, tailor_structured_resume
from tailor.utils.timestamp import now

load_dotenv()

# =============================================================================
# CONFIGURATION
# =============================================================================

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Parse, analyze and tailor résumés against job descriptions.")

# =============================================================================
# HELPERS
# =============================================================================


def start_session(setup, command: str, enabled: bool, **provenance) -> Optional[Path]:
    """Create a timestamped log directory and configure the context logger."""
    if not enabled:
        return None
    log_dir = LOGS_PATH / f"{command}_{now()}"
    return setup(log_dir, extra_provenance={k.replace("_", " ").title(): v for k, v in provenance.items()})


def read_text(path: Path) -> str:
    if not path.exists():
        typer.echo(f"ERROR: File not found: {path}", err=True)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def load_record(path: Path) -> StructuredResume:
    if not path.exists():
        typer.echo(f"ERROR: File not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        return StructuredResume.from_file(path)
    except InvalidResumeStructureError as e:
        typer.echo(f"ERROR: Invalid resume record in {path}:\n{e}", err=True)
        raise typer.Exit(1)


def serialize(data: dict, as_json: bool) -> str:
    if as_json:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return OmegaConf.to_yaml(OmegaConf.create(data))


def emit(text: str, output: Optional[Path]) -> None:
    """Write to output file if given, else to stdout."""
    if output:
        output.parent.mkdir(exist_ok=True, parents=True)
        output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        typer.echo(f"Wrote {output}", err=True)
    else:
        typer.echo(text)


# =============================================================================
# COMMANDS
# =============================================================================


@app.command()
def parse(
    resume_file: Path = typer.Argument(..., help="Plain-text résumé"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write record here"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of YAML"),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """Parse a plain-text résumé into a structured record."""
    start_session(setup_templating_logger, "parse", log, resume=resume_file)
    resume = parse_resume(read_text(resume_file))
    emit(serialize(resume.to_dict(), as_json), output)


@app.command()
def analyze(
    job_file: Path = typer.Argument(..., help="Plain-text job description"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write profile here"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of YAML"),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """Extract the job title and weighted keywords from a job description."""
    start_session(setup_intake_logger, "analyze", log, job_description=job_file)
    analysis = analyze_job_description(read_text(job_file))
    emit(serialize(analysis.to_dict(), as_json), output)


@app.command("format")
def format_command(
    record_file: Path = typer.Argument(..., help="Structured résumé (YAML or JSON)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write rendered text here"),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """Render a structured résumé in the canonical text layout."""
    start_session(setup_rendering_logger, "format", log, record=record_file)
    rendered = format_resume(load_record(record_file))
    log_render_summary(record_file.stem, rendered)
    emit(rendered, output)


@app.command()
def transform(
    resume_file: Path = typer.Argument(..., help="Plain-text résumé"),
    job_file: Path = typer.Argument(..., help="Plain-text job description"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write rendered text here"),
    record_output: Optional[Path] = typer.Option(
        None, "--record", help="Also save the tailored record as YAML"
    ),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """Parse, tailor and render a plain-text résumé for a job description."""
    start_session(setup_targeting_logger, "transform", log, resume=resume_file, job_description=job_file)
    result = tailor_resume(read_text(resume_file), read_text(job_file))

    if record_output:
        result.resume.save(record_output)
        typer.echo(f"Wrote {record_output}", err=True)
    emit(result.rendered, output)


@app.command("transform-structured")
def transform_structured(
    record_file: Path = typer.Argument(..., help="Structured résumé (YAML or JSON)"),
    job_file: Path = typer.Argument(..., help="Plain-text job description"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here"),
    as_json: bool = typer.Option(
        False, "--json", help="Emit {resume, jobTitle, structured} JSON instead of text"
    ),
    log: bool = typer.Option(True, "--log/--no-log", help="Write a session log under LOGS_PATH"),
):
    """Tailor and render an already structured résumé for a job description."""
    start_session(
        setup_targeting_logger, "transform_structured", log, record=record_file, job_description=job_file
    )
    result = tailor_structured_resume(load_record(record_file), read_text(job_file))

    if as_json:
        emit(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), output)
    else:
        if result.job_title:
            typer.echo(f"Job title: {result.job_title}", err=True)
        emit(result.rendered, output)


if __name__ == "__main__":
    app()
