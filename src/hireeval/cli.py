"""Typer CLI entrypoint for the evaluation workflow."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import load_app_config, read_yaml
from .container import create_container
from .core import STAGE_ORDER
from .core.confidence import FEEDBACK_PLACEHOLDER
from .errors import EvaluationError
from .logging import configure_logging
from .report import build_report

app = typer.Typer(help="Candidate hiring-evaluation CLI.")
weights_app = typer.Typer(help="Inspect or change stage weights.")
app.add_typer(weights_app, name="weights")


def _settings(config: Optional[Path], weights_file: Optional[Path]) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_app_config(config).to_settings()
        except (yaml.YAMLError, ValidationError) as exc:
            raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc
    if weights_file:
        settings.setdefault("storage", {})["weights_file"] = str(weights_file)
    return settings


@app.command()
def evaluate(
    input_path: Path = typer.Option(
        ...,
        "--input",
        exists=True,
        readable=True,
        dir_okay=False,
        help="Evaluation document (YAML or JSON).",
    ),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    weights_file: Optional[Path] = typer.Option(None, dir_okay=False, help="Persisted weights (JSON)."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Run one candidate through every stage and write the confidence report."""
    configure_logging(log_level)
    container = create_container(settings=_settings(config, weights_file))
    session = container.session()

    try:
        document = read_yaml(input_path)
    except yaml.YAMLError as exc:
        raise typer.BadParameter(f"Invalid evaluation document: {exc}", param_name="input") from exc
    if not isinstance(document, dict):
        raise typer.BadParameter("Evaluation document must be a mapping", param_name="input")
    stages = document.get("stages") or {}
    if not isinstance(stages, dict):
        raise typer.BadParameter("'stages' must be a mapping of stage name to scores", param_name="input")

    try:
        session.set_candidate(document.get("candidate") or {})
        for stage_key in STAGE_ORDER:
            session.submit_stage(stage_key, stages.get(stage_key) or {})
        report = session.confidence()
    except EvaluationError as exc:
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc

    container.report_writer().write(output, build_report(session.current_state()))

    for stage, feedback in zip(report.per_stage, report.feedback):
        typer.echo(
            f"{stage.label}: average {stage.average:.2f} / 5, "
            f"{stage.contribution:.1f} pts - {feedback.narrative or FEEDBACK_PLACEHOLDER}"
        )
    typer.echo(f"Confidence: {report.overall}% ({report.recommendation}). Report saved to {output}.")


@weights_app.command("show")
def show_weights(
    weights_file: Optional[Path] = typer.Option(None, dir_okay=False, help="Persisted weights (JSON)."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the active stage weights."""
    configure_logging(log_level)
    container = create_container(settings=_settings(None, weights_file))
    weights = container.weight_manager().active
    for stage_key in STAGE_ORDER:
        typer.echo(f"{stage_key}: {weights.for_stage(stage_key):g}%")


@weights_app.command("set")
def set_weights(
    psychometric: str = typer.Option(..., help="Psychometric stage weight (%)."),
    technical: str = typer.Option(..., help="Technical stage weight (%)."),
    final: str = typer.Option(..., help="Final interview weight (%)."),
    weights_file: Optional[Path] = typer.Option(None, dir_okay=False, help="Persisted weights (JSON)."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Validate and persist new stage weights."""
    configure_logging(log_level)
    container = create_container(settings=_settings(None, weights_file))
    try:
        weights = container.weight_manager().update(
            {"psychometric": psychometric, "technical": technical, "final": final}
        )
    except EvaluationError as exc:
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(
        "Weights updated: "
        + ", ".join(f"{key} {weights.for_stage(key):g}%" for key in STAGE_ORDER)
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
