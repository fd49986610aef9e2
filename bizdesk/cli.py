"""CLI tools for previewing templates against submission data."""

import json
from pathlib import Path

import click
from pydantic import ValidationError

from bizdesk.core.config import settings
from bizdesk.core.structured_logging import configure_logging
from bizdesk.schemas.submission import ProjectContext, Submission
from bizdesk.services import template_service


def _load_json(path: Path | None) -> dict:
    if path is None:
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc


def _load_submission(path: Path | None) -> Submission:
    try:
        return Submission.model_validate(_load_json(path))
    except ValidationError as exc:
        raise click.BadParameter(f"Invalid submission: {exc}") from exc


@click.group()
def cli():
    """Content binding CLI tools."""
    configure_logging(settings.LOG_LEVEL)


@cli.command()
@click.option(
    "--template-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Template text containing {{variables}}",
)
@click.option(
    "--submission-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Submission JSON (clientName, formValues, ...)",
)
@click.option(
    "--project-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Optional project JSON (name, ...)",
)
def render_template(template_file: Path, submission_file: Path | None, project_file: Path | None):
    """
    Render a template against a submission.

    Example:
        python -m bizdesk.cli render-template --template-file invoice.txt --submission-file sub.json
    """
    submission = _load_submission(submission_file)
    project = ProjectContext.model_validate(_load_json(project_file)) if project_file else None
    template = template_file.read_text(encoding="utf-8")

    click.echo(template_service.render_template_variables(template, submission, project))


@cli.command()
@click.option(
    "--template-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Template text containing {{variables}}",
)
@click.option(
    "--submission-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Submission JSON used to check which variables resolve",
)
def list_variables(template_file: Path, submission_file: Path | None):
    """List the variables a template uses and whether each one resolves."""
    template = template_file.read_text(encoding="utf-8")
    variables = template_service.build_variable_map(_load_submission(submission_file))
    unresolved = set(template_service.find_unresolved_variables(template, variables))

    names = sorted(template_service.extract_template_variables(template))
    if not names:
        click.echo("No variables found")
        return
    for name in names:
        status = "missing" if name in unresolved else "ok"
        click.echo(f"{name}\t{status}")


if __name__ == "__main__":
    cli()
