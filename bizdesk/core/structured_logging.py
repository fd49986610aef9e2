"""Structured logging helpers (PII-safe)."""

import logging
from typing import Any


def build_log_context(
    *,
    workspace_id: str | None = None,
    submission_id: str | None = None,
    field_label: str | None = None,
    file_id: str | None = None,
    fieldname: str | None = None,
) -> dict[str, Any]:
    """Return a PII-safe log context dict.

    Only identifiers go in here. File payloads and client contact details
    never do.
    """
    context: dict[str, Any] = {}
    if workspace_id:
        context["workspace_id"] = str(workspace_id)
    if submission_id:
        context["submission_id"] = str(submission_id)
    if field_label:
        context["field_label"] = field_label
    if file_id:
        context["file_id"] = file_id
    if fieldname:
        context["fieldname"] = fieldname
    return context


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging for scripts and workers."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
