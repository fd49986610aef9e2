"""Template service - {{variable}} substitution for emails, invoices and notes.

Variables come from a submission (built-in client fields plus every labelled
form answer) and an optional project context. Unknown placeholders are left
in the output untouched.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date

from bizdesk.core.config import settings
from bizdesk.core.structured_logging import build_log_context
from bizdesk.schemas.submission import ProjectContext, Submission
from bizdesk.types import JsonValue, VariableMap


logger = logging.getLogger(__name__)

# Variable pattern for template substitution: {{variable_name}}
# ASCII keeps IGNORECASE from folding non-ASCII letters (e.g. the Kelvin sign) into a-z
VARIABLE_PATTERN = re.compile(r"\{\{([a-z0-9_]+)\}\}", flags=re.IGNORECASE | re.ASCII)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9]")

DEFAULT_CLIENT_NAME = "Client"
DEFAULT_PROJECT_NAME = "New Project"


def safe_variable_key(label: str) -> str:
    """Turn a form field label into a variable name ("Due Date" -> "due_date")."""
    return _UNSAFE_KEY_CHARS.sub("_", label.lower())


def format_variable_value(value: JsonValue) -> str:
    """Display text for a variable value.

    Lists join their formatted items with "," (["SEO", "Ads"] -> "SEO,Ads");
    mappings render as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.strftime(settings.SUBMISSION_DATE_FORMAT)
    if isinstance(value, (list, tuple)):
        return ",".join(format_variable_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def build_variable_map(
    submission: Submission,
    project: ProjectContext | None = None,
    *,
    today: date | None = None,
) -> VariableMap:
    """Build the flat variable map for a submission.

    Built-in client/project fields go in first, then every form answer that
    has both a label and a value, keyed by its safe label. Later entries win
    on key collisions, including over the built-ins.
    """
    today = today or date.today()
    variables: VariableMap = {
        "client_name": submission.client_name or DEFAULT_CLIENT_NAME,
        "client_email": submission.client_email or "",
        "client_phone": submission.client_phone or "",
        "client_company": submission.client_company or "",
        "project_name": (project.name if project else None) or DEFAULT_PROJECT_NAME,
        "submission_date": format_variable_value(today),
        "form_name": submission.form_name or "",
    }

    for field in submission.form_values.values():
        if field is not None and field.label and field.has_value:
            variables[safe_variable_key(field.label)] = field.value

    return variables


def extract_template_variables(template: str | None) -> set[str]:
    """Return the lowercased placeholder names used in a template."""
    if not template:
        return set()
    return {match.group(1).lower() for match in VARIABLE_PATTERN.finditer(template)}


def find_unresolved_variables(template: str | None, variables: VariableMap) -> list[str]:
    """Placeholder names in the template that the variable map cannot resolve."""
    return sorted(name for name in extract_template_variables(template) if name not in variables)


def substitute_variables(template: str | None, variables: VariableMap) -> str:
    """Replace every known {{name}} in a single pass.

    Substituted values are inserted literally and never re-scanned.
    """
    if not template:
        return ""

    def replace_var(match: re.Match) -> str:
        name = match.group(1).lower()
        if name not in variables:
            return match.group(0)
        return format_variable_value(variables[name])

    return VARIABLE_PATTERN.sub(replace_var, template)


def render_template_variables(
    template: str | None,
    submission: Submission,
    project: ProjectContext | None = None,
    *,
    today: date | None = None,
) -> str:
    """Render a template against a submission and optional project context."""
    if not template:
        return ""

    variables = build_variable_map(submission, project, today=today)
    unresolved = find_unresolved_variables(template, variables)
    if unresolved:
        logger.debug(
            "Template has unresolved variables: %s",
            ", ".join(unresolved),
            extra=build_log_context(submission_id=submission.submission_id),
        )
    return substitute_variables(template, variables)
