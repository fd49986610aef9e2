"""Lead form automation rendering.

Builds the rendered pieces automations need from a submission: the client
email draft, the new project's name, and the project note description.
Sending and persistence belong to the caller.
"""

from __future__ import annotations

import logging

from bizdesk.core.config import settings
from bizdesk.core.structured_logging import build_log_context
from bizdesk.schemas.automation import AutomationEmailConfig, EmailDraft
from bizdesk.schemas.submission import ProjectContext, Submission
from bizdesk.services.template_service import DEFAULT_PROJECT_NAME, render_template_variables


logger = logging.getLogger(__name__)


def body_to_html(body: str) -> str:
    return body.replace("\n", "<br>")


def build_automation_email(
    config: AutomationEmailConfig,
    submission: Submission,
    *,
    form_name: str | None = None,
    cc_email: str | None = None,
) -> EmailDraft:
    """Render the automation email for a submission.

    Raises ValueError when the submission has no client email to send to.
    """
    if not submission.client_email:
        raise ValueError("Client email is required for email automation")

    context = submission
    if form_name:
        context = submission.model_copy(update={"form_name": form_name})

    subject = render_template_variables(config.subject, context)
    body = render_template_variables(config.body, context)

    headers: dict[str, str] = {}
    if settings.DEFAULT_EMAIL_REPLY_TO:
        headers["Reply-To"] = settings.DEFAULT_EMAIL_REPLY_TO

    cc = cc_email if config.cc_team and cc_email else None

    logger.info(
        "Built automation email",
        extra=build_log_context(submission_id=submission.submission_id),
    )
    return EmailDraft(
        to=submission.client_email,
        subject=subject,
        html=body_to_html(body),
        cc=cc,
        headers=headers,
    )


def render_project_name(
    submission: Submission,
    *,
    name_template: str | None = None,
    fallback: str | None = None,
) -> str:
    """Name for a project created from a submission."""
    if name_template:
        return render_template_variables(name_template, submission)
    return fallback or DEFAULT_PROJECT_NAME


def render_project_description(
    description_template: str | None,
    submission: Submission,
    project: ProjectContext,
) -> str:
    """Project note text, rendered with the new project as context."""
    return render_template_variables(description_template, submission, project)
