"""Pydantic schemas for the content binding layer."""

from bizdesk.schemas.automation import AutomationEmailConfig, EmailDraft
from bizdesk.schemas.custom_field import (
    ATTACHMENT_FIELD_TYPE,
    DEFAULT_CONTENT_TYPE,
    Attachment,
    AttachmentFile,
    CustomField,
    StoredFile,
    UploadedFile,
)
from bizdesk.schemas.submission import FormFieldResult, ProjectContext, Submission

__all__ = [
    "ATTACHMENT_FIELD_TYPE",
    "DEFAULT_CONTENT_TYPE",
    "Attachment",
    "AttachmentFile",
    "AutomationEmailConfig",
    "CustomField",
    "EmailDraft",
    "FormFieldResult",
    "ProjectContext",
    "StoredFile",
    "Submission",
    "UploadedFile",
]
