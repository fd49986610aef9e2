"""Attachment binding - splice uploaded files into attachment-type custom fields.

Attachments declare a ``file_id``; the multipart parser hands over files keyed
by form field name. A file matches an attachment when its field name equals
the ``file_id`` or ``"file_" + file_id``.

Binding never raises and never drops or reorders fields or attachments.
Unmatched attachments are kept and flagged ``file_not_found``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from bizdesk.core.config import settings
from bizdesk.core.structured_logging import build_log_context
from bizdesk.schemas.custom_field import (
    ATTACHMENT_FIELD_TYPE,
    DEFAULT_CONTENT_TYPE,
    Attachment,
    AttachmentFile,
    CustomField,
    UploadedFile,
)


logger = logging.getLogger(__name__)

EmptyDataPolicy = Literal["ready", "not_found"]

FILE_FIELD_PREFIX = "file_"

# Keys an incoming attachment descriptor may carry before binding
SANITIZED_ATTACHMENT_KEYS = {"name", "type", "size", "url", "file_id"}


def is_sequence(value: object) -> bool:
    """True for lists, tuples and other sequences, but not strings or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def find_matching_file(file_id: str, files: Sequence[UploadedFile]) -> UploadedFile | None:
    """First uploaded file posted under ``file_id`` or ``file_<file_id>``."""
    prefixed = f"{FILE_FIELD_PREFIX}{file_id}"
    for file in files:
        if file.fieldname == file_id or file.fieldname == prefixed:
            return file
    return None


def _bind_attachment(attachment: Attachment, file: UploadedFile) -> Attachment:
    return attachment.model_copy(
        update={
            "file": AttachmentFile(
                data=file.data,
                type=file.mimetype or DEFAULT_CONTENT_TYPE,
            ),
            "name": file.originalname or attachment.name,
            "type": file.mimetype or attachment.type or DEFAULT_CONTENT_TYPE,
            "size": file.size or attachment.size or 0,
            "temp_file_id": file.fieldname,
            "ready_for_upload": True,
        }
    )


def _mark_not_found(attachment: Attachment) -> Attachment:
    return attachment.model_copy(update={"file_not_found": True})


def _bind_field(
    field: CustomField,
    files: Sequence[UploadedFile],
    empty_data_policy: EmptyDataPolicy,
) -> CustomField:
    logger.debug(
        "Processing %d attachments for field",
        len(field.attachments),
        extra=build_log_context(field_label=field.label),
    )

    attachments: list[Attachment] = []
    for attachment in field.attachments:
        if not attachment.file_id:
            logger.debug("Attachment has no file_id to match")
            attachments.append(attachment)
            continue

        log_context = build_log_context(field_label=field.label, file_id=attachment.file_id)
        matching_file = find_matching_file(attachment.file_id, files)

        if matching_file is None:
            logger.warning(
                "No matching file found for file_id %s", attachment.file_id, extra=log_context
            )
            attachments.append(_mark_not_found(attachment))
            continue

        if not matching_file.data:
            logger.error(
                "File %s matched file_id %s but has no data",
                matching_file.fieldname,
                attachment.file_id,
                extra=log_context,
            )
            if empty_data_policy == "not_found":
                attachments.append(_mark_not_found(attachment))
                continue

        attachments.append(_bind_attachment(attachment, matching_file))
        logger.debug(
            "Mapped file %s to attachment", matching_file.fieldname, extra=log_context
        )

    return field.model_copy(update={"attachments": attachments})


def bind_files_to_custom_fields(
    custom_fields: Sequence[CustomField] | None,
    files: Sequence[UploadedFile] | None,
    *,
    empty_data_policy: EmptyDataPolicy | None = None,
) -> list[CustomField] | None:
    """Return custom fields with uploaded files bound to their attachments.

    Any sequence of fields is accepted and the result is always a new list.
    Malformed (non-sequence) or empty inputs are returned unchanged. Fields that are not
    attachment fields (or have no attachments) are returned as the same
    objects; bound fields are new copies, so the input is never mutated.

    ``empty_data_policy`` overrides ``settings.ATTACHMENT_EMPTY_DATA_POLICY``
    for a file that matches but carries no payload.
    """
    if not is_sequence(custom_fields):
        logger.debug("No custom fields to process")
        return custom_fields

    if not is_sequence(files) or not files:
        logger.debug("No files to process")
        return custom_fields

    policy = empty_data_policy or settings.ATTACHMENT_EMPTY_DATA_POLICY
    logger.info(
        "Binding %d uploaded files to %d custom fields", len(files), len(custom_fields)
    )

    return [
        _bind_field(field, files, policy) if field.is_attachment_field else field
        for field in custom_fields
    ]


def sanitize_custom_fields(
    custom_fields: Sequence[CustomField] | None,
) -> list[CustomField] | None:
    """Strip incoming attachment descriptors down to the keys a client may send.

    Anything a client set beyond name/type/size/url/file_id (for instance a
    forged storage path or ready flag) is dropped before binding.
    """
    if not is_sequence(custom_fields):
        return custom_fields

    sanitized: list[CustomField] = []
    for field in custom_fields:
        if field.type != ATTACHMENT_FIELD_TYPE:
            sanitized.append(field)
            continue
        attachments = [
            Attachment(
                **attachment.model_dump(include=SANITIZED_ATTACHMENT_KEYS, exclude_none=True)
            )
            for attachment in field.attachments
        ]
        sanitized.append(field.model_copy(update={"attachments": attachments}))
    return sanitized


def count_attachments(custom_fields: Sequence[CustomField] | None) -> int:
    """Total attachments declared across attachment-type fields."""
    if not is_sequence(custom_fields):
        return 0
    return sum(len(field.attachments) for field in custom_fields if field.is_attachment_field)
