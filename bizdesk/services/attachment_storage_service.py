"""Attachment storage - persist bound attachments and clean them up.

Bound attachments carry their raw payload in ``attachment.file``. Storing one
writes the payload to the configured backend and replaces the attachment with
a stored record (name/type/size plus URL and storage path).
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import re
import time
from collections.abc import Sequence

from botocore.exceptions import BotoCoreError, ClientError

from bizdesk.core.config import settings
from bizdesk.core.structured_logging import build_log_context
from bizdesk.schemas.custom_field import (
    ATTACHMENT_FIELD_TYPE,
    DEFAULT_CONTENT_TYPE,
    Attachment,
    CustomField,
    StoredFile,
)
from bizdesk.services import storage_client
from bizdesk.services.attachment_binding_service import is_sequence


logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")

STORAGE_ERRORS = (ClientError, BotoCoreError, OSError)


# =============================================================================
# Storage Backend
# =============================================================================


def _get_local_storage_path() -> str:
    os.makedirs(settings.LOCAL_STORAGE_PATH, exist_ok=True)
    return settings.LOCAL_STORAGE_PATH


def build_storage_path(
    workspace_id: str,
    file_name: str,
    *,
    timestamp_ms: int | None = None,
) -> str:
    """Storage key for a workspace file: workspaces/<id>/files/<ms>_<safe name>."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", file_name)
    return f"workspaces/{workspace_id}/files/{timestamp_ms}_{safe_name}"


def decode_attachment_data(data: bytes | str) -> bytes:
    """Raw bytes for an attachment payload; text payloads are base64."""
    if isinstance(data, bytes):
        return data
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise ValueError("Attachment data is not valid base64") from exc


def store_file(storage_path: str, data: bytes, content_type: str) -> StoredFile:
    """Store file bytes to the configured backend."""
    if settings.STORAGE_BACKEND == "s3":
        s3 = storage_client.get_s3_client()
        s3.put_object(
            Bucket=settings.S3_BUCKET,
            Key=storage_path,
            Body=data,
            ContentType=content_type,
        )
        return StoredFile(
            url=storage_client.build_object_url(storage_path),
            storage_path=storage_path,
        )

    # Local storage
    path = os.path.join(_get_local_storage_path(), storage_path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return StoredFile(url=f"/files/{storage_path}", storage_path=storage_path)


def delete_file(storage_path: str) -> None:
    """Delete a stored file (missing local files are ignored)."""
    if settings.STORAGE_BACKEND == "s3":
        s3 = storage_client.get_s3_client()
        s3.delete_object(Bucket=settings.S3_BUCKET, Key=storage_path)
        return

    path = os.path.join(_get_local_storage_path(), storage_path)
    if os.path.exists(path):
        os.remove(path)


# =============================================================================
# Custom Field Processing
# =============================================================================


def _store_attachment(attachment: Attachment, workspace_id: str) -> Attachment:
    name = attachment.name or "attachment"
    content_type = attachment.type or DEFAULT_CONTENT_TYPE
    data = decode_attachment_data(attachment.file.data)
    stored = store_file(build_storage_path(workspace_id, name), data, content_type)
    return Attachment(
        name=attachment.name,
        type=attachment.type,
        size=attachment.size,
        url=stored.url,
        storage_url=stored.url,
        storage_path=stored.storage_path,
    )


def upload_bound_attachments(
    custom_fields: Sequence[CustomField] | None,
    workspace_id: str,
) -> list[CustomField] | None:
    """Store every bound attachment payload and return the updated fields.

    Already-stored attachments and attachments without a payload are kept
    as-is. A failed store is logged and the attachment is kept unchanged so
    the caller can report it; storage errors never abort the batch.
    """
    if not is_sequence(custom_fields):
        return custom_fields

    updated: list[CustomField] = []
    for field in custom_fields:
        if not field.is_attachment_field:
            updated.append(field)
            continue

        processed: list[Attachment] = []
        for attachment in field.attachments:
            if attachment.storage_url or attachment.file is None or not attachment.file.data:
                processed.append(attachment)
                continue
            try:
                processed.append(_store_attachment(attachment, workspace_id))
            except (ValueError, *STORAGE_ERRORS):
                logger.exception(
                    "Failed to store attachment",
                    extra=build_log_context(
                        workspace_id=workspace_id,
                        field_label=field.label,
                        file_id=attachment.file_id,
                    ),
                )
                processed.append(attachment)

        updated.append(field.model_copy(update={"attachments": processed}))
    return updated


def delete_attachment_files(custom_fields: Sequence[CustomField] | None) -> int:
    """Delete stored files for attachment fields. Returns how many were deleted."""
    if not is_sequence(custom_fields):
        return 0

    deleted = 0
    for field in custom_fields:
        if field.type != ATTACHMENT_FIELD_TYPE:
            continue
        for attachment in field.attachments:
            if not attachment.storage_path:
                continue
            try:
                delete_file(attachment.storage_path)
                deleted += 1
            except STORAGE_ERRORS as exc:
                logger.warning(
                    "Failed to delete stored attachment: %s",
                    exc,
                    extra=build_log_context(field_label=field.label),
                )
    return deleted
