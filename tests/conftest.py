"""
Test configuration and fixtures.

Provides:
- Submission / custom field / upload builders using the wire (camelCase) shape
- Local storage rooted in a per-test temp directory
"""
from typing import Any

import pytest

from bizdesk.core.config import settings
from bizdesk.schemas.custom_field import CustomField, UploadedFile
from bizdesk.schemas.submission import Submission


# =============================================================================
# Builders
# =============================================================================

@pytest.fixture
def make_submission():
    def _make(**payload: Any) -> Submission:
        return Submission.model_validate(payload)

    return _make


@pytest.fixture
def make_attachment_field():
    def _make(*attachments: dict[str, Any], label: str = "Brand assets") -> CustomField:
        return CustomField.model_validate(
            {"type": "attachment", "label": label, "attachments": list(attachments)}
        )

    return _make


@pytest.fixture
def make_upload():
    def _make(
        fieldname: str,
        *,
        originalname: str = "logo.png",
        size: int | None = 2048,
        mimetype: str | None = "image/png",
        data: bytes | str | None = b"\x89PNG\r\n",
    ) -> UploadedFile:
        return UploadedFile(
            fieldname=fieldname,
            originalname=originalname,
            size=size,
            mimetype=mimetype,
            data=data,
        )

    return _make


# =============================================================================
# Storage
# =============================================================================

@pytest.fixture
def local_storage(tmp_path, monkeypatch):
    """Point the local storage backend at a temp directory."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "LOCAL_STORAGE_PATH", str(tmp_path))
    return tmp_path
