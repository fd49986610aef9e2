"""Utility modules."""

from bizdesk.utils.file_upload import (
    get_upload_file_size,
    read_uploaded_file,
    uploaded_files_from_form,
)

__all__ = [
    # File uploads
    "get_upload_file_size",
    "read_uploaded_file",
    "uploaded_files_from_form",
]
