"""Helpers for turning multipart uploads into file descriptors."""

from __future__ import annotations

from os import SEEK_END

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from bizdesk.schemas.custom_field import UploadedFile


async def get_upload_file_size(file: UploadFile) -> int:
    """Read size from the underlying file object without loading into memory."""

    def _get_size() -> int:
        stream = file.file
        original_pos = stream.tell()
        try:
            stream.seek(0, SEEK_END)
            return stream.tell()
        finally:
            stream.seek(original_pos)

    return await run_in_threadpool(_get_size)


async def read_uploaded_file(fieldname: str, upload: UploadFile) -> UploadedFile:
    """Build an UploadedFile descriptor for a file posted under ``fieldname``."""
    size = upload.size
    if size is None:
        size = await get_upload_file_size(upload)

    await upload.seek(0)
    data = await upload.read()
    await upload.seek(0)

    return UploadedFile(
        fieldname=fieldname,
        originalname=upload.filename,
        size=size,
        mimetype=upload.content_type,
        data=data,
    )


async def uploaded_files_from_form(form: FormData) -> list[UploadedFile]:
    """Every uploaded file in a parsed multipart form, in posted order."""
    files: list[UploadedFile] = []
    for fieldname, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.append(await read_uploaded_file(fieldname, value))
    return files
