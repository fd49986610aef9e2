"""Pydantic schemas for custom fields, their attachments and uploaded files."""

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CONTENT_TYPE = "application/octet-stream"
ATTACHMENT_FIELD_TYPE = "attachment"


# =============================================================================
# Uploaded Files
# =============================================================================


class UploadedFile(BaseModel):
    """File descriptor produced by the multipart parser.

    ``fieldname`` is the form field the file was posted under. Attachments
    reference it through their ``file_id``.
    """

    model_config = ConfigDict(frozen=True)

    fieldname: str
    originalname: str | None = None
    size: int | None = None
    mimetype: str | None = None
    data: bytes | str | None = None


class StoredFile(BaseModel):
    """Location of a file written to durable storage."""

    url: str
    storage_path: str


# =============================================================================
# Custom Fields
# =============================================================================


class AttachmentFile(BaseModel):
    """Raw payload carried by a bound attachment until it is stored."""

    data: bytes | str | None = None
    type: str = DEFAULT_CONTENT_TYPE


class Attachment(BaseModel):
    """A declared file slot inside an attachment-type custom field.

    Unknown keys sent by the client are kept so a bound copy still carries
    every original property.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    file_id: str | None = Field(default=None, alias="fileId")
    type: str | None = None
    size: int | None = None
    url: str | None = None

    # Set by binding
    file: AttachmentFile | None = None
    temp_file_id: str | None = Field(default=None, alias="tempFileId")
    ready_for_upload: bool | None = Field(default=None, alias="readyForUpload")
    file_not_found: bool | None = Field(default=None, alias="fileNotFound")

    # Set once stored
    storage_url: str | None = Field(default=None, alias="storageUrl")
    storage_path: str | None = Field(default=None, alias="storagePath")


class CustomField(BaseModel):
    """Caller-defined form field. Only ``type == "attachment"`` holds files."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    label: str | None = None
    attachments: list[Attachment] = Field(default_factory=list)

    @property
    def is_attachment_field(self) -> bool:
        return self.type == ATTACHMENT_FIELD_TYPE and bool(self.attachments)
