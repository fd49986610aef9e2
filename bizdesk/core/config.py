"""Application configuration with environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Template rendering
    # strftime format used for {{submission_date}} and date-valued fields
    SUBMISSION_DATE_FORMAT: str = "%m/%d/%Y"

    # Attachment binding
    # "ready": a matched upload with no payload is still marked ready_for_upload
    # "not_found": a matched upload with no payload is marked file_not_found
    ATTACHMENT_EMPTY_DATA_POLICY: Literal["ready", "not_found"] = "ready"

    # Storage
    STORAGE_BACKEND: Literal["local", "s3"] = "local"
    LOCAL_STORAGE_PATH: str = "/tmp/bizdesk-files"
    S3_BUCKET: str = "bizdesk-files"
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: str = ""  # S3-compatible endpoint (MinIO, GCS XML API)
    S3_PUBLIC_BASE_URL: str = ""  # CDN/public bucket URL; falls back to the S3 object URL
    S3_URL_STYLE: str = ""  # "path" or "virtual"
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""

    # Automation emails
    DEFAULT_EMAIL_REPLY_TO: str = ""


settings = Settings()
