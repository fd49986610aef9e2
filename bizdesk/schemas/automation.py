"""Pydantic schemas for lead form automations."""

from pydantic import BaseModel, ConfigDict, Field


class AutomationEmailConfig(BaseModel):
    """Email automation settings stored on a lead form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    subject: str = ""
    body: str = ""
    cc_team: bool = Field(default=False, alias="ccTeam")


class EmailDraft(BaseModel):
    """Rendered email handed to the email sender."""

    to: str
    subject: str
    html: str
    cc: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
