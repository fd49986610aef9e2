"""Pydantic schemas for form submissions and project context."""

from pydantic import BaseModel, ConfigDict, Field

from bizdesk.types import JsonValue


class FormFieldResult(BaseModel):
    """A single answered form field: the label shown to the client and its value.

    ``value`` left out of the payload entirely counts as missing. An explicit
    null, 0, "" or false is a defined value. Values are any JSON: multi-select
    answers arrive as lists.
    """

    model_config = ConfigDict(extra="ignore")

    label: str | None = None
    value: JsonValue = None

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set


class Submission(BaseModel):
    """Lead form submission as supplied by the submission store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    submission_id: str | None = Field(default=None, alias="submissionId")
    client_name: str | None = Field(default=None, alias="clientName")
    client_email: str | None = Field(default=None, alias="clientEmail")
    client_phone: str | None = Field(default=None, alias="clientPhone")
    client_company: str | None = Field(default=None, alias="clientCompany")
    form_name: str | None = Field(default=None, alias="formName")
    # Insertion order is kept, so later labels overwrite earlier ones deterministically
    form_values: dict[str, FormFieldResult | None] = Field(default_factory=dict, alias="formValues")


class ProjectContext(BaseModel):
    """Project-level values used as template fallbacks."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
