"""Pydantic schemas for the per-user contacts collection.

The API schema is not the storage schema: it has no ``owner`` field, and
unknown top-level fields are rejected.
"""

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _check_email_shape(value: str) -> str:
    """Reject malformed addresses but keep the address exactly as submitted."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return value


EmailAddress = Annotated[str, Field(max_length=255), AfterValidator(_check_email_shape)]


class PhoneNumbers(BaseModel):
    """Phone numbers keyed by label. Labels beyond home/work/mobile are kept."""

    model_config = ConfigDict(extra="allow")
    __pydantic_extra__: dict[str, str] = Field(init=False)

    home: str | None = None
    work: str | None = None
    mobile: str | None = None


class ContactIn(BaseModel):
    """Request body for creating or saving a contact."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str | None = Field(None, min_length=1, max_length=64)
    first_name: str = Field(..., alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)
    email: EmailAddress | None = None
    phone_numbers: PhoneNumbers | None = Field(None, alias="phoneNumbers")

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_document(self) -> dict:
        """Return the body as a contact document keyed by API field names."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        if self.phone_numbers is not None:
            document["phoneNumbers"] = self.phone_numbers.model_dump(exclude_none=True)
        return document


class ContactView(BaseModel):
    """Public representation of a contact. Absent fields are omitted."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str | None = None
    phone_numbers: dict[str, str] = Field(default_factory=dict, alias="phoneNumbers")


class RemoveResponse(BaseModel):
    n: int
