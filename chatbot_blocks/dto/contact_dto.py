from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional

from chatbot_blocks.dto.common import blank_to_none

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

OPTIONAL_CONTACT_FIELDS = ("phone", "email", "address_text", "city", "country", "hours_text")


class ContactCreate(BaseModel):
    """Body for creating the contact block. Only org_name is required."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    org_name: str = Field(..., min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=190, pattern=EMAIL_PATTERN)
    address_text: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=120)
    country: Optional[str] = Field(None, max_length=120)
    hours_text: Optional[str] = Field(None, max_length=255)

    @field_validator(*OPTIONAL_CONTACT_FIELDS, mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)


class ContactUpdate(BaseModel):
    """
    Partial contact update.

    Fields left out (or blank) are not touched; at least one field must
    carry a value.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    org_name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=190, pattern=EMAIL_PATTERN)
    address_text: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=120)
    country: Optional[str] = Field(None, max_length=120)
    hours_text: Optional[str] = Field(None, max_length=255)

    @field_validator("org_name", *OPTIONAL_CONTACT_FIELDS, mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided for contact update")
        return self


class ContactRead(BaseModel):
    entity_id: int
    chatbot_id: int
    org_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address_text: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    hours_text: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
