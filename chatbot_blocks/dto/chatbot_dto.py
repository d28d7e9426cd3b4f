from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

DOMAIN_PATTERN = r"^\S+\.\S+$"


class ChatbotCreate(BaseModel):
    """Body for creating a chatbot."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    display_name: str = Field(..., min_length=1, max_length=100, description="Label shown in the admin dashboard")
    domain: str = Field(..., min_length=1, max_length=255, pattern=DOMAIN_PATTERN, description="Site the chatbot is mounted on")

    @field_validator("domain")
    @classmethod
    def lower_domain(cls, value: str) -> str:
        return value.lower()


class ChatbotUpdate(BaseModel):
    """Partial update; at least one field is required."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    domain: Optional[str] = Field(None, min_length=1, max_length=255, pattern=DOMAIN_PATTERN)

    @field_validator("domain")
    @classmethod
    def lower_domain(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else value

    @model_validator(mode="after")
    def require_one_field(self):
        if self.display_name is None and self.domain is None:
            raise ValueError("At least one of display_name or domain must be provided")
        return self


class ChatbotRead(BaseModel):
    id: int
    owner_id: int
    display_name: str
    domain: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
