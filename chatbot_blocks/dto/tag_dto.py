from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional

from chatbot_blocks.dto.common import blank_to_none


def normalize_synonyms(value):
    if value is None:
        return value
    if not isinstance(value, list):
        raise ValueError("synonyms must be an array of strings")
    normalized = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str) or not entry.strip() or len(entry.strip()) > 100:
            raise ValueError(f"synonyms[{index}] must be a non-empty string up to 100 chars")
        if entry.strip() not in normalized:
            normalized.append(entry.strip())
    return normalized


class TagFilter(BaseModel):
    """Query parameters accepted by the tag listing."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    category: Optional[str] = Field(None, max_length=50)
    is_custom: Optional[bool] = None
    search: Optional[str] = Field(None, max_length=100)

    @field_validator("category", "search", mode="before")
    @classmethod
    def blank_text(cls, value):
        return blank_to_none(value)

    @field_validator("is_custom", mode="before")
    @classmethod
    def parse_flag(cls, value):
        if value is None or isinstance(value, bool):
            return value
        if value not in ("true", "false"):
            raise ValueError('is_custom must be "true" or "false"')
        return value == "true"


class TagCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=50)
    synonyms: Optional[List[str]] = None

    @field_validator("description", "category", mode="before")
    @classmethod
    def blank_text(cls, value):
        return blank_to_none(value)

    @field_validator("synonyms", mode="before")
    @classmethod
    def check_synonyms(cls, value):
        return normalize_synonyms(value)


class TagUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=50)
    synonyms: Optional[List[str]] = None

    @field_validator("synonyms", mode="before")
    @classmethod
    def check_synonyms(cls, value):
        return normalize_synonyms(value)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class TagRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    is_custom: bool
    synonyms: List[str] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("synonyms", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return value or []
