from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime

from chatbot_blocks.dto.common import blank_to_none

FieldKind = Literal["string", "number", "boolean", "date", "select"]


class FieldDefinition(BaseModel):
    """One field of a block type schema."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)
    label: str = Field(..., min_length=1, max_length=120)
    type: FieldKind
    required: bool = False
    options: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_options(self):
        if self.type == "select":
            if not self.options:
                raise ValueError(f"{self.name}: options must be a non-empty string array when type is select")
            if any(not option.strip() for option in self.options):
                raise ValueError(f"{self.name}: options must be non-empty strings")
        return self


class SchemaDefinition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fields: List[FieldDefinition] = Field(..., min_length=1)

    @field_validator("fields")
    @classmethod
    def unique_names(cls, value: List[FieldDefinition]) -> List[FieldDefinition]:
        names = [f.name for f in value]
        if len(names) != len(set(names)):
            raise ValueError("field names must be unique")
        return value


class BlockTypeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    type_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    schema_definition: SchemaDefinition

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value):
        return blank_to_none(value)


class BlockTypeUpdate(BaseModel):
    """Partial update; description may be cleared with null or an empty string."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    type_name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    schema_definition: Optional[SchemaDefinition] = None

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for block type update")
        return self


class BlockTypeRead(BaseModel):
    type_id: int
    chatbot_id: Optional[int] = None
    type_name: str
    description: Optional[str] = None
    schema_definition: Dict[str, Any]
    is_system: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def scope(self) -> str:
        return "GLOBAL" if self.chatbot_id is None else "CHATBOT"
