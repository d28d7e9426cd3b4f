from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime

from chatbot_blocks.dto.tag_dto import TagRead


class ItemTagsUpdate(BaseModel):
    """
    Replacement tag set for one block, given either by names or by ids.

    Exactly one of the two lists must be present and non-empty.
    """
    model_config = ConfigDict(extra="ignore")

    tag_names: Optional[List[str]] = Field(None, min_length=1)
    tag_ids: Optional[List[int]] = Field(None, min_length=1)

    @field_validator("tag_names")
    @classmethod
    def normalize_names(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        normalized = []
        for index, name in enumerate(value):
            if not name.strip() or len(name.strip()) > 50:
                raise ValueError(f"tag_names[{index}] must be a non-empty string up to 50 characters")
            if name.strip().upper() not in normalized:
                normalized.append(name.strip().upper())
        return normalized

    @field_validator("tag_ids")
    @classmethod
    def normalize_ids(cls, value: Optional[List[int]]) -> Optional[List[int]]:
        if value is None:
            return value
        for index, tag_id in enumerate(value):
            if tag_id <= 0:
                raise ValueError(f"tag_ids[{index}] must be a positive integer")
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def exactly_one_mode(self):
        if self.tag_names is None and self.tag_ids is None:
            raise ValueError("Either tag_names or tag_ids must be provided")
        if self.tag_names is not None and self.tag_ids is not None:
            raise ValueError("Provide either tag_names or tag_ids, not both")
        return self


class ItemRead(BaseModel):
    """Any block attached to a chatbot, whatever its kind."""
    entity_id: int
    chatbot_id: int
    block_type: str
    type_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("block_type", mode="before")
    @classmethod
    def enum_value(cls, value):
        return getattr(value, "value", value)


class ItemTagsRead(BaseModel):
    entity_id: int
    chatbot_id: int
    tags: List[TagRead]
