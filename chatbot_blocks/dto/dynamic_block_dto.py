from pydantic import BaseModel, ConfigDict
from typing import Any, Dict
from datetime import datetime


class DynamicBlockWrite(BaseModel):
    """
    Body for creating or replacing a dynamic block.

    Only the envelope is checked here; the values are checked against the
    block type's schema by DynamicBlockService.
    """
    model_config = ConfigDict(extra="ignore")

    data: Dict[str, Any]


class DynamicBlockRead(BaseModel):
    entity_id: int
    chatbot_id: int
    type_id: int
    type_name: str
    data: Dict[str, Any]
    created_at: datetime
