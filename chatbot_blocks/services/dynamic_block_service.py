import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from chatbot_blocks.models.block_entity import BlockEntity
from chatbot_blocks.models.block_type_definition import BlockTypeDefinition
from chatbot_blocks.dto.block_type_dto import FieldDefinition, SchemaDefinition
from chatbot_blocks.dto.dynamic_block_dto import DynamicBlockRead, DynamicBlockWrite
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.repositories.block_type_repository import BlockTypeRepository
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.services.tag_service import TagService
from chatbot_blocks.exceptions.api_exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


def _invalid_data(details: Dict[str, Any]) -> ValidationException:
    return ValidationException(details=details, error_code="INVALID_DYNAMIC_DATA")


def _is_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        datetime.fromisoformat(text)
    except ValueError:
        return False
    return True


def _matches(field: FieldDefinition, value: Any) -> bool:
    if field.type == "string":
        return isinstance(value, str)
    if field.type == "number":
        # bool is an int subclass but never a number here
        return isinstance(value, (int, float)) and not isinstance(value, bool) and not (
            isinstance(value, float) and math.isnan(value)
        )
    if field.type == "boolean":
        return isinstance(value, bool)
    if field.type == "date":
        return _is_date(value)
    return isinstance(value, str) and value in field.options


def check_data_against_schema(data: Dict[str, Any], schema_definition: Any) -> None:
    """
    Raise unless data satisfies the block type schema.

    Unknown keys are refused, required fields must be present and non-empty,
    and present values must match their declared type. A stored schema that
    does not parse is INVALID_DYNAMIC_SCHEMA, every other failure is
    INVALID_DYNAMIC_DATA.
    """
    try:
        schema = SchemaDefinition.model_validate(schema_definition or {})
    except ValidationError:
        raise ValidationException("Block type schema is invalid", error_code="INVALID_DYNAMIC_SCHEMA")

    known = {field.name for field in schema.fields}
    unknown = [key for key in data if key not in known]
    if unknown:
        raise _invalid_data({"unknown_fields": unknown})

    for field in schema.fields:
        value = data.get(field.name)
        if value is None or value == "":
            if field.required:
                raise _invalid_data({"field": field.name, "reason": "MISSING_REQUIRED_FIELD"})
            continue

        if not _matches(field, value):
            if field.type == "select":
                raise _invalid_data({"field": field.name, "reason": "INVALID_SELECT_OPTION", "options": field.options})
            raise _invalid_data({"field": field.name, "expected": field.type})


class DynamicBlockService:
    """
    Instances of user-defined block types.

    Same gate order as the static blocks: chatbot ownership, then the block
    type must be readable by the chatbot, then the instance must belong to
    both. Values are checked against the type's schema on every write.
    """

    def __init__(
        self,
        chatbots: ChatbotService,
        block_types: BlockTypeRepository,
        blocks: BlockRepository,
        tags: TagService,
    ):
        self.chatbots = chatbots
        self.block_types = block_types
        self.blocks = blocks
        self.tags = tags

    async def create_block(
        self,
        chatbot_id: int,
        acting_user_id: Optional[int],
        type_id: int,
        payload: DynamicBlockWrite,
    ) -> DynamicBlockRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
        block_type = await self._get_type(chatbot_id, type_id)
        check_data_against_schema(payload.data, block_type.schema_definition)

        tag_ids = await self._default_tag_ids(block_type.type_name)
        async with self.blocks.atomic():
            entity = await self.blocks.create_dynamic(chatbot_id, type_id, payload.data)
            await self.blocks.attach_tags(entity.entity_id, tag_ids)

        logger.info("Dynamic block %s of type %s created for chatbot %s", entity.entity_id, type_id, chatbot_id)
        return self._to_read(entity, block_type)

    async def list_blocks(self, chatbot_id: int, acting_user_id: Optional[int], type_id: int) -> List[DynamicBlockRead]:
        """Newest first."""
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
        block_type = await self._get_type(chatbot_id, type_id)

        entities = await self.blocks.list_dynamic(chatbot_id, type_id)
        return [self._to_read(entity, block_type) for entity in entities]

    async def get_block(self, chatbot_id: int, acting_user_id: Optional[int], type_id: int, entity_id: int) -> DynamicBlockRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
        block_type = await self._get_type(chatbot_id, type_id)
        entity = await self._get_member_block(chatbot_id, type_id, entity_id)
        return self._to_read(entity, block_type)

    async def update_block(
        self,
        chatbot_id: int,
        acting_user_id: Optional[int],
        type_id: int,
        entity_id: int,
        payload: DynamicBlockWrite,
    ) -> DynamicBlockRead:
        """Replace the block's values; fields left out are dropped, not kept."""
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            block_type = await self._get_type(chatbot_id, type_id)
            entity = await self._get_member_block(chatbot_id, type_id, entity_id)
            check_data_against_schema(payload.data, block_type.schema_definition)
            entity = await self.blocks.replace_dynamic_data(entity, payload.data)

        return self._to_read(entity, block_type)

    async def delete_block(self, chatbot_id: int, acting_user_id: Optional[int], type_id: int, entity_id: int) -> None:
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            await self._get_type(chatbot_id, type_id)
            await self._get_member_block(chatbot_id, type_id, entity_id)
            await self.blocks.delete_blocks([entity_id])

        logger.info("Dynamic block %s deleted from chatbot %s", entity_id, chatbot_id)

    # --- Helpers -------------------------------------------------------------

    async def _get_type(self, chatbot_id: int, type_id: int) -> BlockTypeDefinition:
        block_type = await self.block_types.get_readable(chatbot_id, type_id)
        if not block_type:
            raise NotFoundException("Block type not found", "BLOCK_TYPE_NOT_FOUND")
        return block_type

    async def _get_member_block(self, chatbot_id: int, type_id: int, entity_id: int) -> BlockEntity:
        entity = await self.blocks.get_dynamic(chatbot_id, type_id, entity_id)
        if not entity:
            raise NotFoundException("Dynamic block not found", "DYNAMIC_BLOCK_NOT_FOUND")
        return entity

    async def _default_tag_ids(self, type_name: str) -> List[int]:
        names = self.tags.get_default_tags_for_dynamic(type_name)
        if not names:
            return []
        resolved = await self.tags.resolve_tag_names(names)
        return list(resolved.values())

    @staticmethod
    def _to_read(entity: BlockEntity, block_type: BlockTypeDefinition) -> DynamicBlockRead:
        return DynamicBlockRead(
            entity_id=entity.entity_id,
            chatbot_id=entity.chatbot_id,
            type_id=entity.type_id,
            type_name=block_type.type_name,
            data=entity.data or {},
            created_at=entity.created_at,
        )
