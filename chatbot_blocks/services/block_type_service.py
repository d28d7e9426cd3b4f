import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from chatbot_blocks.dto.block_type_dto import BlockTypeCreate, BlockTypeRead, BlockTypeUpdate
from chatbot_blocks.repositories.block_type_repository import BlockTypeRepository
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.exceptions.api_exceptions import ConflictException, NotFoundException

logger = logging.getLogger(__name__)


class BlockTypeService:
    """
    Block type definitions for dynamic blocks.

    A chatbot sees its own types plus the global system templates. Only its
    own types can be changed or deleted; a system template is reported as
    BLOCK_TYPE_NOT_FOUND for writes.
    """

    def __init__(self, chatbots: ChatbotService, block_types: BlockTypeRepository):
        self.chatbots = chatbots
        self.block_types = block_types

    async def create_block_type(self, chatbot_id: int, acting_user_id: Optional[int], data: BlockTypeCreate) -> BlockTypeRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        type_name = data.type_name.upper()
        if await self.block_types.get_by_name(chatbot_id, type_name):
            raise ConflictException("Block type name already exists", "BLOCK_TYPE_NAME_ALREADY_EXISTS")

        try:
            async with self.block_types.atomic():
                block_type = await self.block_types.create(chatbot_id, {
                    "type_name": type_name,
                    "description": data.description,
                    "schema_definition": data.schema_definition.model_dump(exclude_none=True),
                })
        except IntegrityError:
            if await self.block_types.get_by_name(chatbot_id, type_name):
                raise ConflictException("Block type name already exists", "BLOCK_TYPE_NAME_ALREADY_EXISTS")
            raise

        logger.info("Block type %s (%s) created for chatbot %s", block_type.type_id, type_name, chatbot_id)
        return BlockTypeRead.model_validate(block_type)

    async def list_block_types(self, chatbot_id: int, acting_user_id: Optional[int]) -> List[BlockTypeRead]:
        """System templates first, then by name."""
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        block_types = await self.block_types.list_for_chatbot(chatbot_id)
        return [BlockTypeRead.model_validate(t) for t in block_types]

    async def get_block_type(self, chatbot_id: int, acting_user_id: Optional[int], type_id: int) -> BlockTypeRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        block_type = await self.block_types.get_readable(chatbot_id, type_id)
        if not block_type:
            raise NotFoundException("Block type not found", "BLOCK_TYPE_NOT_FOUND")
        return BlockTypeRead.model_validate(block_type)

    async def update_block_type(
        self,
        chatbot_id: int,
        acting_user_id: Optional[int],
        type_id: int,
        data: BlockTypeUpdate,
    ) -> BlockTypeRead:
        try:
            async with self.block_types.atomic():
                await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
                block_type = await self._get_custom(chatbot_id, type_id)

                changes = {}
                if data.type_name is not None:
                    type_name = data.type_name.upper()
                    existing = await self.block_types.get_by_name(chatbot_id, type_name)
                    if existing and existing.type_id != type_id:
                        raise ConflictException("Block type name already exists", "BLOCK_TYPE_NAME_ALREADY_EXISTS")
                    changes["type_name"] = type_name
                if "description" in data.model_fields_set:
                    changes["description"] = data.description
                if data.schema_definition is not None:
                    # Existing instances are not re-checked against the new schema
                    changes["schema_definition"] = data.schema_definition.model_dump(exclude_none=True)

                block_type = await self.block_types.update(block_type, changes)
        except IntegrityError:
            raise ConflictException("Block type name already exists", "BLOCK_TYPE_NAME_ALREADY_EXISTS")

        return BlockTypeRead.model_validate(block_type)

    async def delete_block_type(self, chatbot_id: int, acting_user_id: Optional[int], type_id: int) -> None:
        """Delete a custom type; types that still have instances are refused with BLOCK_TYPE_IN_USE."""
        async with self.block_types.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            await self._get_custom(chatbot_id, type_id)
            if await self.block_types.count_instances(type_id) > 0:
                raise ConflictException("Block type is in use", "BLOCK_TYPE_IN_USE")
            await self.block_types.delete(type_id)

        logger.info("Block type %s deleted from chatbot %s", type_id, chatbot_id)

    async def _get_custom(self, chatbot_id: int, type_id: int):
        block_type = await self.block_types.get_custom(chatbot_id, type_id)
        if not block_type:
            raise NotFoundException("Block type not found", "BLOCK_TYPE_NOT_FOUND")
        return block_type
