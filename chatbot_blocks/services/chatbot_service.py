import logging
from typing import List, Optional

from chatbot_blocks.models.chatbot import Chatbot
from chatbot_blocks.dto.chatbot_dto import ChatbotCreate, ChatbotRead, ChatbotUpdate
from chatbot_blocks.repositories.chatbot_repository import ChatbotRepository
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.repositories.block_type_repository import BlockTypeRepository
from chatbot_blocks.exceptions.api_exceptions import NotFoundException, UnauthorizedException

logger = logging.getLogger(__name__)


class ChatbotService:
    """
    Chatbot CRUD with the ownership gate.

    A chatbot owned by someone else is reported exactly like a missing one,
    so callers cannot enumerate other tenants' ids.
    """

    def __init__(self, chatbots: ChatbotRepository, blocks: BlockRepository, block_types: BlockTypeRepository):
        self.chatbots = chatbots
        self.blocks = blocks
        self.block_types = block_types

    async def ensure_owned(self, owner_id: Optional[int], chatbot_id: int) -> Chatbot:
        """Return the chatbot if owner_id owns it, else raise."""
        if owner_id is None:
            raise UnauthorizedException("Authorization token is required")

        chatbot = await self.chatbots.get_for_owner(owner_id, chatbot_id)
        if not chatbot:
            raise NotFoundException("Chatbot not found", "CHATBOT_NOT_FOUND")
        return chatbot

    async def create(self, owner_id: Optional[int], data: ChatbotCreate) -> ChatbotRead:
        if owner_id is None:
            raise UnauthorizedException("Authorization token is required")

        async with self.chatbots.atomic():
            chatbot = await self.chatbots.create(owner_id, data)

        logger.info("Chatbot %s created for user %s", chatbot.id, owner_id)
        return ChatbotRead.model_validate(chatbot)

    async def list_for_user(self, owner_id: Optional[int]) -> List[ChatbotRead]:
        if owner_id is None:
            raise UnauthorizedException("Authorization token is required")

        chatbots = await self.chatbots.list_for_owner(owner_id)
        return [ChatbotRead.model_validate(c) for c in chatbots]

    async def get_by_id_for_user(self, owner_id: Optional[int], chatbot_id: int) -> ChatbotRead:
        chatbot = await self.ensure_owned(owner_id, chatbot_id)
        return ChatbotRead.model_validate(chatbot)

    async def update_for_user(self, owner_id: Optional[int], chatbot_id: int, data: ChatbotUpdate) -> ChatbotRead:
        async with self.chatbots.atomic():
            chatbot = await self.ensure_owned(owner_id, chatbot_id)
            chatbot = await self.chatbots.update(chatbot, data)

        return ChatbotRead.model_validate(chatbot)

    async def delete_for_user(self, owner_id: Optional[int], chatbot_id: int) -> None:
        """
        Delete a chatbot together with every block and block type attached to it.

        Nothing outlives its chatbot: entity rows, payload rows, tag links and
        custom block types go in the same transaction as the chatbot row.
        """
        async with self.chatbots.atomic():
            await self.ensure_owned(owner_id, chatbot_id)
            entity_ids = await self.blocks.list_entity_ids(chatbot_id)
            await self.blocks.delete_blocks(entity_ids)
            # Instances go first, they reference the chatbot's block types
            await self.block_types.delete_for_chatbot(chatbot_id)
            await self.chatbots.delete(chatbot_id)

        logger.info("Chatbot %s deleted by user %s (%d blocks removed)", chatbot_id, owner_id, len(entity_ids))
