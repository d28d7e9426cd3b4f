import logging
from typing import List, Optional

from chatbot_blocks.dto.item_tag_dto import ItemRead, ItemTagsRead, ItemTagsUpdate
from chatbot_blocks.dto.tag_dto import TagRead
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.services.tag_service import TagService
from chatbot_blocks.exceptions.api_exceptions import NotFoundException

logger = logging.getLogger(__name__)


class ItemTagService:
    """
    Reading and replacing the tags of any block attached to a chatbot.

    An item is a block of any kind. Replacement is total: the new set takes
    the place of the old one in a single transaction.
    """

    def __init__(self, chatbots: ChatbotService, blocks: BlockRepository, tags: TagService):
        self.chatbots = chatbots
        self.blocks = blocks
        self.tags = tags

    async def list_items(self, chatbot_id: int, acting_user_id: Optional[int]) -> List[ItemRead]:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        items = await self.blocks.list_items(chatbot_id)
        return [ItemRead.model_validate(item) for item in items]

    async def get_item_tags(self, chatbot_id: int, acting_user_id: Optional[int], entity_id: int) -> ItemTagsRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
        await self._get_member_item(chatbot_id, entity_id)
        return await self._read_tags(chatbot_id, entity_id)

    async def update_item_tags(
        self,
        chatbot_id: int,
        acting_user_id: Optional[int],
        entity_id: int,
        data: ItemTagsUpdate,
    ) -> ItemTagsRead:
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            await self._get_member_item(chatbot_id, entity_id)

            if data.tag_names is not None:
                tag_ids = await self.tags.require_tag_ids_by_names(data.tag_names)
            else:
                tag_ids = await self.tags.ensure_tag_ids_exist(data.tag_ids)

            await self.blocks.replace_tags(entity_id, tag_ids)

        logger.info("Tags of block %s replaced (%d tags)", entity_id, len(tag_ids))
        return await self._read_tags(chatbot_id, entity_id)

    async def _get_member_item(self, chatbot_id: int, entity_id: int):
        item = await self.blocks.get_item(chatbot_id, entity_id)
        if not item:
            raise NotFoundException("Item not found", "ITEM_NOT_FOUND")
        return item

    async def _read_tags(self, chatbot_id: int, entity_id: int) -> ItemTagsRead:
        tags = await self.blocks.list_item_tags(entity_id)
        return ItemTagsRead(
            entity_id=entity_id,
            chatbot_id=chatbot_id,
            tags=[TagRead.model_validate(tag) for tag in tags],
        )
