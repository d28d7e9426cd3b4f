from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_blocks.database.database import get_db
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.repositories.block_type_repository import BlockTypeRepository
from chatbot_blocks.repositories.chatbot_repository import ChatbotRepository
from chatbot_blocks.repositories.tag_repository import TagRepository
from chatbot_blocks.services.block_type_service import BlockTypeService
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.services.dynamic_block_service import DynamicBlockService
from chatbot_blocks.services.item_tag_service import ItemTagService
from chatbot_blocks.services.static_block_service import StaticBlockService
from chatbot_blocks.services.tag_service import TagService


# Services are built per request around the request's session


def get_chatbot_service(db: AsyncSession = Depends(get_db)) -> ChatbotService:
    return ChatbotService(ChatbotRepository(db), BlockRepository(db), BlockTypeRepository(db))


def get_tag_service(db: AsyncSession = Depends(get_db)) -> TagService:
    return TagService(TagRepository(db))


def get_static_block_service(
    db: AsyncSession = Depends(get_db),
    chatbots: ChatbotService = Depends(get_chatbot_service),
    tags: TagService = Depends(get_tag_service),
) -> StaticBlockService:
    return StaticBlockService(chatbots=chatbots, blocks=BlockRepository(db), tags=tags)


def get_block_type_service(
    db: AsyncSession = Depends(get_db),
    chatbots: ChatbotService = Depends(get_chatbot_service),
) -> BlockTypeService:
    return BlockTypeService(chatbots=chatbots, block_types=BlockTypeRepository(db))


def get_dynamic_block_service(
    db: AsyncSession = Depends(get_db),
    chatbots: ChatbotService = Depends(get_chatbot_service),
    tags: TagService = Depends(get_tag_service),
) -> DynamicBlockService:
    return DynamicBlockService(
        chatbots=chatbots,
        block_types=BlockTypeRepository(db),
        blocks=BlockRepository(db),
        tags=tags,
    )


def get_item_tag_service(
    db: AsyncSession = Depends(get_db),
    chatbots: ChatbotService = Depends(get_chatbot_service),
    tags: TagService = Depends(get_tag_service),
) -> ItemTagService:
    return ItemTagService(chatbots=chatbots, blocks=BlockRepository(db), tags=tags)
