# Import every model so SQLAlchemy metadata is complete
from chatbot_blocks.models.role import Role
from chatbot_blocks.models.user import User
from chatbot_blocks.models.chatbot import Chatbot
from chatbot_blocks.models.block_type_definition import BlockTypeDefinition
from chatbot_blocks.models.block_entity import BlockEntity, BlockType
from chatbot_blocks.models.contact_block import ContactBlock
from chatbot_blocks.models.schedule_block import ScheduleBlock
from chatbot_blocks.models.tag import Tag
from chatbot_blocks.models.block_entity_tag import BlockEntityTag

__all__ = [
    "Role",
    "User",
    "Chatbot",
    "BlockTypeDefinition",
    "BlockEntity",
    "BlockType",
    "ContactBlock",
    "ScheduleBlock",
    "Tag",
    "BlockEntityTag",
]
