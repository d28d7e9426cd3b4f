from chatbot_blocks.controllers.block_type_controller import router as block_type_router
from chatbot_blocks.controllers.chatbot_controller import router as chatbot_router
from chatbot_blocks.controllers.dynamic_block_controller import router as dynamic_block_router
from chatbot_blocks.controllers.item_tag_controller import router as item_tag_router
from chatbot_blocks.controllers.static_block_controller import router as static_block_router
from chatbot_blocks.controllers.tag_controller import router as tag_router

__all__ = [
    "block_type_router",
    "chatbot_router",
    "dynamic_block_router",
    "item_tag_router",
    "static_block_router",
    "tag_router",
]
