from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_item_tag_service
from chatbot_blocks.dto.item_tag_dto import ItemRead, ItemTagsRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_user_id
from chatbot_blocks.services.item_tag_service import ItemTagService
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.item_tag_validation import validate_update_item_tags
from chatbot_blocks.validations.result import unwrap

# Mounted under /chatbots/{chatbot_id}/items
router = APIRouter()


@router.get("", response_model=ResponseModel[List[ItemRead]])
async def list_items(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ItemTagService = Depends(get_item_tag_service),
):
    """Every block of the chatbot, whatever its kind."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    return ResponseModel.ok(await service.list_items(parsed_id, user_id))


@router.get("/{entity_id}/tags", response_model=ResponseModel[ItemTagsRead])
async def get_item_tags(
    chatbot_id: str,
    entity_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ItemTagService = Depends(get_item_tag_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    return ResponseModel.ok(await service.get_item_tags(parsed_chatbot_id, user_id, parsed_entity_id))


@router.put("/{entity_id}/tags", response_model=ResponseModel[ItemTagsRead])
async def update_item_tags(
    chatbot_id: str,
    entity_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: ItemTagService = Depends(get_item_tag_service),
):
    """Replace the block's tag set with the given names or ids."""
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    data = unwrap(validate_update_item_tags(body))
    return ResponseModel.ok(await service.update_item_tags(parsed_chatbot_id, user_id, parsed_entity_id, data))
