from fastapi import APIRouter, Body, Depends, Response, status
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_dynamic_block_service
from chatbot_blocks.dto.dynamic_block_dto import DynamicBlockRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_user_id
from chatbot_blocks.services.dynamic_block_service import DynamicBlockService
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.dynamic_block_validation import validate_dynamic_block
from chatbot_blocks.validations.result import unwrap

# Mounted under /chatbots/{chatbot_id}/blocks/dynamic
router = APIRouter()


@router.post("/{type_id}", response_model=ResponseModel[DynamicBlockRead], status_code=status.HTTP_201_CREATED)
async def create_dynamic_block(
    chatbot_id: str,
    type_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: DynamicBlockService = Depends(get_dynamic_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    payload = unwrap(validate_dynamic_block(body))
    return ResponseModel.ok(await service.create_block(parsed_chatbot_id, user_id, parsed_type_id, payload))


@router.get("/{type_id}", response_model=ResponseModel[List[DynamicBlockRead]])
async def list_dynamic_blocks(
    chatbot_id: str,
    type_id: str,
    user_id: int = Depends(get_current_user_id),
    service: DynamicBlockService = Depends(get_dynamic_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    return ResponseModel.ok(await service.list_blocks(parsed_chatbot_id, user_id, parsed_type_id))


@router.get("/{type_id}/{entity_id}", response_model=ResponseModel[DynamicBlockRead])
async def get_dynamic_block(
    chatbot_id: str,
    type_id: str,
    entity_id: str,
    user_id: int = Depends(get_current_user_id),
    service: DynamicBlockService = Depends(get_dynamic_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    return ResponseModel.ok(await service.get_block(parsed_chatbot_id, user_id, parsed_type_id, parsed_entity_id))


@router.put("/{type_id}/{entity_id}", response_model=ResponseModel[DynamicBlockRead])
async def update_dynamic_block(
    chatbot_id: str,
    type_id: str,
    entity_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: DynamicBlockService = Depends(get_dynamic_block_service),
):
    """Replace the block's values with the supplied data."""
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    payload = unwrap(validate_dynamic_block(body))
    return ResponseModel.ok(
        await service.update_block(parsed_chatbot_id, user_id, parsed_type_id, parsed_entity_id, payload)
    )


@router.delete("/{type_id}/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dynamic_block(
    chatbot_id: str,
    type_id: str,
    entity_id: str,
    user_id: int = Depends(get_current_user_id),
    service: DynamicBlockService = Depends(get_dynamic_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    await service.delete_block(parsed_chatbot_id, user_id, parsed_type_id, parsed_entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
