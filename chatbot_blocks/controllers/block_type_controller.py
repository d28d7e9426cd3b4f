from fastapi import APIRouter, Body, Depends, Response, status
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_block_type_service
from chatbot_blocks.dto.block_type_dto import BlockTypeRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_user_id
from chatbot_blocks.services.block_type_service import BlockTypeService
from chatbot_blocks.validations.block_type_validation import validate_create_block_type, validate_update_block_type
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.result import unwrap

# Mounted under /chatbots/{chatbot_id}/block-types
router = APIRouter()


@router.post("", response_model=ResponseModel[BlockTypeRead], status_code=status.HTTP_201_CREATED)
async def create_block_type(
    chatbot_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: BlockTypeService = Depends(get_block_type_service),
):
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    data = unwrap(validate_create_block_type(body))
    return ResponseModel.ok(await service.create_block_type(parsed_id, user_id, data))


@router.get("", response_model=ResponseModel[List[BlockTypeRead]])
async def list_block_types(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: BlockTypeService = Depends(get_block_type_service),
):
    """The chatbot's own types plus the global system templates."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    return ResponseModel.ok(await service.list_block_types(parsed_id, user_id))


@router.get("/{type_id}", response_model=ResponseModel[BlockTypeRead])
async def get_block_type(
    chatbot_id: str,
    type_id: str,
    user_id: int = Depends(get_current_user_id),
    service: BlockTypeService = Depends(get_block_type_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    return ResponseModel.ok(await service.get_block_type(parsed_chatbot_id, user_id, parsed_type_id))


@router.put("/{type_id}", response_model=ResponseModel[BlockTypeRead])
async def update_block_type(
    chatbot_id: str,
    type_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: BlockTypeService = Depends(get_block_type_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    data = unwrap(validate_update_block_type(body))
    return ResponseModel.ok(await service.update_block_type(parsed_chatbot_id, user_id, parsed_type_id, data))


@router.delete("/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_block_type(
    chatbot_id: str,
    type_id: str,
    user_id: int = Depends(get_current_user_id),
    service: BlockTypeService = Depends(get_block_type_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_type_id = unwrap(validate_path_id(type_id, "typeId"))
    await service.delete_block_type(parsed_chatbot_id, user_id, parsed_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
