from fastapi import APIRouter, Body, Depends, Response, status
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_chatbot_service
from chatbot_blocks.dto.chatbot_dto import ChatbotRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_user_id
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.chatbot_validation import validate_create_chatbot, validate_update_chatbot
from chatbot_blocks.validations.result import unwrap

router = APIRouter()


@router.post("", response_model=ResponseModel[ChatbotRead], status_code=status.HTTP_201_CREATED)
async def create_chatbot(
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: ChatbotService = Depends(get_chatbot_service),
):
    """Create a chatbot owned by the caller."""
    data = unwrap(validate_create_chatbot(body))
    return ResponseModel.ok(await service.create(user_id, data))


@router.get("", response_model=ResponseModel[List[ChatbotRead]])
async def list_chatbots(
    user_id: int = Depends(get_current_user_id),
    service: ChatbotService = Depends(get_chatbot_service),
):
    """List the caller's chatbots, newest first."""
    return ResponseModel.ok(await service.list_for_user(user_id))


@router.get("/{chatbot_id}", response_model=ResponseModel[ChatbotRead])
async def get_chatbot(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ChatbotService = Depends(get_chatbot_service),
):
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    return ResponseModel.ok(await service.get_by_id_for_user(user_id, parsed_id))


@router.patch("/{chatbot_id}", response_model=ResponseModel[ChatbotRead])
async def update_chatbot(
    chatbot_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: ChatbotService = Depends(get_chatbot_service),
):
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    data = unwrap(validate_update_chatbot(body))
    return ResponseModel.ok(await service.update_for_user(user_id, parsed_id, data))


@router.delete("/{chatbot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chatbot(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ChatbotService = Depends(get_chatbot_service),
):
    """Delete a chatbot and every block attached to it."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    await service.delete_for_user(user_id, parsed_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
