from fastapi import APIRouter, Body, Depends, Response, status
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_static_block_service
from chatbot_blocks.dto.contact_dto import ContactRead
from chatbot_blocks.dto.schedule_dto import ScheduleRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_user_id
from chatbot_blocks.services.static_block_service import StaticBlockService
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.static_block_validation import (
    validate_create_contact,
    validate_create_schedule,
    validate_update_contact,
    validate_update_schedule,
)
from chatbot_blocks.validations.result import unwrap

# Mounted under /chatbots/{chatbot_id}/blocks
router = APIRouter()


@router.post("/contact", response_model=ResponseModel[ContactRead], status_code=status.HTTP_201_CREATED)
async def create_contact(
    chatbot_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    """Create the chatbot's single contact block."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    data = unwrap(validate_create_contact(body))
    return ResponseModel.ok(await service.create_contact(parsed_id, user_id, data))


@router.get("/contact", response_model=ResponseModel[ContactRead])
async def get_contact(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    return ResponseModel.ok(await service.get_contact(parsed_id, user_id))


@router.put("/contact", response_model=ResponseModel[ContactRead])
async def update_contact(
    chatbot_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    """Merge the supplied fields onto the existing contact block."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    data = unwrap(validate_update_contact(body))
    return ResponseModel.ok(await service.update_contact(parsed_id, user_id, data))


@router.post("/schedules", response_model=ResponseModel[ScheduleRead], status_code=status.HTTP_201_CREATED)
async def create_schedule(
    chatbot_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    data = unwrap(validate_create_schedule(body))
    return ResponseModel.ok(await service.create_schedule(parsed_id, user_id, data))


@router.get("/schedules", response_model=ResponseModel[List[ScheduleRead]])
async def list_schedules(
    chatbot_id: str,
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    """Schedules in creation order."""
    parsed_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    return ResponseModel.ok(await service.list_schedules(parsed_id, user_id))


@router.put("/schedules/{entity_id}", response_model=ResponseModel[ScheduleRead])
async def update_schedule(
    chatbot_id: str,
    entity_id: str,
    body: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    data = unwrap(validate_update_schedule(body))
    return ResponseModel.ok(await service.update_schedule(parsed_chatbot_id, user_id, parsed_entity_id, data))


@router.delete("/schedules/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(
    chatbot_id: str,
    entity_id: str,
    user_id: int = Depends(get_current_user_id),
    service: StaticBlockService = Depends(get_static_block_service),
):
    parsed_chatbot_id = unwrap(validate_path_id(chatbot_id, "chatbotId"))
    parsed_entity_id = unwrap(validate_path_id(entity_id, "entityId"))
    await service.delete_schedule(parsed_chatbot_id, user_id, parsed_entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
