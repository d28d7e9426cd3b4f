from fastapi import APIRouter, Body, Depends, Request, Response, status
from typing import Any, Dict, List

from chatbot_blocks.controllers.dependencies import get_tag_service
from chatbot_blocks.dto.tag_dto import TagRead
from chatbot_blocks.dto.response import ResponseModel
from chatbot_blocks.middlewares.auth_middleware import get_current_admin_id, get_current_user_id
from chatbot_blocks.services.tag_service import TagService
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.tag_validation import validate_create_tag, validate_list_tags_query, validate_update_tag
from chatbot_blocks.validations.result import unwrap

# Every tag route needs a signed-in caller; changes to the shared catalog need an admin
router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.get("", response_model=ResponseModel[List[TagRead]])
async def list_tags(
    request: Request,
    service: TagService = Depends(get_tag_service),
):
    """List tags, filtered by ?category=, ?is_custom=true|false and ?search=."""
    tag_filter = unwrap(validate_list_tags_query(request.query_params))
    return ResponseModel.ok(await service.list_tags(tag_filter))


@router.post(
    "",
    response_model=ResponseModel[TagRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_admin_id)],
)
async def create_tag(
    body: Dict[str, Any] = Body(...),
    service: TagService = Depends(get_tag_service),
):
    data = unwrap(validate_create_tag(body))
    return ResponseModel.ok(await service.create_custom_tag(data))


@router.patch("/{tag_id}", response_model=ResponseModel[TagRead], dependencies=[Depends(get_current_admin_id)])
async def update_tag(
    tag_id: str,
    body: Dict[str, Any] = Body(...),
    service: TagService = Depends(get_tag_service),
):
    parsed_id = unwrap(validate_path_id(tag_id, "tagId"))
    data = unwrap(validate_update_tag(body))
    return ResponseModel.ok(await service.update_tag(parsed_id, data))


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(get_current_admin_id)],
)
async def delete_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
):
    parsed_id = unwrap(validate_path_id(tag_id, "tagId"))
    await service.delete_tag(parsed_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
