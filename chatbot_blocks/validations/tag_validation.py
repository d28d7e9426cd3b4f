from typing import Any, Mapping

from chatbot_blocks.dto.tag_dto import TagCreate, TagFilter, TagUpdate
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_list_tags_query(query: Mapping[str, Any]) -> "ParseResult[TagFilter]":
    return parse_model(TagFilter, dict(query))


def validate_create_tag(body: Any) -> "ParseResult[TagCreate]":
    return parse_model(TagCreate, body)


def validate_update_tag(body: Any) -> "ParseResult[TagUpdate]":
    return parse_model(TagUpdate, body)
