from typing import Any

from chatbot_blocks.dto.item_tag_dto import ItemTagsUpdate
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_update_item_tags(body: Any) -> "ParseResult[ItemTagsUpdate]":
    return parse_model(ItemTagsUpdate, body)
