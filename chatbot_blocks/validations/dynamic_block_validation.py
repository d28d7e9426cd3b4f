from typing import Any

from chatbot_blocks.dto.dynamic_block_dto import DynamicBlockWrite
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_dynamic_block(body: Any) -> "ParseResult[DynamicBlockWrite]":
    """Only checks that data is an object; its values depend on the block type."""
    return parse_model(DynamicBlockWrite, body)
