"""
Parse functions for block type bodies.

The schema definition is checked for shape here (field kinds, select
options, unique names). Name uniqueness within a chatbot is checked by
BlockTypeService.
"""
from typing import Any

from chatbot_blocks.dto.block_type_dto import BlockTypeCreate, BlockTypeUpdate
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_create_block_type(body: Any) -> "ParseResult[BlockTypeCreate]":
    return parse_model(BlockTypeCreate, body)


def validate_update_block_type(body: Any) -> "ParseResult[BlockTypeUpdate]":
    return parse_model(BlockTypeUpdate, body)
