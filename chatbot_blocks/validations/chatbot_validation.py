from typing import Any

from chatbot_blocks.dto.chatbot_dto import ChatbotCreate, ChatbotUpdate
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_create_chatbot(body: Any) -> "ParseResult[ChatbotCreate]":
    return parse_model(ChatbotCreate, body)


def validate_update_chatbot(body: Any) -> "ParseResult[ChatbotUpdate]":
    return parse_model(ChatbotUpdate, body)
