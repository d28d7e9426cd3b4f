"""
Parse functions for contact and schedule bodies.

They check shape only (types, lengths, formats, required fields). Rules that
depend on stored state, including the merged open/close ordering on updates,
belong to StaticBlockService.
"""
from typing import Any

from chatbot_blocks.dto.contact_dto import ContactCreate, ContactUpdate
from chatbot_blocks.dto.schedule_dto import ScheduleCreate, ScheduleUpdate
from chatbot_blocks.validations.result import ParseResult, parse_model


def validate_create_contact(body: Any) -> "ParseResult[ContactCreate]":
    return parse_model(ContactCreate, body)


def validate_update_contact(body: Any) -> "ParseResult[ContactUpdate]":
    return parse_model(ContactUpdate, body)


def validate_create_schedule(body: Any) -> "ParseResult[ScheduleCreate]":
    return parse_model(ScheduleCreate, body)


def validate_update_schedule(body: Any) -> "ParseResult[ScheduleUpdate]":
    return parse_model(ScheduleUpdate, body)
