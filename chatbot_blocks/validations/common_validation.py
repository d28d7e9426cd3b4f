import re
from typing import Any

from chatbot_blocks.validations.result import ParseResult, Parsed, Rejected

DIGITS = re.compile(r"^[0-9]+$")


def validate_path_id(raw: Any, field_name: str) -> "ParseResult[int]":
    """Path ids must be positive integers written in plain decimal."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and DIGITS.match(raw.strip()):
        value = int(raw.strip())
    else:
        return Rejected([f"{field_name}: must be a positive integer"])

    if value <= 0:
        return Rejected([f"{field_name}: must be a positive integer"])
    return Parsed(value)
