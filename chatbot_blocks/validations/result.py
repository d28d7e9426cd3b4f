from dataclasses import dataclass, field
from typing import Any, Generic, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from chatbot_blocks.exceptions.api_exceptions import ValidationException

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Rejected:
    reasons: List[str] = field(default_factory=list)


ParseResult = Union[Parsed[T], Rejected]


def describe_errors(error: ValidationError) -> List[str]:
    """Flatten pydantic errors into 'field: message' strings."""
    reasons = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        # Drop the "Value error, " prefix pydantic adds to custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        reasons.append(f"{location}: {message}" if location else message)
    return reasons


def parse_model(model: Type[M], body: Any) -> "ParseResult[M]":
    """Validate an untrusted mapping against a DTO without raising."""
    if not isinstance(body, dict):
        return Rejected(["body: must be a JSON object"])
    try:
        return Parsed(model.model_validate(body))
    except ValidationError as e:
        return Rejected(describe_errors(e))


def unwrap(result: "ParseResult[T]") -> T:
    """Return the parsed value or raise ValidationException with the reasons."""
    if isinstance(result, Rejected):
        raise ValidationException(details=result.reasons)
    return result.value
