import enum
import re
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from typing import Optional
from datetime import time

from chatbot_blocks.dto.common import blank_to_none

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class DayOfWeek(str, enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


def parse_hhmm(value):
    """Accept only 24h HH:MM strings and turn them into datetime.time."""
    if value is None or isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError("must match HH:MM format")
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("must match HH:MM format")
    return time(int(match.group(1)), int(match.group(2)))


class ScheduleCreate(BaseModel):
    """
    Body for creating one schedule slot.

    Shape only: the open_time < close_time rule is checked by the service
    after the ownership gate.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(..., min_length=1, max_length=120)
    day_of_week: DayOfWeek
    open_time: time
    close_time: time
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator("open_time", "close_time", mode="before")
    @classmethod
    def check_time_format(cls, value):
        return parse_hhmm(value)

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes(cls, value):
        return blank_to_none(value)


class ScheduleUpdate(BaseModel):
    """Partial schedule update; at least one field must carry a value."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(None, max_length=120)
    day_of_week: Optional[DayOfWeek] = None
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator("open_time", "close_time", mode="before")
    @classmethod
    def check_time_format(cls, value):
        return parse_hhmm(value)

    @field_validator("title", "notes", mode="before")
    @classmethod
    def blank_text(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided for schedule update")
        return self


class ScheduleRead(BaseModel):
    entity_id: int
    chatbot_id: int
    title: str
    day_of_week: str
    open_time: time
    close_time: time
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("open_time", "close_time")
    def format_time(self, value: time) -> str:
        return value.strftime("%H:%M")
