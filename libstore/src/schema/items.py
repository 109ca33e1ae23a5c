import re
from datetime import date
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ItemKindEnum(str, Enum):
    audio = "audio"
    book = "book"
    item = "item"
    magazine = "magazine"
    video = "video"


class ItemStatusEnum(str, Enum):
    available = "available"
    loaned = "loaned"
    reserved = "reserved"


class Item(BaseModel):
    # Unknown keys in a stored entry are a decode error, not silently dropped
    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_assignment=True)

    # The kind tag selects the document bucket; it is never written into it
    kind: ItemKindEnum = Field(exclude=True)
    title: str
    id: str
    status: ItemStatusEnum = ItemStatusEnum.available
    loanee: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_calendar_date(cls, value):
        # Timestamps and other numeric forms are not valid stored dates
        if value is None or isinstance(value, date):
            return value
        if isinstance(value, str) and CALENDAR_DATE.match(value):
            return value
        raise ValueError("Must be a calendar date in YYYY-MM-DD form")


class Audio(Item):
    kind: Literal["audio"] = Field(default="audio", exclude=True)
    artist: str
    duration: str


class Book(Item):
    kind: Literal["book"] = Field(default="book", exclude=True)
    isbn: str
    author: str


class Magazine(Item):
    kind: Literal["magazine"] = Field(default="magazine", exclude=True)
    publisher: str
    edition: str


class Miscellaneous(Item):
    kind: Literal["item"] = Field(default="item", exclude=True)


class Video(Item):
    kind: Literal["video"] = Field(default="video", exclude=True)
    publisher: str
    duration: str
