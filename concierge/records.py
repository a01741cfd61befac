"""
Records exchanged between the flows and kept in the user-scoped store.

Every record carries a ``kind`` tag so completed flow results can be
dispatched on it, and so the stores can restore them from JSON.
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar, Optional

from .serialization import KIND_KEY, decode, encode, register


class ResultKind(str, Enum):
    GUEST_INFO = 'guest_info'
    TABLE_INFO = 'table_info'
    WAKE_UP_INFO = 'wake_up_info'
    USER_INFO = 'user_info'
    DATETIME_RESOLUTION = 'datetime_resolution'


class Record:
    kind: ClassVar[ResultKind]

    def to_dict(self):
        data = {KIND_KEY: self.kind.value}
        for field in fields(self):
            data[field.name] = encode(getattr(self, field.name))
        return data

    @classmethod
    def from_dict(cls, data):
        names = {field.name for field in fields(cls)}
        return cls(**{key: decode(value) for key, value in data.items() if key in names})


@register
@dataclass
class GuestInfo(Record):
    kind: ClassVar[ResultKind] = ResultKind.GUEST_INFO

    name: Optional[str] = None
    room: Optional[str] = None


@register
@dataclass
class TableInfo(Record):
    """Placeholder for the table reservation flow."""
    kind: ClassVar[ResultKind] = ResultKind.TABLE_INFO


@register
@dataclass
class WakeUpInfo(Record):
    kind: ClassVar[ResultKind] = ResultKind.WAKE_UP_INFO

    time: Optional[str] = None


@register
@dataclass
class UserInfo(Record):
    kind: ClassVar[ResultKind] = ResultKind.USER_INFO

    guest: Optional[GuestInfo] = None
    table: Optional[TableInfo] = None
    wake_up: Optional[WakeUpInfo] = None

    @property
    def guest_name(self):
        return self.guest.name if self.guest else None

    @property
    def room(self):
        return self.guest.room if self.guest else None


@register
@dataclass
class DateTimeResolution(Record):
    """
    One candidate produced by the date/time recognizer.

    Points in time have a ``value``; ranges have ``start``/``end`` and no value.
    """
    kind: ClassVar[ResultKind] = ResultKind.DATETIME_RESOLUTION

    value: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    @property
    def resolved(self):
        return self.value or self.start
