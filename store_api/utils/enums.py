from enum import IntEnum
from typing import Type

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator


class IntEnumType(TypeDecorator):
    """Stores an ``IntEnum`` as a plain integer column and loads it back as the enum."""

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: Type[IntEnum], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enum_class = enum_class

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(self.enum_class(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.enum_class(value)


def enum_choices(enum_class) -> list[dict]:
    return [{"value": int(member), "label": member.label} for member in enum_class]
