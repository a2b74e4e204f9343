from enum import StrEnum
from typing import Type, TypeVar

from src.platform.exception.exceptions import DomainError


E = TypeVar('E', bound=StrEnum)


def parse_enum(enum_cls: Type[E], value: str | E, *, field: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        valid = ', '.join(member.value for member in enum_cls)
        raise DomainError(f'Invalid {field}: {value}. Must be one of: {valid}') from None
