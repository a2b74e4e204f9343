"""
Pydantic type for the uuid_utils.UUID keys of subscriptions and payments.

    class PaymentResponse(BaseModel):
        id: UtilsUUID7

Accepts a uuid_utils.UUID, a stdlib uuid.UUID or its string form, always serializes to
the canonical string. Also usable as a FastAPI path parameter.
"""

from typing import Annotated, Any
import uuid

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema
from uuid_utils import UUID


def parse_uuid7(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str | uuid.UUID):
        raise ValueError(f'Expected a UUID string, got {type(value).__name__}')
    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValueError(f'Invalid UUID: {value}') from e


UtilsUUID7 = Annotated[
    UUID,
    PlainValidator(parse_uuid7),
    PlainSerializer(str, return_type=str, when_used='always'),
    WithJsonSchema({'type': 'string', 'format': 'uuid'}),
]
