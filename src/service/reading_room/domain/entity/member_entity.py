from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


MEMBER_CODE_PREFIX = 'MEM'


def build_member_code(member_id: int) -> str:
    return f'{MEMBER_CODE_PREFIX}{member_id:05d}'


@attrs.define
class Member:
    name: str
    email: str
    phone: str
    address: str = ''
    exam_prep: Optional[str] = None
    id: Optional[int] = None
    member_code: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @staticmethod
    def validate_fields(*, name: str, email: str, phone: str) -> None:
        if not name or not name.strip():
            raise DomainError('name is required')
        if not email or '@' not in email:
            raise DomainError('A valid email is required')
        if not phone or not phone.strip():
            raise DomainError('phone is required')

    @classmethod
    def create(
        cls,
        *,
        name: str,
        email: str,
        phone: str,
        address: str = '',
        exam_prep: Optional[str] = None,
    ) -> 'Member':
        cls.validate_fields(name=name, email=email, phone=phone)
        return cls(
            name=name.strip(),
            email=email.strip().lower(),
            phone=phone.strip(),
            address=address,
            exam_prep=exam_prep,
        )

    def update(self, **changes) -> 'Member':
        changes = {k: v for k, v in changes.items() if v is not None}
        updated = attrs.evolve(self, **changes)
        self.validate_fields(name=updated.name, email=updated.email, phone=updated.phone)
        return updated

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
