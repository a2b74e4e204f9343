from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import DomainError, ForbiddenError, LoginError
from src.service.reading_room.domain.enum.user_role import UserRole


if TYPE_CHECKING:
    from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher


BAD_CREDENTIALS = 'LOGIN_BAD_CREDENTIALS'


@attrs.define
class UserEntity:
    """
    A login account: Admin, Manager or Member.

    Managers are scoped to location_ids, an empty list means every location.
    Member accounts match their member record by email.
    """

    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)
    id: Optional[int] = None
    role: UserRole = UserRole.MEMBER
    location_ids: List[int] = attrs.field(factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_staff(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.MANAGER)

    def can_access_location(self, location_id: Optional[int]) -> bool:
        if self.role == UserRole.ADMIN or not self.location_ids or location_id is None:
            return True
        return location_id in self.location_ids

    @property
    def location_scope(self) -> Optional[List[int]]:
        """Locations a listing is narrowed to, None for every location"""
        if self.role == UserRole.ADMIN or not self.location_ids:
            return None
        return list(self.location_ids)

    def ensure_location(self, location_id: Optional[int]) -> None:
        if not self.can_access_location(location_id):
            raise ForbiddenError('You are not assigned to this location')

    def owns_member_email(self, email: str) -> bool:
        return self.email.lower() == email.lower()

    @staticmethod
    def validate_role(role: str) -> UserRole:
        try:
            return UserRole(role)
        except ValueError:
            valid_roles = ', '.join(r.value for r in UserRole)
            raise DomainError(f'Invalid role: {role}. Must be one of: {valid_roles}') from None

    def set_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> None:
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )

    def verify_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> bool:
        return password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=self.hashed_password
        )

    @classmethod
    def check_login(
        cls,
        user: Optional['UserEntity'],
        *,
        plain_password: str,
        password_hasher: 'IPasswordHasher',
    ) -> 'UserEntity':
        """Unknown email and wrong password raise the same error"""
        if user is None or not user.verify_password(plain_password, password_hasher):
            raise LoginError(BAD_CREDENTIALS)
        if not user.is_active:
            raise ForbiddenError('User is inactive')
        return user
