"""
Cookie JWT authentication.

The token carries everything the role checks need (role, assigned locations, active flag),
so authorizing a request never queries the user table.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher
from src.service.reading_room.app.interface.i_user_repo import IUserRepo
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.user_role import UserRole


class JwtAuth:
    def __init__(self, *, secret: SecretStr, algorithm: str, expire_days: int) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_days = expire_days

    @property
    def max_age_seconds(self) -> int:
        return int(timedelta(days=self.expire_days).total_seconds())

    def issue(self, user: UserEntity) -> str:
        issued_at = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            'sub': str(user.id),
            'iat': issued_at,
            'exp': issued_at + timedelta(days=self.expire_days),
            'email': user.email,
            'name': user.name,
            'role': user.role.value,
            'location_ids': list(user.location_ids),
            'is_active': user.is_active,
        }
        return jwt.encode(claims, self._secret.get_secret_value(), algorithm=self.algorithm)

    def _decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self.algorithm],
                options={'require': ['sub', 'exp', 'role']},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Session expired, please log in again') from None
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token') from None

    def read(self, token: Optional[str]) -> UserEntity:
        """Rebuild the caller from the cookie token"""
        if not token:
            raise AuthenticationError('Not authenticated')

        claims = self._decode(token)
        try:
            user = UserEntity(
                id=int(claims['sub']),
                email=claims['email'],
                name=claims['name'],
                role=UserRole(claims['role']),
                location_ids=[int(location_id) for location_id in claims.get('location_ids', [])],
                is_active=bool(claims.get('is_active', False)),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError('Invalid token') from None

        if not user.is_active:
            raise ForbiddenError('User is inactive')
        return user

    async def authenticate(
        self,
        *,
        user_repo: IUserRepo,
        password_hasher: IPasswordHasher,
        email: str,
        password: str,
    ) -> UserEntity:
        return UserEntity.check_login(
            await user_repo.get_by_email(email=email),
            plain_password=password,
            password_hasher=password_hasher,
        )
