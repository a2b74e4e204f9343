from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.reading_room.domain.entity.member_entity import Member
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.user_role import UserRole
from src.service.reading_room.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def is_staff(user: UserEntity) -> bool:
        return user.is_staff

    @staticmethod
    def can_manage_location(user: UserEntity, location_id: Optional[int]) -> bool:
        return user.is_staff and user.can_access_location(location_id)

    @staticmethod
    def can_view_member(user: UserEntity, member: Member) -> bool:
        """Staff see every member, a Member account only the record with its own email"""
        return user.is_staff or user.owns_member_email(member.email)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Current user from the JWT cookie (stateless, no DB query)"""
    return jwt_auth.read(token)


async def require_staff(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_staff',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.is_staff(current_user):
            raise ForbiddenError('Only managers and admins can perform this action')
        return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user


def ensure_location_access(user: UserEntity, location_id: Optional[int]) -> None:
    if not RoleAuthStrategy.can_manage_location(user, location_id):
        raise ForbiddenError('You are not assigned to this location')


def ensure_member_access(user: UserEntity, member: Member) -> None:
    if not RoleAuthStrategy.can_view_member(user, member):
        raise ForbiddenError("You don't have permission to view this member")
