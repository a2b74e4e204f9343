from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.command.user_command_use_case import UserCommandUseCase
from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher
from src.service.reading_room.app.interface.i_user_repo import IUserRepo
from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.reading_room.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.reading_room.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    UserResponse,
)


router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UserCommandUseCase = Depends(UserCommandUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.create_user(
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
        role=request.role.value,
        location_ids=request.location_ids,
        performed_by=current_user.email,
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_repo: IUserRepo = Depends(Provide[Container.user_repo]),
    password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    user_entity = await jwt_auth.authenticate(
        user_repo=user_repo,
        password_hasher=password_hasher,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=jwt_auth.issue(user_entity),
        max_age=jwt_auth.max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=settings.AUTH_COOKIE_SECURE,
    )

    return UserResponse.from_entity(user_entity)


@router.post('/logout', status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME)


@router.get('', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)
