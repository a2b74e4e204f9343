from typing import Annotated, List

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.reading_room.domain.entity.user_entity import UserEntity
from src.service.reading_room.domain.enum.user_role import UserRole


# bcrypt only looks at the first 72 bytes
NewPassword = Annotated[SecretStr, Field(min_length=8, max_length=72)]


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: NewPassword
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.MEMBER
    # Managers only: the locations they may run, empty means all of them
    location_ids: List[int] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'manager@example.com',
                'password': 'P@ssw0rd',
                'name': 'Asha Rao',
                'role': 'Manager',
                'location_ids': [1],
            }
        }


class LoginRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)

    class Config:
        json_schema_extra = {'example': {'email': 'admin@example.com', 'password': 'P@ssw0rd'}}


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    location_ids: List[int] = []
    is_active: bool

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            name=user.name,
            role=user.role,
            location_ids=list(user.location_ids),
            is_active=user.is_active,
        )
