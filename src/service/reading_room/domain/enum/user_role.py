from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = 'Admin'
    MANAGER = 'Manager'
    MEMBER = 'Member'
