"""
Errors raised by the reading room core.

Each class carries the HTTP status it maps to. @Logger.io logs these as warnings
without a traceback, anything else is logged with one.
"""


class CustomBaseError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.status_code}, {self.message!r})'


class DomainError(CustomBaseError):
    """Input that breaks a business rule: bad duration, negative amount, unknown role"""

    status_code = 400


class LoginError(CustomBaseError):
    status_code = 400


class AuthenticationError(CustomBaseError):
    status_code = 401


class ForbiddenError(CustomBaseError):
    """Role or location assignment does not allow the action"""

    status_code = 403


class NotFoundError(CustomBaseError):
    status_code = 404


class ConflictError(CustomBaseError):
    """Duplicate email, duplicate waiting entry, member still seated"""

    status_code = 409
