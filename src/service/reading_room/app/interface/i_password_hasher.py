from abc import ABC, abstractmethod

from pydantic import SecretStr


class IPasswordHasher(ABC):
    """Staff and member account passwords, never stored or logged in plain text"""

    @abstractmethod
    def hash_password(self, *, plain_password: SecretStr) -> str: ...

    @abstractmethod
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        """False for a wrong password and for a stored value that is not a valid hash"""
