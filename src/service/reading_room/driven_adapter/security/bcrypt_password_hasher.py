import bcrypt
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.reading_room.app.interface.i_password_hasher import IPasswordHasher


# bcrypt ignores everything past 72 bytes, newer releases raise instead
_BCRYPT_MAX_BYTES = 72


def _encode(plain_password: SecretStr) -> bytes:
    return plain_password.get_secret_value().encode('utf-8')[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    def __init__(self, *, rounds: int = 12) -> None:
        self.rounds = rounds

    @Logger.io
    def hash_password(self, *, plain_password: SecretStr) -> str:
        return bcrypt.hashpw(_encode(plain_password), bcrypt.gensalt(self.rounds)).decode('utf-8')

    @Logger.io
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(_encode(plain_password), hashed_password.encode('utf-8'))
        except ValueError:
            return False
