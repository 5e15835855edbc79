import bcrypt

from cryptoquotes.domain.ports import PasswordHasher

BCRYPT_MAX_BYTES = 72


class BcryptHasher(PasswordHasher):
    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds if rounds > 0 else 12

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password_hash: str, password: str) -> bool:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
