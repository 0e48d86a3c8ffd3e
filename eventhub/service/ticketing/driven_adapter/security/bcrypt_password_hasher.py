import bcrypt
from pydantic import SecretStr

from eventhub.service.ticketing.app.interface.i_password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: SecretStr) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plain_password.get_secret_value().encode(), salt).decode()

    def matches(self, plain_password: SecretStr, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(
                plain_password.get_secret_value().encode(), hashed_password.encode()
            )
        except ValueError:
            # Invalid salt
            return False
