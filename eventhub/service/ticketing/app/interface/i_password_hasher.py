from abc import ABC, abstractmethod

from pydantic import SecretStr


class IPasswordHasher(ABC):
    @abstractmethod
    def hash(self, plain_password: SecretStr) -> str: ...

    @abstractmethod
    def matches(self, plain_password: SecretStr, hashed_password: str) -> bool:
        """False for a wrong password and for a stored value that is not a hash at all"""
