from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr

from eventhub.platform.exception.exceptions import AuthenticationError, ValidationError


if TYPE_CHECKING:
    from eventhub.service.ticketing.app.interface.i_password_hasher import IPasswordHasher


class UserRole(StrEnum):
    USER = 'user'
    ORGANIZER = 'organizer'
    ADMIN = 'admin'


# Roles a visitor may pick at signup; admins are provisioned by operators
SELF_SERVICE_ROLES = frozenset({UserRole.USER, UserRole.ORGANIZER})


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise AuthenticationError('Invalid credentials')

        return user_entity

    @staticmethod
    def validate_signup_role(role: UserRole) -> None:
        if role not in SELF_SERVICE_ROLES:
            allowed = ', '.join(sorted(r.value for r in SELF_SERVICE_ROLES))
            raise ValidationError(f'Invalid role: {role}. Must be one of: {allowed}')

    def set_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> None:
        self.hashed_password = password_hasher.hash(SecretStr(plain_password))
