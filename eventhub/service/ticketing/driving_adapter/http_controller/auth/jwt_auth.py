"""
User Authentication Service
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from eventhub.platform.config.core_setting import settings
from eventhub.platform.exception.exceptions import AuthenticationError
from eventhub.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from eventhub.service.ticketing.domain.value_object.principal import Principal


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role.value,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('Token expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    async def authenticate_user(
        self, user_query_repo: IUserQueryRepo, email: str, password: str
    ) -> UserEntity:
        user_entity = await user_query_repo.find_by_credentials(email, password)
        return UserEntity.validate_user_exists(user_entity)

    def authenticate(self, token: Optional[str]) -> Principal:
        """Rebuild the caller from the token alone (no DB query)"""
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role')
        if not user_id or not role:
            raise AuthenticationError('Invalid token')

        try:
            principal_id = int(user_id)
            user_role = UserRole(role)
        except (TypeError, ValueError) as e:
            raise AuthenticationError('Invalid token') from e

        return Principal(
            id=principal_id,
            role=user_role,
            email=payload.get('email', ''),
            name=payload.get('name', ''),
        )
