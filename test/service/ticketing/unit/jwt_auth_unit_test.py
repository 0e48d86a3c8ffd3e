"""
Unit tests for JwtAuth: token round trip into a Principal and the 401 cases
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest

from eventhub.platform.exception.exceptions import AuthenticationError
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity, UserRole
from eventhub.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@pytest.mark.unit
class TestJwtAuth:
    @pytest.fixture
    def jwt_auth(self) -> JwtAuth:
        return JwtAuth()

    @pytest.fixture
    def organizer(self) -> UserEntity:
        return UserEntity(id=5, email='org@example.com', name='Org', role=UserRole.ORGANIZER)

    def test_token_round_trips_into_principal(
        self, jwt_auth: JwtAuth, organizer: UserEntity
    ) -> None:
        token = jwt_auth.create_jwt_token(organizer)

        principal = jwt_auth.authenticate(token)

        assert principal.id == 5
        assert principal.role == UserRole.ORGANIZER
        assert principal.email == 'org@example.com'
        assert not principal.is_admin

    @pytest.mark.parametrize('token', [None, ''])
    def test_missing_token(self, jwt_auth: JwtAuth, token: str | None) -> None:
        with pytest.raises(AuthenticationError, match='Not authenticated'):
            jwt_auth.authenticate(token)

    def test_tampered_token(self, jwt_auth: JwtAuth, organizer: UserEntity) -> None:
        header, payload, signature = jwt_auth.create_jwt_token(organizer).split('.')

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.authenticate(f'{header}.{payload}.{signature[::-1]}')

    def test_token_signed_with_other_key(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode({'user_id': 1, 'role': 'admin'}, 'not-our-secret', algorithm='HS256')

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.authenticate(token)

    def test_expired_token(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode(
            {
                'user_id': 1,
                'role': 'user',
                'exp': datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            jwt_auth.secret,
            algorithm=jwt_auth.algorithm,
        )

        with pytest.raises(AuthenticationError, match='Token expired'):
            jwt_auth.authenticate(token)

    def test_unknown_role_is_rejected(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode(
            {'user_id': 1, 'role': 'superuser'}, jwt_auth.secret, algorithm=jwt_auth.algorithm
        )

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.authenticate(token)

    def test_non_numeric_user_id_is_rejected(self, jwt_auth: JwtAuth) -> None:
        token = jwt.encode(
            {'user_id': 'abc', 'role': 'user'}, jwt_auth.secret, algorithm=jwt_auth.algorithm
        )

        with pytest.raises(AuthenticationError, match='Invalid token'):
            jwt_auth.authenticate(token)

    @pytest.mark.asyncio
    async def test_bad_credentials(self, jwt_auth: JwtAuth) -> None:
        user_query_repo = AsyncMock()
        user_query_repo.find_by_credentials = AsyncMock(return_value=None)

        with pytest.raises(AuthenticationError, match='Invalid credentials'):
            await jwt_auth.authenticate_user(
                user_query_repo=user_query_repo, email='a@b.c', password='wrong'
            )
