from typing import Awaitable, Callable, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from eventhub.platform.config.core_setting import settings
from eventhub.platform.config.di import Container
from eventhub.service.ticketing.domain.access_policy import AccessPolicy, Operation
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Principal:
    """Bearer header wins over the auth cookie"""
    token = credentials.credentials if credentials else cookie_token
    return jwt_auth.authenticate(token)


def require(operation: Operation) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: authenticated principal whose role may perform `operation`"""

    async def _require(principal: Principal = Depends(get_current_principal)) -> Principal:
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            f'auth.require.{operation.value}',
            attributes={'user.id': principal.id, 'user.role': principal.role.value},
        ):
            return AccessPolicy.authorize(principal, operation)

    return _require
