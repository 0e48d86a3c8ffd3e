from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from eventhub.platform.config.core_setting import settings
from eventhub.platform.config.di import Container
from eventhub.platform.exception.exceptions import AuthenticationError
from eventhub.platform.logging.loguru_io import Logger
from eventhub.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from eventhub.service.ticketing.app.query.user_query_use_case import UserUseCase
from eventhub.service.ticketing.domain.entity.user_entity import UserEntity
from eventhub.service.ticketing.domain.value_object.principal import Principal
from eventhub.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from eventhub.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_principal,
)
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    MessageResponse,
)
from eventhub.service.ticketing.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()


def _to_response(user_entity: UserEntity) -> UserResponse:
    return UserResponse(
        id=user_entity.id or 0,
        name=user_entity.name,
        email=user_entity.email,
        role=user_entity.role,
        created_at=user_entity.created_at,
    )


@router.post('/signup', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def signup(
    request: SignupRequest,
    use_case: UserUseCase = Depends(UserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.create_user(
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
        role=request.role,
    )
    return _to_response(user_entity)


@router.post('/login', response_model=LoginResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    token = jwt_auth.create_jwt_token(user_entity)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite='lax',
        secure=settings.AUTH_COOKIE_SECURE,
    )

    return LoginResponse(token=token, user=_to_response(user_entity))


@router.post('/logout', response_model=MessageResponse)
@Logger.io
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, httponly=True, samesite='lax')
    return MessageResponse(message='Logged out successfully')


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(
    principal: Principal = Depends(get_current_principal),
    use_case: UserUseCase = Depends(UserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.get_user_by_id(principal.id)
    if user_entity is None:
        # Token outlived its account
        raise AuthenticationError('User not found')
    return _to_response(user_entity)
