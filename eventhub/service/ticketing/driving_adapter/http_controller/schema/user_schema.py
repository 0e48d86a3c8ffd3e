"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, SecretStr

from eventhub.service.ticketing.domain.entity.user_entity import UserRole
from eventhub.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class SignupRequest(CamelModel):
    """Sign up request schema"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Jane Doe',
                'email': 'jane@example.com',
                'password': 'secret123',
                'role': 'user',
            }
        }
    )

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=72,
        description='Password must be 6-72 characters (bcrypt limit)',
    )
    role: UserRole = UserRole.USER


class LoginRequest(CamelModel):
    """User login request schema"""

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'jane@example.com', 'password': 'secret123'}}
    )

    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None


class LoginResponse(CamelModel):
    token: str
    user: UserResponse
