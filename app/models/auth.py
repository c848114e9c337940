"""Pydantic models for authentication."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from app.models.assets import CamelModel


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class LoginRequest(CamelModel):
    """Login request model."""
    email: EmailStr
    password: str = Field(..., min_length=1, description="Password is required")


class RegisterRequest(CamelModel):
    """Registration request model."""
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class User(CamelModel):
    """A user as returned to clients; the password hash is never included."""
    id: str
    email: str
    first_name: str
    last_name: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AuthResponse(CamelModel):
    """Authentication response model."""
    user: User
    token: str
    token_type: str = "bearer"
