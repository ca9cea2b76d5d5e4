from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..core.security import UserRole


class UserRegister(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    token: str
    role: UserRole
    token_type: str = "bearer"
    expires_in: int  # seconds
