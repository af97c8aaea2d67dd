from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from app.models.user import UserRole
from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    user_name: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=10)


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    remember_me: bool = False


class UserResponse(CamelModel):
    id: str
    user_name: str
    email: str
    role: UserRole
    avatar: str | None = None
    created_at: datetime | None = None


class LoginResponse(CamelModel):
    message: str
    user: UserResponse


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=10)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self
