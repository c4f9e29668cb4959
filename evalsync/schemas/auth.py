from pydantic import BaseModel, EmailStr, Field

from evalsync.schemas.base import CamelModel


class User(CamelModel):
    id: str
    email: str
    name: str = ""


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(LoginRequest):
    name: str = Field(min_length=1)


class AuthResponse(CamelModel):
    user: User
    token: str
