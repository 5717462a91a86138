from pydantic import BaseModel, EmailStr
from typing import Optional
from enum import Enum

class RoleEnum(str, Enum):
    admin = "admin"
    teacher = "teacher"
    student = "student"

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    # Which backend login endpoint to use
    role: RoleEnum = RoleEnum.teacher

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None

class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None

class PasswordChange(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
    confirmPassword: Optional[str] = None

class MessageResponse(BaseModel):
    status: str
    detail: str
