from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterSchema(BaseModel):
    fullname: str = ""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str
    passwordConfirm: str

    @field_validator("username", "fullname")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class LoginSchema(BaseModel):
    email: EmailStr
    password: str


class RefreshSchema(BaseModel):
    refreshToken: str


class ForgotPasswordSchema(BaseModel):
    email: EmailStr


class ResetPasswordSchema(BaseModel):
    password: str
    passwordConfirm: str


class ChangePasswordSchema(BaseModel):
    # presence is checked by the route so the message matches
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
    passwordConfirm: Optional[str] = None


class FindByEmailsSchema(BaseModel):
    emails: Any = None


class AdminUserUpdateSchema(BaseModel):
    role: Optional[str] = None
    isDeleted: Optional[bool] = None


class FoundUser(BaseModel):
    userId: str
    email: str
    username: str
    fullname: str = ""


class EmailLookupResult(BaseModel):
    foundUsers: List[FoundUser]
    notFoundEmails: List[str]
