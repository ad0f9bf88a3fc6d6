from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ProfileUpdateSchema(BaseModel):
    """Scalar profile fields; skills, availability and dates are checked separately."""

    fullname: Optional[str] = Field(None, max_length=100)
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    about: Optional[str] = Field(None, max_length=2000)
    experience: Optional[str] = Field(None, max_length=2000)
    yearOfExperience: Optional[int] = Field(None, ge=0, le=80)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v

    @field_validator("fullname", "username")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if v else v
