# teamboard/models/user.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

ROLE_USER = "user"
ROLE_ADMIN = "adminSystem"
ROLES = (ROLE_USER, ROLE_ADMIN)

# Never returned to clients
PRIVATE_PROJECTION = {"password": 0, "passwordResetToken": 0, "passwordResetExpires": 0}


class Availability(BaseModel):
    status: Literal["available", "busy", "unavailable"] = "available"
    willingToJoin: bool = True


class ExpectedWorkDuration(BaseModel):
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None


class User(BaseModel):
    fullname: str = ""
    username: str
    email: EmailStr
    password: Optional[str] = None

    role: Literal["user", "adminSystem"] = ROLE_USER
    avatar: Optional[str] = None

    # Skill values (lower-case), see models/skill.py
    skills: List[str] = []
    about: str = ""
    experience: str = ""
    yearOfExperience: int = Field(0, ge=0)
    availability: Availability = Field(default_factory=Availability)
    expectedWorkDuration: ExpectedWorkDuration = Field(default_factory=ExpectedWorkDuration)

    googleId: Optional[str] = None

    isDeleted: bool = False
    deletedAt: Optional[datetime] = None
    passwordChangedAt: Optional[datetime] = None
    passwordResetToken: Optional[str] = None
    passwordResetExpires: Optional[datetime] = None

    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["email"] = doc["email"].lower()
        return doc
