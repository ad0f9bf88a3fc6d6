from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BoardCreateSchema(BaseModel):
    name: str = Field(..., max_length=100)
    description: str = Field("", max_length=1000)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Board name is required")
        return v


class BoardUpdateSchema(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Board name is required")
        return v
