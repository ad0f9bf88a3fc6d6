# teamboard/models/skill.py
from pydantic import BaseModel, Field, field_validator


class Skill(BaseModel):
    value: str = Field(..., min_length=1, max_length=50, description="Lower-case key, e.g. python")
    label: str = Field(..., min_length=1, max_length=50, description="Display name, e.g. Python")

    # before-validators so the length checks see the stripped text
    @field_validator("value", mode="before")
    @classmethod
    def normalize_value(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("label", mode="before")
    @classmethod
    def strip_label(cls, v):
        return v.strip() if isinstance(v, str) else v
