from pydantic import BaseModel


class SkillOut(BaseModel):
    id: str
    value: str
    label: str
