# teamboard/models/board.py
from datetime import datetime
from typing import List

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class Board(BaseModel):
    """A workspace: named container owned by one user and shared with members."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    owner: ObjectId
    members: List[ObjectId] = []
    isDeleted: bool = False
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)

    def to_document(self) -> dict:
        doc = self.model_dump()
        if self.owner not in doc["members"]:
            doc["members"] = [self.owner] + doc["members"]
        return doc
