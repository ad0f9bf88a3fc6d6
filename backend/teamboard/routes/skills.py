# teamboard/routes/skills.py
from fastapi import APIRouter, Depends, status

from teamboard.core.errors import AppError
from teamboard.db.database import skill_collection
from teamboard.middleware.rbac import get_current_user, is_admin
from teamboard.models.skill import Skill
from teamboard.schemas.skill import SkillOut

skills_router = APIRouter(prefix="/skills", tags=["Skills"])


def skill_out(doc: dict) -> dict:
    return SkillOut(id=str(doc["_id"]), value=doc["value"], label=doc.get("label", doc["value"])).model_dump()


@skills_router.get("")
async def list_skills(user: dict = Depends(get_current_user)):
    skills = await skill_collection().find().sort("label", 1).to_list(length=None)
    return {"status": "success", "results": len(skills), "data": {"skills": [skill_out(s) for s in skills]}}


@skills_router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(skill: Skill, admin: dict = Depends(is_admin)):
    if await skill_collection().find_one({"value": skill.value}):
        raise AppError(f"Skill already exists: {skill.value}", status.HTTP_400_BAD_REQUEST)

    doc = skill.model_dump()
    result = await skill_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    return {"status": "success", "data": {"skill": skill_out(doc)}}
