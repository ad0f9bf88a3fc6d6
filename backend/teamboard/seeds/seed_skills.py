from teamboard.db.database import skill_collection

DEFAULT_SKILLS = [
    {"value": "javascript", "label": "JavaScript"},
    {"value": "typescript", "label": "TypeScript"},
    {"value": "python", "label": "Python"},
    {"value": "java", "label": "Java"},
    {"value": "go", "label": "Go"},
    {"value": "react", "label": "React"},
    {"value": "nodejs", "label": "Node.js"},
    {"value": "mongodb", "label": "MongoDB"},
    {"value": "sql", "label": "SQL"},
    {"value": "docker", "label": "Docker"},
    {"value": "devops", "label": "DevOps"},
    {"value": "uiux", "label": "UI/UX Design"},
    {"value": "testing", "label": "Testing"},
    {"value": "project-management", "label": "Project Management"},
]


async def seed_skills(skills=None) -> int:
    """Upsert skills by value; existing labels are refreshed, nothing is removed."""
    skills = skills or DEFAULT_SKILLS
    for skill in skills:
        await skill_collection().update_one(
            {"value": skill["value"]},
            {"$set": {"label": skill["label"]}},
            upsert=True
        )
    return len(skills)
