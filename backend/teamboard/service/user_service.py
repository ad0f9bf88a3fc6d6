# teamboard/service/user_service.py
import re
from datetime import datetime, timedelta
from typing import Iterable, List

from fastapi import status

from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import skill_collection, user_collection

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

DEFAULT_AVAILABILITY = {"status": "available", "willingToJoin": True}

MIN_PASSWORD_LENGTH = 8


def check_new_password(password: str, confirm: str):
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ErrorResponses.password_too_short()
    if password != confirm:
        raise ErrorResponses.password_mismatch()


def password_changed_now() -> datetime:
    # one second back so a token signed right after still verifies
    return datetime.utcnow() - timedelta(seconds=1)


def public_user(user: dict) -> dict:
    """Profile fields every view of a user shares."""
    duration = user.get("expectedWorkDuration") or {}
    return {
        "id": str(user["_id"]),
        "fullname": user.get("fullname") or "",
        "username": user.get("username") or "",
        "email": user.get("email"),
        "role": user.get("role"),
        "avatar": user.get("avatar") or None,
        "skills": user.get("skills") or [],
        "about": user.get("about") or "",
        "experience": user.get("experience") or "",
        "yearOfExperience": user.get("yearOfExperience") or 0,
        "availability": user.get("availability") or dict(DEFAULT_AVAILABILITY),
        "expectedWorkDuration": {
            "startDate": duration.get("startDate"),
            "endDate": duration.get("endDate"),
        },
    }


def profile_with_links(user: dict) -> dict:
    profile = public_user(user)
    password = user.get("password")
    # Google-only accounts have no password and cannot unlink Google
    profile["hasPassword"] = bool(password and password.strip())
    profile["googleId"] = user.get("googleId")
    return profile


async def ensure_skills_exist(values) -> None:
    # operator dicts like {"$ne": null} would otherwise match any skill
    if not isinstance(values, list) or not all(isinstance(val, str) for val in values):
        raise AppError("Skills must be an array of skill values.", status.HTTP_400_BAD_REQUEST)
    for val in values:
        skill = await skill_collection().find_one({"value": val})
        if not skill:
            raise AppError(f"Skill not found: {val}", status.HTTP_404_NOT_FOUND)


async def populate_skills(values: Iterable[str]) -> List[dict]:
    values = [v for v in (values or []) if isinstance(v, str)]
    if not values:
        return []
    found = await skill_collection().find({"value": {"$in": values}}).to_list(length=None)
    by_value = {s["value"]: {"id": str(s["_id"]), "value": s["value"], "label": s.get("label", s["value"])} for s in found}
    return [by_value[v] for v in values if v in by_value]


async def ensure_unique(field: str, value, exclude_id=None) -> None:
    query = {field: value}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    if await user_collection().find_one(query, {"_id": 1}):
        raise AppError(f"This {field} is already in use.", status.HTTP_400_BAD_REQUEST)


async def resolve_emails(emails, current_email: str) -> dict:
    """
    Split a list of invitee emails into registered users and unknown addresses.
    """
    if not emails or not isinstance(emails, list):
        raise AppError("Email list is required and must be an array.", status.HTTP_400_BAD_REQUEST)

    invalid = [str(e) for e in emails if not isinstance(e, str) or not EMAIL_RE.fullmatch(e)]
    if invalid:
        raise AppError(f"Email is invalid: {', '.join(invalid)}", status.HTTP_400_BAD_REQUEST)

    if current_email in emails:
        raise AppError("You cannot invite yourself.", status.HTTP_400_BAD_REQUEST)

    users = await user_collection().find(
        {"email": {"$in": emails}, "isDeleted": False},
        {"_id": 1, "email": 1, "username": 1, "fullname": 1},
    ).to_list(length=None)

    found_emails = {u["email"] for u in users}
    return {
        "users": users,
        "foundUsers": [
            {
                "userId": str(u["_id"]),
                "email": u["email"],
                "username": u.get("username"),
                "fullname": u.get("fullname") or "",
            }
            for u in users
        ],
        "notFoundEmails": [e for e in emails if e not in found_emails],
    }
