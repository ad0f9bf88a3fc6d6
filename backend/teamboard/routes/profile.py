# teamboard/routes/profile.py
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import TypeAdapter, ValidationError
from pymongo import ReturnDocument

from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import user_collection
from teamboard.middleware.rbac import get_current_user
from teamboard.models.user import PRIVATE_PROJECTION, Availability
from teamboard.schemas.profile import ProfileUpdateSchema
from teamboard.schemas.user import ChangePasswordSchema
from teamboard.service.user_service import (
    check_new_password,
    ensure_skills_exist,
    ensure_unique,
    password_changed_now,
    profile_with_links,
    public_user,
)
from teamboard.utils.auth_utils import create_access_token, token_payload
from teamboard.utils.hash_utils import hash_password, verify_and_upgrade_password

profile_router = APIRouter(prefix="/profile", tags=["Profile"])

ALLOWED_FIELDS = (
    "fullname",
    "username",
    "email",
    "avatar",
    "skills",
    "about",
    "experience",
    "yearOfExperience",
    "availability",
    "expectedWorkDuration",
)

_date_adapter = TypeAdapter(datetime)


def parse_date(value):
    if value is None or value == "":
        raise ValueError("missing date")
    return _date_adapter.validate_python(value)


def to_naive_utc(value: datetime) -> datetime:
    # Mongo hands back naive UTC datetimes
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@profile_router.get("")
async def get_profile(user: dict = Depends(get_current_user)):
    profile = await user_collection().find_one({"_id": user["_id"]}, PRIVATE_PROJECTION)
    if not profile:
        raise ErrorResponses.user_not_found()
    # password is projected out, so derive hasPassword from the full document
    profile["password"] = user.get("password")
    return {"status": "success", "data": {"user": profile_with_links(profile)}}


@profile_router.patch("")
async def update_profile(body: dict = Body(...), user: dict = Depends(get_current_user)):
    if body.get("password") or body.get("role"):
        raise AppError("This route is not for password or role updates.", status.HTTP_400_BAD_REQUEST)

    filtered = {k: v for k, v in body.items() if k in ALLOWED_FIELDS}

    # 1. Scalar fields
    scalars = {k: v for k, v in filtered.items() if k not in ("skills", "availability", "expectedWorkDuration")}
    try:
        validated = ProfileUpdateSchema(**scalars).model_dump(exclude_unset=True)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise AppError(f"Invalid {field}: {first['msg']}", status.HTTP_400_BAD_REQUEST)
    update = dict(validated)

    if "email" in update:
        await ensure_unique("email", update["email"], exclude_id=user["_id"])
    if "username" in update:
        await ensure_unique("username", update["username"], exclude_id=user["_id"])

    # 2. Skills must reference the lookup table
    if "skills" in filtered:
        await ensure_skills_exist(filtered["skills"])
        update["skills"] = filtered["skills"]

    # 3. Availability
    if "availability" in filtered:
        try:
            update["availability"] = Availability.model_validate(filtered["availability"]).model_dump()
        except ValidationError:
            raise AppError("Invalid availability.", status.HTTP_400_BAD_REQUEST)

    # 4. Work duration
    if "expectedWorkDuration" in filtered:
        duration = filtered["expectedWorkDuration"]
        if not isinstance(duration, dict):
            raise AppError("Invalid start or end date.", status.HTTP_400_BAD_REQUEST)
        try:
            start = parse_date(duration.get("startDate"))
            end = parse_date(duration.get("endDate"))
        except (ValueError, ValidationError):
            raise AppError("Invalid start or end date.", status.HTTP_400_BAD_REQUEST)
        start, end = to_naive_utc(start), to_naive_utc(end)
        if start > end:
            raise AppError("Start date must be before or equal to end date.", status.HTTP_400_BAD_REQUEST)
        update["expectedWorkDuration"] = {"startDate": start, "endDate": end}

    # 5. Single write
    update["updatedAt"] = datetime.utcnow()
    updated = await user_collection().find_one_and_update(
        {"_id": user["_id"]},
        {"$set": update},
        projection=PRIVATE_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise ErrorResponses.user_not_found()

    return {"status": "success", "data": {"user": public_user(updated)}}


@profile_router.patch("/password")
async def change_password(data: ChangePasswordSchema, user: dict = Depends(get_current_user)):
    if not data.currentPassword or not data.newPassword or not data.passwordConfirm:
        raise AppError("All three fields are required.", status.HTTP_400_BAD_REQUEST)

    current = await user_collection().find_one({"_id": user["_id"]})
    if not current:
        raise ErrorResponses.user_not_found()

    if not await verify_and_upgrade_password(current["_id"], data.currentPassword, current.get("password")):
        raise AppError("Your current password is incorrect.", status.HTTP_401_UNAUTHORIZED)

    check_new_password(data.newPassword, data.passwordConfirm)

    await user_collection().update_one(
        {"_id": current["_id"]},
        {"$set": {
            "password": hash_password(data.newPassword),
            "passwordChangedAt": password_changed_now(),
            "updatedAt": datetime.utcnow(),
        }}
    )

    return {"status": "success", "token": create_access_token(token_payload(current))}


@profile_router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_me(user: dict = Depends(get_current_user)):
    await user_collection().update_one(
        {"_id": user["_id"]},
        {"$set": {"isDeleted": True, "deletedAt": datetime.utcnow()}}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
