# teamboard/routes/users.py
import logging
from datetime import datetime

from bson import ObjectId
from fastapi import APIRouter, Depends, status
from pymongo import ReturnDocument

from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import board_collection, user_collection
from teamboard.middleware.rbac import get_current_user, is_admin
from teamboard.models.user import PRIVATE_PROJECTION, ROLE_ADMIN, ROLES
from teamboard.schemas.user import AdminUserUpdateSchema, EmailLookupResult, FindByEmailsSchema
from teamboard.serialize import is_valid_object_id
from teamboard.service.user_service import populate_skills, public_user, resolve_emails

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["Users"])


@users_router.post("/by-emails")
async def find_users_by_emails(data: FindByEmailsSchema, user: dict = Depends(get_current_user)):
    result = await resolve_emails(data.emails, user["email"])
    lookup = EmailLookupResult(foundUsers=result["foundUsers"], notFoundEmails=result["notFoundEmails"])
    return {"status": "success", "data": lookup.model_dump()}


# ------------------------
# Admin endpoints
# ------------------------
@users_router.get("")
async def get_all_users(admin: dict = Depends(is_admin)):
    users = await user_collection().find({"isDeleted": False}, PRIVATE_PROJECTION).to_list(length=None)

    items = []
    for u in users:
        items.append({
            "id": str(u["_id"]),
            "fullname": u.get("fullname") or "",
            "username": u.get("username") or "",
            "email": u.get("email"),
            "role": u.get("role"),
            "skills": await populate_skills(u.get("skills")),
        })

    return {"status": "success", "results": len(items), "data": {"users": items}}


@users_router.get("/{user_id}")
async def get_user_by_id(user_id: str, user: dict = Depends(get_current_user)):
    if not is_valid_object_id(user_id):
        raise AppError("Invalid user ID.", status.HTTP_400_BAD_REQUEST)

    found = await user_collection().find_one({"_id": ObjectId(user_id)}, PRIVATE_PROJECTION)
    if not found:
        raise ErrorResponses.user_not_found()

    profile = public_user(found)
    profile["skills"] = await populate_skills(found.get("skills"))
    profile["createdAt"] = found.get("createdAt")
    return {"status": "success", "data": {"user": profile}}


@users_router.patch("/{user_id}")
async def update_user_by_id(user_id: str, data: AdminUserUpdateSchema, admin: dict = Depends(is_admin)):
    if not is_valid_object_id(user_id):
        raise AppError("Invalid user ID format.", status.HTTP_400_BAD_REQUEST)

    if user_id == str(admin["_id"]) and data.role and data.role != ROLE_ADMIN:
        raise AppError("You cannot change your own role.", status.HTTP_400_BAD_REQUEST)

    update = data.model_dump(exclude_unset=True, exclude_none=True)
    if "role" in update and update["role"] not in ROLES:
        raise AppError(f"Invalid role: {update['role']}", status.HTTP_400_BAD_REQUEST)
    if "isDeleted" in update:
        update["deletedAt"] = datetime.utcnow() if update["isDeleted"] else None
    update["updatedAt"] = datetime.utcnow()

    updated = await user_collection().find_one_and_update(
        {"_id": ObjectId(user_id)},
        {"$set": update},
        projection=PRIVATE_PROJECTION,
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise ErrorResponses.user_not_found()

    logger.info("Admin %s updated user %s: %s", admin["email"], user_id, sorted(update))
    return {
        "status": "success",
        "data": {
            "user": {
                "id": str(updated["_id"]),
                "fullname": updated.get("fullname") or "",
                "username": updated.get("username") or "",
                "email": updated.get("email"),
                "role": updated.get("role"),
                "isDeleted": updated.get("isDeleted", False),
                "skills": await populate_skills(updated.get("skills")),
            }
        },
    }


@users_router.delete("/{user_id}")
async def delete_user_by_id(user_id: str, admin: dict = Depends(is_admin)):
    if not is_valid_object_id(user_id):
        raise AppError("Invalid user ID format.", status.HTTP_400_BAD_REQUEST)

    target = await user_collection().find_one({"_id": ObjectId(user_id)})
    if not target:
        raise ErrorResponses.user_not_found()

    if target.get("role") == ROLE_ADMIN:
        raise AppError("Cannot delete another admin user.", status.HTTP_400_BAD_REQUEST)

    await user_collection().delete_one({"_id": target["_id"]})
    await board_collection().update_many(
        {"members": target["_id"]},
        {"$pull": {"members": target["_id"]}}
    )

    logger.info("Admin %s deleted user %s", admin["email"], target["email"])
    return {"status": "success", "message": "User deleted successfully."}
