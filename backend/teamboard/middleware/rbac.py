# teamboard/middleware/rbac.py
import calendar
from typing import Optional

from bson import ObjectId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import user_collection
from teamboard.models.user import ROLE_ADMIN
from teamboard.serialize import is_valid_object_id
from teamboard.utils.auth_utils import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def changed_password_after(user: dict, issued_at: Optional[int]) -> bool:
    changed_at = user.get("passwordChangedAt")
    if not changed_at or issued_at is None:
        return False
    return issued_at < calendar.timegm(changed_at.utctimetuple())


async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)):
    if credentials is None or not credentials.credentials:
        raise ErrorResponses.not_logged_in()

    payload = decode_token(credentials.credentials)
    user_id = payload.get("id")
    if not is_valid_object_id(user_id):
        raise ErrorResponses.invalid_token()

    user = await user_collection().find_one({"_id": ObjectId(user_id)})
    if not user or user.get("isDeleted"):
        raise AppError("The user belonging to this token no longer exists.", 401)

    if changed_password_after(user, payload.get("iat")):
        raise AppError("User recently changed password. Please log in again.", 401)

    return user


def is_admin(user: dict = Depends(get_current_user)):
    if user.get("role") != ROLE_ADMIN:
        raise ErrorResponses.admin_required()
    return user
