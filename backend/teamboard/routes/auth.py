# teamboard/routes/auth.py
import logging
from datetime import datetime, timedelta

from bson import ObjectId
from fastapi import APIRouter, Depends, status

from teamboard.core.config import settings
from teamboard.core.errors import AppError, ErrorResponses
from teamboard.db.database import user_collection
from teamboard.middleware.rbac import get_current_user
from teamboard.models.user import ROLE_ADMIN, ROLE_USER, User
from teamboard.schemas.user import (
    ForgotPasswordSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    ResetPasswordSchema,
)
from teamboard.serialize import is_valid_object_id
from teamboard.service.user_service import (
    check_new_password,
    ensure_unique,
    password_changed_now,
    public_user,
)
from teamboard.utils.auth_utils import (
    create_access_token,
    create_refresh_token,
    decode_token,
    token_payload,
)
from teamboard.utils.email_utils import send_password_reset_email
from teamboard.utils.hash_utils import (
    create_reset_token,
    hash_password,
    hash_reset_token,
    verify_and_upgrade_password,
)

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["Auth"])

# ------------------------
# Register
# ------------------------
@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: RegisterSchema):
    email = data.email.lower()
    check_new_password(data.password, data.passwordConfirm)
    await ensure_unique("email", email)
    await ensure_unique("username", data.username)

    role = ROLE_USER
    if (
        settings.ADMIN_EMAIL
        and email == settings.ADMIN_EMAIL.lower()
        and data.password == settings.ADMIN_PASSWORD
    ):
        role = ROLE_ADMIN

    user = User(
        fullname=data.fullname,
        username=data.username,
        email=email,
        password=hash_password(data.password),
        role=role,
    ).to_document()
    result = await user_collection().insert_one(user)
    user["_id"] = result.inserted_id
    logger.info("Registered user %s (%s)", email, role)

    return {
        "status": "success",
        "token": create_access_token(token_payload(user)),
        "data": {"user": public_user(user)},
    }


# ------------------------
# Login
# ------------------------
@auth_router.post("/login")
async def login(data: LoginSchema):
    user = await user_collection().find_one({"email": data.email.lower()})
    if not user or user.get("isDeleted"):
        raise ErrorResponses.invalid_credentials()

    valid = await verify_and_upgrade_password(user["_id"], data.password, user.get("password"))
    if not valid:
        logger.info("Failed login for %s", data.email)
        raise ErrorResponses.invalid_credentials()

    payload = token_payload(user)
    return {
        "status": "success",
        "token": create_access_token(payload),
        "refreshToken": create_refresh_token(payload),
        "data": {"user": public_user(user)},
    }


# ------------------------
# Refresh token
# ------------------------
@auth_router.post("/refresh")
async def refresh_token(data: RefreshSchema):
    payload = decode_token(data.refreshToken, expected_type="refresh")
    user_id = payload.get("id")
    if not is_valid_object_id(user_id):
        raise ErrorResponses.invalid_token()

    user = await user_collection().find_one({"_id": ObjectId(user_id)})
    if not user or user.get("isDeleted"):
        raise ErrorResponses.invalid_token()

    new_payload = token_payload(user)
    return {
        "status": "success",
        "token": create_access_token(new_payload),
        "refreshToken": create_refresh_token(new_payload),
    }


# ------------------------
# Forgot/Reset Password
# ------------------------
@auth_router.post("/forgot-password")
async def forgot_password(data: ForgotPasswordSchema):
    email = data.email.lower()
    user = await user_collection().find_one({"email": email, "isDeleted": False})
    if not user:
        raise AppError("There is no user with that email address.", status.HTTP_404_NOT_FOUND)

    token, digest = create_reset_token()
    await user_collection().update_one(
        {"_id": user["_id"]},
        {"$set": {
            "passwordResetToken": digest,
            "passwordResetExpires": datetime.utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES),
        }}
    )

    reset_url = f"{settings.FRONTEND_URL}/reset-password/{token}"
    try:
        send_password_reset_email(email, reset_url)
    except Exception:
        await user_collection().update_one(
            {"_id": user["_id"]},
            {"$set": {"passwordResetToken": None, "passwordResetExpires": None}}
        )
        raise AppError("There was an error sending the email. Try again later.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"status": "success", "message": "Token sent to email."}


@auth_router.post("/reset-password/{token}")
async def reset_password(token: str, data: ResetPasswordSchema):
    user = await user_collection().find_one({
        "passwordResetToken": hash_reset_token(token),
        "passwordResetExpires": {"$gt": datetime.utcnow()},
    })
    if not user:
        raise AppError("Token is invalid or has expired.", status.HTTP_400_BAD_REQUEST)

    check_new_password(data.password, data.passwordConfirm)

    await user_collection().update_one(
        {"_id": user["_id"]},
        {"$set": {
            "password": hash_password(data.password),
            "passwordChangedAt": password_changed_now(),
            "passwordResetToken": None,
            "passwordResetExpires": None,
            "updatedAt": datetime.utcnow(),
        }}
    )

    return {"status": "success", "token": create_access_token(token_payload(user))}


# ------------------------
# Get current user info
# ------------------------
@auth_router.get("/me")
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    return {"status": "success", "data": {"user": public_user(current_user)}}
