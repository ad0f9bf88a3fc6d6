# teamboard/utils/auth_utils.py
import logging
from datetime import datetime, timedelta
from typing import Optional

import jwt

from teamboard.core.config import settings
from teamboard.core.errors import ErrorResponses

logger = logging.getLogger(__name__)


def _encode(data: dict, expires_delta: timedelta, token_type: str) -> str:
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update({
        "iat": now,
        "exp": now + expires_delta,
        "type": token_type
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    return _encode(data, expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES), "access")


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    return _encode(data, expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS), "refresh")


def token_payload(user: dict) -> dict:
    return {"id": str(user["_id"]), "email": user["email"], "role": user.get("role")}


def decode_token(token: str, expected_type: str = "access") -> dict:
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ErrorResponses.token_expired()
    except jwt.InvalidTokenError as e:
        logger.debug("Invalid token: %s", e)
        raise ErrorResponses.invalid_token()

    if decoded.get("type") != expected_type:
        raise ErrorResponses.invalid_token()
    return decoded
