# teamboard/utils/hash_utils.py
import hashlib
import secrets

from passlib.hash import argon2, bcrypt

from teamboard.db.database import user_collection


def hash_password(password: str) -> str:
    """Hash plain password with Argon2."""
    return argon2.hash(password)


async def verify_and_upgrade_password(user_id, plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against its stored hash. Legacy bcrypt hashes are
    re-hashed with Argon2 on a successful match.
    """
    if not hashed_password:
        return False

    if hashed_password.startswith("$argon2"):
        return argon2.verify(plain_password, hashed_password)

    elif hashed_password.startswith("$2b$") or hashed_password.startswith("$2a$"):
        if bcrypt.verify(plain_password, hashed_password):
            await user_collection().update_one(
                {"_id": user_id},
                {"$set": {"password": argon2.hash(plain_password)}}
            )
            return True
    return False


def create_reset_token() -> tuple[str, str]:
    """Return (plain token for the email link, sha256 digest for storage)."""
    token = secrets.token_hex(32)
    return token, hash_reset_token(token)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
