# teamboard/serialize.py
from datetime import datetime

from bson import ObjectId

SENSITIVE_FIELDS = ("password", "passwordResetToken", "passwordResetExpires")


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return serialize_doc(value)
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def serialize_doc(doc):
    if doc is None:
        return None
    return {key: serialize_value(value) for key, value in doc.items()}


def is_valid_object_id(value) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)
