"""Strict MongoDB ObjectId parsing."""

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: str | None) -> ObjectId | None:
    """Parse a 24-char hex ObjectId string.

    Returns None for anything else, including 12-byte strings that
    ObjectId() would otherwise accept and upper-case hex that would not
    round-trip to the same string.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    try:
        oid = ObjectId(value)
    except (InvalidId, TypeError):
        return None
    return oid if str(oid) == value else None


def is_object_id(value: str | None) -> bool:
    return parse_object_id(value) is not None
