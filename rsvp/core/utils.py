"""
Core utilities: path splitting, canonical URLs, id checks
"""
import re
from typing import List
from urllib.parse import quote

from rsvp.core.config import EVENTS_SEGMENT
from rsvp.core.identifiers import LiteralKey, parse_identifier

# Firestore document name limits
MAX_ID_BYTES = 1500
_RESERVED_NAME = re.compile(r"^__.*__$")


def split_path(path: str) -> List[str]:
    """Non-empty '/'-separated segments of a URL path"""
    return [segment for segment in path.split("/") if segment]


def event_url(segment: str) -> str:
    """Canonical resource URL for an event"""
    return f"/{EVENTS_SEGMENT}/{quote(segment, safe='')}"


def is_valid_literal_id(value: str, collection: str) -> bool:
    """
    A caller-chosen id must fit in one path segment, be a legal document
    name, and not be mistaken for an encoded key token.
    """
    if "/" in value or value in (".", ".."):
        return False
    if _RESERVED_NAME.match(value) or len(value.encode("utf-8")) > MAX_ID_BYTES:
        return False
    return isinstance(parse_identifier(value, collection), LiteralKey)
