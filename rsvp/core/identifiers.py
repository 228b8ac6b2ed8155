"""
Event identity: opaque encoded store keys vs. caller-chosen literal ids.

Store-generated ids appear in URLs as an encoded token
(URL-safe base64 of "<collection>/<doc_id>", padding stripped). Any path
segment that is not a canonical token is taken literally.
"""
import base64
import binascii
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class EncodedKey:
    """Key decoded from an opaque URL token"""
    raw: bytes

    @property
    def collection(self) -> str:
        return self.raw.decode("utf-8").split("/", 1)[0]

    @property
    def doc_id(self) -> str:
        return self.raw.decode("utf-8").split("/", 1)[1]


@dataclass(frozen=True)
class LiteralKey:
    """Caller-chosen id used as the document name directly"""
    name: str

    @property
    def doc_id(self) -> str:
        return self.name


Identifier = Union[EncodedKey, LiteralKey]


def encode_key(collection: str, doc_id: str) -> str:
    """Builds the URL token for a store-generated document id"""
    raw = f"{collection}/{doc_id}".encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _decode_token(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def parse_identifier(segment: str, collection: str) -> Identifier:
    """
    Classifies a path segment.

    A segment is an EncodedKey only when it decodes to
    "<collection>/<doc_id>" and re-encodes to exactly the same text;
    everything else is a LiteralKey.
    """
    try:
        raw = _decode_token(segment)
        text = raw.decode("utf-8")
    except (binascii.Error, ValueError):
        return LiteralKey(segment)

    prefix, sep, doc_id = text.partition("/")
    if not sep or prefix != collection or not doc_id or "/" in doc_id:
        return LiteralKey(segment)
    if encode_key(collection, doc_id) != segment:
        return LiteralKey(segment)
    return EncodedKey(raw)
