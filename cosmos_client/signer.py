"""
Master key authorization for the Cosmos DB REST API.

Builds the ``authorization`` header value expected by the service:
HMAC-SHA256 over a canonical string of verb, resource type, resource link
and request date, keyed with the base64-decoded master key.
"""

import base64
import binascii
import datetime
import hashlib
import hmac
from email.utils import format_datetime
from typing import Optional
from urllib.parse import quote_plus

from .constants import TOKEN_TYPE, TOKEN_VERSION
from .exceptions import CredentialError


def decode_master_key(master_key: str) -> bytes:
    """
    Decode a base64 master key into raw key bytes.

    Raises:
        CredentialError: If the key is not valid base64
    """
    if not isinstance(master_key, (str, bytes)) or not master_key:
        raise CredentialError("master key must be a non-empty base64 string")
    try:
        return base64.b64decode(master_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialError(f"master key is not valid base64: {e}")


def sign(verb: str, resource_type: str, resource_link: str,
         timestamp: str, master_key: str) -> str:
    """
    Generate a master key authorization token.

    Format: HMAC-SHA256(verb + "\\n" + type + "\\n" + link + "\\n" + date + "\\n\\n")
    with verb, type and date lowercased. The resource link is hashed
    exactly as given.

    Args:
        verb: HTTP method
        resource_type: Resource type, e.g. "docs"
        resource_link: Resource link, e.g. "dbs/db/colls/coll"
        timestamp: Request date as sent in x-ms-date
        master_key: Base64-encoded master key

    Returns:
        URL-escaped token "type=master&ver=1.0&sig=<signature>"

    Raises:
        CredentialError: If the master key cannot be decoded
    """
    key = decode_master_key(master_key)

    text = (
        verb.lower() + "\n"
        + resource_type.lower() + "\n"
        + resource_link + "\n"
        + timestamp.lower() + "\n"
        + "" + "\n"
    )

    mac = hmac.new(key, text.encode('utf-8'), hashlib.sha256)
    signature = base64.b64encode(mac.digest()).decode('ascii')

    return quote_plus(f"type={TOKEN_TYPE}&ver={TOKEN_VERSION}&sig={signature}")


def http_date(now: Optional[datetime.datetime] = None) -> str:
    """Format a UTC timestamp as an RFC 1123 HTTP date."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return format_datetime(now.astimezone(datetime.timezone.utc), usegmt=True)


def collection_link(database: str, container: str) -> str:
    return f"dbs/{database}/colls/{container}".lower()


def document_link(database: str, container: str, document_id: str) -> str:
    # the id keeps its case, ids are case sensitive
    return f"{collection_link(database, container)}/docs/{document_id}"
