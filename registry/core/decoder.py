"""
Recipient identity and metadata decoding.

Pure transforms from raw RecipientAdded events into Recipient records
(metadata kept verbatim) or Project views (metadata parsed as JSON).
"""

import json
from typing import Any, Dict, Optional

from eth_utils import is_hex_address, is_hexstr

from .errors import InvalidEventError, InvalidMetadataError
from .events import RecipientAdded
from .recipient import Project, Recipient

RECIPIENT_ID_BYTES = 32

# metadata key -> Project field
_PROJECT_FIELDS = {
    "name": "name",
    "tagline": "tagline",
    "description": "description",
    "category": "category",
    "problemSpace": "problem_space",
    "plans": "plans",
    "teamName": "team_name",
    "teamDescription": "team_description",
    "githubUrl": "github_url",
    "websiteUrl": "website_url",
    "twitterUrl": "twitter_url",
    "discordUrl": "discord_url",
}


def is_hex_string(value: Any, length: Optional[int] = None) -> bool:
    """
    Check for a 0x-prefixed hex string, optionally of exactly `length` bytes.

    Example:
        is_hex_string("0x" + "ab" * 32, 32) -> True
        is_hex_string("ab" * 32, 32) -> False
    """
    if not isinstance(value, str) or not value.startswith("0x"):
        return False
    if not is_hexstr(value):
        return False
    if length is not None and len(value) != 2 + 2 * length:
        return False
    return True


def normalize_recipient_id(value: Any) -> str:
    """
    Lowercase a recipient id after validating it is 32-byte hex.

    Raises:
        InvalidEventError: If value is not a 32-byte hex string
    """
    if isinstance(value, (bytes, bytearray)):
        value = "0x" + bytes(value).hex()
    if not is_hex_string(value, RECIPIENT_ID_BYTES):
        raise InvalidEventError(f"Invalid recipient id: {value!r}")
    return value.lower()


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidEventError(f"Invalid {name}: {value!r}")
    return value


def recipient_from_event(event: RecipientAdded, created_at: int) -> Recipient:
    """
    Build a Recipient from a RecipientAdded event.

    Metadata is stored as emitted; it is never parsed here.

    Args:
        event: Raw added event
        created_at: Processing time to stamp on the record

    Returns:
        Recipient with derived flags unset

    Raises:
        InvalidEventError: If id, index, address or timestamp are malformed
    """
    recipient_id = normalize_recipient_id(event.recipient_id)
    index = _require_int("index", event.index)
    submitted_at = _require_int("timestamp", event.timestamp)
    if not is_hex_address(event.recipient):
        raise InvalidEventError(f"Invalid recipient address: {event.recipient!r}")
    if not isinstance(event.metadata, str):
        raise InvalidEventError("Recipient metadata must be a string")

    return Recipient(
        id=recipient_id,
        registry_id=event.registry.lower(),
        requester=event.sender.lower(),
        metadata=event.metadata,
        index=index,
        address=event.recipient,
        submitted_at=submitted_at,
        created_at=created_at,
        tx_hash=event.tx_hash,
    )


def parse_metadata(raw: str) -> Dict[str, Any]:
    """
    Parse a metadata blob as a JSON object.

    Raises:
        InvalidMetadataError: If the blob is not valid JSON or not an object
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidMetadataError(f"Invalid recipient metadata: {e}") from e
    if not isinstance(data, dict):
        raise InvalidMetadataError("Recipient metadata must be a JSON object")
    return data


def project_from_event(event: RecipientAdded, ipfs_gateway_url: str) -> Project:
    """
    Decode a RecipientAdded event into a Project.

    Known metadata keys map onto Project fields; anything else is kept in
    Project.extra. The image URL is derived from metadata.imageHash.

    Raises:
        InvalidEventError: If id or index are malformed
        InvalidMetadataError: If metadata is not a JSON object
    """
    recipient_id = normalize_recipient_id(event.recipient_id)
    index = _require_int("index", event.index)
    metadata = parse_metadata(event.metadata)

    fields: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}
    for key, value in metadata.items():
        if key in _PROJECT_FIELDS:
            fields[_PROJECT_FIELDS[key]] = value
        elif key != "imageHash":
            extra[key] = value

    image_hash = metadata.get("imageHash")
    image_url = f"{ipfs_gateway_url.rstrip('/')}/ipfs/{image_hash}" if image_hash else None

    return Project(
        id=recipient_id,
        address=event.recipient,
        index=index,
        image_url=image_url,
        extra=extra,
        **fields,
    )
