"""
Recipient model.

Recipient is the reconciled record the indexer stores, keyed by id.
Project is the decoded view the snapshot reconciler returns to callers.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Recipient:
    """
    Immutable reconciled recipient.

    Fields:
        id: 0x-prefixed 32-byte recipient id
        registry_id: Address of the owning registry
        requester: Address that submitted the registration
        metadata: Raw metadata blob, stored verbatim
        index: Registry-assigned ordinal (display order, not identity)
        address: Payout address
        submitted_at: On-chain registration time
        created_at: Time the record was materialized by the indexer
        tx_hash: Registration transaction hash
        removed: Whether a RecipientRemoved was observed (flag strategy)
        removed_at: On-chain removal time, if removed
        is_hidden: Derived, excluded from the round listing
        is_locked: Derived, listed but closed to new contributions
    """
    id: str
    registry_id: str
    requester: str
    metadata: str
    index: int
    address: str
    submitted_at: int
    created_at: int
    tx_hash: str = ""
    removed: bool = False
    removed_at: Optional[int] = None
    is_hidden: bool = False
    is_locked: bool = False

    def with_flags(self, is_hidden: bool, is_locked: bool) -> "Recipient":
        return replace(self, is_hidden=is_hidden, is_locked=is_locked)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Recipient":
        return Recipient(
            id=data["id"],
            registry_id=data["registry_id"],
            requester=data.get("requester", ""),
            metadata=data.get("metadata", ""),
            index=int(data["index"]),
            address=data["address"],
            submitted_at=int(data["submitted_at"]),
            created_at=int(data["created_at"]),
            tx_hash=data.get("tx_hash", ""),
            removed=bool(data.get("removed", False)),
            removed_at=data.get("removed_at"),
            is_hidden=bool(data.get("is_hidden", False)),
            is_locked=bool(data.get("is_locked", False)),
        )


@dataclass
class Project:
    """Recipient decoded for display in a funding round."""
    id: str
    address: str
    index: int
    name: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    problem_space: Optional[str] = None
    plans: Optional[str] = None
    team_name: Optional[str] = None
    team_description: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None
    twitter_url: Optional[str] = None
    discord_url: Optional[str] = None
    image_url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    is_hidden: bool = False
    is_locked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
