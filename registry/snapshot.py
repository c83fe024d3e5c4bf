"""
Snapshot reconciler: recomputes a round's recipient view from the full
event history of a registry.

Each request fetches both event sets from genesis, cross-references them
and derives hidden/locked flags for the requested window. Nothing is
cached between requests.
"""

import asyncio
from typing import Dict, List, Optional

from .core.decoder import RECIPIENT_ID_BYTES, is_hex_string, project_from_event
from .core.errors import InvalidEventError
from .core.events import RecipientRemoved
from .core.recipient import Project
from .core.window import derive_visibility, lock_on_any_removal
from .logging_config import get_logger
from .source import EventSource


def index_removals(removed: List[RecipientRemoved]) -> Dict[str, RecipientRemoved]:
    """
    Map recipient id -> first removal event.

    Built once per request; lookups are O(1) instead of rescanning the
    removal list for every added recipient.
    """
    out: Dict[str, RecipientRemoved] = {}
    for ev in removed:
        out.setdefault(ev.recipient_id.lower(), ev)
    return out


class SnapshotReconciler:
    """
    Pull-model recipient view for a funding round.

    Usage:
        reconciler = SnapshotReconciler(source, "https://ipfs.io")
        projects = await reconciler.list_recipients(registry, start, end)
    """

    def __init__(self, source: EventSource, ipfs_gateway_url: str) -> None:
        self.source = source
        self.ipfs_gateway_url = ipfs_gateway_url

    async def list_recipients(
        self,
        registry: str,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> List[Project]:
        """
        List every decodable recipient with round flags.

        Recipients with undecodable events or metadata are skipped. A fetch
        failure fails the whole request.

        Args:
            registry: Registry contract address
            start_time: Round start, None for no start bound
            end_time: Round end, None for no end bound

        Returns:
            Projects in the order their RecipientAdded events were emitted

        Raises:
            ProviderError: If either fetch fails
        """
        logger = get_logger(__name__, trace_id=registry)

        added, removed = await asyncio.gather(
            self.source.fetch_added(registry),
            self.source.fetch_removed(registry),
        )
        removals = index_removals(removed)

        projects: List[Project] = []
        for ev in added:
            try:
                project = project_from_event(ev, self.ipfs_gateway_url)
            except InvalidEventError as e:
                logger.warning("Skipping recipient %s: %s", ev.recipient_id, e)
                continue

            removal = removals.get(project.id)
            vis = derive_visibility(
                added_at=ev.timestamp,
                removed_at=removal.timestamp if removal is not None else None,
                start_time=start_time,
                end_time=end_time,
            )
            project.is_hidden = vis.is_hidden
            project.is_locked = vis.is_locked
            projects.append(project)

        logger.debug(
            "Snapshot reconciled: %d added, %d removed, %d listed",
            len(added),
            len(removed),
            len(projects),
        )
        return projects

    async def get_recipient(self, registry: str, recipient_id: str) -> Optional[Project]:
        """
        Look up a single recipient.

        Returns None for a malformed id (no query issued), for zero or
        multiple RecipientAdded events, and for undecodable metadata.

        The lookup locks the recipient if any removal exists and applies no
        round window; list_recipients() hides or locks by window instead.

        Raises:
            ProviderError: If a fetch fails
        """
        if not is_hex_string(recipient_id, RECIPIENT_ID_BYTES):
            return None
        logger = get_logger(__name__, trace_id=recipient_id)

        added = await self.source.fetch_added(registry, recipient_id)
        if len(added) != 1:
            logger.debug("Recipient not found (%d add events)", len(added))
            return None

        try:
            project = project_from_event(added[0], self.ipfs_gateway_url)
        except InvalidEventError as e:
            logger.warning("Invalid recipient: %s", e)
            return None

        removed = await self.source.fetch_removed(registry, recipient_id)
        vis = lock_on_any_removal(bool(removed))
        project.is_hidden = vis.is_hidden
        project.is_locked = vis.is_locked
        return project
