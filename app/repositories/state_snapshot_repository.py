"""
State snapshot repository.

Data access layer for StateSnapshot model.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.state_snapshot import StateSnapshot
from app.repositories.base import BaseRepository


class StateSnapshotRepository(BaseRepository[StateSnapshot]):
    """Repository for whole-state snapshots."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(StateSnapshot, session)

    async def get_payload(self, key: str) -> dict[str, Any] | None:
        """
        Load stored payload.

        Args:
            key: Snapshot key

        Returns:
            Payload dict or None if nothing was saved
        """
        snapshot = await self.get_by(key=key)
        return snapshot.payload if snapshot else None

    async def save_payload(self, key: str, payload: dict[str, Any]) -> StateSnapshot:
        """
        Insert or replace payload under key.

        Args:
            key: Snapshot key
            payload: JSON-serializable state

        Returns:
            Stored snapshot row
        """
        snapshot = await self.get_by(key=key)
        if snapshot is None:
            return await self.create(key=key, payload=payload)

        snapshot.payload = payload
        snapshot.version += 1
        await self.session.flush()
        return snapshot

    async def delete_key(self, key: str) -> bool:
        return await self.delete_by(key=key) > 0
