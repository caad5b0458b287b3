"""
Platform snapshot service.

Saves and restores the whole platform state as one JSON document in the
state_snapshots table. Deferred verification actions are not persisted:
slots caught in verifying or failed are restored as unpaid.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config.business_constants import PLATFORM_SNAPSHOT_KEY
from app.config.database import async_session_maker
from app.models.account import AccountState
from app.models.binary import QueueState
from app.models.enums import PaymentStatus
from app.models.participant import ParticipantRecord
from app.models.system_config import (
    DEFAULT_ADMIN_PAYMENT_OPTIONS,
    AdminPaymentOption,
    SystemConfig,
)
from app.repositories.state_snapshot_repository import StateSnapshotRepository
from app.services.base_service import BaseService
from app.services.store import PlatformStore
from app.utils.clock import Clock


@dataclass(frozen=True)
class PlatformSnapshot:
    """Serializable copy of every platform aggregate."""

    config: SystemConfig = field(default_factory=SystemConfig)
    payment_options: tuple[AdminPaymentOption, ...] = DEFAULT_ADMIN_PAYMENT_OPTIONS
    accounts: dict[str, AccountState] = field(default_factory=dict)
    queue: QueueState = field(default_factory=QueueState)
    directory: dict[str, ParticipantRecord] = field(default_factory=dict)


snapshot_adapter = TypeAdapter(PlatformSnapshot)

_INTERRUPTED = {PaymentStatus.VERIFYING, PaymentStatus.FAILED}


def recover_interrupted(account: AccountState) -> AccountState:
    """Turn verifying/failed slots back to unpaid with no transaction id."""
    if not any(p.status in _INTERRUPTED for p in account.payments):
        return account
    return replace(
        account,
        payments=tuple(
            replace(p, status=PaymentStatus.UNPAID, transaction_id="")
            if p.status in _INTERRUPTED
            else p
            for p in account.payments
        ),
    )


class SnapshotService(BaseService):
    """
    Persistence of PlatformStore.

    Args:
        store: Platform store
        clock: Time source
        session_maker: Session factory (application database by default)
        key: Snapshot key
    """

    def __init__(
        self,
        store: PlatformStore,
        clock: Clock | None = None,
        session_maker: async_sessionmaker[AsyncSession] | None = None,
        key: str = PLATFORM_SNAPSHOT_KEY,
    ) -> None:
        super().__init__(store, clock)
        self.session_maker = session_maker or async_session_maker
        self.key = key

    def dump(self) -> dict[str, Any]:
        """Serialize current store to a JSON-compatible dict."""
        snapshot = PlatformSnapshot(
            config=self.store.config,
            payment_options=self.store.payment_options,
            accounts=dict(self.store.accounts),
            queue=self.store.queue,
            directory=dict(self.store.directory),
        )
        return snapshot_adapter.dump_python(snapshot, mode="json")

    def restore(self, payload: dict[str, Any]) -> PlatformSnapshot:
        """
        Replace store contents with payload.

        Raises:
            ValidationError: If payload does not describe a platform state
        """
        snapshot = snapshot_adapter.validate_python(payload)
        accounts = {pid: recover_interrupted(a) for pid, a in snapshot.accounts.items()}
        self.store.replace_all(
            config=snapshot.config,
            payment_options=snapshot.payment_options,
            accounts=accounts,
            queue=snapshot.queue,
            directory=snapshot.directory,
        )
        return snapshot

    async def save(self) -> None:
        payload = self.dump()
        async with self.session_maker() as session:
            repo = StateSnapshotRepository(session)
            await repo.save_payload(self.key, payload)
            await session.commit()
        self.logger.debug(f"Snapshot {self.key} saved ({len(self.store.accounts)} accounts)")

    async def load(self) -> bool:
        """
        Restore store from the database.

        Returns:
            True if a stored snapshot was applied
        """
        async with self.session_maker() as session:
            payload = await StateSnapshotRepository(session).get_payload(self.key)

        if payload is None:
            self.logger.info(f"No stored snapshot under {self.key}")
            return False

        try:
            self.restore(payload)
        except ValidationError as e:
            self.logger.error(f"Stored snapshot {self.key} is invalid, ignoring it: {e}")
            return False

        self.logger.info(f"Snapshot {self.key} restored ({len(self.store.accounts)} accounts)")
        return True

    async def clear(self) -> bool:
        async with self.session_maker() as session:
            deleted = await StateSnapshotRepository(session).delete_key(self.key)
            await session.commit()
        return deleted
