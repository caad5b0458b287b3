"""
Platform store.

Holds the current snapshot of every aggregate and the locks that serialize
writers. Aggregates are replaced wholesale; readers always get a complete
snapshot, never a half-updated collection.

Lock order: queue -> directory -> account.
"""

import asyncio
from dataclasses import dataclass, field

from app.models.account import AccountState
from app.models.binary import QueueState
from app.models.participant import ParticipantRecord
from app.models.system_config import (
    DEFAULT_ADMIN_PAYMENT_OPTIONS,
    AdminPaymentOption,
    SystemConfig,
)
from app.utils.exceptions import UnknownParticipantError


@dataclass
class PlatformStore:
    """Owner of all platform aggregates."""

    config: SystemConfig = field(default_factory=SystemConfig)
    payment_options: tuple[AdminPaymentOption, ...] = DEFAULT_ADMIN_PAYMENT_OPTIONS
    accounts: dict[str, AccountState] = field(default_factory=dict)
    queue: QueueState = field(default_factory=QueueState)
    directory: dict[str, ParticipantRecord] = field(default_factory=dict)

    queue_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    directory_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    _account_locks: dict[str, asyncio.Lock] = field(default_factory=dict, repr=False)

    def account_lock(self, participant_id: str) -> asyncio.Lock:
        """Lock guarding one participant's account."""
        lock = self._account_locks.get(participant_id)
        if lock is None:
            lock = asyncio.Lock()
            self._account_locks[participant_id] = lock
        return lock

    def has_account(self, participant_id: str) -> bool:
        return participant_id in self.accounts

    def get_account(self, participant_id: str) -> AccountState:
        account = self.accounts.get(participant_id)
        if account is None:
            raise UnknownParticipantError(participant_id)
        return account

    def find_account(self, participant_id: str) -> AccountState | None:
        return self.accounts.get(participant_id)

    def put_account(self, account: AccountState) -> None:
        self.accounts[account.participant_id] = account

    def participant_ids(self) -> list[str]:
        return list(self.accounts)

    def put_queue(self, queue: QueueState) -> None:
        self.queue = queue

    def put_record(self, record: ParticipantRecord) -> None:
        self.directory[record.id] = record

    def replace_all(
        self,
        config: SystemConfig,
        payment_options: tuple[AdminPaymentOption, ...],
        accounts: dict[str, AccountState],
        queue: QueueState,
        directory: dict[str, ParticipantRecord],
    ) -> None:
        """Swap in a full state (snapshot restore or demo reset)."""
        self.config = config
        self.payment_options = payment_options
        self.accounts = dict(accounts)
        self.queue = queue
        self.directory = dict(directory)
