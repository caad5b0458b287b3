"""
Participant onboarding service.

Creates the account of a new participant: eight activation slots issued
from the current system config, a welcome notification, a directory record
(pending until activation) and a place at the back of the binary queue.
"""

import random
from collections.abc import Sequence

from app.models.account import AccountState
from app.models.binary import BinaryLedger
from app.models.enums import NotificationType
from app.models.participant import ParticipantRecord
from app.services.base_service import BaseService, ServiceResult, log_operation
from app.services.binary.queue_matcher import BinaryQueueService
from app.services.notification.core import build_notification
from app.services.participant_service import DirectoryService
from app.services.payment.issuer import DEFAULT_SPONSOR_ID, issue_payments
from app.services.store import PlatformStore
from app.utils.clock import Clock


WELCOME_MESSAGE = "Welcome to Payback247! Complete your payments to get started."


class OnboardingService(BaseService):
    """
    Registration of new participants.

    Args:
        store: Platform store
        clock: Time source
        directory: Participant directory
        queue: Binary queue service
        rng: Random source for receiver choice and unique amounts
    """

    def __init__(
        self,
        store: PlatformStore,
        clock: Clock,
        directory: DirectoryService,
        queue: BinaryQueueService,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(store, clock)
        self.directory = directory
        self.queue = queue
        self.rng = rng or random.Random()

    @log_operation
    async def register_participant(
        self,
        participant_id: str,
        name: str,
        sponsor_id: str = DEFAULT_SPONSOR_ID,
        upline_ids: Sequence[str] | None = None,
        left_team: Sequence[str] = (),
        right_team: Sequence[str] = (),
        enqueue: bool = True,
    ) -> ServiceResult:
        """
        Register participant and issue their activation payments.

        Args:
            participant_id: New participant id
            name: Display name
            sponsor_id: Receiver of the referral slot
            upline_ids: Receivers of the five upline slots
            left_team: Initial left team members
            right_team: Initial right team members
            enqueue: Put the participant at the back of the binary queue

        Returns:
            ServiceResult with the new AccountState
        """
        name = name.strip()
        if not name:
            return ServiceResult.fail("Name is required", "missing_name")

        async with self.store.account_lock(participant_id):
            if self.store.has_account(participant_id):
                return ServiceResult.fail("Participant already registered", "already_registered")

            now = self.now()
            try:
                payments = issue_payments(
                    self.store.config,
                    self.store.payment_options,
                    now,
                    self.rng,
                    sponsor_id=sponsor_id,
                    upline_ids=upline_ids,
                )
            except ValueError as e:
                return ServiceResult.fail(str(e), "invalid_uplines")

            account = AccountState(
                participant_id=participant_id,
                display_name=name,
                payments=payments,
                notifications=(build_notification(NotificationType.SYSTEM, WELCOME_MESSAGE, now),),
                binary=BinaryLedger(left_team=tuple(left_team), right_team=tuple(right_team)),
            )
            self.store.put_account(account)

        await self.directory.register(
            ParticipantRecord(id=participant_id, name=name, joined_at=now)
        )
        if enqueue:
            await self.queue.enqueue(participant_id, name)

        self.logger.info(f"Participant {participant_id} ({name}) registered")
        return ServiceResult.ok(self.store.get_account(participant_id))
