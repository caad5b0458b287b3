"""
Sponsor directs and binary teams.

Every change to a participant's directs recomputes sponsor qualification and
feeds it to the qualification hook. The hook is called after the account
lock is released, since it takes the queue lock first.
"""

from dataclasses import replace
from decimal import Decimal

from app.models.binary import SponsorDirect, is_sponsor_qualified
from app.models.enums import LegPosition, NotificationType
from app.services.base_service import BaseService, ServiceResult
from app.services.binary.qualification import QualificationService
from app.services.notification.core import build_notification
from app.services.store import PlatformStore
from app.utils.clock import Clock


class SponsorService(BaseService):
    """
    Sponsor directs of participants.

    Args:
        store: Platform store
        clock: Time source
        qualification: Qualification hook
    """

    def __init__(
        self,
        store: PlatformStore,
        clock: Clock,
        qualification: QualificationService,
    ) -> None:
        super().__init__(store, clock)
        self.qualification = qualification

    def is_qualified(self, participant_id: str) -> bool:
        account = self.store.find_account(participant_id)
        return account is not None and is_sponsor_qualified(account.sponsor_directs)

    async def add_direct(
        self,
        participant_id: str,
        name: str,
        position: LegPosition,
        amount: Decimal,
        is_paid: bool = False,
    ) -> ServiceResult:
        """
        Record a direct referral on one of the sponsor's legs.

        Returns:
            ServiceResult with the new SponsorDirect
        """
        direct = SponsorDirect(
            name=name,
            position=position,
            amount=amount,
            joined_at=self.now(),
            is_paid=is_paid,
        )
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            account = replace(account, sponsor_directs=account.sponsor_directs + (direct,))
            account = account.with_notifications(
                build_notification(
                    NotificationType.REFERRAL,
                    f"{name} joined as your direct referral on the {position.value} leg.",
                    self.now(),
                )
            )
            self.store.put_account(account)

        await self._recompute(participant_id)
        return ServiceResult.ok(direct)

    async def mark_direct_paid(self, participant_id: str, name: str) -> ServiceResult:
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            if not any(d.name == name for d in account.sponsor_directs):
                return ServiceResult.fail("Direct referral not found", "not_found")
            directs = tuple(
                replace(d, is_paid=True) if d.name == name else d
                for d in account.sponsor_directs
            )
            self.store.put_account(replace(account, sponsor_directs=directs))

        return await self._recompute(participant_id)

    async def mark_all_directs_paid(self, participant_id: str) -> ServiceResult:
        """Mark every direct paid (admin shortcut to qualify a participant)."""
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            directs = tuple(replace(d, is_paid=True) for d in account.sponsor_directs)
            self.store.put_account(replace(account, sponsor_directs=directs))

        return await self._recompute(participant_id)

    async def add_team_member(
        self, participant_id: str, name: str, position: LegPosition
    ) -> ServiceResult:
        """
        Place a member in the participant's left or right binary team.

        Returns:
            ServiceResult with the team sizes (left, right)
        """
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            binary = account.binary
            if position == LegPosition.LEFT:
                binary = replace(binary, left_team=binary.left_team + (name,))
            else:
                binary = replace(binary, right_team=binary.right_team + (name,))
            account = replace(account, binary=binary).with_notifications(
                build_notification(
                    NotificationType.REFERRAL,
                    f"{name} joined your {position.value} team.",
                    self.now(),
                )
            )
            self.store.put_account(account)

        return ServiceResult.ok((len(binary.left_team), len(binary.right_team)))

    async def _recompute(self, participant_id: str) -> ServiceResult:
        return await self.qualification.on_qualification_change(
            participant_id, self.is_qualified(participant_id)
        )
