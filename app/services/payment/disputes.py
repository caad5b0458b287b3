"""
Dispute resolution service.

Admin arbitration of matrix confirmations that expired unanswered.
"""

from dataclasses import replace

from app.models.enums import DisputeFavor, NotificationType, PaymentStatus
from app.models.payment import Dispute
from app.services.base_service import BaseService, ServiceResult, log_operation
from app.services.notification.core import build_notification
from app.services.participant_service import DirectoryService
from app.services.payment.transitions import reissue, transition
from app.services.store import PlatformStore
from app.utils.clock import Clock


class DisputeService(BaseService):
    """Open disputes and their resolution."""

    def __init__(
        self, store: PlatformStore, clock: Clock, directory: DirectoryService
    ) -> None:
        super().__init__(store, clock)
        self.directory = directory

    def list_disputes(self) -> list[tuple[str, Dispute]]:
        """Open disputes with their sender's participant id, oldest first."""
        disputes = [
            (participant_id, dispute)
            for participant_id, account in self.store.accounts.items()
            for dispute in account.disputes
        ]
        return sorted(disputes, key=lambda item: item[1].submitted_at)

    def _find_owner(self, dispute_id: str) -> str | None:
        for participant_id, account in self.store.accounts.items():
            if account.get_dispute(dispute_id) is not None:
                return participant_id
        return None

    def _has_open_disputes(self, receiver_id: str) -> bool:
        return any(d.receiver_id == receiver_id for _, d in self.list_disputes())

    @log_operation
    async def resolve(self, dispute_id: str, favor: DisputeFavor) -> ServiceResult:
        """
        Resolve dispute.

        Args:
            dispute_id: Dispute id
            favor: sender -> payment confirmed; receiver -> payment back to
                unpaid with cleared fields and a new countdown

        Returns:
            ServiceResult with the removed Dispute
        """
        owner = self._find_owner(dispute_id)
        if owner is None:
            return ServiceResult.fail("Dispute not found", "not_found")

        async with self.store.account_lock(owner):
            account = self.store.get_account(owner)
            dispute = account.get_dispute(dispute_id)
            if dispute is None:
                return ServiceResult.fail("Dispute not found", "not_found")

            account = replace(
                account,
                disputes=tuple(d for d in account.disputes if d.id != dispute_id),
            )
            payment = account.get_payment(dispute.payment_id)
            now = self.now()

            if payment is not None and payment.status == PaymentStatus.DISPUTED:
                if favor == DisputeFavor.SENDER:
                    account = account.with_payment(transition(payment, PaymentStatus.CONFIRMED))
                    message = (
                        f'The dispute for your "{dispute.payment_title}" payment was resolved '
                        "in your favour. The payment is confirmed."
                    )
                else:
                    account = account.with_payment(reissue(payment, now))
                    message = (
                        f'The dispute for your "{dispute.payment_title}" payment was resolved '
                        "in favour of the receiver. Please make the payment again."
                    )
                account = account.with_notifications(
                    build_notification(NotificationType.SYSTEM, message, now)
                )
            self.store.put_account(account)
            activated = account.is_active

        self.logger.info(f"Dispute {dispute_id} of {owner} resolved for {favor.value}")
        if not self._has_open_disputes(dispute.receiver_id):
            await self.directory.release_hold(dispute.receiver_id)
        if activated:
            await self.directory.mark_active(owner)
        return ServiceResult.ok(dispute)
