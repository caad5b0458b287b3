"""
Payment expiry sweeps.

Run by the sweep scheduler once per interval, payment sweep first.
Deadlines are hard: a slot or confirmation is late only when now is strictly
past its start plus the captured timer duration.
"""

from dataclasses import replace

from app.models.enums import NotificationType, PaymentStatus
from app.models.payment import Dispute
from app.services.base_service import BaseService
from app.services.notification.core import build_notification
from app.services.participant_service import DirectoryService
from app.services.payment.transitions import reissue, transition
from app.services.store import PlatformStore
from app.utils.clock import Clock


class PaymentExpiryService(BaseService):
    """Expiry of unpaid slots and unanswered confirmations."""

    def __init__(
        self, store: PlatformStore, clock: Clock, directory: DirectoryService
    ) -> None:
        super().__init__(store, clock)
        self.directory = directory

    async def expire_payments(self) -> int:
        """
        Mark overdue unpaid slots expired.

        Admin slots have no countdown and are never touched.

        Returns:
            Number of expired slots
        """
        expired = 0
        for participant_id in self.store.participant_ids():
            async with self.store.account_lock(participant_id):
                account = self.store.find_account(participant_id)
                if account is None:
                    continue
                now = self.now()
                overdue = [p for p in account.payments if p.is_overdue(now)]
                if not overdue:
                    continue
                for payment in overdue:
                    account = account.with_payment(transition(payment, PaymentStatus.EXPIRED))
                self.store.put_account(account)

            expired += len(overdue)
            self.logger.info(
                f"Expired {len(overdue)} payment(s) of {participant_id}: "
                f"{', '.join(p.id for p in overdue)}"
            )
        return expired

    async def expire_confirmations(self) -> dict[str, int]:
        """
        Resolve confirmations nobody acted on in time.

        Matrix slots escalate to a dispute and put the receiver on hold.
        Referral, binary and admin slots go back to unpaid with a new
        countdown.

        Returns:
            Dict with counts: disputed, reset
        """
        stats = {"disputed": 0, "reset": 0}
        receivers_on_hold: list[str] = []

        for participant_id in self.store.participant_ids():
            async with self.store.account_lock(participant_id):
                account = self.store.find_account(participant_id)
                if account is None:
                    continue
                now = self.now()
                late = [c for c in account.confirmations if c.is_expired(now)]
                if not late:
                    continue

                late_ids = {c.id for c in late}
                account = replace(
                    account,
                    confirmations=tuple(
                        c for c in account.confirmations if c.id not in late_ids
                    ),
                )

                for confirmation in late:
                    payment = account.get_payment(confirmation.payment_id)
                    if payment is None or payment.status != PaymentStatus.PENDING:
                        continue

                    if confirmation.payment_type.is_matrix:
                        dispute = Dispute(
                            **{f: getattr(confirmation, f) for f in _CONFIRMATION_FIELDS},
                            escalated_at=now,
                        )
                        account = account.with_payment(
                            transition(payment, PaymentStatus.DISPUTED)
                        )
                        account = replace(account, disputes=account.disputes + (dispute,))
                        account = account.with_notifications(
                            build_notification(
                                NotificationType.SYSTEM,
                                f'Your payment for "{payment.title}" was not confirmed in time '
                                "and has been sent to an admin for review.",
                                now,
                            )
                        )
                        receivers_on_hold.append(confirmation.receiver_id)
                        stats["disputed"] += 1
                        self.logger.warning(
                            f"Confirmation {confirmation.id} of {participant_id} escalated "
                            f"to dispute, receiver {confirmation.receiver_id} on hold"
                        )
                    else:
                        account = account.with_payment(reissue(payment, now))
                        account = account.with_notifications(
                            build_notification(
                                NotificationType.SYSTEM,
                                f'Your payment for "{payment.title}" was not confirmed in time. '
                                "Please submit it again.",
                                now,
                            )
                        )
                        stats["reset"] += 1
                        self.logger.info(
                            f"Confirmation {confirmation.id} of {participant_id} expired, "
                            f"payment {payment.id} reissued"
                        )

                self.store.put_account(account)

        if receivers_on_hold:
            await self.directory.put_on_hold(receivers_on_hold)
        return stats


_CONFIRMATION_FIELDS = (
    "id",
    "payment_id",
    "payment_type",
    "payment_title",
    "sender_name",
    "amount",
    "transaction_id",
    "proof",
    "submitted_at",
    "receiver_id",
    "timer_duration",
)
