"""
Payment lifecycle service.

Handles submission, receiver confirmation/rejection and the crypto
auto-verification path of activation payments.

Validation failures never raise: the operation is a no-op and the caller
gets an unsuccessful ServiceResult.
"""

from dataclasses import replace
from datetime import timedelta
from functools import partial

from app.models.account import AccountState
from app.models.enums import (
    NotificationType,
    PaymentMethod,
    PaymentStatus,
    TransactionStatus,
)
from app.models.payment import Confirmation
from app.services.base_service import BaseService, ServiceResult, log_operation
from app.services.notification.core import (
    NotificationService,
    build_notification,
    build_transaction,
)
from app.services.participant_service import DirectoryService
from app.services.payment.transitions import reissue, transition
from app.services.payment.verification import VerificationDecision
from app.services.scheduler import SweepScheduler
from app.services.store import PlatformStore
from app.utils.clock import Clock
from app.utils.formatters import format_amount
from app.utils.identifiers import new_id


class PaymentLifecycleService(BaseService):
    """
    Activation payment state machine.

    Args:
        store: Platform store
        clock: Time source
        scheduler: Coordinator for the verification delays
        notifications: Feed service (receiver-side notifications)
        directory: Participant directory (activation)
        decide: Verification decision port
        settle_delay: Time a crypto payment stays in verifying
        reset_delay: Time a failed payment is shown before it resets
    """

    def __init__(
        self,
        store: PlatformStore,
        clock: Clock,
        scheduler: SweepScheduler,
        notifications: NotificationService,
        directory: DirectoryService,
        decide: VerificationDecision,
        settle_delay: timedelta = timedelta(seconds=3),
        reset_delay: timedelta = timedelta(seconds=3),
    ) -> None:
        super().__init__(store, clock)
        self.scheduler = scheduler
        self.notifications = notifications
        self.directory = directory
        self.decide = decide
        self.settle_delay = settle_delay
        self.reset_delay = reset_delay

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_confirmation_owner(self, confirmation_id: str) -> str | None:
        """Participant whose payment the confirmation belongs to."""
        for participant_id, account in self.store.accounts.items():
            if account.get_confirmation(confirmation_id) is not None:
                return participant_id
        return None

    def list_pending_confirmations(
        self, receiver_id: str | None = None
    ) -> list[Confirmation]:
        """
        Live confirmations, oldest first.

        Args:
            receiver_id: Only confirmations addressed to this receiver

        Returns:
            List of confirmations
        """
        confirmations = [
            c
            for account in self.store.accounts.values()
            for c in account.confirmations
            if receiver_id is None or c.receiver_id == receiver_id
        ]
        return sorted(confirmations, key=lambda c: c.submitted_at)

    # ------------------------------------------------------------------
    # Manual submission path
    # ------------------------------------------------------------------

    async def submit(
        self,
        participant_id: str,
        payment_id: str,
        transaction_id: str,
        proof: str | None = None,
        method: PaymentMethod = PaymentMethod.QR,
    ) -> ServiceResult:
        """
        Submit payment details for receiver confirmation.

        Args:
            participant_id: Sender
            payment_id: Slot id
            transaction_id: Transaction reference (required)
            proof: Proof reference (required unless method is crypto)
            method: Payment method used

        Returns:
            ServiceResult with the created Confirmation
        """
        transaction_id = (transaction_id or "").strip()
        if not transaction_id:
            return ServiceResult.fail("Transaction ID is required", "missing_transaction_id")
        if method != PaymentMethod.CRYPTO and not proof:
            return ServiceResult.fail("Payment proof is required", "missing_proof")

        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            payment = account.get_payment(payment_id)
            if payment is None:
                return ServiceResult.fail("Payment not found", "not_found")
            if payment.status != PaymentStatus.UNPAID:
                return ServiceResult.fail(
                    f"Payment is {payment.status.value}", "invalid_state"
                )

            now = self.now()
            pending = transition(
                payment,
                PaymentStatus.PENDING,
                transaction_id=transaction_id,
                proof=proof,
            )
            confirmation = Confirmation(
                id=new_id("conf"),
                payment_id=payment.id,
                payment_type=payment.type,
                payment_title=payment.title,
                sender_name=account.display_name,
                amount=payment.amount,
                transaction_id=transaction_id,
                proof=proof,
                submitted_at=now,
                receiver_id=payment.receiver_id,
                timer_duration=payment.timer_duration,
            )
            account = account.with_payment(pending)
            account = replace(account, confirmations=account.confirmations + (confirmation,))
            self.store.put_account(account)

        self.logger.info(
            f"Payment {payment_id} of {participant_id} submitted, "
            f"confirmation {confirmation.id} awaits {confirmation.receiver_id}"
        )
        return ServiceResult.ok(confirmation)

    @log_operation
    async def confirm(self, confirmation_id: str) -> ServiceResult:
        """
        Receiver/admin approves a pending confirmation.

        Args:
            confirmation_id: Confirmation id

        Returns:
            ServiceResult with the removed Confirmation
        """
        owner = self.find_confirmation_owner(confirmation_id)
        if owner is None:
            return ServiceResult.fail("Confirmation not found", "not_found")

        async with self.store.account_lock(owner):
            account = self.store.get_account(owner)
            confirmation = account.get_confirmation(confirmation_id)
            if confirmation is None:
                return ServiceResult.fail("Confirmation not found", "not_found")

            account = _drop_confirmation(account, confirmation_id)
            payment = account.get_payment(confirmation.payment_id)
            if payment is None or payment.status != PaymentStatus.PENDING:
                self.store.put_account(account)
                self.logger.warning(
                    f"Stale confirmation {confirmation_id} dropped "
                    f"(payment {confirmation.payment_id} not pending)"
                )
                return ServiceResult.fail("Payment is no longer pending", "stale_confirmation")

            now = self.now()
            account = account.with_payment(transition(payment, PaymentStatus.CONFIRMED))
            account = account.with_transactions(
                build_transaction(
                    payment.type.ledger_type,
                    f"Payment from {confirmation.sender_name}",
                    confirmation.amount,
                    TransactionStatus.CONFIRMED,
                    now,
                )
            )
            account = account.with_notifications(
                build_notification(
                    NotificationType.PAYMENT_CONFIRMED,
                    f'Your payment for "{confirmation.payment_title}" was approved.',
                    now,
                )
            )
            self.store.put_account(account)
            activated = account.is_active

        self.logger.info(f"Confirmation {confirmation_id} approved, payment {payment.id} confirmed")
        await self.notifications.push(
            confirmation.receiver_id,
            NotificationType.PAYMENT_RECEIVED,
            f'"{confirmation.sender_name}" has sent you a {confirmation.payment_title} '
            f"payment of {format_amount(confirmation.amount)}.",
        )
        if activated:
            await self.directory.mark_active(owner)
        return ServiceResult.ok(confirmation)

    @log_operation
    async def reject(self, confirmation_id: str) -> ServiceResult:
        """
        Receiver/admin rejects a pending confirmation.

        The slot goes back to unpaid for the same receiver with a fresh
        countdown.
        """
        owner = self.find_confirmation_owner(confirmation_id)
        if owner is None:
            return ServiceResult.fail("Confirmation not found", "not_found")

        async with self.store.account_lock(owner):
            account = self.store.get_account(owner)
            confirmation = account.get_confirmation(confirmation_id)
            if confirmation is None:
                return ServiceResult.fail("Confirmation not found", "not_found")

            account = _drop_confirmation(account, confirmation_id)
            payment = account.get_payment(confirmation.payment_id)
            now = self.now()
            if payment is not None and payment.status == PaymentStatus.PENDING:
                account = account.with_payment(reissue(payment, now))
                account = account.with_notifications(
                    build_notification(
                        NotificationType.SYSTEM,
                        f'Your payment for "{confirmation.payment_title}" was rejected. '
                        "Please check the details and submit again.",
                        now,
                    )
                )
            self.store.put_account(account)

        self.logger.info(f"Confirmation {confirmation_id} rejected, payment reissued")
        return ServiceResult.ok(confirmation)

    # ------------------------------------------------------------------
    # Crypto auto-verification path
    # ------------------------------------------------------------------

    async def auto_verify(
        self, participant_id: str, payment_id: str, transaction_id: str
    ) -> ServiceResult:
        """
        Start crypto verification of a transaction hash.

        The payment turns verifying immediately and is resolved by the
        scheduler after the settle delay. Without a ready crypto config the
        request fails closed: the payment stays unpaid and an error
        notification is appended.

        Returns:
            ServiceResult with the due time of the verification
        """
        transaction_id = (transaction_id or "").strip()
        if not transaction_id:
            return ServiceResult.fail("Transaction ID is required", "missing_transaction_id")

        config = self.store.config
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                return ServiceResult.fail("Participant not found", "not_found")
            payment = account.get_payment(payment_id)
            if payment is None:
                return ServiceResult.fail("Payment not found", "not_found")
            if payment.status != PaymentStatus.UNPAID:
                return ServiceResult.fail(
                    f"Payment is {payment.status.value}", "invalid_state"
                )

            if not config.crypto_verification_ready:
                account = account.with_notifications(
                    build_notification(
                        NotificationType.ERROR,
                        "Crypto verification is not configured. "
                        "Please submit your payment proof for manual confirmation.",
                        self.now(),
                    )
                )
                self.store.put_account(account)
                self.logger.warning(
                    f"Auto-verify of {payment_id} for {participant_id} refused: "
                    "crypto verification not configured"
                )
                return ServiceResult.fail(
                    "Crypto verification is not configured", "verification_unavailable"
                )

            self.store.put_account(
                account.with_payment(
                    transition(payment, PaymentStatus.VERIFYING, transaction_id=transaction_id)
                )
            )

        due = self.scheduler.schedule_in(
            self.settle_delay,
            f"verify:{participant_id}:{payment_id}",
            partial(self._resolve_verification, participant_id, payment_id),
        )
        self.logger.info(f"Payment {payment_id} of {participant_id} verifying until {due}")
        return ServiceResult.ok(due)

    async def _resolve_verification(self, participant_id: str, payment_id: str) -> None:
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            payment = account.get_payment(payment_id) if account else None
            if payment is None or payment.status != PaymentStatus.VERIFYING:
                return

            try:
                verified = bool(self.decide(payment))
            except Exception as e:
                self.logger.exception(f"Verification of {payment_id} raised: {e}")
                verified = False

            now = self.now()
            if verified:
                account = account.with_payment(transition(payment, PaymentStatus.CONFIRMED))
                account = account.with_transactions(
                    build_transaction(
                        payment.type.ledger_type,
                        f"Auto-verified: {payment.title}",
                        payment.amount,
                        TransactionStatus.CONFIRMED,
                        now,
                    )
                )
                account = account.with_notifications(
                    build_notification(
                        NotificationType.PAYMENT_CONFIRMED,
                        f'Your payment for "{payment.title}" was verified automatically.',
                        now,
                    )
                )
            else:
                account = account.with_payment(transition(payment, PaymentStatus.FAILED))
            self.store.put_account(account)
            activated = account.is_active

        if verified:
            self.logger.info(f"Payment {payment_id} of {participant_id} auto-verified")
            if activated:
                await self.directory.mark_active(participant_id)
            return

        self.logger.warning(f"Payment {payment_id} of {participant_id} failed verification")
        self.scheduler.schedule_in(
            self.reset_delay,
            f"reset:{participant_id}:{payment_id}",
            partial(self._reset_failed, participant_id, payment_id),
        )

    async def _reset_failed(self, participant_id: str, payment_id: str) -> None:
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            payment = account.get_payment(payment_id) if account else None
            if payment is None or payment.status != PaymentStatus.FAILED:
                return
            self.store.put_account(
                account.with_payment(
                    transition(payment, PaymentStatus.UNPAID, transaction_id="")
                )
            )
        self.logger.info(f"Failed payment {payment_id} of {participant_id} reset to unpaid")


def _drop_confirmation(account: AccountState, confirmation_id: str) -> AccountState:
    return replace(
        account,
        confirmations=tuple(c for c in account.confirmations if c.id != confirmation_id),
    )
