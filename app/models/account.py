"""
Participant account aggregate.

Everything a single participant owns: payment slots, live confirmations,
disputes, ledger, notification feed, binary data and sponsor directs.
The aggregate is immutable; helpers return a replaced copy.
"""

from dataclasses import dataclass, replace

from app.models.binary import BinaryLedger, SponsorDirect
from app.models.enums import PaymentStatus
from app.models.ledger import Notification, Transaction
from app.models.payment import Confirmation, Dispute, Payment


@dataclass(frozen=True)
class AccountState:
    """Snapshot of one participant's account."""

    participant_id: str
    display_name: str
    payments: tuple[Payment, ...] = ()
    confirmations: tuple[Confirmation, ...] = ()
    disputes: tuple[Dispute, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    notifications: tuple[Notification, ...] = ()
    binary: BinaryLedger = BinaryLedger()
    sponsor_directs: tuple[SponsorDirect, ...] = ()

    @property
    def is_active(self) -> bool:
        """Account is activated once every slot is confirmed."""
        return bool(self.payments) and all(
            p.status == PaymentStatus.CONFIRMED for p in self.payments
        )

    @property
    def confirmed_count(self) -> int:
        return sum(1 for p in self.payments if p.status == PaymentStatus.CONFIRMED)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def get_payment(self, payment_id: str) -> Payment | None:
        for payment in self.payments:
            if payment.id == payment_id:
                return payment
        return None

    def get_confirmation(self, confirmation_id: str) -> Confirmation | None:
        for confirmation in self.confirmations:
            if confirmation.id == confirmation_id:
                return confirmation
        return None

    def get_dispute(self, dispute_id: str) -> Dispute | None:
        for dispute in self.disputes:
            if dispute.id == dispute_id:
                return dispute
        return None

    def with_payment(self, payment: Payment) -> "AccountState":
        """Replace the slot with the same id."""
        payments = tuple(payment if p.id == payment.id else p for p in self.payments)
        return replace(self, payments=payments)

    def with_notifications(self, *notifications: Notification) -> "AccountState":
        """Prepend notifications (feed is newest first)."""
        return replace(self, notifications=notifications + self.notifications)

    def with_transactions(self, *transactions: Transaction) -> "AccountState":
        """Prepend ledger transactions (history is newest first)."""
        return replace(self, transactions=transactions + self.transactions)
