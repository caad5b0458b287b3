"""
Activation payment models.

A participant owns eight payment slots. Each slot carries its own countdown,
captured from the system config when the slot was issued.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from app.models.enums import PaymentStatus, PaymentType


@dataclass(frozen=True)
class Payment:
    """
    One activation payment slot.

    Timeline:
    - assigned_at: slot issued (or re-issued after reject/reset)
    - assigned_at + timer_duration: unpaid slot expires (admin slots never do)
    """

    id: str
    type: PaymentType
    title: str
    amount: Decimal
    receiver_id: str
    assigned_at: datetime
    timer_duration: timedelta
    status: PaymentStatus = PaymentStatus.UNPAID
    transaction_id: str = ""
    proof: str | None = None
    receiver_contact: str = ""
    upi_id: str = ""
    usdt_address: str = ""
    unique_amount: Decimal | None = None

    @property
    def deadline(self) -> datetime:
        return self.assigned_at + self.timer_duration

    def is_overdue(self, now: datetime) -> bool:
        """Check if an unpaid slot ran out of time."""
        return (
            self.status == PaymentStatus.UNPAID
            and self.type.expires
            and now > self.deadline
        )

    def remaining(self, now: datetime) -> timedelta:
        """Time left on the countdown, never negative."""
        left = self.deadline - now
        return left if left > timedelta(0) else timedelta(0)


@dataclass(frozen=True)
class Confirmation:
    """Sender's claim that a payment was made, awaiting the receiver."""

    id: str
    payment_id: str
    payment_type: PaymentType
    payment_title: str
    sender_name: str
    amount: Decimal
    transaction_id: str
    proof: str | None
    submitted_at: datetime
    receiver_id: str
    timer_duration: timedelta

    def is_expired(self, now: datetime) -> bool:
        return now > self.submitted_at + self.timer_duration


@dataclass(frozen=True)
class Dispute(Confirmation):
    """Confirmation that expired without receiver action."""

    escalated_at: datetime | None = None
