"""
Payment status transitions.

States: unpaid -> pending -> {confirmed | disputed}; unpaid -> expired;
unpaid -> verifying -> {confirmed | failed -> unpaid}.

Rejections, receiver-side dispute rulings and sponsor/binary/admin
confirmation expiries take pending/disputed back to unpaid.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any

from app.models.enums import PaymentStatus
from app.models.payment import Payment
from app.utils.exceptions import InvalidTransition


ALLOWED: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.UNPAID: {
        PaymentStatus.PENDING,
        PaymentStatus.VERIFYING,
        PaymentStatus.EXPIRED,
    },
    PaymentStatus.PENDING: {
        PaymentStatus.CONFIRMED,
        PaymentStatus.DISPUTED,
        PaymentStatus.UNPAID,
    },
    PaymentStatus.VERIFYING: {
        PaymentStatus.CONFIRMED,
        PaymentStatus.FAILED,
        PaymentStatus.UNPAID,
    },
    PaymentStatus.FAILED: {PaymentStatus.UNPAID},
    PaymentStatus.DISPUTED: {PaymentStatus.CONFIRMED, PaymentStatus.UNPAID},
    PaymentStatus.CONFIRMED: set(),
    PaymentStatus.EXPIRED: set(),
}


def can_transition(old: PaymentStatus, new: PaymentStatus) -> bool:
    return new in ALLOWED.get(old, set())


def transition(payment: Payment, new_status: PaymentStatus, **changes: Any) -> Payment:
    """
    Return payment moved to new_status.

    Raises:
        InvalidTransition: If the move is not in ALLOWED
    """
    if not can_transition(payment.status, new_status):
        raise InvalidTransition(payment.status.value, new_status.value)
    return replace(payment, status=new_status, **changes)


def reissue(payment: Payment, now: datetime) -> Payment:
    """Back to unpaid with submission fields cleared and the timer restarted."""
    return transition(
        payment,
        PaymentStatus.UNPAID,
        transaction_id="",
        proof=None,
        assigned_at=now,
    )
