"""
Enum definitions.

Status and type enums shared by models, services and bot handlers.
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Activation payment status."""

    UNPAID = "unpaid"
    PENDING = "pending"
    VERIFYING = "verifying"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    EXPIRED = "expired"
    DISPUTED = "disputed"


class PaymentType(StrEnum):
    """Activation payment slot."""

    REFERRAL = "referral"
    BINARY = "binary"
    UPLINE1 = "upline1"
    UPLINE2 = "upline2"
    UPLINE3 = "upline3"
    UPLINE4 = "upline4"
    UPLINE5 = "upline5"
    ADMIN = "admin"

    @property
    def is_matrix(self) -> bool:
        """Upline slots feed the matrix plan and escalate to disputes."""
        return self.value.startswith("upline")

    @property
    def expires(self) -> bool:
        """Admin fee slots have no countdown."""
        return self is not PaymentType.ADMIN

    @property
    def ledger_type(self) -> str:
        """Transaction type label used in the ledger."""
        return "upline" if self.is_matrix else self.value


class PaymentMethod(StrEnum):
    """How the sender paid."""

    QR = "qr"
    UPI = "upi"
    BANK = "bank"
    CRYPTO = "crypto"


class NotificationType(StrEnum):
    """Notification feed entry type."""

    INCOME = "income"
    REFERRAL = "referral"
    PAYMENT_CONFIRMED = "payment_confirmed"
    PAYMENT_RECEIVED = "payment_received"
    SYSTEM = "system"
    ERROR = "error"


class PairStatus(StrEnum):
    """Binary pair status."""

    PAID = "paid"
    PENDING = "pending"


class PairSource(StrEnum):
    """Where a binary pair came from."""

    TEAM = "team"
    QUEUE = "queue"


class ParticipantStatus(StrEnum):
    """Directory status of a participant."""

    ACTIVE = "active"
    PENDING = "pending"
    ON_HOLD = "on_hold"


class LegPosition(StrEnum):
    """Binary leg."""

    LEFT = "left"
    RIGHT = "right"


class DisputeFavor(StrEnum):
    """Side an admin resolves a dispute for."""

    SENDER = "sender"
    RECEIVER = "receiver"


class TransactionStatus(StrEnum):
    """Ledger transaction status."""

    PAID = "paid"
    CONFIRMED = "confirmed"
    PENDING = "pending"
