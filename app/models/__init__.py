"""
Models.

Immutable domain snapshots and the SQLAlchemy snapshot table.
"""

from app.models.account import AccountState
from app.models.base import Base
from app.models.binary import (
    BinaryLedger,
    BinaryPair,
    QueueEntrant,
    QueueState,
    SponsorDirect,
    is_sponsor_qualified,
)
from app.models.enums import (
    DisputeFavor,
    LegPosition,
    NotificationType,
    PairSource,
    PairStatus,
    ParticipantStatus,
    PaymentMethod,
    PaymentStatus,
    PaymentType,
    TransactionStatus,
)
from app.models.ledger import Notification, Transaction
from app.models.participant import ParticipantRecord
from app.models.payment import Confirmation, Dispute, Payment
from app.models.state_snapshot import StateSnapshot
from app.models.system_config import AdminPaymentOption, BankAccount, SystemConfig


__all__ = [
    "AccountState",
    "AdminPaymentOption",
    "BankAccount",
    "Base",
    "BinaryLedger",
    "BinaryPair",
    "Confirmation",
    "Dispute",
    "DisputeFavor",
    "LegPosition",
    "Notification",
    "NotificationType",
    "PairSource",
    "PairStatus",
    "ParticipantRecord",
    "ParticipantStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentType",
    "QueueEntrant",
    "QueueState",
    "SponsorDirect",
    "StateSnapshot",
    "SystemConfig",
    "Transaction",
    "TransactionStatus",
    "is_sponsor_qualified",
]
