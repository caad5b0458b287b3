"""
Notification and transaction records.

Both collections are append-only from the core's perspective.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.models.enums import NotificationType, TransactionStatus


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    message: str
    timestamp: datetime
    is_read: bool = False


@dataclass(frozen=True)
class Transaction:
    """Audit/history entry."""

    date: str
    type: str
    details: str
    amount: Decimal
    status: TransactionStatus
