"""
Core notification service.

The core only appends to a participant's feed and ledger; it never prunes
them. Builders are plain functions so state transitions can attach records
while the account lock is already held.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from app.models.enums import NotificationType, TransactionStatus
from app.models.ledger import Notification, Transaction
from app.services.base_service import BaseService, ServiceResult
from app.utils.datetime_utils import format_ledger_date
from app.utils.identifiers import new_id


def build_notification(
    type_: NotificationType, message: str, now: datetime
) -> Notification:
    """Create unread notification stamped with now."""
    return Notification(id=new_id("n"), type=type_, message=message, timestamp=now)


def build_transaction(
    type_: str,
    details: str,
    amount: Decimal,
    status: TransactionStatus,
    now: datetime,
) -> Transaction:
    """Create ledger entry dated at minute precision."""
    return Transaction(
        date=format_ledger_date(now),
        type=type_,
        details=details,
        amount=amount,
        status=status,
    )


class NotificationService(BaseService):
    """Notification feed of participant accounts."""

    async def push(
        self, participant_id: str, type_: NotificationType, message: str
    ) -> Notification | None:
        """
        Append notification to a participant's feed.

        Args:
            participant_id: Feed owner
            type_: Notification type
            message: Text

        Returns:
            Created notification, None if the participant has no account
        """
        async with self.store.account_lock(participant_id):
            account = self.store.find_account(participant_id)
            if account is None:
                self.logger.debug(f"No feed for {participant_id}, notification dropped")
                return None
            notification = build_notification(type_, message, self.now())
            self.store.put_account(account.with_notifications(notification))
            return notification

    async def mark_read(self, participant_id: str, notification_id: str) -> ServiceResult:
        async with self.store.account_lock(participant_id):
            account = self.store.get_account(participant_id)
            if not any(n.id == notification_id for n in account.notifications):
                return ServiceResult.fail("Notification not found", "not_found")
            notifications = tuple(
                replace(n, is_read=True) if n.id == notification_id else n
                for n in account.notifications
            )
            self.store.put_account(replace(account, notifications=notifications))
            return ServiceResult.ok()

    async def mark_all_read(self, participant_id: str) -> ServiceResult:
        async with self.store.account_lock(participant_id):
            account = self.store.get_account(participant_id)
            notifications = tuple(
                n if n.is_read else replace(n, is_read=True)
                for n in account.notifications
            )
            self.store.put_account(replace(account, notifications=notifications))
            return ServiceResult.ok(data=account.unread_count)
