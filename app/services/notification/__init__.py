"""
Notification service module.

Notification feed and ledger sinks owned by participant accounts.

Structure:
- core.py: record builders and the feed service (push, mark read)

Usage:
    from app.services.notification import NotificationService

    notification_service = NotificationService(store, clock)
    await notification_service.push(participant_id, NotificationType.SYSTEM, "Hello!")
"""

from app.services.notification.core import (
    NotificationService,
    build_notification,
    build_transaction,
)


__all__ = ["NotificationService", "build_notification", "build_transaction"]
