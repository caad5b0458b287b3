"""
Handlers.

Bot command and message handlers.
"""

from bot.handlers import binary, notifications, payments, start

__all__ = [
    "binary",
    "notifications",
    "payments",
    "start",
]
