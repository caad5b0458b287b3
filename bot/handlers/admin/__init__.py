"""Admin handlers package"""

from bot.handlers.admin import config, confirmations, disputes


__all__ = [
    "config",
    "confirmations",
    "disputes",
]
