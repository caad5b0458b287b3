"""Bot utilities"""

# Formatters
from bot.utils.formatters import (
    format_binary_summary,
    format_config,
    format_confirmation,
    format_notifications,
    format_payments,
    format_queue,
)

# User context
from bot.utils.user_context import (
    display_name_for,
    participant_id_for,
)

__all__ = [
    # Formatters
    "format_binary_summary",
    "format_config",
    "format_confirmation",
    "format_notifications",
    "format_payments",
    "format_queue",
    # User context
    "display_name_for",
    "participant_id_for",
]
