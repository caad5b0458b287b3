"""
Business logic constants for the Payback247 plan.

Central location for business rules and constants used across the application.
This module can be imported by both app.services and bot handlers without circular dependencies.
"""

from decimal import Decimal


# Default per-slot amounts (INR)
DEFAULT_REFERRAL_AMOUNT = Decimal("1000")
DEFAULT_BINARY_AMOUNT = Decimal("1000")
DEFAULT_UPLINE_AMOUNT = Decimal("500")
DEFAULT_ADMIN_FEE_AMOUNT = Decimal("500")

# Number of upline (matrix) levels a new participant pays
UPLINE_LEVELS = 5

# Users per leg consumed by one team-leg binary pair
PAIR_SIZE = 3

# Unique crypto amount: base + uniform(MIN, MAX), rounded to 6 places
UNIQUE_AMOUNT_MIN = Decimal("0.000001")
UNIQUE_AMOUNT_SPAN = Decimal("0.009999")
UNIQUE_AMOUNT_QUANT = Decimal("0.000001")

# Receiver ids of the system-owned slots
SYSTEM_BINARY_RECEIVER = "system_binary"
SYSTEM_ADMIN_RECEIVER = "system_admin"

# Placeholder names used by global queue matches
QUEUE_MATCH_LEFT = "System Match L"
QUEUE_MATCH_RIGHT = "System Match R"

# Ledger date format (minute precision)
LEDGER_DATE_FORMAT = "%Y-%m-%d %H:%M"

# Snapshot key of the platform state
PLATFORM_SNAPSHOT_KEY = "payback247_app_state"

# Currency symbol used in user-facing texts
CURRENCY_SYMBOL = "₹"
