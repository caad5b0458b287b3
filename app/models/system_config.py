"""
System configuration models.

Process-wide tunables read by the payment engine and the binary matcher.
Validated with pydantic on every admin save.
"""

from datetime import timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config.business_constants import (
    DEFAULT_ADMIN_FEE_AMOUNT,
    DEFAULT_BINARY_AMOUNT,
    DEFAULT_REFERRAL_AMOUNT,
    DEFAULT_UPLINE_AMOUNT,
)


class SystemConfig(BaseModel):
    """Per-slot amounts, payment timer and crypto verification settings."""

    model_config = ConfigDict(frozen=True)

    referral_amount: Decimal = Field(default=DEFAULT_REFERRAL_AMOUNT, gt=0)
    binary_amount: Decimal = Field(default=DEFAULT_BINARY_AMOUNT, gt=0)
    upline_amount: Decimal = Field(default=DEFAULT_UPLINE_AMOUNT, gt=0)
    admin_fee_amount: Decimal = Field(default=DEFAULT_ADMIN_FEE_AMOUNT, gt=0)
    payment_timer_hours: float = Field(default=2.0, gt=0)
    enable_crypto_verification: bool = False
    crypto_api_key: str | None = None
    crypto_wallet_address: str | None = None

    @field_validator("crypto_api_key", "crypto_wallet_address", mode="before")
    @classmethod
    def blank_credential_is_missing(cls, v: str | None) -> str | None:
        """Treat whitespace-only credentials as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def timer_duration(self) -> timedelta:
        return timedelta(hours=self.payment_timer_hours)

    @property
    def crypto_verification_ready(self) -> bool:
        """Verification may only run when enabled and fully configured."""
        return bool(
            self.enable_crypto_verification
            and self.crypto_api_key
            and self.crypto_wallet_address
        )


class BankAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    number: str = ""
    ifsc: str = ""


class AdminPaymentOption(BaseModel):
    """Receiving account for the system-owned binary and admin slots."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    upi_id: str = ""
    bank_account: BankAccount = BankAccount()
    usdt_address: str = ""
    qr_code_url: str | None = None
    receiver_contact: str = ""


DEFAULT_ADMIN_PAYMENT_OPTIONS: tuple[AdminPaymentOption, ...] = (
    AdminPaymentOption(
        id="admin_opt_1",
        name="Default Admin Account",
        upi_id="admin@ybl",
        bank_account=BankAccount(name="Admin Fee", number="890123456789", ifsc="BANK0000123"),
        usdt_address="0xcde456cde456cde456cde456cde456cde456cde",
        receiver_contact="+91 12345 67897",
    ),
    AdminPaymentOption(
        id="admin_opt_2",
        name="Default Binary Account",
        upi_id="system-binary@ybl",
        bank_account=BankAccount(name="System Payments", number="210987654321", ifsc="BANK0004321"),
        usdt_address="0x456defgh456defgh456defgh456defgh456defgh",
        receiver_contact="+91 12345 67891",
    ),
)

FALLBACK_ADMIN_PAYMENT_OPTION = AdminPaymentOption(
    id="fallback",
    name="Fallback",
    upi_id="fallback@upi",
    bank_account=BankAccount(name="N/A", number="N/A", ifsc="N/A"),
    usdt_address="N/A",
    receiver_contact="N/A",
)
