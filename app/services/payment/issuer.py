"""
Payment slot issuer.

Builds the eight activation payments of a new participant from the current
system config. Amounts and the countdown are captured at issue time, so a
later config save does not touch slots already in flight.
"""

import random
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from app.config.business_constants import (
    SYSTEM_ADMIN_RECEIVER,
    SYSTEM_BINARY_RECEIVER,
    UNIQUE_AMOUNT_MIN,
    UNIQUE_AMOUNT_QUANT,
    UNIQUE_AMOUNT_SPAN,
    UPLINE_LEVELS,
)
from app.models.enums import PaymentType
from app.models.payment import Payment
from app.models.system_config import (
    FALLBACK_ADMIN_PAYMENT_OPTION,
    AdminPaymentOption,
    SystemConfig,
)


DEFAULT_SPONSOR_ID = "usr_sponsor"

UPLINE_TYPES = (
    PaymentType.UPLINE1,
    PaymentType.UPLINE2,
    PaymentType.UPLINE3,
    PaymentType.UPLINE4,
    PaymentType.UPLINE5,
)


def generate_unique_amount(base: Decimal, rng: random.Random) -> Decimal:
    """
    Add a random micro amount so crypto transfers can be told apart.

    Args:
        base: Slot amount
        rng: Random source

    Returns:
        base + [0.000001, 0.01), rounded to 6 decimals
    """
    unique_part = UNIQUE_AMOUNT_MIN + UNIQUE_AMOUNT_SPAN * Decimal(str(rng.random()))
    return (base + unique_part).quantize(UNIQUE_AMOUNT_QUANT)


def pick_payment_option(
    options: Sequence[AdminPaymentOption], rng: random.Random
) -> AdminPaymentOption:
    if not options:
        return FALLBACK_ADMIN_PAYMENT_OPTION
    return rng.choice(list(options))


def default_upline_ids() -> tuple[str, ...]:
    return tuple(f"usr_0{2 + i}" for i in range(UPLINE_LEVELS))


def issue_payments(
    config: SystemConfig,
    options: Sequence[AdminPaymentOption],
    now: datetime,
    rng: random.Random,
    sponsor_id: str = DEFAULT_SPONSOR_ID,
    upline_ids: Sequence[str] | None = None,
) -> tuple[Payment, ...]:
    """
    Issue the activation slots: referral, binary, upline1..5, admin.

    Args:
        config: Current system config
        options: Admin payment options for the system-owned slots
        now: Issue moment (starts every countdown)
        rng: Random source for receiver choice and unique amounts
        sponsor_id: Receiver of the referral slot
        upline_ids: Receivers of the upline slots, nearest first

    Returns:
        Tuple of eight unpaid payments
    """
    uplines = tuple(upline_ids) if upline_ids else default_upline_ids()
    if len(uplines) != UPLINE_LEVELS:
        raise ValueError(f"Expected {UPLINE_LEVELS} upline receivers, got {len(uplines)}")

    timer = config.timer_duration
    binary_option = pick_payment_option(options, rng)
    admin_option = pick_payment_option(options, rng)

    payments = [
        Payment(
            id="pay_ref",
            type=PaymentType.REFERRAL,
            title="1. Referral",
            amount=config.referral_amount,
            receiver_id=sponsor_id,
            assigned_at=now,
            timer_duration=timer,
            receiver_contact="+91 12345 67890",
            upi_id="sponsor@ybl",
            usdt_address="0x123abcde123abcde123abcde123abcde123abcde",
            unique_amount=generate_unique_amount(config.referral_amount, rng),
        ),
        Payment(
            id="pay_bin",
            type=PaymentType.BINARY,
            title="2. Binary",
            amount=config.binary_amount,
            receiver_id=SYSTEM_BINARY_RECEIVER,
            assigned_at=now,
            timer_duration=timer,
            receiver_contact=binary_option.receiver_contact,
            upi_id=binary_option.upi_id,
            usdt_address=binary_option.usdt_address,
            unique_amount=generate_unique_amount(config.binary_amount, rng),
        ),
    ]

    for level, (payment_type, receiver_id) in enumerate(zip(UPLINE_TYPES, uplines), start=1):
        payments.append(
            Payment(
                id=f"pay_up{level}",
                type=payment_type,
                title=f"{2 + level}. Upline {level}",
                amount=config.upline_amount,
                receiver_id=receiver_id,
                assigned_at=now,
                timer_duration=timer,
                receiver_contact=f"+91 12345 6789{1 + level}",
                upi_id=f"upline{level}@ybl",
                usdt_address=f"0x{788 + level:x}ijklm789ijklm789ijklm789ijklm789ijklm",
                unique_amount=generate_unique_amount(config.upline_amount, rng),
            )
        )

    payments.append(
        Payment(
            id="pay_adm",
            type=PaymentType.ADMIN,
            title="8. Admin Fee",
            amount=config.admin_fee_amount,
            receiver_id=SYSTEM_ADMIN_RECEIVER,
            assigned_at=now,
            timer_duration=timer,
            receiver_contact=admin_option.receiver_contact,
            upi_id=admin_option.upi_id,
            usdt_address=admin_option.usdt_address,
            unique_amount=generate_unique_amount(config.admin_fee_amount, rng),
        )
    )
    return tuple(payments)
