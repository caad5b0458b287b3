"""
Binary income helpers.

Pure functions over an AccountState, called while the account lock is held.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from app.models.account import AccountState
from app.models.binary import BinaryPair
from app.models.enums import NotificationType, PairSource, PairStatus, TransactionStatus
from app.services.notification.core import build_notification, build_transaction
from app.utils.formatters import format_amount


BINARY_LEDGER_TYPE = "binary"


def award_pair(
    account: AccountState,
    left_users: tuple[str, ...],
    right_users: tuple[str, ...],
    amount: Decimal,
    now: datetime,
    details: str,
    source: PairSource = PairSource.TEAM,
) -> tuple[AccountState, BinaryPair]:
    """
    Record a binary pair for the account.

    A qualified participant is paid at once (matched pair plus ledger
    entry); otherwise the pair is held as pending until qualification.

    Args:
        account: Earning participant
        left_users: Names on the left side of the pair
        right_users: Names on the right side of the pair
        amount: Pair income
        now: Pair date
        details: Ledger details of a paid pair
        source: Team-leg pair or global queue match

    Returns:
        Tuple of (updated account, created pair)
    """
    ledger = account.binary
    status = PairStatus.PAID if ledger.is_qualified else PairStatus.PENDING
    pair = BinaryPair(
        pair_number=ledger.next_pair_number,
        left_users=tuple(left_users),
        right_users=tuple(right_users),
        amount=amount,
        date=now,
        status=status,
        source=source,
    )

    if status == PairStatus.PAID:
        account = replace(
            account, binary=replace(ledger, matched_pairs=ledger.matched_pairs + (pair,))
        )
        account = account.with_transactions(
            build_transaction(BINARY_LEDGER_TYPE, details, amount, TransactionStatus.PAID, now)
        )
    else:
        account = replace(
            account, binary=replace(ledger, pending_pairs=ledger.pending_pairs + (pair,))
        )
    return account, pair


def pay_out_pending(account: AccountState, now: datetime) -> tuple[AccountState, Decimal]:
    """
    Convert every pending pair to a paid matched pair.

    Returns:
        Tuple of (updated account, total paid out)
    """
    ledger = account.binary
    if not ledger.pending_pairs:
        return account, Decimal("0")

    paid_out = tuple(
        replace(p, status=PairStatus.PAID, date=now) for p in ledger.pending_pairs
    )
    total = sum((p.amount for p in paid_out), Decimal("0"))
    transactions = tuple(
        build_transaction(
            BINARY_LEDGER_TYPE,
            f"Pending match #{p.pair_number} paid out",
            p.amount,
            TransactionStatus.PAID,
            now,
        )
        for p in paid_out
    )

    account = replace(
        account,
        binary=replace(
            ledger,
            matched_pairs=ledger.matched_pairs + paid_out,
            pending_pairs=(),
        ),
    )
    account = account.with_transactions(*transactions)
    account = account.with_notifications(
        build_notification(
            NotificationType.INCOME,
            "Congratulations! You've qualified for binary income. "
            f"Pending income of {format_amount(total)} has been paid out.",
            now,
        )
    )
    return account, total
