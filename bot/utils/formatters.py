"""
Formatters
Utility functions for formatting platform data into message texts
"""

from datetime import datetime

from app.models.account import AccountState
from app.models.binary import QueueState
from app.models.enums import PaymentStatus
from app.models.ledger import Notification
from app.models.payment import Confirmation, Dispute, Payment
from app.models.system_config import SystemConfig

# Import shared formatters from app layer (re-exported for bot usage)
from app.utils.datetime_utils import format_countdown, format_ledger_date
from app.utils.formatters import escape_md, format_amount


STATUS_ICONS = {
    PaymentStatus.UNPAID: "⏳",
    PaymentStatus.PENDING: "🕓",
    PaymentStatus.VERIFYING: "🔄",
    PaymentStatus.CONFIRMED: "✅",
    PaymentStatus.FAILED: "❌",
    PaymentStatus.EXPIRED: "⌛",
    PaymentStatus.DISPUTED: "⚖️",
}


def format_transaction_hash(tx_hash: str, show_chars: int = 6) -> str:
    """
    Format transaction hash to shortened version

    Args:
        tx_hash: Full transaction hash
        show_chars: Number of characters to show at start/end

    Returns:
        Shortened hash (e.g., "0xabcd...ef01")
    """
    if len(tx_hash) <= show_chars * 2:
        return tx_hash

    return f"{tx_hash[:show_chars]}...{tx_hash[-show_chars:]}"


def format_payment_line(payment: Payment, now: datetime) -> str:
    """
    Format one payment slot.

    Unpaid slots with a countdown show the time left.
    """
    icon = STATUS_ICONS.get(payment.status, "•")
    line = (
        f"{icon} {escape_md(payment.title)}: {format_amount(payment.amount)} "
        f"({payment.status.value})"
    )
    if payment.status == PaymentStatus.UNPAID and payment.type.expires:
        line += f" ⏱ {format_countdown(payment.remaining(now))}"
    if payment.transaction_id:
        line += f"\n    TX: `{format_transaction_hash(payment.transaction_id)}`"
    return line


def format_payments(account: AccountState, now: datetime) -> str:
    lines = [
        f"💳 *Activation payments* ({account.confirmed_count}/{len(account.payments)} confirmed)",
        "",
    ]
    for payment in account.payments:
        lines.append(f"`{payment.id}` " + format_payment_line(payment, now))
    if account.is_active:
        lines.extend(["", "🎉 Your account is active."])
    return "\n".join(lines)


def format_notifications(notifications: tuple[Notification, ...], limit: int = 10) -> str:
    if not notifications:
        return "🔔 No notifications yet."
    lines = ["🔔 *Notifications*", ""]
    for notification in notifications[:limit]:
        marker = "" if notification.is_read else "🆕 "
        lines.append(
            f"{marker}{format_ledger_date(notification.timestamp)} "
            f"{escape_md(notification.message)}"
        )
    return "\n".join(lines)


def format_binary_summary(account: AccountState) -> str:
    binary = account.binary
    left, right = binary.carry_forward()
    status = "✅ Qualified" if binary.is_qualified else "⚠️ Not qualified"
    position = binary.queue_position if binary.queue_position is not None else "-"
    return "\n".join([
        "🌳 *Binary*",
        "",
        f"Status: {status}",
        f"Team: {len(binary.left_team)} left / {len(binary.right_team)} right",
        f"Carry forward: {len(left)} left / {len(right)} right",
        f"Matched pairs: {len(binary.matched_pairs)} ({format_amount(binary.total_income)})",
        f"Pending pairs: {len(binary.pending_pairs)} ({format_amount(binary.pending_income)})",
        f"Queue position: {position}",
    ])


def format_queue(queue: QueueState, highlight: str | None = None, limit: int = 20) -> str:
    if not queue.entrants:
        return "📋 The global binary queue is empty."
    lines = [f"📋 *Global binary queue* ({len(queue)})", ""]
    for entrant in queue.entrants[:limit]:
        mark = "✅" if entrant.is_qualified else "⏸"
        me = " 👈" if entrant.id == highlight else ""
        lines.append(f"{entrant.queue_position}. {mark} {escape_md(entrant.name)}{me}")
    if len(queue) > limit:
        lines.append(f"... and {len(queue) - limit} more")
    return "\n".join(lines)


def format_confirmation(confirmation: Confirmation) -> str:
    text = (
        f"`{confirmation.id}` {escape_md(confirmation.payment_title)}\n"
        f"    From: {escape_md(confirmation.sender_name)} → {escape_md(confirmation.receiver_id)}\n"
        f"    Amount: {format_amount(confirmation.amount)}\n"
        f"    TX: `{format_transaction_hash(confirmation.transaction_id)}`\n"
        f"    Submitted: {format_ledger_date(confirmation.submitted_at)}"
    )
    if isinstance(confirmation, Dispute) and confirmation.escalated_at:
        text += f"\n    Escalated: {format_ledger_date(confirmation.escalated_at)}"
    return text


def format_config(config: SystemConfig) -> str:
    crypto = "ready" if config.crypto_verification_ready else (
        "enabled, not configured" if config.enable_crypto_verification else "disabled"
    )
    return "\n".join([
        "⚙️ *System config*",
        "",
        f"referral\\_amount: {format_amount(config.referral_amount)}",
        f"binary\\_amount: {format_amount(config.binary_amount)}",
        f"upline\\_amount: {format_amount(config.upline_amount)}",
        f"admin\\_fee\\_amount: {format_amount(config.admin_fee_amount)}",
        f"payment\\_timer\\_hours: {config.payment_timer_hours:g}",
        f"Crypto verification: {crypto}",
    ])
