"""
Payment handlers.

Activation payments: list, manual submission and crypto verification.
"""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from app.models.enums import PaymentMethod
from app.services.platform import Platform
from bot.utils.formatters import format_payments
from bot.utils.user_context import participant_id_for


router = Router(name="payments")

NOT_REGISTERED_TEXT = "Please send /start first."


@router.message(Command("payments"))
async def cmd_payments(message: Message, platform: Platform) -> None:
    """Show the user's payment slots."""
    participant_id = participant_id_for(message.from_user)
    account = platform.store.find_account(participant_id) if participant_id else None
    if account is None:
        await message.answer(NOT_REGISTERED_TEXT)
        return

    await message.answer(format_payments(account, platform.clock.now()), parse_mode="Markdown")


@router.message(Command("submit"))
async def cmd_submit(message: Message, command: CommandObject, platform: Platform) -> None:
    """
    Handle /submit <payment_id> <transaction_id> <proof>.

    Args:
        message: Telegram message
        command: Parsed command with arguments
        platform: Platform facade
    """
    participant_id = participant_id_for(message.from_user)
    if participant_id is None or not platform.store.has_account(participant_id):
        await message.answer(NOT_REGISTERED_TEXT)
        return

    args = (command.args or "").split()
    if len(args) < 2:
        await message.answer("Usage: /submit <payment_id> <transaction_id> <proof>")
        return

    payment_id, transaction_id = args[0], args[1]
    proof = args[2] if len(args) > 2 else None
    result = await platform.payments.submit(
        participant_id, payment_id, transaction_id, proof=proof, method=PaymentMethod.QR
    )
    if not result.success:
        await message.answer(f"❌ {result.error}")
        return

    await message.answer(
        f"✅ Payment submitted. Confirmation `{result.data.id}` is waiting for the receiver.",
        parse_mode="Markdown",
    )


@router.message(Command("verify"))
async def cmd_verify(message: Message, command: CommandObject, platform: Platform) -> None:
    """Handle /verify <payment_id> <tx_hash>."""
    participant_id = participant_id_for(message.from_user)
    if participant_id is None or not platform.store.has_account(participant_id):
        await message.answer(NOT_REGISTERED_TEXT)
        return

    args = (command.args or "").split()
    if len(args) != 2:
        await message.answer("Usage: /verify <payment_id> <tx_hash>")
        return

    result = await platform.payments.auto_verify(participant_id, args[0], args[1])
    if not result.success:
        await message.answer(f"❌ {result.error}")
        return

    await message.answer("🔄 Verifying your transaction. Check /payments in a few seconds.")
